#!/usr/bin/env python3
"""
Goldenpane CLI - Golden-ratio sizing for the focused tmux pane.

Usage:
    goldenpane enable | disable | toggle
    goldenpane resize
    goldenpane toggle-widescreen
    goldenpane adjust <factor>
    goldenpane status [--json]
    goldenpane config [show|init|path|set]
    goldenpane --version
    goldenpane --help

``enable`` installs tmux hooks that run ``goldenpane resize`` whenever the
focused pane, the window size or the split layout changes.
"""

import argparse
import json
import sys
from dataclasses import replace

from goldenpane import (
    COMMANDS,
    ConfigStore,
    GoldenPaneError,
    GoldenRatioConfig,
    GoldenRatioSession,
    InvalidConfigKeyError,
    __version__,
    get_config_path,
    load_config,
    run_command,
    save_config,
)
from goldenpane.config import init_config
from goldenpane.providers import TmuxProvider
from goldenpane.telemetry import configure_logging

# commands whose effect must outlive this process
PERSISTED_COMMANDS = ("adjust", "toggle-widescreen")


def parse_value(value: str):
    """Parse a config value given on the command line."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered in ("null", "none"):
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value  # Keep as string


def cmd_session(args, config: GoldenRatioConfig):
    """Run a session command against tmux."""
    provider = TmuxProvider()
    if not provider.is_available():
        print("Error: Not in a tmux session", file=sys.stderr)
        return 1

    store = ConfigStore(config)
    session = GoldenRatioSession(provider, store)

    command_args = [args.factor] if args.command == "adjust" else []
    ok = run_command(args.command, *command_args, session=session)

    if ok and args.command in PERSISTED_COMMANDS:
        file_config = load_config(apply_env=False)
        save_config(replace(file_config, adjust_factor=store.get().adjust_factor))

    return 0 if ok else 1


def cmd_status(args, config: GoldenRatioConfig):
    """Show whether golden ratio mode is on."""
    provider = TmuxProvider()
    available = provider.is_available()
    enabled = available and provider.has_subscription(GoldenRatioSession.GROUP)

    result = {
        "tmux": available,
        "enabled": enabled,
        "adjust_factor": config.adjust_factor,
        "ratio": config.ratio,
    }

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"Status: {'enabled' if enabled else 'disabled'}")
        print(f"  ratio={config.ratio}, adjust_factor={config.adjust_factor}")
        if not available:
            print("  (not in a tmux session)")
    return 0


def cmd_config(args, config: GoldenRatioConfig):
    """Configuration management."""
    config_path = get_config_path()

    if args.config_action == "path":
        print(config_path)

    elif args.config_action == "show":
        print(json.dumps(config.to_dict(), indent=2))

    elif args.config_action == "init":
        if config_path.exists() and not args.force:
            print(f"Config already exists: {config_path}")
            print("Use --force to overwrite")
        else:
            path = init_config(config_path)
            print(f"Created: {path}")

    elif args.config_action == "set":
        if not args.key or args.value is None:
            print("Usage: goldenpane config set --key <key> --value <value>")
            print("Examples:")
            print("  goldenpane config set --key max_width --value 120")
            print('  goldenpane config set --key exclude_filetypes --value \'["htop", "less"]\'')
            return 1

        value = parse_value(args.value)
        store = ConfigStore(load_config(apply_env=False))
        try:
            store.set(args.key, value)
        except InvalidConfigKeyError as e:
            print(f"Warning: {e}", file=sys.stderr)
            return 1
        except GoldenPaneError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        save_config(store.get(), config_path)
        print(f"Set {args.key} = {value!r}")

    else:
        print("Usage: goldenpane config [show|init|path|set]")

    return 0


def main():
    """CLI entry point."""
    # Load config first
    config = load_config()

    parser = argparse.ArgumentParser(
        prog="goldenpane",
        description="Golden-ratio sizing for the focused tmux pane"
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-d", "--debug", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    for name, command in COMMANDS.items():
        p_command = subparsers.add_parser(name, help=command.help)
        if name == "adjust":
            # kept as text so bad input gets the same notice as the tmux command
            p_command.add_argument("factor", help="Width adjustment factor, e.g. 0.8")

    # status
    p_status = subparsers.add_parser("status", help="Show whether resizing is on")
    p_status.add_argument("-j", "--json", action="store_true", help="JSON output")

    # config
    p_config = subparsers.add_parser("config", help="Configuration management")
    p_config.add_argument("config_action", nargs="?", default="show",
                          choices=["show", "init", "path", "set"])
    p_config.add_argument("--key", help="Config key (e.g., max_width)")
    p_config.add_argument("--value", help="Config value")
    p_config.add_argument("--force", action="store_true", help="Force overwrite")

    args = parser.parse_args()
    configure_logging(args.debug or config.debug)

    if args.command in COMMANDS:
        return cmd_session(args, config)
    elif args.command == "status":
        return cmd_status(args, config)
    elif args.command == "config":
        return cmd_config(args, config)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
