"""
Goldenpane configuration management.

Configuration priority (highest to lowest):
1. Runtime updates (ConfigStore.set, the adjust/widescreen commands)
2. Config file (~/.config/goldenpane/config.json or platform-specific)
3. Environment variables (GOLDENPANE_*)
4. Default values (zero-config)

User mappings are deep-merged over the defaults: an explicit user value wins
at every key, unset keys inherit the default.
"""

import copy
import json
import math
import os
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Callable, Optional

import platformdirs

from .errors import GoldenPaneError, InvalidConfigKeyError, InvalidConfigValueError
from .telemetry import get_logger

logger = get_logger(__name__)

ExcludeFunc = Callable[[str, Optional[str]], bool]

DEFAULT_EXCLUDE_FILETYPES = [
    # File explorers
    "NvimTree",
    "neo-tree",
    "oil",
    "nerdtree",
    # Special windows
    "qf",
    "help",
    "man",
    "terminal",
    # Outlines and sidebars
    "aerial",
    "Outline",
    "vista",
    "sagaoutline",
    # Diagnostics and debugging
    "Trouble",
    "dap-repl",
    "dapui_scopes",
    "dapui_breakpoints",
    "dapui_stacks",
    "dapui_watches",
    "dapui_console",
    # Version control
    "fugitive",
    "fugitiveblame",
    "git",
    # Plugins
    "TelescopePrompt",
    "TelescopeResults",
    "packer",
    "lazy",
    "undotree",
    "spectre_panel",
    "toggleterm",
]


@dataclass(frozen=True)
class GoldenRatioConfig:
    """Tunable resize parameters. Replace, don't mutate."""

    ratio: float = 1.618
    adjust_factor: float = 1.0  # multiplies the target width
    wide_adjust_factor: float = 0.8  # used by the widescreen toggle
    auto_scale: bool = False  # derive the scale from the canvas width instead
    max_width: Optional[int] = None
    recenter: bool = False
    minimal_width_change: int = 1
    minimal_height_change: int = 1
    exclude_filetypes: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_FILETYPES))
    exclude_buffer_names: list[str] = field(default_factory=list)
    exclude_buffer_patterns: list[str] = field(default_factory=list)
    exclude_func: Optional[ExcludeFunc] = None
    debug: bool = False

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary (exclude_func is dropped)."""
        return {
            f.name: copy.deepcopy(getattr(self, f.name))
            for f in fields(self)
            if f.name != "exclude_func"
        }

    @classmethod
    def from_dict(cls, data: Optional[dict] = None) -> "GoldenRatioConfig":
        """Create from a user mapping merged over the defaults."""
        data = data or {}
        for key in data:
            if key not in _FIELD_NAMES:
                raise InvalidConfigKeyError(key)

        defaults = cls()
        merged = deep_merge(defaults.to_dict(), data)
        merged["exclude_func"] = data.get("exclude_func", defaults.exclude_func)
        return cls(**{key: validate_option(key, value) for key, value in merged.items()})

    def apply_env_overrides(self) -> "GoldenRatioConfig":
        """
        Return a copy with environment variable overrides applied.

        Environment variables:
            GOLDENPANE_RATIO - float
            GOLDENPANE_ADJUST_FACTOR - float
            GOLDENPANE_AUTO_SCALE - true/false
            GOLDENPANE_MAX_WIDTH - int (0 disables the cap)
            GOLDENPANE_DEBUG - true/false
        """
        overrides: dict[str, Any] = {}
        for key, (env_name, parse) in _ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if not raw:
                continue
            try:
                overrides[key] = validate_option(key, parse(raw))
            except (ValueError, GoldenPaneError) as e:
                logger.warning("Ignoring %s=%r: %s", env_name, raw, e)

        return replace(self, **overrides) if overrides else self


_FIELD_NAMES = frozenset(f.name for f in fields(GoldenRatioConfig))


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


_ENV_OVERRIDES: dict[str, tuple[str, Callable[[str], Any]]] = {
    "ratio": ("GOLDENPANE_RATIO", float),
    "adjust_factor": ("GOLDENPANE_ADJUST_FACTOR", float),
    "auto_scale": ("GOLDENPANE_AUTO_SCALE", _parse_bool),
    "max_width": ("GOLDENPANE_MAX_WIDTH", int),
    "debug": ("GOLDENPANE_DEBUG", _parse_bool),
}


def deep_merge(base: dict, override: dict) -> dict:
    """
    Merge ``override`` over ``base`` without touching either.

    Nested dicts merge key by key; any other explicit value in ``override``
    replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        elif callable(value):
            merged[key] = value
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _finite_float(key: str, value: Any, positive: bool = False) -> float:
    if not _is_number(value) or not math.isfinite(value):
        raise InvalidConfigValueError(key, value, "expected a finite number")
    if positive and value <= 0:
        raise InvalidConfigValueError(key, value, "must be greater than 0")
    return float(value)


def _non_negative_int(key: str, value: Any) -> int:
    if not _is_number(value) or not math.isfinite(value) or value != int(value):
        raise InvalidConfigValueError(key, value, "expected an integer")
    if value < 0:
        raise InvalidConfigValueError(key, value, "must not be negative")
    return int(value)


def _string_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise InvalidConfigValueError(key, value, "expected a list of strings")
    items = list(value)
    if not all(isinstance(item, str) for item in items):
        raise InvalidConfigValueError(key, value, "expected a list of strings")
    return items


def validate_option(key: str, value: Any) -> Any:
    """
    Validate and normalize a single option value.

    Raises:
        InvalidConfigKeyError: Key is not a known option.
        InvalidConfigValueError: Value would break the option's invariants.
    """
    if key not in _FIELD_NAMES:
        raise InvalidConfigKeyError(key)

    if key == "ratio":
        return _finite_float(key, value, positive=True)
    if key in ("adjust_factor", "wide_adjust_factor"):
        return _finite_float(key, value, positive=True)
    if key in ("auto_scale", "recenter", "debug"):
        if not isinstance(value, bool):
            raise InvalidConfigValueError(key, value, "expected true or false")
        return value
    if key == "max_width":
        if value is None:
            return None
        width = _non_negative_int(key, value)
        return width or None
    if key in ("minimal_width_change", "minimal_height_change"):
        return _non_negative_int(key, value)
    if key == "exclude_buffer_patterns":
        patterns = _string_list(key, value)
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise InvalidConfigValueError(key, pattern, f"bad pattern: {e}") from e
        return patterns
    if key in ("exclude_filetypes", "exclude_buffer_names"):
        return _string_list(key, value)
    if key == "exclude_func":
        if value is not None and not callable(value):
            raise InvalidConfigValueError(key, value, "expected a callable or None")
        return value
    return value


class ConfigStore:
    """
    Holds the configuration record for a session.

    The record itself is immutable; ``setup`` and ``set`` swap in a new one.
    """

    def __init__(self, options: Optional[GoldenRatioConfig] = None):
        self._options = options or GoldenRatioConfig()

    def setup(self, user_config: Optional[dict] = None) -> GoldenRatioConfig:
        """Replace the configuration with ``user_config`` merged over the defaults."""
        self._options = GoldenRatioConfig.from_dict(user_config or {})
        logger.debug("Configuration loaded")
        return self._options

    def get(self) -> GoldenRatioConfig:
        """Get current configuration."""
        return self._options

    def set(self, key: str, value: Any) -> GoldenRatioConfig:
        """
        Update a single option.

        Raises:
            InvalidConfigKeyError: Unknown key; nothing changes.
            InvalidConfigValueError: Invalid value; nothing changes.
        """
        normalized = validate_option(key, value)
        self._options = replace(self._options, **{key: normalized})
        logger.debug("Set %s = %r", key, normalized)
        return self._options


def get_config_dir() -> Path:
    """
    Get platform-specific user config directory.

    Returns:
        - Linux: ~/.config/goldenpane (or $XDG_CONFIG_HOME/goldenpane)
        - macOS: ~/Library/Application Support/goldenpane
        - Windows: C:\\Users\\<user>\\AppData\\Roaming\\goldenpane
    """
    return Path(platformdirs.user_config_dir("goldenpane", appauthor=False))


def get_config_path() -> Path:
    """Get configuration file path."""
    return get_config_dir() / "config.json"


def load_config(path: Optional[Path] = None, apply_env: bool = True) -> GoldenRatioConfig:
    """
    Load configuration from file.

    Args:
        path: Config file path. Uses default if None.
        apply_env: Apply environment variable overrides.

    Returns:
        GoldenRatioConfig with loaded or default values.
    """
    config_path = path or get_config_path()
    config = GoldenRatioConfig()

    if config_path.exists():
        try:
            with open(config_path) as f:
                data = json.load(f)
            config = GoldenRatioConfig.from_dict(data)
        except (json.JSONDecodeError, TypeError, AttributeError, GoldenPaneError) as e:
            logger.warning("Ignoring config file %s: %s", config_path, e)

    if apply_env:
        config = config.apply_env_overrides()

    return config


def save_config(config: GoldenRatioConfig, path: Optional[Path] = None) -> bool:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        path: Config file path. Uses default if None.

    Returns:
        True if successful.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        return True
    except OSError as e:
        logger.warning("Could not save config to %s: %s", config_path, e)
        return False


def init_config(path: Optional[Path] = None) -> Path:
    """
    Initialize configuration file with defaults.

    Args:
        path: Config file path. Uses default if None.

    Returns:
        Path to created config file.
    """
    config_path = path or get_config_path()
    save_config(GoldenRatioConfig(), config_path)
    return config_path
