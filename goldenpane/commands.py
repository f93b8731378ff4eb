"""
Command surface.

Each command maps to one session method. Commands run against the default
session unless one is passed in.
"""

import math
from typing import Any, Callable, NamedTuple, Optional

from .errors import InvalidFactorArgumentError
from .session import GoldenRatioSession, get_session
from .types import NotifyLevel


class Command(NamedTuple):
    """A user command bound to a session method."""

    run: Callable[..., bool]
    nargs: int
    help: str


def parse_factor(argument: Any) -> float:
    """
    Parse the adjust command's argument.

    Raises:
        InvalidFactorArgumentError: Not a finite number.
    """
    if isinstance(argument, bool):
        raise InvalidFactorArgumentError(argument)
    if isinstance(argument, (int, float)):
        value = float(argument)
    elif isinstance(argument, str):
        try:
            value = float(argument.strip())
        except ValueError:
            raise InvalidFactorArgumentError(argument) from None
    else:
        raise InvalidFactorArgumentError(argument)

    if not math.isfinite(value):
        raise InvalidFactorArgumentError(argument)
    return value


def _adjust(session: GoldenRatioSession, factor: Any) -> bool:
    return session.set_adjust_factor(parse_factor(factor))


def _call(method: str) -> Callable[[GoldenRatioSession], bool]:
    def run(session: GoldenRatioSession) -> bool:
        getattr(session, method)()
        return True
    return run


COMMANDS: dict[str, Command] = {
    "enable": Command(_call("enable"), 0, "Enable golden ratio mode"),
    "disable": Command(_call("disable"), 0, "Disable golden ratio mode"),
    "toggle": Command(_call("toggle"), 0, "Toggle golden ratio mode"),
    "resize": Command(_call("resize"), 0, "Manually trigger golden ratio resize"),
    "toggle-widescreen": Command(_call("toggle_widescreen"), 0, "Toggle widescreen mode"),
    "adjust": Command(_adjust, 1, "Set golden ratio adjust factor"),
}


def run_command(name: str, *args: Any, session: Optional[GoldenRatioSession] = None) -> bool:
    """
    Run a command by name.

    Args:
        name: One of COMMANDS.
        *args: Command arguments (``adjust`` takes the factor).
        session: Target session. Defaults to the process-wide one.

    Returns:
        True if the command ran; False if it was rejected with a notice.
    """
    session = session or get_session()

    def reject(message: str) -> bool:
        session.provider.notify(f"goldenpane: {message}", NotifyLevel.ERROR)
        return False

    command = COMMANDS.get(name)
    if command is None:
        return reject(f"Unknown command '{name}'")

    if len(args) != command.nargs:
        if name == "adjust":
            return reject(str(InvalidFactorArgumentError(" ".join(map(str, args)))))
        return reject(f"'{name}' takes {command.nargs} argument(s), got {len(args)}")

    try:
        return command.run(session, *args)
    except InvalidFactorArgumentError as e:
        return reject(str(e))
