"""
tmux provider for Goldenpane.

Implements the host interface for the tmux terminal multiplexer. tmux panes
have no buffers, so the pane itself stands in for the content: its title is
the content name and its running command is the filetype.
"""

import shlex
import subprocess
from collections.abc import Iterable
from typing import Any, Callable, Optional

from .base import EventHandler, Provider
from ..errors import HostOperationError
from ..telemetry import get_logger
from ..types import CanvasSize, HostEvent, NotifyLevel, PaneData

logger = get_logger(__name__)

# event -> (set-hook scope flags, hook name)
HOOKS: dict[HostEvent, tuple[str, str]] = {
    HostEvent.FOCUS_CHANGED: ("-g", "after-select-pane"),
    HostEvent.CANVAS_RESIZED: ("-gw", "window-resized"),
    HostEvent.CONTENT_ENTERED: ("-gw", "after-split-window"),
}

GROUP_OPTION = "@goldenpane-group"


class TmuxProvider(Provider):
    """Provider for tmux terminal multiplexer."""

    @property
    def name(self) -> str:
        return "tmux"

    def __init__(self, hook_command: str = "goldenpane resize", hook_index: int = 73):
        """
        Initialize tmux provider.

        Args:
            hook_command: Shell command tmux hooks run to trigger a resize.
            hook_index: Slot used in each hook array, so other hooks on the
                same event are left alone.
        """
        self.hook_command = hook_command
        self.hook_index = hook_index

    def _run_tmux(self, *args: str) -> str:
        """Run tmux command and return output."""
        result = subprocess.run(
            ["tmux", *args],
            capture_output=True,
            text=True
        )
        return result.stdout.strip()

    def _run_tmux_checked(self, *args: str) -> str:
        """Run tmux command, raising HostOperationError when it fails."""
        try:
            result = subprocess.run(
                ["tmux", *args],
                capture_output=True,
                text=True
            )
        except (FileNotFoundError, OSError) as e:
            raise HostOperationError(f"tmux {args[0]} failed: {e}") from e

        if result.returncode != 0:
            raise HostOperationError(
                f"tmux {args[0]} failed: {result.stderr.strip() or result.returncode}"
            )
        return result.stdout.strip()

    def is_available(self) -> bool:
        """Check if tmux is available and we're in a session."""
        try:
            result = subprocess.run(
                ["tmux", "display-message", "-p", "#{session_name}"],
                capture_output=True,
                timeout=5
            )
            return result.returncode == 0 and bool(result.stdout.strip())
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def get_panes(self) -> list[PaneData]:
        """Get all panes of the current window."""
        # title goes last: it is free text and may contain the separator
        format_str = (
            "#{pane_id}|#{pane_width}|#{pane_height}|#{pane_top}|#{pane_left}"
            "|#{pane_active}|#{pane_dead}|#{pane_current_command}|#{pane_title}"
        )
        output = self._run_tmux("list-panes", "-F", format_str)
        panes = []

        for line in output.split("\n"):
            if not line:
                continue
            parts = line.split("|", 8)
            if len(parts) < 9:
                continue
            pane_id = parts[0]
            panes.append(PaneData(
                id=pane_id,
                width=int(parts[1]),
                height=int(parts[2]),
                row=int(parts[3]),
                col=int(parts[4]),
                active=parts[5] == "1",
                buffer=pane_id,
                buffer_valid=parts[6] != "1",
                filetype=parts[7],
                buffer_name=parts[8],
            ))

        return panes

    def get_canvas_size(self) -> CanvasSize:
        """Get window dimensions."""
        output = self._run_tmux("display-message", "-p", "#{window_height}|#{window_width}")
        lines, columns = output.split("|")
        return CanvasSize(lines=int(lines), columns=int(columns))

    def get_active_pane_id(self) -> Optional[str]:
        """Get current pane ID."""
        return self._run_tmux("display-message", "-p", "#{pane_id}") or None

    def is_pane_valid(self, pane_id: str) -> bool:
        try:
            output = self._run_tmux_checked("display-message", "-t", pane_id, "-p", "#{pane_id}")
        except HostOperationError:
            return False
        return output == pane_id

    def set_pane_width(self, pane_id: str, width: int) -> None:
        self._run_tmux_checked("resize-pane", "-t", pane_id, "-x", str(width))

    def set_pane_height(self, pane_id: str, height: int) -> None:
        self._run_tmux_checked("resize-pane", "-t", pane_id, "-y", str(height))

    def equalize(self) -> None:
        """
        Spread panes out evenly.

        ``select-layout -E`` evens out the active pane and its neighbours
        within the same layout cell. Panes in other cells keep their size:
        tmux has no single command that rebalances a nested layout tree,
        and the preset layouts would rearrange the panes.
        """
        self._run_tmux_checked("select-layout", "-E")

    def recenter(self, pane_id: str) -> None:
        """tmux panes have no viewport of their own to scroll."""
        logger.debug("Recenter not supported by tmux (pane %s)", pane_id)

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Show a message in the status line."""
        if level in (NotifyLevel.WARN, NotifyLevel.ERROR):
            message = f"{level.value.upper()}: {message}"
        self._run_tmux("display-message", message)

    def _hook_slot(self, hook: str) -> str:
        return f"{hook}[{self.hook_index}]"

    def subscribe(
        self,
        group: str,
        events: Iterable[HostEvent],
        handler: EventHandler,
    ) -> str:
        """
        Install global hooks that re-run ``hook_command``.

        tmux runs hooks outside this process, so ``handler`` is not called;
        each hook starts ``hook_command`` in the background instead, which
        is already deferred until tmux has finished the triggering command.
        """
        command = f"run-shell -b {shlex.quote(self.hook_command)}"
        for event in events:
            scope, hook = HOOKS[event]
            self._run_tmux_checked("set-hook", scope, self._hook_slot(hook), command)

        self._run_tmux_checked("set-option", "-g", GROUP_OPTION, group)
        logger.debug("Installed tmux hooks for group %s", group)
        return group

    def unsubscribe(self, handle: Any) -> None:
        """Remove every hook installed by subscribe."""
        for scope, hook in HOOKS.values():
            self._run_tmux("set-hook", f"{scope}u", self._hook_slot(hook))
        self._run_tmux("set-option", "-gu", GROUP_OPTION)
        logger.debug("Removed tmux hooks for group %s", handle)

    def has_subscription(self, group: str) -> bool:
        return self._run_tmux("show-options", "-gqv", GROUP_OPTION) == group

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Run immediately; every CLI invocation handles a single event."""
        callback(*args)
