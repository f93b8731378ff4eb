"""
Generic provider for Goldenpane.

A provider that works with manually provided pane data.
Useful for library usage, custom integrations and tests.
"""

from collections.abc import Iterable
from dataclasses import replace
from typing import Any, Callable, Optional

from .base import EventHandler, Provider
from ..errors import HostOperationError
from ..scheduler import TaskQueue
from ..telemetry import get_logger
from ..types import CanvasSize, HostEvent, NotifyLevel, PaneData

logger = get_logger(__name__)


class GenericProvider(Provider):
    """
    Generic in-memory host.

    This provider doesn't interact with any editor or multiplexer. Pane data
    is provided programmatically, resizes update it in place, and scheduled
    callbacks wait in a TaskQueue until ``run_pending`` is called.
    """

    @property
    def name(self) -> str:
        return "generic"

    def __init__(
        self,
        panes: Optional[list[PaneData]] = None,
        lines: int = 50,
        columns: int = 200,
        active_id: Optional[str] = None,
        on_pane_resized: Optional[Callable[[str, int, int], None]] = None,
        on_equalize: Optional[Callable[[list[PaneData]], None]] = None,
    ):
        """
        Initialize generic provider.

        Args:
            panes: Initial pane data.
            lines: Canvas height.
            columns: Canvas width.
            active_id: Focused pane. Defaults to the pane flagged active.
            on_pane_resized: Callback when a pane is resized.
            on_equalize: Callback when a rebalance is requested; it may
                rewrite the pane geometry it receives.
        """
        self._panes = panes or []
        self._lines = lines
        self._columns = columns
        self._active_id = active_id
        self._on_pane_resized = on_pane_resized
        self._on_equalize = on_equalize
        self._groups: dict[str, tuple[frozenset[HostEvent], EventHandler]] = {}

        self.tasks = TaskQueue()
        self.messages: list[tuple[NotifyLevel, str]] = []
        self.recentered: list[str] = []
        self.equalize_count = 0

    def is_available(self) -> bool:
        """Always available."""
        return True

    def set_panes(self, panes: list[PaneData]) -> None:
        """Set pane data."""
        self._panes = panes

    def set_canvas_size(self, lines: int, columns: int) -> None:
        """Set canvas dimensions."""
        self._lines = lines
        self._columns = columns

    def set_active(self, pane_id: Optional[str]) -> None:
        """Focus a pane."""
        self._active_id = pane_id

    def add_pane(self, pane: PaneData) -> None:
        """Add a pane."""
        self._panes.append(pane)

    def remove_pane(self, pane_id: str) -> bool:
        """Remove a pane."""
        for i, pane in enumerate(self._panes):
            if pane.id == pane_id:
                self._panes.pop(i)
                return True
        return False

    def _find(self, pane_id: str) -> Optional[PaneData]:
        for pane in self._panes:
            if pane.id == pane_id:
                return pane
        return None

    def get_panes(self) -> list[PaneData]:
        """Get copies of the stored panes."""
        return [replace(pane) for pane in self._panes]

    def get_canvas_size(self) -> CanvasSize:
        """Get canvas dimensions."""
        return CanvasSize(lines=self._lines, columns=self._columns)

    def get_active_pane_id(self) -> Optional[str]:
        """Get the focused pane."""
        if self._active_id is not None:
            return self._active_id
        for pane in self._panes:
            if pane.active:
                return pane.id
        return None

    def is_pane_valid(self, pane_id: str) -> bool:
        return self._find(pane_id) is not None

    def _resize(self, pane_id: str, width: Optional[int], height: Optional[int]) -> None:
        pane = self._find(pane_id)
        if pane is None:
            raise HostOperationError(f"Invalid pane id: {pane_id}")
        if (width is not None and width < 0) or (height is not None and height < 0):
            raise HostOperationError(f"Invalid size for pane {pane_id}")

        if width is not None:
            pane.width = width
        if height is not None:
            pane.height = height

        if self._on_pane_resized:
            self._on_pane_resized(pane_id, pane.width, pane.height)

    def set_pane_width(self, pane_id: str, width: int) -> None:
        """Resize a pane's width (updates internal state)."""
        self._resize(pane_id, width, None)

    def set_pane_height(self, pane_id: str, height: int) -> None:
        """Resize a pane's height (updates internal state)."""
        self._resize(pane_id, None, height)

    def equalize(self) -> None:
        """Count the request and hand the panes to the equalize callback."""
        self.equalize_count += 1
        if self._on_equalize:
            self._on_equalize(self._panes)

    def recenter(self, pane_id: str) -> None:
        self.recentered.append(pane_id)

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Record a message."""
        logger.debug("notify[%s]: %s", level.value, message)
        self.messages.append((level, message))

    def subscribe(
        self,
        group: str,
        events: Iterable[HostEvent],
        handler: EventHandler,
    ) -> str:
        self._groups[group] = (frozenset(events), handler)
        return group

    def unsubscribe(self, handle: Any) -> None:
        self._groups.pop(handle, None)

    def has_subscription(self, group: str) -> bool:
        return group in self._groups

    def emit(self, event: HostEvent) -> int:
        """
        Fire ``event`` to every subscribed handler, as a host would.

        Returns:
            Number of handlers called.
        """
        handlers = [handler for events, handler in self._groups.values() if event in events]
        for handler in handlers:
            handler(event)
        return len(handlers)

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self.tasks.schedule(callback, *args)

    def run_pending(self) -> int:
        """Run the next tick of scheduled callbacks."""
        return self.tasks.run_pending()
