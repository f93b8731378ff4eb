"""
Base provider interface for Goldenpane.

A provider is the host that owns the canvas and its panes. The core only
reads geometry through it and asks it to resize; it never creates or
destroys panes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Callable, Optional

from ..types import CanvasSize, HostEvent, NotifyLevel, PaneData

EventHandler = Callable[[HostEvent], None]


class Provider(ABC):
    """Abstract base class for pane hosts."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is available in current environment."""
        pass

    # ========== Queries ==========

    @abstractmethod
    def get_panes(self) -> list[PaneData]:
        """
        Get all panes of the current view, floating ones included.

        Returns:
            List of PaneData objects.
        """
        pass

    @abstractmethod
    def get_canvas_size(self) -> CanvasSize:
        """
        Get the full canvas size.

        Returns:
            CanvasSize of (lines, columns).
        """
        pass

    @abstractmethod
    def get_active_pane_id(self) -> Optional[str]:
        """Get the focused pane ID, or None when nothing is focused."""
        pass

    def get_pane(self, pane_id: str) -> Optional[PaneData]:
        """Get a single pane by ID."""
        for pane in self.get_panes():
            if pane.id == pane_id:
                return pane
        return None

    def is_pane_valid(self, pane_id: str) -> bool:
        """Check if the pane still exists."""
        return self.get_pane(pane_id) is not None

    # ========== Mutations ==========

    @abstractmethod
    def set_pane_width(self, pane_id: str, width: int) -> None:
        """
        Set a pane's width.

        Raises:
            HostOperationError: The host rejected the resize.
        """
        pass

    @abstractmethod
    def set_pane_height(self, pane_id: str, height: int) -> None:
        """
        Set a pane's height.

        Raises:
            HostOperationError: The host rejected the resize.
        """
        pass

    @abstractmethod
    def equalize(self) -> None:
        """Rebalance all panes to even sizes."""
        pass

    def recenter(self, pane_id: str) -> None:
        """Center the viewport of a pane on its cursor."""
        pass

    # ========== Notifications ==========

    @abstractmethod
    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Show a message to the user."""
        pass

    # ========== Events ==========

    @abstractmethod
    def subscribe(
        self,
        group: str,
        events: Iterable[HostEvent],
        handler: EventHandler,
    ) -> Any:
        """
        Register a named group of event handlers.

        Registering a group that already exists replaces it.

        Returns:
            Opaque handle accepted by unsubscribe.
        """
        pass

    @abstractmethod
    def unsubscribe(self, handle: Any) -> None:
        """Remove a group registered with subscribe."""
        pass

    def has_subscription(self, group: str) -> bool:
        """Check if a handler group is currently registered."""
        return False

    @abstractmethod
    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Run ``callback(*args)`` once the host has settled the current event."""
        pass
