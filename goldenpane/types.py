"""
Goldenpane type definitions.

Core data structures shared by the geometry engine, the orchestrator and
the host providers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional


class HostEvent(Enum):
    """Layout-affecting events a host can report."""

    FOCUS_CHANGED = "focus-changed"
    CANVAS_RESIZED = "canvas-resized"
    CONTENT_ENTERED = "content-entered"


class NotifyLevel(Enum):
    """Severity of a user-facing notice."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class CanvasSize(NamedTuple):
    """Full display area, in lines and columns."""

    lines: int
    columns: int


class TargetSize(NamedTuple):
    """Target dimensions for the active pane."""

    height: int
    width: int


class SplitAxes(NamedTuple):
    """Which kinds of neighbors the active pane has."""

    horizontal: bool  # stacked neighbor exists, height may change
    vertical: bool    # side-by-side neighbor exists, width may change


@dataclass
class PaneData:
    """A rectangular region of the canvas as reported by the host."""

    id: str
    width: int = 80
    height: int = 24
    row: int = 0
    col: int = 0
    buffer: Optional[str] = None
    buffer_name: str = ""
    filetype: str = ""
    buffer_valid: bool = True
    floating: bool = False
    active: bool = False

    @property
    def row_end(self) -> int:
        return self.row + self.height

    @property
    def col_end(self) -> int:
        return self.col + self.width

    @property
    def is_normal(self) -> bool:
        """True for panes taking part in the tiled layout."""
        return not self.floating


@dataclass
class ExcludedPane:
    """Geometry snapshot of a pane that keeps its size during a resize pass."""

    width: int
    height: int
    row_start: int
    row_end: int
    col_start: int
    col_end: int

    @classmethod
    def from_pane(cls, pane: PaneData) -> "ExcludedPane":
        return cls(
            width=pane.width,
            height=pane.height,
            row_start=pane.row,
            row_end=pane.row_end,
            col_start=pane.col,
            col_end=pane.col_end,
        )
