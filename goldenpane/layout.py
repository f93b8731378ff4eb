"""
Goldenpane geometry engine.

Pure functions of explicit inputs: nothing here talks to a host.
"""

import math
from collections.abc import Iterable, Mapping

from .config import GoldenRatioConfig
from .telemetry import get_logger
from .types import CanvasSize, ExcludedPane, PaneData, SplitAxes, TargetSize

logger = get_logger(__name__)


def _overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open ranges [start, end) share at least one cell."""
    return start_a < end_b and start_b < end_a


class GoldenRatioCalculator:
    """Calculates golden-ratio dimensions for the focused pane."""

    REFERENCE_COLUMNS = 100
    MIN_SCALE = 0.4

    def __init__(self, config: GoldenRatioConfig):
        """
        Initialize calculator.

        Args:
            config: Configuration snapshot to calculate with.
        """
        self.config = config

    def scale_factor(self, columns: int) -> float:
        """
        Width scale factor.

        With auto_scale the factor is 1.0 at 100 columns and shrinks
        linearly as the canvas widens, never below 0.4. Otherwise it is
        the configured adjust_factor.
        """
        if self.config.auto_scale:
            return max(
                self.MIN_SCALE,
                1.0 - ((columns - self.REFERENCE_COLUMNS) / 1000.0) * 1.8,
            )
        return self.config.adjust_factor

    def available_space(
        self,
        canvas: CanvasSize,
        active: PaneData,
        excluded: Mapping[str, ExcludedPane],
    ) -> CanvasSize:
        """
        Canvas space left once excluded panes are accounted for.

        An excluded pane sharing rows with the active pane sits beside it
        and takes its width; one sharing columns sits above or below and
        takes its height. A pane overlapping on both axes is subtracted
        from both.
        """
        excluded_width = 0
        excluded_height = 0

        for info in excluded.values():
            if _overlaps(info.row_start, info.row_end, active.row, active.row_end):
                excluded_width += info.width
                logger.debug("Excluded window width: %d (row overlap)", info.width)

            if _overlaps(info.col_start, info.col_end, active.col, active.col_end):
                excluded_height += info.height
                logger.debug("Excluded window height: %d (col overlap)", info.height)

        available = CanvasSize(
            lines=canvas.lines - excluded_height,
            columns=canvas.columns - excluded_width,
        )
        logger.debug(
            "Available space: %dx%d (excluded: %dx%d)",
            available.lines, available.columns, excluded_height, excluded_width,
        )
        return available

    def calculate(
        self,
        canvas: CanvasSize,
        active: PaneData,
        excluded: Mapping[str, ExcludedPane],
    ) -> TargetSize:
        """
        Calculate target dimensions for the active pane.

        Args:
            canvas: Full canvas size.
            active: Active pane geometry.
            excluded: Snapshot of excluded panes by pane ID.

        Returns:
            TargetSize, never negative.
        """
        ratio = self.config.ratio
        available = self.available_space(canvas, active, excluded)

        height = math.floor(available.lines / ratio)
        width = math.floor((available.columns / ratio) * self.scale_factor(canvas.columns))

        max_width = self.config.max_width
        if max_width and max_width > 0:
            width = min(max_width, width)

        target = TargetSize(height=max(0, height), width=max(0, width))
        logger.debug("Target dimensions: %dx%d", target.height, target.width)
        return target


def compute_target(
    canvas: CanvasSize,
    active: PaneData,
    excluded: Mapping[str, ExcludedPane],
    config: GoldenRatioConfig,
) -> TargetSize:
    """Calculate target dimensions with ``config``."""
    return GoldenRatioCalculator(config).calculate(canvas, active, excluded)


def detect_axes(active: PaneData, panes: Iterable[PaneData]) -> SplitAxes:
    """
    Detect which splits surround the active pane.

    A normal pane sharing rows with the active pane at another column is a
    side-by-side (vertical) split; one sharing columns at another row is a
    stacked (horizontal) split. Floating panes are ignored, and with fewer
    than two normal panes neither axis is eligible.
    """
    normal = [pane for pane in panes if pane.is_normal]
    if len(normal) <= 1:
        return SplitAxes(horizontal=False, vertical=False)

    has_horizontal = False
    has_vertical = False

    for pane in normal:
        if pane.id == active.id:
            continue

        if _overlaps(pane.row, pane.row_end, active.row, active.row_end) and pane.col != active.col:
            has_vertical = True

        if _overlaps(pane.col, pane.col_end, active.col, active.col_end) and pane.row != active.row:
            has_horizontal = True

    return SplitAxes(horizontal=has_horizontal, vertical=has_vertical)
