"""
Resize orchestration.

Runs one resize pass against a provider:

1. guard (session enabled, pane not floating or excluded, 2+ normal panes)
2. snapshot excluded panes
3. detect which split axes surround the active pane
4. calculate the target size
5. rebalance all panes
6. resize width, then height, when the change clears its threshold
7. restore every excluded pane to its snapshot size
8. recenter if configured

Step 5 runs only when step 6 will resize something. A pass whose target is
within the thresholds leaves the layout alone, so repeating ``apply`` does
not undo the previous one.

Every host call is best-effort: a failed resize is logged and the pass
continues. Nothing raises out of ``apply``.
"""

from typing import Any, Callable, Optional

from .config import ConfigStore, GoldenRatioConfig
from .exclusion import is_excluded
from .layout import GoldenRatioCalculator, detect_axes
from .providers.base import Provider
from .telemetry import get_logger
from .types import ExcludedPane, NotifyLevel, PaneData

logger = get_logger(__name__)


class ResizeOrchestrator:
    """Applies golden-ratio sizing to the focused pane."""

    def __init__(
        self,
        provider: Provider,
        config: Optional[ConfigStore] = None,
        is_enabled: Optional[Callable[[], bool]] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            provider: Host owning the panes.
            config: Configuration store, read at the start of every pass.
            is_enabled: Returns whether resizing is currently on.
                Always on if None.
        """
        self.provider = provider
        self.config = config or ConfigStore()
        self._is_enabled = is_enabled or (lambda: True)

    def _debug(self, msg: str, *args: Any) -> None:
        logger.debug(msg, *args)
        if self.config.get().debug:
            self.provider.notify("goldenpane: " + (msg % args), NotifyLevel.DEBUG)

    def _attempt(self, action: str, operation: Callable[..., Any], *args: Any) -> bool:
        """Run a host operation, logging instead of raising on failure."""
        try:
            operation(*args)
            return True
        except Exception as e:
            self._debug("Failed to %s: %s", action, e)
            return False

    def should_apply(self, pane: PaneData, panes: list[PaneData]) -> bool:
        """Check if ``pane`` may be resized in the current layout."""
        if not self._is_enabled():
            return False

        if pane.floating:
            self._debug("Skipping floating window")
            return False

        # exclusion before counting panes
        if is_excluded(pane, self.config.get()):
            return False

        if sum(1 for p in panes if p.is_normal) <= 1:
            self._debug("Only one window, skipping")
            return False

        return True

    def snapshot_excluded(
        self,
        active: PaneData,
        panes: list[PaneData],
        config: GoldenRatioConfig,
    ) -> dict[str, ExcludedPane]:
        """Record the geometry of every excluded normal pane but the active one."""
        excluded = {}
        for pane in panes:
            if pane.id == active.id or not pane.is_normal:
                continue
            if is_excluded(pane, config):
                excluded[pane.id] = ExcludedPane.from_pane(pane)
        return excluded

    def apply(self, pane_id: Optional[str] = None) -> None:
        """
        Resize ``pane_id`` (the focused pane if None).

        Safe to call from event callbacks: failures are logged, never raised.
        """
        try:
            self._apply(pane_id)
        except Exception:
            logger.exception("Golden ratio resize failed")

    def _apply(self, pane_id: Optional[str]) -> None:
        if not self._is_enabled():
            return

        pane_id = pane_id or self.provider.get_active_pane_id()
        if pane_id is None:
            return

        panes = self.provider.get_panes()
        active = next((pane for pane in panes if pane.id == pane_id), None)
        if active is None or not self.should_apply(active, panes):
            return

        config = self.config.get()
        excluded = self.snapshot_excluded(active, panes, config)
        axes = detect_axes(active, panes)
        canvas = self.provider.get_canvas_size()
        target = GoldenRatioCalculator(config).calculate(canvas, active, excluded)

        height_diff = target.height - active.height
        width_diff = target.width - active.width
        self._debug(
            "Layout: hsplit=%s vsplit=%s, Current: %dx%d, Target: %dx%d, Diff: %dx%d",
            axes.horizontal, axes.vertical,
            active.height, active.width,
            target.height, target.width,
            height_diff, width_diff,
        )

        resize_width = axes.vertical and abs(width_diff) >= config.minimal_width_change
        resize_height = axes.horizontal and abs(height_diff) >= config.minimal_height_change

        # with nothing to resize a rebalance would only undo the last pass
        if resize_width or resize_height:
            self._attempt("rebalance windows", self.provider.equalize)

        if resize_width and self._attempt(
            "set window width", self.provider.set_pane_width, active.id, target.width
        ):
            self._debug("Width adjusted")

        if resize_height and self._attempt(
            "set window height", self.provider.set_pane_height, active.id, target.height
        ):
            self._debug("Height adjusted")

        for excluded_id, info in excluded.items():
            self._restore(excluded_id, info)

        if config.recenter:
            self._attempt("recenter", self.provider.recenter, active.id)

    def _restore(self, pane_id: str, info: ExcludedPane) -> None:
        """Put an excluded pane back to its snapshot size."""
        try:
            valid = self.provider.is_pane_valid(pane_id)
        except Exception as e:
            self._debug("Failed to check window %s: %s", pane_id, e)
            return
        if not valid:
            return

        self._attempt("restore window width", self.provider.set_pane_width, pane_id, info.width)
        self._attempt("restore window height", self.provider.set_pane_height, pane_id, info.height)
        self._debug("Restored excluded window %s size: %dx%d", pane_id, info.height, info.width)
