"""
Session lifecycle for Goldenpane.

A session owns the enabled flag and the host event subscription:

    create -> enable -> disable -> destroy

While enabled, focus changes, canvas resizes and content entering a pane
each schedule a resize of whichever pane is focused when the scheduled call
runs. Scheduling instead of resizing inside the event means the resize sees
the layout after the host has settled it (a fresh split has its final size).

A default process-wide session backs the command surface; ``setup`` creates
it and ``get_session`` returns it.
"""

from typing import Any, Optional

from .config import ConfigStore
from .errors import HostOperationError, InvalidConfigKeyError, InvalidConfigValueError
from .orchestrator import ResizeOrchestrator
from .providers.base import Provider
from .telemetry import get_logger
from .types import HostEvent, NotifyLevel

logger = get_logger(__name__)


class GoldenRatioSession:
    """Enable/disable state machine wrapping a ResizeOrchestrator."""

    GROUP = "GoldenRatio"
    EVENTS = (
        HostEvent.FOCUS_CHANGED,
        HostEvent.CANVAS_RESIZED,
        HostEvent.CONTENT_ENTERED,
    )

    def __init__(self, provider: Provider, config: Optional[ConfigStore] = None):
        """
        Initialize session.

        A handler group the host still holds from an earlier process (tmux
        hooks outlive the CLI) is adopted, so the session starts enabled.

        Args:
            provider: Host owning the panes.
            config: Configuration store. Defaults are used if None.
        """
        self.provider = provider
        self.config = config or ConfigStore()
        self.orchestrator = ResizeOrchestrator(provider, self.config, is_enabled=self.is_enabled)

        self._handle: Any = None
        self._enabled = False
        if provider.has_subscription(self.GROUP):
            self._handle = self.GROUP
            self._enabled = True

    def _notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        self.provider.notify(f"goldenpane: {message}", level)

    def _debug(self, message: str) -> None:
        logger.debug(message)
        if self.config.get().debug:
            self._notify(message, NotifyLevel.DEBUG)

    def is_enabled(self) -> bool:
        """Check if golden ratio mode is on."""
        return self._enabled

    def _on_event(self, event: HostEvent) -> None:
        self._debug(f"Event {event.value}, scheduling resize")
        self.provider.schedule(self.orchestrator.apply)

    def enable(self) -> None:
        """Subscribe to layout events and resize the focused pane."""
        if self._enabled:
            self._notify("Already enabled")
            return

        try:
            self._handle = self.provider.subscribe(self.GROUP, self.EVENTS, self._on_event)
        except HostOperationError as e:
            logger.debug("Failed to register event handlers: %s", e)
            # drop whatever part of the group the host did register
            try:
                self.provider.unsubscribe(self.GROUP)
            except HostOperationError as cleanup_error:
                logger.debug("Failed to clear event handlers: %s", cleanup_error)
            self._notify(f"Failed to enable: {e}", NotifyLevel.ERROR)
            return

        self._enabled = True
        self._notify("Enabled")
        self._debug("Event handlers registered")

        self.orchestrator.apply()

    def disable(self) -> None:
        """Drop the event subscription and rebalance all panes."""
        if not self._enabled:
            self._notify("Already disabled")
            return

        self._enabled = False
        if self._handle is not None:
            self.provider.unsubscribe(self._handle)
            self._handle = None

        try:
            self.provider.equalize()
        except Exception as e:
            logger.debug("Failed to rebalance windows: %s", e)

        self._notify("Disabled")
        self._debug("Event handlers cleared")

    def toggle(self) -> None:
        """Toggle golden ratio mode."""
        if self._enabled:
            self.disable()
        else:
            self.enable()

    def resize(self) -> None:
        """Resize the focused pane now."""
        self.orchestrator.apply()

    def toggle_widescreen(self) -> None:
        """Switch adjust_factor between 1.0 and wide_adjust_factor."""
        opts = self.config.get()
        if opts.adjust_factor == 1.0:
            self.config.set("adjust_factor", opts.wide_adjust_factor)
            self._notify(f"Widescreen mode (factor: {opts.wide_adjust_factor:.2f})")
        else:
            self.config.set("adjust_factor", 1.0)
            self._notify("Normal mode (factor: 1.0)")
        self.resize()

    def set_adjust_factor(self, factor: float) -> bool:
        """
        Set the width adjustment factor and resize.

        Returns:
            True if the factor was accepted.
        """
        try:
            self.config.set("adjust_factor", factor)
        except InvalidConfigValueError as e:
            self._notify(str(e), NotifyLevel.ERROR)
            return False

        self._notify(f"Adjust factor set to {factor:.2f}")
        self.resize()
        return True

    def set_option(self, key: str, value: Any) -> bool:
        """
        Update one configuration option.

        Unknown keys are a warning, bad values an error; neither changes
        anything.
        """
        try:
            self.config.set(key, value)
        except InvalidConfigKeyError as e:
            self._notify(str(e), NotifyLevel.WARN)
            return False
        except InvalidConfigValueError as e:
            self._notify(str(e), NotifyLevel.ERROR)
            return False
        return True

    def destroy(self) -> None:
        """Tear the session down, disabling it first if needed."""
        if self._enabled:
            self.disable()


_default_session: Optional[GoldenRatioSession] = None


def setup(provider: Provider, user_config: Optional[dict] = None) -> GoldenRatioSession:
    """
    Create the default session.

    Args:
        provider: Host owning the panes.
        user_config: Options merged over the defaults.

    Returns:
        The new default session. A previous one is destroyed first.
    """
    global _default_session

    config = ConfigStore()
    config.setup(user_config)

    if _default_session is not None:
        _default_session.destroy()
    _default_session = GoldenRatioSession(provider, config)
    return _default_session


def get_session() -> GoldenRatioSession:
    """Get the default session."""
    if _default_session is None:
        raise RuntimeError("goldenpane.setup() has not been called")
    return _default_session


def teardown() -> None:
    """Destroy and forget the default session."""
    global _default_session

    if _default_session is not None:
        _default_session.destroy()
    _default_session = None
