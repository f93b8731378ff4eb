"""
Goldenpane - Golden-ratio sizing for the focused pane.

Resizes the focused pane to a golden-ratio share of the canvas, shrinking
its neighbors while panes matched by exclusion rules keep their size.

Basic Usage:
    from goldenpane import GoldenRatioConfig, PaneData, CanvasSize, compute_target

    active = PaneData(id="1", width=100, height=50, col=0)
    target = compute_target(CanvasSize(50, 200), active, {}, GoldenRatioConfig())
    # TargetSize(height=30, width=123)

With a Provider (e.g., tmux):
    import goldenpane
    from goldenpane.providers import TmuxProvider

    session = goldenpane.setup(TmuxProvider(), {"max_width": 120})
    session.enable()
"""

__version__ = "0.1.0"
__author__ = "Goldenpane Contributors"

# Core types
from .types import (
    PaneData,
    ExcludedPane,
    CanvasSize,
    TargetSize,
    SplitAxes,
    HostEvent,
    NotifyLevel,
)

# Errors
from .errors import (
    GoldenPaneError,
    InvalidConfigKeyError,
    InvalidConfigValueError,
    InvalidFactorArgumentError,
    HostOperationError,
)

# Core
from .exclusion import ExclusionRule, exclusion_reason, is_excluded
from .layout import GoldenRatioCalculator, compute_target, detect_axes
from .orchestrator import ResizeOrchestrator
from .session import GoldenRatioSession, setup, get_session, teardown
from .commands import COMMANDS, run_command, parse_factor
from .scheduler import TaskQueue

# Configuration
from .config import (
    GoldenRatioConfig,
    ConfigStore,
    load_config,
    save_config,
    get_config_path,
)

from . import providers

__all__ = [
    # Version
    "__version__",

    # Types
    "PaneData",
    "ExcludedPane",
    "CanvasSize",
    "TargetSize",
    "SplitAxes",
    "HostEvent",
    "NotifyLevel",

    # Errors
    "GoldenPaneError",
    "InvalidConfigKeyError",
    "InvalidConfigValueError",
    "InvalidFactorArgumentError",
    "HostOperationError",

    # Core
    "ExclusionRule",
    "exclusion_reason",
    "is_excluded",
    "GoldenRatioCalculator",
    "compute_target",
    "detect_axes",
    "ResizeOrchestrator",
    "GoldenRatioSession",
    "setup",
    "get_session",
    "teardown",
    "COMMANDS",
    "run_command",
    "parse_factor",
    "TaskQueue",

    # Configuration
    "GoldenRatioConfig",
    "ConfigStore",
    "load_config",
    "save_config",
    "get_config_path",

    # Submodules
    "providers",
]
