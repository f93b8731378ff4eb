"""
Exclusion rules.

Decides whether a pane keeps its size while the focused pane is resized.
Rules are checked in a fixed order and the first match wins:

1. the pane's content is gone (invalid buffer)
2. filetype is listed in ``exclude_filetypes``
3. content name is listed in ``exclude_buffer_names`` (exact match)
4. content name matches one of ``exclude_buffer_patterns``, in list order
5. ``exclude_func(pane_id, buffer)`` returns true

Patterns are Python regular expressions searched anywhere in the name,
so ``"^term://"`` anchors and ``"\\.log$"`` needs the escaped dot.
"""

import re
from enum import Enum
from typing import Optional

from .config import GoldenRatioConfig
from .telemetry import get_logger
from .types import PaneData

logger = get_logger(__name__)


class ExclusionRule(Enum):
    """The rule that excluded a pane."""

    INVALID_BUFFER = "invalid-buffer"
    FILETYPE = "filetype"
    BUFFER_NAME = "buffer-name"
    BUFFER_PATTERN = "buffer-pattern"
    EXCLUDE_FUNC = "exclude-func"


def exclusion_reason(pane: PaneData, config: GoldenRatioConfig) -> Optional[ExclusionRule]:
    """
    Find the first rule excluding ``pane``.

    Returns:
        The matching rule, or None if the pane may be resized.
    """
    if not pane.buffer_valid:
        logger.debug("Excluded by invalid buffer: pane %s", pane.id)
        return ExclusionRule.INVALID_BUFFER

    if pane.filetype in config.exclude_filetypes:
        logger.debug("Excluded by filetype: %s", pane.filetype)
        return ExclusionRule.FILETYPE

    name = pane.buffer_name
    if name in config.exclude_buffer_names:
        logger.debug("Excluded by buffer name: %s", name)
        return ExclusionRule.BUFFER_NAME

    for pattern in config.exclude_buffer_patterns:
        if re.search(pattern, name):
            logger.debug("Excluded by pattern: %s matches %s", name, pattern)
            return ExclusionRule.BUFFER_PATTERN

    if config.exclude_func is not None and config.exclude_func(pane.id, pane.buffer):
        logger.debug("Excluded by custom function: pane %s", pane.id)
        return ExclusionRule.EXCLUDE_FUNC

    return None


def is_excluded(pane: PaneData, config: GoldenRatioConfig) -> bool:
    """Check if ``pane`` is exempt from resizing."""
    return exclusion_reason(pane, config) is not None
