"""
Goldenpane providers.

Providers abstract the host that owns the panes: an editor, a terminal
multiplexer, or plain in-memory data.
"""

from .base import Provider
from .tmux import TmuxProvider
from .generic import GenericProvider

__all__ = ["Provider", "TmuxProvider", "GenericProvider"]
