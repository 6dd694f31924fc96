"""Host infrastructure package."""

from .local import LocalHostInfoProvider

__all__ = ['LocalHostInfoProvider']
