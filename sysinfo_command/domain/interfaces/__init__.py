"""Domain interfaces package - Protocols for ports."""

from .host_info import HostInfoProvider

__all__ = [
    "HostInfoProvider",
]
