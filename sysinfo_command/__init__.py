"""
sysinfo-command - A chat command reporting device and OS statistics.
"""

__version__ = "1.0.0"
__author__ = "sysinfo-command Team"

__all__ = [
    "build_result",
    "system_info",
]


# Lazy attribute access to avoid importing psutil at package import time.
def __getattr__(name: str):  # pragma: no cover - simple lazy loader
    if name in {"build_result", "system_info"}:
        from .plugins import system_info as _plugin
        return getattr(_plugin, name)
    raise AttributeError(f"module 'sysinfo_command' has no attribute {name!r}")
