"""
Host info provider protocol.
Every platform read the probes need goes through this single capability.
"""

from __future__ import annotations
from typing import List, Optional, Protocol

from ..models.report import DiskUsage, MemoryStats


class HostInfoProvider(Protocol):
    """Read-only view of the host device and operating system.

    Implementations may raise on any call; probes are responsible for
    turning failures into fallback values.
    """

    def manufacturer(self) -> str:
        ...

    def model(self) -> str:
        ...

    def os_release(self) -> str:
        """User-facing OS release, e.g. "14" on Android or a kernel release elsewhere."""
        ...

    def api_level(self) -> Optional[int]:
        """Android SDK level, or None when the host is not Android."""
        ...

    def supported_abis(self) -> List[str]:
        ...

    def os_arch(self) -> Optional[str]:
        ...

    def os_version(self) -> Optional[str]:
        ...

    def getenv(self, name: str) -> Optional[str]:
        ...

    def file_exists(self, path: str) -> bool:
        ...

    def disk_usage(self, path: str) -> DiskUsage:
        ...

    def internal_storage_path(self) -> str:
        ...

    def external_storage_path(self) -> str:
        ...

    def external_storage_mounted(self) -> bool:
        ...

    def cpu_info_text(self) -> str:
        ...

    def kernel_version_text(self) -> str:
        ...

    def security_patch(self) -> str:
        ...

    def bootloader(self) -> str:
        ...

    def hardware(self) -> str:
        ...

    def build_type(self) -> str:
        ...

    def build_tags(self) -> str:
        ...

    def fingerprint(self) -> str:
        ...

    def memory(self) -> MemoryStats:
        ...

    def elapsed_realtime_ms(self) -> int:
        """Milliseconds since boot."""
        ...
