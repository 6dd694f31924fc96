"""
Local host provider - reads facts about the machine the command runs on.

On Android the build properties come from `getprop`; on other Linux and
desktop hosts the closest platform equivalents are used and Android-only
identifiers report "unknown".
"""

from __future__ import annotations
import logging
import os
import platform
import select
import shutil
import subprocess
import time
from typing import List, Optional

import psutil

from ...domain.models.report import DiskUsage, MemoryStats
from ..config.settings import HostSettings

# Mirrors android.os.Build.UNKNOWN
BUILD_UNKNOWN = "unknown"

_MACHINE_ABIS = {
    "aarch64": ["arm64-v8a"],
    "arm64": ["arm64-v8a"],
    "armv8l": ["armeabi-v7a"],
    "armv7l": ["armeabi-v7a"],
    "x86_64": ["x86_64", "x86"],
    "amd64": ["x86_64", "x86"],
    "i386": ["x86"],
    "i686": ["x86"],
}

_DMI_DIR = "/sys/class/dmi/id"


class LocalHostInfoProvider:
    """HostInfoProvider backed by getprop, /proc, platform and psutil."""

    def __init__(self, settings: Optional[HostSettings] = None, logger: Optional[logging.Logger] = None):
        self._settings = settings or HostSettings()
        self._logger = logger or logging.getLogger(__name__)
        self._getprop_bin = shutil.which("getprop")

    # --- helpers ---

    def _getprop(self, key: str) -> Optional[str]:
        if not self._getprop_bin:
            return None
        try:
            completed = subprocess.run(
                [self._getprop_bin, key],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=self._settings.getprop_timeout_s,
                text=True,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            self._logger.debug(f"getprop {key} failed: {e}")
            return None
        value = (completed.stdout or "").strip()
        return value or None

    def _read_text(self, path: str) -> str:
        """Read up to `max_read_bytes` from a text source, waiting at most `read_timeout_s`.

        Device files such as /proc/cpuinfo report size 0, so the read is capped
        rather than sized. The descriptor is non-blocking and every chunk waits
        on select(), which raises TimeoutError for a source that never becomes
        readable (a FIFO without a writer, a hung device).
        """
        cap = self._settings.max_read_bytes
        timeout = self._settings.read_timeout_s
        deadline = time.monotonic() + timeout
        chunks: List[bytes] = []
        size = 0
        fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
        try:
            while size < cap:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError(f"{path} not fully read within {timeout}s")
                readable, _, _ = select.select([fd], [], [], remaining)
                if not readable:
                    raise TimeoutError(f"{path} not readable within {timeout}s")
                try:
                    chunk = os.read(fd, cap - size)
                except BlockingIOError:
                    continue
                if not chunk:
                    break
                chunks.append(chunk)
                size += len(chunk)
        finally:
            os.close(fd)
        return b"".join(chunks).decode("utf-8", errors="replace")

    def _dmi(self, name: str) -> Optional[str]:
        try:
            value = self._read_text(os.path.join(_DMI_DIR, name)).strip()
        except OSError:
            return None
        return value or None

    # --- identity ---

    def manufacturer(self) -> str:
        return self._getprop("ro.product.manufacturer") or self._dmi("sys_vendor") or ""

    def model(self) -> str:
        return self._getprop("ro.product.model") or self._dmi("product_name") or platform.node()

    def os_release(self) -> str:
        release = self._getprop("ro.build.version.release")
        if release:
            return release
        try:
            pretty = platform.freedesktop_os_release().get("PRETTY_NAME")
        except OSError:
            pretty = None
        return pretty or f"{platform.system()} {platform.release()}".strip()

    def api_level(self) -> Optional[int]:
        sdk = self._getprop("ro.build.version.sdk")
        if sdk is None:
            return None
        try:
            return int(sdk)
        except ValueError:
            self._logger.debug(f"Unparseable SDK level: {sdk!r}")
            return None

    def supported_abis(self) -> List[str]:
        abilist = self._getprop("ro.product.cpu.abilist")
        if abilist:
            return [abi.strip() for abi in abilist.split(",") if abi.strip()]
        return list(_MACHINE_ABIS.get(platform.machine().lower(), []))

    def os_arch(self) -> Optional[str]:
        return platform.machine() or None

    def os_version(self) -> Optional[str]:
        return platform.release() or None

    # --- environment and filesystem ---

    def getenv(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def file_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def disk_usage(self, path: str) -> DiskUsage:
        usage = psutil.disk_usage(path)
        return DiskUsage(total=usage.total, free=usage.free)

    def internal_storage_path(self) -> str:
        return self._settings.internal_storage_path

    def external_storage_path(self) -> str:
        return self._settings.external_storage_path

    def external_storage_mounted(self) -> bool:
        path = self._settings.external_storage_path
        return os.path.isdir(path) and os.access(path, os.R_OK)

    def cpu_info_text(self) -> str:
        return self._read_text(self._settings.cpuinfo_path)

    def kernel_version_text(self) -> str:
        return self._read_text(self._settings.version_path)

    # --- build properties ---

    def security_patch(self) -> str:
        return self._getprop("ro.build.version.security_patch") or ""

    def bootloader(self) -> str:
        return self._getprop("ro.bootloader") or BUILD_UNKNOWN

    def hardware(self) -> str:
        return self._getprop("ro.hardware") or BUILD_UNKNOWN

    def build_type(self) -> str:
        return self._getprop("ro.build.type") or BUILD_UNKNOWN

    def build_tags(self) -> str:
        return self._getprop("ro.build.tags") or BUILD_UNKNOWN

    def fingerprint(self) -> str:
        return self._getprop("ro.build.fingerprint") or BUILD_UNKNOWN

    # --- live stats ---

    def memory(self) -> MemoryStats:
        vm = psutil.virtual_memory()
        return MemoryStats(total=vm.total, available=vm.available)

    def elapsed_realtime_ms(self) -> int:
        return int((time.time() - psutil.boot_time()) * 1000)
