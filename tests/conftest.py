import datetime as _dt
from typing import Dict, List, Optional

import pytest

from sysinfo_command.domain.models.report import DiskUsage, MemoryStats

GB = 1024 ** 3

CPUINFO_X86 = """processor\t: 0
vendor_id\t: GenuineIntel
model name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz
cpu MHz\t\t: 1992.000
"""

PROC_VERSION = "Linux version 5.10.43-android12-9-00001 (build-user@build-host) (clang version 12.0.5) #1 SMP PREEMPT\n"


class FakeHostInfoProvider:
    """In-memory host used across tests; set an attribute to an Exception to make that read fail."""

    def __init__(self, **overrides):
        self.values = {
            "manufacturer": "Google",
            "model": "Pixel 7",
            "os_release": "14",
            "api_level": 34,
            "supported_abis": ["arm64-v8a", "armeabi-v7a", "armeabi"],
            "os_arch": "aarch64",
            "os_version": "5.10.43-android12",
            "env": {"PATH": "/usr/bin:/bin"},
            "existing_files": set(),
            "disks": {"/data": DiskUsage(total=100 * GB, free=40 * GB)},
            "internal_storage_path": "/data",
            "external_storage_path": "/storage/emulated/0",
            "external_storage_mounted": False,
            "cpu_info_text": CPUINFO_X86,
            "kernel_version_text": PROC_VERSION,
            "security_patch": "2024-03-05",
            "bootloader": "slider-1.2-9152140",
            "hardware": "gs201",
            "build_type": "user",
            "build_tags": "release-keys",
            "fingerprint": "google/panther/panther:14/UQ1A.240205.004/11269751:user/release-keys",
            "memory": MemoryStats(total=8 * GB, available=2 * GB),
            "elapsed_realtime_ms": 3_665_000,
        }
        self.values.update(overrides)

    def _get(self, key):
        value = self.values[key]
        if isinstance(value, Exception):
            raise value
        return value

    def manufacturer(self) -> str:
        return self._get("manufacturer")

    def model(self) -> str:
        return self._get("model")

    def os_release(self) -> str:
        return self._get("os_release")

    def api_level(self) -> Optional[int]:
        return self._get("api_level")

    def supported_abis(self) -> List[str]:
        return self._get("supported_abis")

    def os_arch(self) -> Optional[str]:
        return self._get("os_arch")

    def os_version(self) -> Optional[str]:
        return self._get("os_version")

    def getenv(self, name: str) -> Optional[str]:
        env: Dict[str, str] = self._get("env")
        return env.get(name)

    def file_exists(self, path: str) -> bool:
        return path in self._get("existing_files")

    def disk_usage(self, path: str) -> DiskUsage:
        disks = self._get("disks")
        if path not in disks:
            raise FileNotFoundError(path)
        return disks[path]

    def internal_storage_path(self) -> str:
        return self._get("internal_storage_path")

    def external_storage_path(self) -> str:
        return self._get("external_storage_path")

    def external_storage_mounted(self) -> bool:
        return self._get("external_storage_mounted")

    def cpu_info_text(self) -> str:
        return self._get("cpu_info_text")

    def kernel_version_text(self) -> str:
        return self._get("kernel_version_text")

    def security_patch(self) -> str:
        return self._get("security_patch")

    def bootloader(self) -> str:
        return self._get("bootloader")

    def hardware(self) -> str:
        return self._get("hardware")

    def build_type(self) -> str:
        return self._get("build_type")

    def build_tags(self) -> str:
        return self._get("build_tags")

    def fingerprint(self) -> str:
        return self._get("fingerprint")

    def memory(self) -> MemoryStats:
        return self._get("memory")

    def elapsed_realtime_ms(self) -> int:
        return self._get("elapsed_realtime_ms")


@pytest.fixture
def host():
    return FakeHostInfoProvider()


@pytest.fixture
def fixed_clock():
    return lambda: _dt.datetime(2024, 3, 9, 14, 5)


@pytest.fixture(autouse=True)
def _env_defaults(monkeypatch):
    # Keep settings independent from the developer's environment
    for key in ("SYSINFO_COMMANDS_DIR", "SYSINFO_LOG_LEVEL", "SYSINFO_ACCENT_COLOR", "SYSINFO_READ_TIMEOUT_S"):
        monkeypatch.delenv(key, raising=False)
    yield
