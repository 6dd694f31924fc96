"""
Report assembly - Application service merging probe outputs into ordered facts.
"""

from __future__ import annotations
import logging
from typing import Any, List, Optional, Tuple

from ..domain.interfaces.host_info import HostInfoProvider
from ..domain.models.report import Fact, ProbeResult, Report
from . import probes

OS_VERSION_LABEL = "OS Version"
ANDROID_VERSION_LABEL = "Android Version"

BASIC_LABELS: Tuple[str, ...] = (
    "Device",
    OS_VERSION_LABEL,
    "Architecture",
    "Root Status",
    "Memory Usage",
    "Internal Storage",
    "Security Patch",
    "Uptime",
)

# Android hosts name the release after the platform
ANDROID_BASIC_LABELS: Tuple[str, ...] = tuple(
    ANDROID_VERSION_LABEL if label == OS_VERSION_LABEL else label for label in BASIC_LABELS
)

DETAILED_LABELS: Tuple[str, ...] = (
    "Kernel Version",
    "CPU/Hardware",
    "Bootloader",
    "Build Type",
    "External Storage",
    "Hardware Platform",
    "Supported ABIs",
    "Build Fingerprint",
)


class ReportService:
    """Builds a fresh Report from a host provider on every call."""

    def __init__(
        self,
        host: HostInfoProvider,
        su_paths: Optional[Tuple[str, ...]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._host = host
        self._su_paths = tuple(su_paths) if su_paths is not None else probes.SU_FALLBACK_PATHS
        self._logger = logger or logging.getLogger(__name__)

    def build(self, detailed: bool = False) -> Report:
        degraded: List[str] = []

        def fact(label: str, result: ProbeResult[Any], value: Optional[str] = None) -> Fact:
            if result.degraded:
                degraded.append(label)
                self._logger.debug(
                    f"Fact '{label}' degraded to {result.fallback.value} fallback: {result.reason}"
                )
            return Fact(label, value if value is not None else str(result.value))

        host = self._host
        internal, external = probes.probe_storage(host)
        root = probes.probe_root(host, self._su_paths)

        basic = (
            fact("Device", probes.probe_device(host)),
            fact(self._os_version_label(), probes.probe_os_version(host)),
            fact("Architecture", probes.probe_architecture(host)),
            fact("Root Status", root, "Rooted" if root.value else "Not Rooted"),
            fact("Memory Usage", probes.probe_memory(host)),
            fact("Internal Storage", internal),
            fact("Security Patch", probes.probe_security_patch(host)),
            fact("Uptime", probes.probe_uptime(host)),
        )

        extra: Tuple[Fact, ...] = ()
        if detailed:
            extra = (
                fact("Kernel Version", probes.probe_kernel_version(host)),
                fact("CPU/Hardware", probes.probe_cpu(host)),
                fact("Bootloader", probes.guarded(host.bootloader, "bootloader")),
                fact("Build Type", probes.probe_build_type(host)),
                fact("External Storage", external),
                fact("Hardware Platform", probes.guarded(host.hardware, "hardware")),
                fact("Supported ABIs", probes.probe_abis(host)),
                fact("Build Fingerprint", probes.probe_fingerprint(host)),
            )

        if degraded:
            self._logger.info(f"System report built with {len(degraded)} degraded fact(s): {degraded}")
        return Report(basic=basic, detailed=extra, degraded=tuple(degraded))

    def _os_version_label(self) -> str:
        try:
            android = self._host.api_level() is not None
        except Exception as e:
            self._logger.debug(f"API level unavailable for version label: {e}")
            android = False
        return ANDROID_VERSION_LABEL if android else OS_VERSION_LABEL
