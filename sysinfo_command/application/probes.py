"""
System probes.

Each probe reads one fact through a HostInfoProvider and never raises:
failures are converted into a ProbeResult tagged with the fallback used.
"""

from __future__ import annotations
import os
from typing import Callable, Optional, Tuple

from ..domain.interfaces.host_info import HostInfoProvider
from ..domain.models.report import ProbeResult
from .formatters import format_abis, format_fingerprint, format_uptime, format_usage

UNKNOWN = "Unknown"
NOT_AVAILABLE = "Not available"
SAME_AS_INTERNAL = "Same as internal"

# Lookup order matters only through the ABI list; the first ABI with a mapping wins.
ARCH_NAMES = {
    "arm64-v8a": "ARM64 (64-bit)",
    "armeabi-v7a": "ARM (32-bit)",
    "x86_64": "x86_64 (64-bit)",
    "x86": "x86 (32-bit)",
}

SU_FALLBACK_PATHS = ("/system/bin/su", "/system/xbin/su")

# Build.VERSION_CODES.M, first release exposing the security patch level
SECURITY_PATCH_MIN_API = 23


def _describe(e: Exception) -> str:
    return f"{type(e).__name__}: {e}"


def guarded(read: Callable[[], str], what: str) -> ProbeResult[str]:
    """Run a plain provider read, substituting "Unknown" on failure or empty output."""
    try:
        value = read()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"{what}: {_describe(e)}")
    if value is None or str(value).strip() == "":
        return ProbeResult.sentinel(UNKNOWN, f"{what}: empty value")
    return ProbeResult.ok(str(value))


def probe_device(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        manufacturer = (host.manufacturer() or "").strip()
        model = (host.model() or "").strip()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"device: {_describe(e)}")
    value = f"{manufacturer} {model}".strip()
    if not value:
        return ProbeResult.sentinel(UNKNOWN, "device: no manufacturer or model")
    return ProbeResult.ok(value)


def probe_os_version(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        release = host.os_release()
        api = host.api_level()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"os version: {_describe(e)}")
    if not release:
        return ProbeResult.sentinel(UNKNOWN, "os version: empty release")
    if api is None:
        return ProbeResult.ok(release)
    return ProbeResult.ok(f"{release} (API {api})")


def _platform_arch(host: HostInfoProvider, reason: str) -> ProbeResult[str]:
    try:
        arch = host.os_arch()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"{reason}; os arch: {_describe(e)}")
    if arch:
        return ProbeResult.platform(arch, reason)
    return ProbeResult.sentinel(UNKNOWN, reason)


def probe_architecture(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        abis = list(host.supported_abis())
        for abi in abis:
            name = ARCH_NAMES.get(abi)
            if name:
                return ProbeResult.ok(name)
    except Exception as e:
        return _platform_arch(host, f"abi list: {_describe(e)}")
    return _platform_arch(host, f"no known ABI in {abis}")


def _hardware_fallback(host: HostInfoProvider, reason: str) -> ProbeResult[str]:
    try:
        hardware = host.hardware()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"{reason}; hardware: {_describe(e)}")
    if hardware:
        return ProbeResult.platform(hardware, reason)
    return ProbeResult.sentinel(UNKNOWN, reason)


def probe_cpu(host: HostInfoProvider) -> ProbeResult[str]:
    """CPU model from cpuinfo, falling back to Processor, Hardware, then the platform constant."""
    try:
        lines = host.cpu_info_text().splitlines()
    except Exception as e:
        return _hardware_fallback(host, f"cpuinfo: {_describe(e)}")

    processor: Optional[str] = None
    hardware: Optional[str] = None
    for line in lines:
        if ":" not in line:
            continue
        value = line.split(":", 1)[1].strip()
        if line.startswith("model name"):
            return ProbeResult.ok(value)
        if line.startswith("Processor") and processor is None:
            processor = value
        elif line.startswith("Hardware") and hardware is None:
            hardware = value

    if processor:
        return ProbeResult.platform(processor, "cpuinfo: no model name, using Processor")
    if hardware:
        return ProbeResult.platform(hardware, "cpuinfo: no model name, using Hardware")
    return _hardware_fallback(host, "cpuinfo: no model name, Processor or Hardware line")


def probe_storage(host: HostInfoProvider) -> Tuple[ProbeResult[str], ProbeResult[str]]:
    """Internal and external storage usage.

    External storage is reported only when mounted and distinct from internal.
    """
    try:
        internal = host.disk_usage(host.internal_storage_path())
        if internal.total <= 0:
            raise ValueError(f"non-positive total {internal.total}")
        internal_result = ProbeResult.ok(format_usage(internal.used, internal.total))
    except Exception as e:
        reason = f"internal storage: {_describe(e)}"
        return ProbeResult.sentinel(UNKNOWN, reason), ProbeResult.sentinel(UNKNOWN, reason)

    try:
        if not host.external_storage_mounted():
            return internal_result, ProbeResult.sentinel(NOT_AVAILABLE, "external storage: not mounted")
        external = host.disk_usage(host.external_storage_path())
        if external.total == internal.total:
            return internal_result, ProbeResult.ok(SAME_AS_INTERNAL)
        if external.total <= 0:
            raise ValueError(f"non-positive total {external.total}")
        return internal_result, ProbeResult.ok(format_usage(external.used, external.total))
    except Exception as e:
        return internal_result, ProbeResult.sentinel(NOT_AVAILABLE, f"external storage: {_describe(e)}")


def _os_version_fallback(host: HostInfoProvider, reason: str) -> ProbeResult[str]:
    try:
        version = host.os_version()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"{reason}; os version: {_describe(e)}")
    if version:
        return ProbeResult.platform(version, reason)
    return ProbeResult.sentinel(UNKNOWN, reason)


def probe_kernel_version(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        lines = host.kernel_version_text().splitlines()
    except Exception as e:
        return _os_version_fallback(host, f"kernel version: {_describe(e)}")

    first = lines[0] if lines else ""
    if "Linux version" in first:
        parts = first.split()
        if len(parts) >= 3:
            return ProbeResult.ok(f"Linux {parts[2]}")
    return _os_version_fallback(host, "kernel version: unrecognised banner")


def probe_security_patch(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        api = host.api_level()
        if api is None or api < SECURITY_PATCH_MIN_API:
            return ProbeResult.sentinel(NOT_AVAILABLE, f"security patch: unsupported API level {api}")
        patch = host.security_patch()
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"security patch: {_describe(e)}")
    if not patch:
        return ProbeResult.sentinel(UNKNOWN, "security patch: empty value")
    return ProbeResult.ok(patch)


def probe_root(host: HostInfoProvider, su_paths: Tuple[str, ...] = SU_FALLBACK_PATHS) -> ProbeResult[bool]:
    """True when an `su` binary exists in any PATH directory or at a well-known location."""
    try:
        path_env = host.getenv("PATH") or ""
        candidates = [os.path.join(d, "su") for d in path_env.split(":") if d]
        candidates.extend(su_paths)
        return ProbeResult.ok(any(host.file_exists(c) for c in candidates))
    except Exception as e:
        return ProbeResult.safe_default(False, f"root check: {_describe(e)}")


def probe_memory(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        mem = host.memory()
        if mem.total <= 0:
            return ProbeResult.sentinel(UNKNOWN, f"memory: non-positive total {mem.total}")
        return ProbeResult.ok(format_usage(mem.used, mem.total))
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"memory: {_describe(e)}")


def probe_uptime(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        elapsed = max(0, int(host.elapsed_realtime_ms()))
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"uptime: {_describe(e)}")
    return ProbeResult.ok(format_uptime(elapsed))


def probe_build_type(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        return ProbeResult.ok(f"{host.build_type()} ({host.build_tags()})")
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"build type: {_describe(e)}")


def probe_abis(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        abis = [str(abi) for abi in host.supported_abis()]
        if not abis:
            return ProbeResult.sentinel(UNKNOWN, "abi list: empty")
        return ProbeResult.ok(format_abis(abis))
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"abi list: {_describe(e)}")


def probe_fingerprint(host: HostInfoProvider) -> ProbeResult[str]:
    try:
        return ProbeResult.ok(format_fingerprint(host.fingerprint() or ""))
    except Exception as e:
        return ProbeResult.sentinel(UNKNOWN, f"fingerprint: {_describe(e)}")
