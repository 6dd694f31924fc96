from conftest import GB, FakeHostInfoProvider

from sysinfo_command.application import probes
from sysinfo_command.domain.models.report import DiskUsage, FallbackKind, MemoryStats


def test_architecture_first_abi_wins():
    host = FakeHostInfoProvider(supported_abis=["arm64-v8a", "armeabi-v7a"])
    result = probes.probe_architecture(host)
    assert result.value == "ARM64 (64-bit)"
    assert not result.degraded


def test_architecture_follows_abi_order():
    host = FakeHostInfoProvider(supported_abis=["x86", "x86_64"])
    assert probes.probe_architecture(host).value == "x86 (32-bit)"


def test_architecture_falls_back_to_os_arch_then_unknown():
    host = FakeHostInfoProvider(supported_abis=["mips"], os_arch="mips")
    result = probes.probe_architecture(host)
    assert result.value == "mips"
    assert result.fallback is FallbackKind.PLATFORM

    host = FakeHostInfoProvider(supported_abis=RuntimeError("boom"), os_arch=None)
    result = probes.probe_architecture(host)
    assert result.value == "Unknown"
    assert result.fallback is FallbackKind.SENTINEL


def test_cpu_model_name():
    result = probes.probe_cpu(FakeHostInfoProvider())
    assert result.value == "Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz"


def test_cpu_processor_then_hardware_fallback():
    text = "Processor\t: AArch64 Processor rev 4 (aarch64)\nHardware\t: Qualcomm SM8150\n"
    assert probes.probe_cpu(FakeHostInfoProvider(cpu_info_text=text)).value == "AArch64 Processor rev 4 (aarch64)"

    text = "processor\t: 0\nHardware\t: Qualcomm SM8150\n"
    result = probes.probe_cpu(FakeHostInfoProvider(cpu_info_text=text))
    assert result.value == "Qualcomm SM8150"
    assert result.degraded


def test_cpu_keeps_first_processor_line():
    text = "Processor\t: first\nProcessor\t: second\n"
    assert probes.probe_cpu(FakeHostInfoProvider(cpu_info_text=text)).value == "first"


def test_cpu_unreadable_uses_platform_hardware():
    host = FakeHostInfoProvider(cpu_info_text=PermissionError("denied"))
    result = probes.probe_cpu(host)
    assert result.value == "gs201"
    assert result.fallback is FallbackKind.PLATFORM


def test_cpu_no_matching_lines_uses_platform_hardware():
    host = FakeHostInfoProvider(cpu_info_text="garbage without colons\n")
    assert probes.probe_cpu(host).value == "gs201"


def test_storage_internal_only():
    internal, external = probes.probe_storage(FakeHostInfoProvider())
    assert internal.value == "60.00GB / 100.00GB (60.0% used)"
    assert external.value == "Not available"


def test_storage_external_same_as_internal():
    host = FakeHostInfoProvider(
        external_storage_mounted=True,
        disks={
            "/data": DiskUsage(total=100 * GB, free=40 * GB),
            "/storage/emulated/0": DiskUsage(total=100 * GB, free=10 * GB),
        },
    )
    _, external = probes.probe_storage(host)
    assert external.value == "Same as internal"


def test_storage_external_distinct():
    host = FakeHostInfoProvider(
        external_storage_mounted=True,
        disks={
            "/data": DiskUsage(total=100 * GB, free=40 * GB),
            "/storage/emulated/0": DiskUsage(total=32 * GB, free=16 * GB),
        },
    )
    _, external = probes.probe_storage(host)
    assert external.value == "16.00GB / 32.00GB (50.0% used)"


def test_storage_external_error_is_not_available():
    host = FakeHostInfoProvider(external_storage_mounted=True)  # no disk entry for external path
    internal, external = probes.probe_storage(host)
    assert internal.value.startswith("60.00GB")
    assert external.value == "Not available"
    assert external.fallback is FallbackKind.SENTINEL


def test_storage_internal_failure_degrades_both():
    host = FakeHostInfoProvider(disks={})
    internal, external = probes.probe_storage(host)
    assert (internal.value, external.value) == ("Unknown", "Unknown")


def test_kernel_version_from_banner():
    assert probes.probe_kernel_version(FakeHostInfoProvider()).value == "Linux 5.10.43-android12-9-00001"


def test_kernel_version_falls_back_to_os_version():
    host = FakeHostInfoProvider(kernel_version_text="Darwin Kernel\n")
    result = probes.probe_kernel_version(host)
    assert result.value == "5.10.43-android12"
    assert result.fallback is FallbackKind.PLATFORM

    host = FakeHostInfoProvider(kernel_version_text=FileNotFoundError("/proc/version"), os_version=None)
    assert probes.probe_kernel_version(host).value == "Unknown"


def test_security_patch_levels():
    assert probes.probe_security_patch(FakeHostInfoProvider()).value == "2024-03-05"
    assert probes.probe_security_patch(FakeHostInfoProvider(api_level=22)).value == "Not available"
    assert probes.probe_security_patch(FakeHostInfoProvider(api_level=None)).value == "Not available"
    assert probes.probe_security_patch(FakeHostInfoProvider(security_patch=OSError("x"))).value == "Unknown"


def test_root_from_path_directory():
    host = FakeHostInfoProvider(env={"PATH": "/sbin:/usr/bin"}, existing_files={"/sbin/su"})
    assert probes.probe_root(host).value is True


def test_root_from_fixed_paths_even_when_path_lookup_misses():
    host = FakeHostInfoProvider(existing_files={"/system/xbin/su"})
    assert probes.probe_root(host).value is True

    host = FakeHostInfoProvider(env={}, existing_files={"/system/bin/su"})
    assert probes.probe_root(host).value is True


def test_root_not_found_and_error_default():
    assert probes.probe_root(FakeHostInfoProvider()).value is False

    host = FakeHostInfoProvider(env=RuntimeError("no env"))
    result = probes.probe_root(host)
    assert result.value is False
    assert result.fallback is FallbackKind.SAFE_DEFAULT


def test_memory_usage_and_failure():
    assert probes.probe_memory(FakeHostInfoProvider()).value == "6.00GB / 8.00GB (75.0% used)"
    assert probes.probe_memory(FakeHostInfoProvider(memory=MemoryStats(0, 0))).value == "Unknown"
    assert probes.probe_memory(FakeHostInfoProvider(memory=OSError("x"))).value == "Unknown"


def test_uptime_probe():
    assert probes.probe_uptime(FakeHostInfoProvider()).value == "1h 1m 5s"


def test_device_and_os_version():
    host = FakeHostInfoProvider()
    assert probes.probe_device(host).value == "Google Pixel 7"
    assert probes.probe_os_version(host).value == "14 (API 34)"

    host = FakeHostInfoProvider(api_level=None, os_release="Ubuntu 22.04.4 LTS")
    assert probes.probe_os_version(host).value == "Ubuntu 22.04.4 LTS"

    host = FakeHostInfoProvider(manufacturer="", model="")
    assert probes.probe_device(host).value == "Unknown"


def test_build_identifiers():
    host = FakeHostInfoProvider()
    assert probes.probe_build_type(host).value == "user (release-keys)"
    assert probes.probe_abis(host).value == "arm64-v8a, armeabi-v7a, armeabi"
    assert probes.probe_fingerprint(host).value == "google/panther/panther:14/..."
    assert probes.guarded(host.bootloader, "bootloader").value == "slider-1.2-9152140"
    assert probes.guarded(lambda: "", "empty").value == "Unknown"


def test_malformed_provider_values_degrade_instead_of_raising():
    host = FakeHostInfoProvider(
        supported_abis=None,
        cpu_info_text=None,
        kernel_version_text=None,
        memory=None,
        elapsed_realtime_ms="soon",
        fingerprint=42,
        os_arch=None,
        hardware="",
        os_version="",
    )
    assert probes.probe_architecture(host).value == "Unknown"
    assert probes.probe_abis(host).value == "Unknown"
    assert probes.probe_cpu(host).value == "Unknown"
    assert probes.probe_kernel_version(host).value == "Unknown"
    assert probes.probe_memory(host).value == "Unknown"
    assert probes.probe_fingerprint(host).value == "Unknown"

    uptime = probes.probe_uptime(host)
    assert uptime.value == "Unknown"
    assert uptime.fallback is FallbackKind.SENTINEL


def test_storage_with_malformed_usage_degrades():
    host = FakeHostInfoProvider(disks={"/data": None})
    internal, external = probes.probe_storage(host)
    assert internal.value == "Unknown"
    assert external.value == "Unknown"
