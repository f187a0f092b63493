"""Shared pytest fixtures for vmconfig tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from vmconfig import constants
from vmconfig.models import PlatformLimits, ResourceLimits
from vmconfig.platform_utils import HostCapabilities, HostOS

_SETTINGS_ENV_VARS = (
    "VMCONFIG_DISK_IMAGE_PATH",
    "VMCONFIG_DISK_READ_ONLY",
    "VMCONFIG_SHARED_DIRECTORY",
    "VMCONFIG_MEMORY_SIZE_BYTES",
    "VMCONFIG_DISPLAY_WIDTH_PIXELS",
    "VMCONFIG_DISPLAY_HEIGHT_PIXELS",
    "VMCONFIG_DISPLAY_PIXELS_PER_INCH",
    "VMCONFIG_MAC_ADDRESS",
    "VMCONFIG_RANDOMIZE_MAC_ADDRESS",
    "VMCONFIG_HOST_CPU_COUNT",
    "VMCONFIG_HOST_MEMORY_BYTES",
    "VMCONFIG_PLATFORM_VERSION",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's VMCONFIG_* environment out of the tests."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def vmconfig_logs(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """caplog capturing WARNING and above from the vmconfig logger tree."""
    with caplog.at_level(logging.WARNING, logger="vmconfig"):
        yield caplog


@pytest.fixture
def disk_image(tmp_path: Path) -> Path:
    """Small writable disk image."""
    path = tmp_path / "Disk.img"
    path.write_bytes(b"\0" * 4096)
    return path


@pytest.fixture
def typical_limits() -> PlatformLimits:
    """Limits bracketing the 4 GiB baseline."""
    return PlatformLimits(
        cpu_count=ResourceLimits(minimum=constants.MIN_CPU_COUNT, maximum=constants.MAX_CPU_COUNT),
        memory_size=ResourceLimits(minimum=constants.MIN_MEMORY_SIZE_BYTES, maximum=64 * constants.GIB),
    )


@pytest.fixture
def sonoma_host() -> HostCapabilities:
    """8-core, 16 GiB macOS 14 host."""
    return HostCapabilities(
        logical_cpu_count=8,
        physical_memory_bytes=16 * constants.GIB,
        platform_version=(14, 2),
        host_os=HostOS.MACOS,
    )
