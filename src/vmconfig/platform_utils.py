"""Host capability queries.

Uses psutil's built-in OS detection constants and resource counters for
robust host introspection. Results that cannot change during the process
lifetime are cached.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from enum import Enum, auto
from functools import cache

import psutil

from vmconfig import constants
from vmconfig._logging import get_logger
from vmconfig.models import PlatformLimits, ResourceLimits

logger = get_logger(__name__)


class HostOS(Enum):
    """Supported host operating systems."""

    LINUX = auto()
    """Linux (no platform version for capability gates)."""

    MACOS = auto()
    """macOS (platform version drives device variant selection)."""

    UNKNOWN = auto()
    """Unsupported or unrecognized OS."""


@cache
def detect_host_os() -> HostOS:
    """Detect current host operating system using psutil constants."""
    if psutil.LINUX:
        return HostOS.LINUX
    if psutil.MACOS:
        return HostOS.MACOS
    return HostOS.UNKNOWN


def parse_platform_version(text: str | None) -> tuple[int, ...] | None:
    """Parse a dotted release string such as "14.2.1" into (14, 2, 1).

    Trailing non-numeric components are ignored ("13.0-beta" -> (13, 0)).
    Returns None when no leading numeric component exists.
    """
    if not text:
        return None
    parts: list[int] = []
    for raw in text.strip().split("."):
        digits = ""
        for ch in raw:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
        if len(digits) != len(raw):
            break
    return tuple(parts) or None


@cache
def detect_platform_version() -> tuple[int, ...] | None:
    """Return the macOS release of the host, or None elsewhere.

    Device capability gates are defined against macOS releases only, so a
    Linux host yields None and gets the fallback variants.
    """
    if detect_host_os() != HostOS.MACOS:
        return None
    return parse_platform_version(platform.mac_ver()[0])


def meets_platform_version(version: tuple[int, ...] | None, minimum: tuple[int, ...]) -> bool:
    """True when a known version is at least ``minimum``.

    Missing components count as zero, so (14,) meets (14, 0).
    """
    if version is None:
        return False
    width = max(len(version), len(minimum))
    padded_version = version + (0,) * (width - len(version))
    padded_minimum = minimum + (0,) * (width - len(minimum))
    return padded_version >= padded_minimum


@dataclass(frozen=True)
class HostCapabilities:
    """Point-in-time view of the host resources relevant to VM sizing."""

    logical_cpu_count: int
    physical_memory_bytes: int | None
    platform_version: tuple[int, ...] | None
    host_os: HostOS = HostOS.UNKNOWN


def probe_host_capabilities(
    *,
    cpu_count: int | None = None,
    memory_bytes: int | None = None,
    platform_version: tuple[int, ...] | None = None,
) -> HostCapabilities:
    """Probe the host via psutil, honoring explicit overrides.

    Args:
        cpu_count: Logical CPU count override (skips psutil)
        memory_bytes: Physical memory override (skips psutil)
        platform_version: Platform version override (skips detection)

    Returns:
        HostCapabilities with every field populated where detectable
    """
    if cpu_count is None:
        detected = psutil.cpu_count(logical=True)
        if detected is None:
            logger.warning("Logical CPU count undetectable, assuming 1")
            detected = 1
        cpu_count = detected

    if memory_bytes is None:
        try:
            memory_bytes = int(psutil.virtual_memory().total)
        except (OSError, RuntimeError) as e:
            logger.warning("Physical memory probe failed", extra={"error": str(e)})
            memory_bytes = None

    if platform_version is None:
        platform_version = detect_platform_version()

    host = HostCapabilities(
        logical_cpu_count=cpu_count,
        physical_memory_bytes=memory_bytes,
        platform_version=platform_version,
        host_os=detect_host_os(),
    )
    logger.debug(
        "Host capabilities",
        extra={
            "logical_cpu_count": host.logical_cpu_count,
            "physical_memory_bytes": host.physical_memory_bytes,
            "platform_version": host.platform_version,
            "host_os": host.host_os.name,
        },
    )
    return host


def platform_limits(host: HostCapabilities | None = None) -> PlatformLimits:
    """Build the platform limits, capping memory at the host's physical RAM.

    The memory ceiling never drops below the platform minimum, so the
    resulting limits are always a valid interval.
    """
    max_memory = constants.MAX_MEMORY_SIZE_BYTES
    if host is not None and host.physical_memory_bytes is not None:
        max_memory = max(min(max_memory, host.physical_memory_bytes), constants.MIN_MEMORY_SIZE_BYTES)

    return PlatformLimits(
        cpu_count=ResourceLimits(minimum=constants.MIN_CPU_COUNT, maximum=constants.MAX_CPU_COUNT),
        memory_size=ResourceLimits(minimum=constants.MIN_MEMORY_SIZE_BYTES, maximum=max_memory),
    )
