"""Defaults table for vmconfig.

Every literal the builder relies on lives here so it can be overridden
through Settings without touching construction logic.
"""

from typing import Final

# ============================================================================
# Sizes
# ============================================================================

KIB: Final[int] = 1024
MIB: Final[int] = 1024 * KIB
GIB: Final[int] = 1024 * MIB

UINT64_MAX: Final[int] = 2**64 - 1
"""Largest memory size representable by the engine (unsigned 64-bit)."""

# ============================================================================
# Compute Resources
# ============================================================================

DEFAULT_MEMORY_SIZE_BYTES: Final[int] = 4 * GIB
"""Baseline guest memory before clamping into the platform limits."""

HOST_RESERVED_CPU_COUNT: Final[int] = 1
"""Logical cores kept back for the host when more than one is available."""

MIN_CPU_COUNT: Final[int] = 1
"""Smallest vCPU count the virtualization platform accepts."""

MAX_CPU_COUNT: Final[int] = 64
"""Largest vCPU count the virtualization platform accepts."""

MIN_MEMORY_SIZE_BYTES: Final[int] = 128 * MIB
"""Smallest guest memory size the virtualization platform accepts."""

MAX_MEMORY_SIZE_BYTES: Final[int] = 1024 * GIB
"""Platform ceiling for guest memory (further capped by host physical memory)."""

# ============================================================================
# Graphics
# ============================================================================

DEFAULT_DISPLAY_WIDTH_PIXELS: Final[int] = 1920
DEFAULT_DISPLAY_HEIGHT_PIXELS: Final[int] = 1200
DEFAULT_DISPLAY_PIXELS_PER_INCH: Final[int] = 80

# ============================================================================
# Network
# ============================================================================

DEFAULT_MAC_ADDRESS: Final[str] = "d6:a7:58:8e:78:d4"
"""Hardware address of the NAT interface.

Shared by every VM built with defaults; set VMCONFIG_RANDOMIZE_MAC_ADDRESS
when more than one instance runs on the same host network.
"""

# ============================================================================
# Reserved Identifiers
# ============================================================================

MACOS_GUEST_AUTOMOUNT_TAG: Final[str] = "com.apple.virtio-fs.automount"
"""virtio-fs tag that macOS guests mount automatically."""

SPICE_AGENT_PORT_NAME: Final[str] = "com.redhat.spice.0"
"""Console port name the guest spice agent looks for."""

SPICE_AGENT_PORT_INDEX: Final[int] = 0
"""Console port reserved for the clipboard agent."""

# ============================================================================
# Capability Gates
# ============================================================================

MAC_KEYBOARD_MIN_PLATFORM_VERSION: Final[tuple[int, ...]] = (14, 0)
"""First platform release offering the Mac keyboard device."""

MAC_TRACKPAD_MIN_PLATFORM_VERSION: Final[tuple[int, ...]] = (13, 0)
"""First platform release offering the Mac trackpad device."""
