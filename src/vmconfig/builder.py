"""VM configuration builder.

Translates host capabilities and optional inputs into a VMConfiguration that
satisfies the platform limits. Each create_* function produces one
self-contained device descriptor and may be called in any order;
build_configuration() runs them all and assembles the result.

Failure policy:
    disk image unavailable   -> ResourceUnavailableError, nothing returned
    shared directory missing -> warning logged, device omitted
    CPU/memory sizing        -> clamped, never fails
    keyboard/pointing        -> fallback variant, never fails
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from vmconfig import constants
from vmconfig._logging import get_logger
from vmconfig.exceptions import ResourceUnavailableError
from vmconfig.models import (
    AudioDescriptor,
    AudioDirection,
    AudioEndpoint,
    AudioStream,
    BootLoaderDescriptor,
    BootLoaderVariant,
    ConsoleAttachment,
    ConsoleDescriptor,
    ConsolePort,
    DiskDescriptor,
    DisplayConfig,
    GraphicsDescriptor,
    KeyboardDescriptor,
    KeyboardVariant,
    NetworkAttachment,
    NetworkDescriptor,
    PlatformLimits,
    PointingDescriptor,
    PointingVariant,
    ResourceLimits,
    SharedDirectoryDescriptor,
    VMConfiguration,
)
from vmconfig.platform_utils import (
    HostCapabilities,
    meets_platform_version,
    platform_limits,
    probe_host_capabilities,
)
from vmconfig.settings import Settings

logger = get_logger(__name__)

# Positional slot carrying the shared directory in process arguments
SHARED_DIRECTORY_ARG_INDEX = 1


# ============================================================================
# Compute Resources
# ============================================================================


def compute_cpu_count(host_logical_core_count: int, limits: ResourceLimits) -> int:
    """Leave one core to the host when it has more than one, then clamp."""
    if host_logical_core_count <= 1:
        cpu_count = 1
    else:
        cpu_count = host_logical_core_count - constants.HOST_RESERVED_CPU_COUNT
    return limits.clamp(cpu_count)


def compute_memory_size(
    limits: ResourceLimits,
    baseline: int = constants.DEFAULT_MEMORY_SIZE_BYTES,
) -> int:
    """Clamp the baseline memory size (4 GiB unless overridden) into the limits."""
    return limits.clamp(baseline)


# ============================================================================
# Devices
# ============================================================================


def create_boot_loader_descriptor() -> BootLoaderDescriptor:
    return BootLoaderDescriptor(variant=BootLoaderVariant.MACOS)


def create_disk_descriptor(disk_image_path: str | os.PathLike[str], read_only: bool = False) -> DiskDescriptor:
    """Attach a disk image as a virtio block device.

    The image is opened with the access mode the guest will get, so a
    read-write attachment of a read-only file fails here rather than in
    the engine.

    Args:
        disk_image_path: Path to the raw disk image
        read_only: Attach the image read-only

    Returns:
        DiskDescriptor for the image

    Raises:
        ResourceUnavailableError: image missing, not a regular file, or
            cannot be opened with the requested mode
    """
    path = Path(disk_image_path).expanduser()
    if not path.is_file():
        raise ResourceUnavailableError(
            f"Disk image not found: {path}",
            path=str(path),
            context={"read_only": read_only},
        )

    mode = "rb" if read_only else "r+b"
    try:
        with path.open(mode) as f:
            size_bytes = os.fstat(f.fileno()).st_size
    except OSError as e:
        raise ResourceUnavailableError(
            f"Failed to attach disk image {path}: {e.strerror or e}",
            path=str(path),
            context={"read_only": read_only, "errno": e.errno},
        ) from e

    return DiskDescriptor(image_path=path.resolve(), read_only=read_only, size_bytes=size_bytes)


def create_graphics_descriptor(
    width_pixels: int = constants.DEFAULT_DISPLAY_WIDTH_PIXELS,
    height_pixels: int = constants.DEFAULT_DISPLAY_HEIGHT_PIXELS,
    pixels_per_inch: int = constants.DEFAULT_DISPLAY_PIXELS_PER_INCH,
) -> GraphicsDescriptor:
    """Single display, 1920x1200 at 80 ppi unless overridden."""
    display = DisplayConfig(
        width_pixels=width_pixels,
        height_pixels=height_pixels,
        pixels_per_inch=pixels_per_inch,
    )
    return GraphicsDescriptor(displays=(display,))


def create_network_descriptor(mac_address: str = constants.DEFAULT_MAC_ADDRESS) -> NetworkDescriptor:
    """NAT-attached virtio network interface with a fixed hardware address."""
    try:
        return NetworkDescriptor(mac_address=mac_address, attachment=NetworkAttachment.NAT)
    except ValidationError as e:
        # Callers pass the defaults-table constant or a value Settings already validated
        raise AssertionError(f"Invalid MAC address constant: {mac_address!r}") from e


def generate_mac_address() -> str:
    """Random locally-administered unicast MAC address."""
    octets = bytearray(os.urandom(6))
    # Clear multicast bit, set locally-administered bit
    octets[0] = (octets[0] & 0xFE) | 0x02
    return ":".join(f"{b:02x}" for b in octets)


def create_audio_descriptor() -> AudioDescriptor:
    return AudioDescriptor(
        streams=(
            AudioStream(direction=AudioDirection.INPUT, endpoint=AudioEndpoint.HOST_MICROPHONE),
            AudioStream(direction=AudioDirection.OUTPUT, endpoint=AudioEndpoint.HOST_SPEAKERS),
        )
    )


def select_pointing_variant(platform_version: tuple[int, ...] | None) -> PointingVariant:
    if meets_platform_version(platform_version, constants.MAC_TRACKPAD_MIN_PLATFORM_VERSION):
        return PointingVariant.TRACKPAD
    return PointingVariant.USB_SCREEN_COORDINATE


def select_keyboard_variant(platform_version: tuple[int, ...] | None) -> KeyboardVariant:
    if meets_platform_version(platform_version, constants.MAC_KEYBOARD_MIN_PLATFORM_VERSION):
        return KeyboardVariant.MAC
    return KeyboardVariant.USB


def create_pointing_descriptor(platform_version: tuple[int, ...] | None) -> PointingDescriptor:
    """Trackpad on 13.0+, USB screen-coordinate pointer otherwise."""
    return PointingDescriptor(variant=select_pointing_variant(platform_version))


def create_keyboard_descriptor(platform_version: tuple[int, ...] | None) -> KeyboardDescriptor:
    """Mac keyboard on 14.0+, generic USB keyboard otherwise."""
    return KeyboardDescriptor(variant=select_keyboard_variant(platform_version))


def create_shared_directory_descriptor_for(
    path: str | os.PathLike[str] | None,
) -> tuple[SharedDirectoryDescriptor, ...]:
    """Share one host directory read-write under the guest automount tag.

    Sharing is optional: a missing or non-directory path is logged and
    skipped so the VM still launches.

    Args:
        path: Host directory to share, or None to disable sharing

    Returns:
        Tuple of zero or one SharedDirectoryDescriptor
    """
    if path is None:
        logger.debug("No shared directory configured")
        return ()

    # Path("") means the current directory; never share it by accident
    if not os.fspath(path).strip():
        logger.warning("Empty shared directory path, ignoring")
        return ()

    dir_path = Path(path).expanduser()
    if not dir_path.is_dir():
        logger.warning(
            "Failed to locate shared directory at %s, ignoring",
            dir_path,
            extra={"path": str(dir_path), "exists": dir_path.exists()},
        )
        return ()

    return (
        SharedDirectoryDescriptor(
            tag=constants.MACOS_GUEST_AUTOMOUNT_TAG,
            path=dir_path.resolve(),
            read_only=False,
        ),
    )


def create_shared_directory_descriptors(raw_arguments: Sequence[str]) -> tuple[SharedDirectoryDescriptor, ...]:
    """Share the directory named by the first positional process argument.

    raw_arguments follows sys.argv layout: index 0 is the program name.
    """
    if len(raw_arguments) <= SHARED_DIRECTORY_ARG_INDEX or not raw_arguments[SHARED_DIRECTORY_ARG_INDEX]:
        logger.warning(
            "No shared directory argument at position %d, ignoring",
            SHARED_DIRECTORY_ARG_INDEX,
        )
        return ()
    return create_shared_directory_descriptor_for(raw_arguments[SHARED_DIRECTORY_ARG_INDEX])


def create_console_descriptor() -> ConsoleDescriptor:
    """Console with a single spice agent port that shares the clipboard."""
    spice_port = ConsolePort(
        index=constants.SPICE_AGENT_PORT_INDEX,
        name=constants.SPICE_AGENT_PORT_NAME,
        attachment=ConsoleAttachment.SPICE_AGENT,
        shares_clipboard=True,
    )
    return ConsoleDescriptor(ports=(spice_port,))


# ============================================================================
# Assembly
# ============================================================================


def build_configuration(
    settings: Settings | None = None,
    host: HostCapabilities | None = None,
    limits: PlatformLimits | None = None,
) -> VMConfiguration:
    """Assemble and validate the configuration for one VM launch.

    Args:
        settings: Runtime settings (default: loaded from environment)
        host: Host capabilities (default: probed, honoring settings overrides)
        limits: Platform limits (default: derived from host)

    Returns:
        Immutable VMConfiguration within the platform limits

    Raises:
        ResourceUnavailableError: disk image cannot be attached
        VmResourceLimitError: a sized field ended up outside the limits
    """
    settings = settings if settings is not None else Settings()
    if host is None:
        host = probe_host_capabilities(
            cpu_count=settings.host_cpu_count,
            memory_bytes=settings.host_memory_bytes,
            platform_version=settings.parsed_platform_version(),
        )
    if limits is None:
        limits = platform_limits(host)

    # Disk first: without it nothing else matters
    disk = create_disk_descriptor(settings.disk_image_path, read_only=settings.disk_read_only)

    mac_address = generate_mac_address() if settings.randomize_mac_address else settings.mac_address

    config = VMConfiguration(
        cpu_count=compute_cpu_count(host.logical_cpu_count, limits.cpu_count),
        memory_size=compute_memory_size(limits.memory_size, baseline=settings.memory_size_bytes),
        boot_loader=create_boot_loader_descriptor(),
        disk_device=disk,
        graphics_device=create_graphics_descriptor(
            width_pixels=settings.display_width_pixels,
            height_pixels=settings.display_height_pixels,
            pixels_per_inch=settings.display_pixels_per_inch,
        ),
        network_device=create_network_descriptor(mac_address),
        audio_device=create_audio_descriptor(),
        pointing_device=create_pointing_descriptor(host.platform_version),
        keyboard_device=create_keyboard_descriptor(host.platform_version),
        shared_directory_devices=create_shared_directory_descriptor_for(settings.shared_directory),
        console_device=create_console_descriptor(),
    )
    config.validate_limits(limits)

    logger.info(
        "VM configuration assembled",
        extra={
            "cpu_count": config.cpu_count,
            "memory_size": config.memory_size,
            "disk": str(config.disk_device.image_path),
            "keyboard": config.keyboard_device.variant.value,
            "pointing": config.pointing_device.variant.value,
            "shared_directories": len(config.shared_directory_devices),
        },
    )
    return config
