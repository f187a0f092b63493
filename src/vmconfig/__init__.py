"""vmconfig: resource sizing and device assembly for one virtual machine.

Builds an immutable, validated VMConfiguration (CPU count, memory size,
boot loader, disk, graphics, network, audio, pointing, keyboard, shared
directory and console devices) for an external virtualization engine.

Quick Start:
    ```python
    from vmconfig import Settings, build_configuration

    config = build_configuration(Settings(disk_image_path="VM.bundle/Disk.img"))
    engine_payload = config.model_dump(mode="json")
    ```

Individual devices:
    ```python
    from vmconfig import compute_cpu_count, create_keyboard_descriptor
    from vmconfig.platform_utils import platform_limits, probe_host_capabilities

    host = probe_host_capabilities()
    cpus = compute_cpu_count(host.logical_cpu_count, platform_limits(host).cpu_count)
    keyboard = create_keyboard_descriptor(host.platform_version)
    ```

Failure policy:
    - Disk image unavailable: ResourceUnavailableError, no configuration
    - Shared directory missing: warning logged, device omitted
    - CPU/memory: clamped into platform limits, never fails

Requirements:
    - Python 3.12+
"""

from vmconfig.builder import (
    build_configuration,
    compute_cpu_count,
    compute_memory_size,
    create_audio_descriptor,
    create_boot_loader_descriptor,
    create_console_descriptor,
    create_disk_descriptor,
    create_graphics_descriptor,
    create_keyboard_descriptor,
    create_network_descriptor,
    create_pointing_descriptor,
    create_shared_directory_descriptor_for,
    create_shared_directory_descriptors,
    generate_mac_address,
)
from vmconfig.exceptions import (
    FatalPreconditionError,
    PermanentError,
    ResourceUnavailableError,
    VmConfigError,
    VmResourceLimitError,
)
from vmconfig.models import (
    AudioDescriptor,
    BootLoaderDescriptor,
    ConsoleDescriptor,
    DiskDescriptor,
    GraphicsDescriptor,
    KeyboardDescriptor,
    KeyboardVariant,
    NetworkDescriptor,
    PlatformLimits,
    PointingDescriptor,
    PointingVariant,
    ResourceLimits,
    SharedDirectoryDescriptor,
    VMConfiguration,
)
from vmconfig.settings import Settings

__all__ = [
    "AudioDescriptor",
    "BootLoaderDescriptor",
    "ConsoleDescriptor",
    "DiskDescriptor",
    "FatalPreconditionError",
    "GraphicsDescriptor",
    "KeyboardDescriptor",
    "KeyboardVariant",
    "NetworkDescriptor",
    "PermanentError",
    "PlatformLimits",
    "PointingDescriptor",
    "PointingVariant",
    "ResourceLimits",
    "ResourceUnavailableError",
    "Settings",
    "SharedDirectoryDescriptor",
    "VMConfiguration",
    "VmConfigError",
    "VmResourceLimitError",
    "build_configuration",
    "compute_cpu_count",
    "compute_memory_size",
    "create_audio_descriptor",
    "create_boot_loader_descriptor",
    "create_console_descriptor",
    "create_disk_descriptor",
    "create_graphics_descriptor",
    "create_keyboard_descriptor",
    "create_network_descriptor",
    "create_pointing_descriptor",
    "create_shared_directory_descriptor_for",
    "create_shared_directory_descriptors",
    "generate_mac_address",
]

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("vmconfig")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
