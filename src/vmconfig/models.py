"""Data models for vmconfig.

Every device descriptor is a frozen pydantic model with a ``kind``
discriminator, so a finished VMConfiguration is immutable and can be
dumped to plain data for the virtualization engine.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vmconfig import constants
from vmconfig.exceptions import VmResourceLimitError

_MAC_ADDRESS_RE = re.compile(r"^[0-9a-fA-F]{2}(:[0-9a-fA-F]{2}){5}$")


def normalize_mac_address(value: str) -> str:
    """Validate a colon-separated MAC address and return it lowercased.

    Raises:
        ValueError: value is not six colon-separated hex octets
    """
    if not _MAC_ADDRESS_RE.match(value):
        raise ValueError(f"Invalid MAC address: {value!r}")
    return value.lower()


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ============================================================================
# Resource Limits
# ============================================================================


class ResourceLimits(_Frozen):
    """Closed interval [minimum, maximum] the platform accepts for a resource."""

    minimum: int = Field(ge=0)
    maximum: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> ResourceLimits:
        if self.minimum > self.maximum:
            raise ValueError(f"minimum ({self.minimum}) exceeds maximum ({self.maximum})")
        return self

    def clamp(self, value: int) -> int:
        return min(max(value, self.minimum), self.maximum)

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum


class PlatformLimits(_Frozen):
    """Limits for every sized resource of a VM."""

    cpu_count: ResourceLimits
    memory_size: ResourceLimits


# ============================================================================
# Variants
# ============================================================================


class BootLoaderVariant(str, Enum):
    """Boot paths the platform offers."""

    MACOS = "macos"


class NetworkAttachment(str, Enum):
    NAT = "nat"


class AudioDirection(str, Enum):
    INPUT = "input"
    OUTPUT = "output"


class AudioEndpoint(str, Enum):
    HOST_MICROPHONE = "host_microphone"
    HOST_SPEAKERS = "host_speakers"


class PointingVariant(str, Enum):
    """Pointing devices, richest first."""

    TRACKPAD = "trackpad"
    USB_SCREEN_COORDINATE = "usb_screen_coordinate"


class KeyboardVariant(str, Enum):
    """Keyboard devices, richest first."""

    MAC = "mac"
    USB = "usb"


class ConsoleAttachment(str, Enum):
    SPICE_AGENT = "spice_agent"


# ============================================================================
# Device Descriptors
# ============================================================================


class BootLoaderDescriptor(_Frozen):
    kind: Literal["boot_loader"] = "boot_loader"
    variant: BootLoaderVariant = BootLoaderVariant.MACOS


class DiskDescriptor(_Frozen):
    """virtio block device backed by a disk image on the host."""

    kind: Literal["disk"] = "disk"
    image_path: Path
    read_only: bool = False
    size_bytes: int = Field(ge=0)


class DisplayConfig(_Frozen):
    width_pixels: int = Field(gt=0)
    height_pixels: int = Field(gt=0)
    pixels_per_inch: int = Field(gt=0)


class GraphicsDescriptor(_Frozen):
    kind: Literal["graphics"] = "graphics"
    displays: tuple[DisplayConfig, ...] = Field(min_length=1)


class NetworkDescriptor(_Frozen):
    kind: Literal["network"] = "network"
    mac_address: str
    attachment: NetworkAttachment = NetworkAttachment.NAT

    @field_validator("mac_address")
    @classmethod
    def _normalize_mac(cls, value: str) -> str:
        return normalize_mac_address(value)


class AudioStream(_Frozen):
    direction: AudioDirection
    endpoint: AudioEndpoint


class AudioDescriptor(_Frozen):
    kind: Literal["audio"] = "audio"
    streams: tuple[AudioStream, ...]


class PointingDescriptor(_Frozen):
    kind: Literal["pointing"] = "pointing"
    variant: PointingVariant


class KeyboardDescriptor(_Frozen):
    kind: Literal["keyboard"] = "keyboard"
    variant: KeyboardVariant


class SharedDirectoryDescriptor(_Frozen):
    """virtio-fs device exposing one host directory to the guest."""

    kind: Literal["shared_directory"] = "shared_directory"
    tag: str = Field(min_length=1)
    path: Path
    read_only: bool = False


class ConsolePort(_Frozen):
    index: int = Field(ge=0)
    name: str
    attachment: ConsoleAttachment
    shares_clipboard: bool = False


class ConsoleDescriptor(_Frozen):
    kind: Literal["console"] = "console"
    ports: tuple[ConsolePort, ...]

    @field_validator("ports")
    @classmethod
    def _unique_indices(cls, ports: tuple[ConsolePort, ...]) -> tuple[ConsolePort, ...]:
        indices = [port.index for port in ports]
        if len(indices) != len(set(indices)):
            raise ValueError(f"Duplicate console port indices: {indices}")
        return ports


# ============================================================================
# Aggregate
# ============================================================================


class VMConfiguration(_Frozen):
    """Everything the virtualization engine needs to create one VM."""

    cpu_count: int = Field(ge=1)
    memory_size: int = Field(ge=0, le=constants.UINT64_MAX)
    boot_loader: BootLoaderDescriptor
    disk_device: DiskDescriptor
    graphics_device: GraphicsDescriptor
    network_device: NetworkDescriptor
    audio_device: AudioDescriptor
    pointing_device: PointingDescriptor
    keyboard_device: KeyboardDescriptor
    shared_directory_devices: tuple[SharedDirectoryDescriptor, ...] = ()
    console_device: ConsoleDescriptor

    def validate_limits(self, limits: PlatformLimits) -> None:
        """Check every sized field against the platform limits.

        Raises:
            VmResourceLimitError: a field lies outside its limits
        """
        for resource, value, bounds in (
            ("cpu_count", self.cpu_count, limits.cpu_count),
            ("memory_size", self.memory_size, limits.memory_size),
        ):
            if not bounds.contains(value):
                raise VmResourceLimitError(
                    f"{resource}={value} outside [{bounds.minimum}, {bounds.maximum}]",
                    resource=resource,
                    value=value,
                    context={"minimum": bounds.minimum, "maximum": bounds.maximum},
                )
