"""Runtime configuration from environment variables."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vmconfig import constants
from vmconfig.models import normalize_mac_address
from vmconfig.platform_utils import parse_platform_version


class Settings(BaseSettings):
    """Runtime configuration from environment variables.

    All settings can be overridden via environment variables with VMCONFIG_ prefix.
    Example: VMCONFIG_DISK_IMAGE_PATH=~/VM.bundle/Disk.img
    """

    model_config = SettingsConfigDict(
        env_prefix="VMCONFIG_",
        extra="ignore",
    )

    # Disk
    disk_image_path: Path = Path("Disk.img")
    disk_read_only: bool = False

    # Shared directory (None = feature off)
    shared_directory: Path | None = None

    # Memory
    memory_size_bytes: int = Field(default=constants.DEFAULT_MEMORY_SIZE_BYTES, gt=0, le=constants.UINT64_MAX)

    # Graphics
    display_width_pixels: int = Field(default=constants.DEFAULT_DISPLAY_WIDTH_PIXELS, gt=0)
    display_height_pixels: int = Field(default=constants.DEFAULT_DISPLAY_HEIGHT_PIXELS, gt=0)
    display_pixels_per_inch: int = Field(default=constants.DEFAULT_DISPLAY_PIXELS_PER_INCH, gt=0)

    # Network
    mac_address: str = constants.DEFAULT_MAC_ADDRESS
    randomize_mac_address: bool = False
    """Generate a locally-administered address per build instead of mac_address.
    Needed when several VMs share one host network."""

    # Host resource overrides (None = auto-detect via psutil)
    # Useful for testing or container deployments where psutil reports host resources
    host_cpu_count: int | None = Field(default=None, ge=1)
    host_memory_bytes: int | None = Field(default=None, gt=0)
    platform_version: str | None = None
    """Dotted platform release (e.g. "14.2") used for device capability gates."""

    @field_validator("shared_directory", mode="before")
    @classmethod
    def _blank_shared_directory_is_unset(cls, value: object) -> object:
        # VMCONFIG_SHARED_DIRECTORY= would otherwise become Path(".")
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("mac_address")
    @classmethod
    def _validate_mac(cls, value: str) -> str:
        return normalize_mac_address(value)

    @field_validator("platform_version")
    @classmethod
    def _validate_platform_version(cls, value: str | None) -> str | None:
        if value is not None and parse_platform_version(value) is None:
            raise ValueError(f"Unparseable platform version: {value!r}")
        return value

    def parsed_platform_version(self) -> tuple[int, ...] | None:
        return parse_platform_version(self.platform_version)
