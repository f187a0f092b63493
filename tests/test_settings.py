"""Unit tests for Settings.

No mocks - uses real environment variables via monkeypatch.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from vmconfig import constants
from vmconfig.settings import Settings


class TestSettingsDefaults:
    """Settings defaults mirror the defaults table."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.memory_size_bytes == constants.DEFAULT_MEMORY_SIZE_BYTES
        assert settings.display_width_pixels == 1920
        assert settings.display_height_pixels == 1200
        assert settings.display_pixels_per_inch == 80
        assert settings.mac_address == constants.DEFAULT_MAC_ADDRESS
        assert settings.randomize_mac_address is False
        assert settings.shared_directory is None
        assert settings.disk_read_only is False
        assert settings.host_cpu_count is None
        assert settings.parsed_platform_version() is None


class TestSettingsEnvironment:
    """VMCONFIG_* environment variables override defaults."""

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("VMCONFIG_DISK_IMAGE_PATH", str(tmp_path / "Disk.img"))
        monkeypatch.setenv("VMCONFIG_SHARED_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("VMCONFIG_HOST_CPU_COUNT", "12")
        monkeypatch.setenv("VMCONFIG_PLATFORM_VERSION", "14.4.1")
        monkeypatch.setenv("VMCONFIG_RANDOMIZE_MAC_ADDRESS", "true")

        settings = Settings()
        assert settings.disk_image_path == tmp_path / "Disk.img"
        assert settings.shared_directory == tmp_path
        assert settings.host_cpu_count == 12
        assert settings.parsed_platform_version() == (14, 4, 1)
        assert settings.randomize_mac_address is True

    def test_init_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VMCONFIG_DISPLAY_PIXELS_PER_INCH", "110")
        assert Settings(display_pixels_per_inch=220).display_pixels_per_inch == 220

    @pytest.mark.parametrize("blank", ["", "  "])
    def test_blank_shared_directory_is_unset(self, monkeypatch: pytest.MonkeyPatch, blank: str) -> None:
        monkeypatch.setenv("VMCONFIG_SHARED_DIRECTORY", blank)
        assert Settings().shared_directory is None
        assert Settings(shared_directory=blank).shared_directory is None

    def test_mac_override_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VMCONFIG_MAC_ADDRESS", "02:00:00:AA:BB:CC")
        assert Settings().mac_address == "02:00:00:aa:bb:cc"


class TestSettingsValidation:
    """Invalid overrides fail at load time."""

    def test_invalid_mac(self) -> None:
        with pytest.raises(ValidationError):
            Settings(mac_address="nope")

    def test_invalid_platform_version(self) -> None:
        with pytest.raises(ValidationError):
            Settings(platform_version="sonoma")

    def test_memory_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(memory_size_bytes=0)

    def test_memory_fits_uint64(self) -> None:
        with pytest.raises(ValidationError):
            Settings(memory_size_bytes=2**64)

    def test_host_cpu_count_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(host_cpu_count=0)
