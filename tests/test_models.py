"""Unit tests for vmconfig data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from vmconfig import constants
from vmconfig.models import (
    ConsoleAttachment,
    ConsoleDescriptor,
    ConsolePort,
    DisplayConfig,
    GraphicsDescriptor,
    NetworkDescriptor,
    ResourceLimits,
    SharedDirectoryDescriptor,
    normalize_mac_address,
)

# ============================================================================
# ResourceLimits
# ============================================================================


class TestResourceLimits:
    """Tests for the closed-interval limits."""

    def test_clamp(self) -> None:
        limits = ResourceLimits(minimum=2, maximum=8)
        assert limits.clamp(1) == 2
        assert limits.clamp(5) == 5
        assert limits.clamp(99) == 8

    def test_contains_is_inclusive(self) -> None:
        limits = ResourceLimits(minimum=2, maximum=8)
        assert limits.contains(2)
        assert limits.contains(8)
        assert not limits.contains(1)
        assert not limits.contains(9)

    def test_minimum_above_maximum_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ResourceLimits(minimum=9, maximum=8)

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ResourceLimits(minimum=-1, maximum=8)

    def test_frozen(self) -> None:
        limits = ResourceLimits(minimum=1, maximum=2)
        with pytest.raises(ValidationError):
            limits.maximum = 3  # type: ignore[misc]


# ============================================================================
# MAC Address
# ============================================================================


class TestMacAddress:
    """Tests for hardware address validation."""

    def test_lowercases(self) -> None:
        assert normalize_mac_address("AA:BB:CC:DD:EE:FF") == "aa:bb:cc:dd:ee:ff"

    @pytest.mark.parametrize(
        "value",
        ["", "aa:bb:cc:dd:ee", "aa-bb-cc-dd-ee-ff", "aa:bb:cc:dd:ee:fg", "aa:bb:cc:dd:ee:ff:00"],
    )
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError, match="Invalid MAC address"):
            normalize_mac_address(value)

    def test_descriptor_rejects_invalid(self) -> None:
        with pytest.raises(ValidationError):
            NetworkDescriptor(mac_address="zz:zz:zz:zz:zz:zz")


# ============================================================================
# Descriptors
# ============================================================================


class TestDescriptors:
    """Tests for descriptor field constraints."""

    def test_graphics_needs_a_display(self) -> None:
        with pytest.raises(ValidationError):
            GraphicsDescriptor(displays=())

    def test_display_dimensions_positive(self) -> None:
        with pytest.raises(ValidationError):
            DisplayConfig(width_pixels=0, height_pixels=1200, pixels_per_inch=80)

    def test_console_rejects_duplicate_port_indices(self) -> None:
        port = ConsolePort(index=0, name="a", attachment=ConsoleAttachment.SPICE_AGENT)
        with pytest.raises(ValidationError, match="Duplicate console port"):
            ConsoleDescriptor(ports=(port, port))

    def test_shared_directory_defaults_read_write(self, tmp_path: Path) -> None:
        share = SharedDirectoryDescriptor(tag=constants.MACOS_GUEST_AUTOMOUNT_TAG, path=tmp_path)
        assert share.read_only is False
        assert share.kind == "shared_directory"

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            DisplayConfig(width_pixels=1, height_pixels=1, pixels_per_inch=1, refresh_hz=60)  # type: ignore[call-arg]
