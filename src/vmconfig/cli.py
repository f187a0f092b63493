"""Command-line interface for vmconfig.

Usage:
    vmconfig                         # Defaults, disk from VMCONFIG_DISK_IMAGE_PATH
    vmconfig ~/Shared                # Share ~/Shared with the guest
    vmconfig -d VM.bundle/Disk.img   # Explicit disk image
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from vmconfig import VmConfigError, __version__
from vmconfig._logging import configure_logging, get_logger
from vmconfig.builder import build_configuration
from vmconfig.settings import Settings

logger = get_logger(__name__)

# Exit codes following Unix conventions
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 125


def format_error(title: str, message: str, suggestions: list[str] | None = None) -> str:
    """Format an error message following What → Why → Fix pattern.

    Args:
        title: Short error title
        message: Detailed explanation
        suggestions: Optional list of suggestions to fix the issue

    Returns:
        Formatted error string
    """
    lines = [
        click.style(f"Error: {title}", fg="red", bold=True),
        "",
        f"  {message}",
    ]

    if suggestions:
        lines.extend(["", "  Suggestions:"])
        lines.extend(f"    • {suggestion}" for suggestion in suggestions)

    return "\n".join(lines)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("shared_dir", required=False, type=click.Path())
@click.option("-d", "--disk", type=click.Path(path_type=Path), help="Disk image to attach")
@click.option("--read-only", is_flag=True, help="Attach the disk image read-only")
@click.option("--random-mac", is_flag=True, help="Use a random locally-administered MAC address")
@click.option("-q", "--quiet", is_flag=True, help="Suppress warnings")
@click.option("-v", "--verbose", is_flag=True, help="Log at INFO level")
@click.version_option(__version__, "-V", "--version", prog_name="vmconfig")
def main(
    shared_dir: str | None,
    disk: Path | None,
    read_only: bool,
    random_mac: bool,
    quiet: bool,
    verbose: bool,
) -> NoReturn:
    """Assemble a VM configuration and print it as JSON.

    SHARED_DIR is an optional host directory shared read-write with the
    guest under the automount tag. A missing or empty path is skipped with
    a warning. Without SHARED_DIR (and without VMCONFIG_SHARED_DIRECTORY)
    sharing is off and nothing is logged.

    Every VMCONFIG_* environment variable is honored; options given here
    take precedence.
    """
    configure_logging(level="INFO" if verbose else None, quiet=quiet)

    overrides: dict[str, Any] = {}
    if shared_dir is not None:
        if shared_dir.strip():
            overrides["shared_directory"] = Path(shared_dir)
        else:
            logger.warning("Empty shared directory argument, ignoring")
    if disk is not None:
        overrides["disk_image_path"] = disk
    if read_only:
        overrides["disk_read_only"] = True
    if random_mac:
        overrides["randomize_mac_address"] = True

    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        raise click.UsageError(f"Invalid settings: {exc}") from exc

    try:
        config = build_configuration(settings)
    except VmConfigError as e:
        click.echo(
            format_error(
                "Configuration failed",
                e.message,
                [
                    "Pass the disk image with -d/--disk or VMCONFIG_DISK_IMAGE_PATH",
                    "Check the image is readable (and writable unless --read-only)",
                ],
            ),
            err=True,
        )
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(config.model_dump_json(indent=2))
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
