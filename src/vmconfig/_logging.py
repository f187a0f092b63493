"""Logging setup for vmconfig.

The package logs under the "vmconfig" logger and attaches only a NullHandler,
so embedding applications decide where records go. VMCONFIG_LOG_LEVEL sets
the level at import. The vmconfig command calls configure_logging() to print
records on stderr as:

    WARNING [2026-02-25 10:02:54] vmconfig.builder - message
"""

import logging
import os

import click

LIBRARY_LOGGER_NAME: str = "vmconfig"

logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())

# Honor VMCONFIG_LOG_LEVEL env var (e.g. "DEBUG", "WARNING", "ERROR")
_env_level = os.environ.get("VMCONFIG_LOG_LEVEL", "").strip().upper()
_env_level_value = logging.getLevelNamesMapping().get(_env_level)
if _env_level_value:  # excludes NOTSET (0) and missing keys (None)
    logging.getLogger(LIBRARY_LOGGER_NAME).setLevel(_env_level_value)

_FMT = "%(levelname)s [%(asctime)s] %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ClickHandler(logging.Handler):
    """Writes records to stderr via click.echo with dim styling.

    click.echo() strips ANSI codes when stderr is not a TTY.
    """

    def __init__(self) -> None:
        super().__init__()
        self.formatter = logging.Formatter(fmt=_FMT, datefmt=_DATEFMT)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            click.echo(click.style(msg, dim=True), err=True)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def get_logger(name: str) -> logging.Logger:
    """Logger under the vmconfig hierarchy (pass __name__)."""
    return logging.getLogger(name)


def configure_logging(
    *,
    level: int | str | None = None,
    quiet: bool = False,
) -> None:
    """Send vmconfig records to stderr for the vmconfig command.

    Safe to call repeatedly: the stderr handler is attached once.

    Args:
        level: Log level (e.g. logging.DEBUG, "WARNING"). Overrides env var.
        quiet: If True, set level to ERROR (suppress WARNING/INFO).
               Takes precedence over level.
    """
    lib_logger = logging.getLogger(LIBRARY_LOGGER_NAME)

    if not any(isinstance(h, _ClickHandler) for h in lib_logger.handlers):
        lib_logger.addHandler(_ClickHandler())

    if quiet:
        lib_logger.setLevel(logging.ERROR)
    elif level is not None:
        # setLevel() raises ValueError on unknown level names
        lib_logger.setLevel(level)
