"""Exception hierarchy for vmconfig.

All exceptions inherit from VmConfigError base class.

Hierarchy:
    VmConfigError (base)
    └── PermanentError (non-retryable marker base)
        ├── ResourceUnavailableError  ← disk image cannot be attached
        └── VmResourceLimitError      ← assembled value outside platform limits

Shared-directory problems are not exceptions: the device is skipped and a
warning is logged.

Aliases:
    FatalPreconditionError = ResourceUnavailableError
"""

from __future__ import annotations

from typing import Any


class VmConfigError(Exception):
    """Base exception for all configuration errors with structured context.

    Attributes:
        message: Human-readable error message
        context: Dictionary of structured error context for logging/debugging
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class PermanentError(VmConfigError):
    """Base for errors that won't go away by building again.

    The caller must fix the host or the inputs before a usable
    configuration can be produced.
    """


class ResourceUnavailableError(PermanentError):
    """A resource the VM cannot boot without is unavailable.

    Raised when the disk image is missing, is not a regular file, or cannot
    be opened with the requested access mode. Configuration assembly stops
    and no partial configuration is returned.

    Attributes:
        path: Path of the resource that could not be attached
    """

    def __init__(self, message: str, path: str, context: dict[str, Any] | None = None):
        ctx = context or {}
        ctx.setdefault("path", path)
        super().__init__(message, ctx)
        self.path = path


class VmResourceLimitError(PermanentError):
    """A resource value falls outside the platform limits.

    Attributes:
        resource: Name of the offending field (e.g. "cpu_count")
        value: The out-of-range value
    """

    def __init__(self, message: str, resource: str, value: int, context: dict[str, Any] | None = None):
        ctx = context or {}
        ctx.update({"resource": resource, "value": value})
        super().__init__(message, ctx)
        self.resource = resource
        self.value = value


FatalPreconditionError = ResourceUnavailableError
