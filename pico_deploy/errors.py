"""
Error taxonomy for the bootstrap sequence.

Every stage raises a BootstrapError subclass. Each carries a human-readable
remediation hint that the CLI prints before exiting with status 1.
"""

from typing import Optional


class BootstrapError(Exception):
    """Base class for fatal bootstrap gate failures."""

    exit_code = 1

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message


class MissingDependency(BootstrapError):
    """A required host tool is not installed."""


class MissingTemplate(BootstrapError):
    """No configuration template to bootstrap the environment file from."""


class InvalidConfiguration(BootstrapError):
    """The environment file holds a malformed value for a recognized key."""


class HardwareUnavailable(BootstrapError):
    """GPU probe failed and the operator declined to continue."""


class IncompleteAssetSet(BootstrapError):
    """One or more gnark artifacts are still missing after the fetch stage."""

    def __init__(self, message: str, missing=(), hint: Optional[str] = None):
        super().__init__(message, hint)
        self.missing = list(missing)


class ImageNotLoaded(BootstrapError):
    """The proving service image is absent from the local image store."""


class OrchestrationFailed(BootstrapError):
    """`compose up` returned a non-zero exit status."""


class RuntimeUnavailable(BootstrapError):
    """The Docker daemon could not be reached."""


class OperatorAborted(BootstrapError):
    """The operator declined to continue at an interactive pause."""


class ConfirmationRequired(BootstrapError):
    """A confirmation was requested while running non-interactively."""
