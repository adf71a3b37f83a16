"""Error taxonomy for Slack tool invocations.

Every failure raised while a tool runs is normalized into a ``ToolError``
carrying a kind, a user-visible message and the original cause. Handlers turn
these into failure envelopes; only unknown tool names escape as protocol errors.
"""
import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Class of failure behind a failed tool call."""

    VALIDATION = "validation"    # Required argument missing, no remote call made
    RESOLUTION = "resolution"    # Channel/user name could not be mapped to an ID
    REMOTE = "remote"            # Slack answered with ok: false
    TRANSPORT = "transport"      # Network, HTTP status, malformed payload, anything else


class ToolError(Exception):
    """Raised when a tool invocation cannot produce data."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.cause = cause

    def with_prefix(self, prefix: str) -> "ToolError":
        """Return a copy whose message is prefixed with the failing stage."""
        return ToolError(f"{prefix}: {self.message}", kind=self.kind, cause=self.cause or self)


class MissingArgumentError(ToolError):
    """Raised when a required tool argument is absent or empty."""

    kind = ErrorKind.VALIDATION


class ResolutionError(ToolError):
    """Raised when a channel or user reference cannot be resolved to an ID."""

    kind = ErrorKind.RESOLUTION

    def __init__(self, message: str, reference: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause=cause)
        self.reference = reference


class RemoteError(ToolError):
    """Raised when the Slack Web API reports ``ok: false``."""

    kind = ErrorKind.REMOTE

    def __init__(self, message: str, method: Optional[str] = None):
        super().__init__(message)
        self.method = method


class ConfigurationError(Exception):
    """Raised at startup when the server cannot be configured."""
