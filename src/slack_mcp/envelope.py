"""Uniform result envelope returned by every Slack tool handler."""
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from .errors import ErrorKind, ToolError


class ToolResult(BaseModel):
    """Outcome of one tool invocation.

    ``data`` is only meaningful when ``success`` is true; ``error`` and
    ``error_kind`` only when it is false.
    """

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @model_validator(mode="after")
    def check_consistency(self) -> "ToolResult":
        if self.success:
            if self.error is not None or self.error_kind is not None:
                raise ValueError("successful result cannot carry an error")
        else:
            if self.data is not None:
                raise ValueError("failed result cannot carry data")
            if not self.error:
                raise ValueError("failed result requires an error message")
        return self

    @classmethod
    def ok(cls, data: Any) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind = ErrorKind.TRANSPORT) -> "ToolResult":
        return cls(success=False, error=error, error_kind=kind)

    @classmethod
    def from_error(cls, exc: ToolError) -> "ToolResult":
        return cls.fail(exc.message, exc.kind)
