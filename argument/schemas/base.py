"""
Base Schemas.

Outcome envelope returned by every mutating note command.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from argument.core.exceptions import ApplicationError
from argument.core.utils import utc_now

DataT = TypeVar("DataT")


class ResultMetadata(BaseModel):
    """Metadata attached to every outcome."""

    timestamp: datetime = Field(default_factory=utc_now)
    operation: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None

    @classmethod
    def from_exception(cls, exc: ApplicationError) -> "ErrorDetail":
        return cls(
            code=exc.code,
            message=exc.message,
            details=getattr(exc, "details", None) or None,
        )


class OperationResult(BaseModel, Generic[DataT]):
    """
    Outcome of a command.

    Callers inspect ``success`` instead of catching exceptions; on failure
    ``error`` says what went wrong and ``data`` is None.
    """

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def ok(cls, data: DataT, operation: str | None = None) -> "OperationResult[DataT]":
        return cls(data=data, metadata=ResultMetadata(operation=operation))

    @classmethod
    def fail(cls, exc: ApplicationError, operation: str | None = None) -> "OperationResult[DataT]":
        return cls(
            success=False,
            error=ErrorDetail.from_exception(exc),
            metadata=ResultMetadata(operation=operation),
        )
