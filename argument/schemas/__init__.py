"""Pydantic schemas for note commands and their outcomes."""

from argument.schemas.base import ErrorDetail, OperationResult, ResultMetadata
from argument.schemas.note import NoteCreate, NoteResponse, NoteUpdate

__all__ = [
    "ErrorDetail",
    "NoteCreate",
    "NoteResponse",
    "NoteUpdate",
    "OperationResult",
    "ResultMetadata",
]
