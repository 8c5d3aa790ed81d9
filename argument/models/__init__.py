"""SQLAlchemy models."""

from argument.models.base import Base
from argument.models.note import Note

__all__ = ["Base", "Note"]
