"""Argument: short text and image notes with search, copy and share."""

__version__ = "0.1.0"
