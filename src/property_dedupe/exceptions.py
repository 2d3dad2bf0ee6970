"""Exceptions raised at the I/O edge. The reconcile engine itself never raises."""
from __future__ import annotations


class PropertyDedupeError(Exception):
    """Base exception for all application errors."""

    pass


class InputFormatError(PropertyDedupeError):
    """Raised when an input file cannot be read as dashboard rows."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
