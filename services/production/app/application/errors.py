from typing import Iterable
from .validation import FieldError

class RecordError(Exception):
    """Base class for failures the record services report to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ValidationFailed(RecordError):
    def __init__(self, errors: Iterable[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(e.message for e in self.errors) or "Invalid input")

class ConflictError(RecordError):
    """A unique constraint (part number, batch code) was violated."""

class NotFoundError(RecordError):
    """A referenced record does not exist."""
