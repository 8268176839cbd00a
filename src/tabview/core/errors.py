"""
Tabview exceptions.

Raised for caller-input validation failures. Capacity rejection is not an
error: it is reported through return values and the capacity callback.
"""
from typing import Optional


class TabviewError(Exception):
    """Base class for all tabview errors."""
    pass


class TabIndexError(TabviewError, IndexError):
    """Exception raised when an index does not address an existing slot."""

    def __init__(self, index: int, length: int, name: str = "index"):
        self.index = index
        self.length = length
        self.name = name
        super().__init__(
            f"{name} {index} out of range for collection of length {length}"
        )


class InvalidStateError(TabviewError, RuntimeError):
    """Exception raised when an operation is not valid in the current state."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)
