"""Exception hierarchy for the linked registry.

Defines all custom exceptions used throughout the implementation.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base exception for all registry errors."""
    pass


class InvalidArgumentError(RegistryError, ValueError):
    """Raised when a caller passes a missing or malformed argument."""
    pass


class AllocationFailureError(RegistryError):
    """Raised when a store has reached its configured capacity."""
    pass


class NotFoundError(RegistryError, LookupError):
    """Raised when a key does not resolve to a record, owner or reference."""
    pass


class DuplicateKeyError(RegistryError):
    """Raised when inserting a key that compares equal to an existing one."""
    pass


class DuplicateReferenceError(DuplicateKeyError):
    """Raised when an owner already references the target record."""
    pass


class FileCorruptedError(RegistryError):
    """Raised when a data file violates its line format.

    Attributes:
        path: File being loaded
        line_no: 1-based line number of the offending line (0 if unknown)
    """

    def __init__(self, message: str, path: str | None = None, line_no: int = 0):
        self.path = path
        self.line_no = line_no
        if path is not None:
            message = f"{path}:{line_no}: {message}"
        super().__init__(message)


class DataFileNotFoundError(RegistryError, FileNotFoundError):
    """Raised when a data or config file does not exist."""
    pass


class EmptyCollectionError(RegistryError):
    """Raised when an operation needs at least one element."""
    pass
