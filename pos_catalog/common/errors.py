"""
Error Types

Every error raised by the catalog core is recoverable: the caller shows a
message and lets the operator correct the input or retry.
"""

from typing import List, Optional


class PosCatalogError(Exception):
    """Base class for catalog errors."""


class ValidationError(PosCatalogError, ValueError):
    """User input violates a precondition. The rejected operation leaves state unchanged."""


class PersistenceError(PosCatalogError):
    """
    Saving a product failed.

    Attributes:
        kind: "validation" when required product fields are missing,
              "storage" when the write itself failed (quota, I/O, remote call)
        errors: Individual problems, if known
        retryable: True when retrying the same save may succeed
    """

    VALIDATION = "validation"
    STORAGE = "storage"

    def __init__(self, message: str, kind: str = STORAGE, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.kind = kind
        self.errors = list(errors or [])

    @property
    def retryable(self) -> bool:
        return self.kind == self.STORAGE
