"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""

from enum import Enum
from typing import List, NamedTuple


class ValidationErrorKind(str, Enum):
    """Which part of a create request was rejected."""
    INVALID_URL = "InvalidUrl"
    INVALID_ALIAS = "InvalidAlias"
    INVALID_EXPIRY = "InvalidExpiry"


class FieldError(NamedTuple):
    field: str
    kind: ValidationErrorKind
    reason: str


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class URLValidationError(URLError):
    """A create request failed validation.

    Carries one FieldError per violated field.
    """

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.reason}" for e in self.errors)
        super().__init__(f"Invalid create request: {summary}")

    @property
    def kinds(self) -> List[ValidationErrorKind]:
        return [e.kind for e in self.errors]


class URLCreationError(URLError):
    """Error occurred during URL creation (store unreachable or failing)."""
    pass


class ShortCodeGenerationError(URLCreationError):
    """Every generated code collided with an existing one."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Failed to generate a unique short code after {attempts} attempts")


class CustomCodeAlreadyExistsError(URLCreationError):
    """The requested custom alias is already in use."""
    pass


class URLLookupError(URLError):
    """The store failed while resolving a short code."""
    pass
