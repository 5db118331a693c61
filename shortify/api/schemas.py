"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from shortify.models.short_link import MAX_URL_LENGTH
from shortify.services.exceptions import FieldError, URLValidationError, ValidationErrorKind

ALIAS_PATTERN = r"^[A-Za-z0-9_-]{3,30}$"

_URL_ADAPTER = TypeAdapter(AnyUrl)
# Silently dropped by the URL parser but kept in the stored string
_UNSAFE_URL_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")
_ISO_DATETIME = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?"
)

# Request keys and the error kind reported when they are rejected
FIELD_KINDS: Dict[str, ValidationErrorKind] = {
    "longUrl": ValidationErrorKind.INVALID_URL,
    "url": ValidationErrorKind.INVALID_URL,
    "customAlias": ValidationErrorKind.INVALID_ALIAS,
    "expiresAt": ValidationErrorKind.INVALID_EXPIRY,
}


class ShortenRequest(BaseModel):
    """Request schema for creating a short link.

    ``url`` is accepted in place of ``longUrl``; ``longUrl`` wins when both are sent.
    """
    model_config = ConfigDict(extra="ignore")

    long_url: str = Field(
        validation_alias=AliasChoices("longUrl", "url"),
        max_length=MAX_URL_LENGTH,
    )
    custom_alias: Optional[str] = Field(
        default=None,
        validation_alias="customAlias",
        pattern=ALIAS_PATTERN,
    )
    expires_at: Optional[datetime] = Field(default=None, validation_alias="expiresAt")

    @field_validator("long_url")
    @classmethod
    def check_absolute_url(cls, v: str) -> str:
        # Validate only; the submitted string is what gets stored and redirected to
        if _UNSAFE_URL_CHARS.search(v):
            raise ValueError("URL must not contain whitespace or control characters")
        try:
            _URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError("Invalid URL") from None
        return v

    @field_validator("expires_at", mode="before")
    @classmethod
    def require_iso_string(cls, v: Any) -> Any:
        if v is None:
            return v
        if not isinstance(v, str) or not _ISO_DATETIME.fullmatch(v):
            raise ValueError("expiresAt must be an ISO-8601 datetime string")
        return v

    @field_validator("expires_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


def _to_field_error(error: Dict[str, Any]) -> FieldError:
    loc = error.get("loc") or ("longUrl",)
    field = str(loc[0])
    kind = FIELD_KINDS.get(field, ValidationErrorKind.INVALID_URL)
    return FieldError(field=field, kind=kind, reason=error["msg"])


def validate_shorten_request(payload: Any) -> ShortenRequest:
    """
    Validate a decoded create-request body.

    Args:
        payload: The JSON-decoded request body

    Returns:
        ShortenRequest: The typed, constraint-satisfying request

    Raises:
        URLValidationError: Listing every violated field
    """
    if not isinstance(payload, dict):
        raise URLValidationError([
            FieldError("longUrl", ValidationErrorKind.INVALID_URL, "Request body must be a JSON object")
        ])
    try:
        return ShortenRequest.model_validate(payload)
    except ValidationError as e:
        raise URLValidationError([_to_field_error(err) for err in e.errors()]) from None


class ShortenResponse(BaseModel):
    """Response schema for a created short link."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "URL shortened successfully"
    short_id: str
    original_url: str
    short_url: str  # Full URL including base domain
    created_at: datetime
    expires_at: Optional[datetime] = None


class FieldErrorResponse(BaseModel):
    field: str
    kind: str
    reason: str


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    error_code: Optional[str] = None  # Machine-readable error code
    field_errors: Optional[List[FieldErrorResponse]] = None  # For validation errors


class MessageResponse(BaseModel):
    message: str
