"""Exception taxonomy for calendar computation and provider failures."""

from __future__ import annotations

import re

import httpx

_TRANSPORT_CODES = frozenset({"ECONNRESET", "ETIMEDOUT", "ECONNREFUSED"})
_TRANSPORT_TYPES: tuple[type[BaseException], ...] = (
    ConnectionResetError,
    ConnectionRefusedError,
    TimeoutError,
    httpx.TransportError,
)
_TRANSIENT_MESSAGE_RE = re.compile(r"503|timeout", re.IGNORECASE)


class CalendarError(Exception):
    """Base class for every error raised by the calendar engine."""


class ValidationError(CalendarError):
    """The request is missing fields or carries malformed values."""

    def __init__(self, message: str, missing_fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields


class InvalidDateError(ValidationError):
    """The anchor date is not a parseable calendar date."""


class ConfigurationError(CalendarError):
    """Provider credentials or configuration are absent."""


class ProviderError(CalendarError):
    """The offer search provider failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class UpstreamAuthError(ProviderError):
    """The provider rejected our credentials. Fatal for the whole calendar."""


class RetryableTransientError(ProviderError):
    """5xx/429 or transport-level failure worth another attempt."""


def status_code_of(exc: BaseException) -> int | None:
    """Best-effort HTTP status extraction from provider/SDK/httpx errors."""
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def is_auth_failure(exc: BaseException) -> bool:
    return isinstance(exc, UpstreamAuthError) or status_code_of(exc) == 401


def is_transient(
    exc: BaseException, retryable_status_codes: frozenset[int]
) -> bool:
    """Return True if *exc* belongs to the retryable failure class."""
    if is_auth_failure(exc):
        return False
    if isinstance(exc, RetryableTransientError):
        return True
    if status_code_of(exc) in retryable_status_codes:
        return True
    if isinstance(exc, _TRANSPORT_TYPES):
        return True
    if getattr(exc, "code", None) in _TRANSPORT_CODES:
        return True
    return bool(_TRANSIENT_MESSAGE_RE.search(str(exc)))
