"""Error taxonomy for the Presto statement client.

Every failure is terminal for the ``execute`` call that raised it. Nothing in
the client retries; :func:`classify_error` exists so callers and telemetry can
decide what a failure means without string-matching messages themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


class PrestoError(Exception):
    """Base class for all errors raised by the client."""


class TransportError(PrestoError):
    """A request could not be issued or the server answered with a non-2xx status."""

    def __init__(
        self, message: str, uri: Optional[str] = None, status_code: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.uri = uri
        self.status_code = status_code


class MalformedResponseError(PrestoError):
    """A response body could not be decoded into a statement envelope."""


class ProtocolError(PrestoError):
    """The engine reported ``stats.state == "FAILED"`` for the query."""

    def __init__(
        self,
        error_name: str,
        message: str,
        error_code: Optional[int] = None,
        error_type: Optional[str] = None,
        query_id: Optional[str] = None,
    ) -> None:
        super().__init__(f"{error_name}: {message}")
        self.error_name = error_name
        self.error_message = message
        self.error_code = error_code
        self.error_type = error_type
        self.query_id = query_id


class PollLimitExceededError(PrestoError):
    """The engine kept returning continuations past the configured ``max_polls``."""

    def __init__(self, max_polls: int, query_id: Optional[str] = None) -> None:
        super().__init__(f"Presto query exceeded the poll limit of {max_polls} continuations.")
        self.max_polls = max_polls
        self.query_id = query_id


class QueryTimeoutError(PrestoError):
    """The whole statement round-trip exceeded ``query_timeout_seconds``."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Presto query exceeded {timeout_seconds}s timeout.")
        self.timeout_seconds = timeout_seconds


@dataclass(frozen=True)
class ErrorClassification:
    """Provider-agnostic view of a client failure."""

    category: str
    is_retryable: bool


_RETRYABLE_CATEGORIES = {"connectivity", "timeout", "resource_exhausted", "transient"}

# Presto errorType values reported alongside errorName.
_ERROR_TYPE_CATEGORIES = {
    "USER_ERROR": "syntax",
    "INSUFFICIENT_RESOURCES": "resource_exhausted",
    "EXTERNAL": "dependency_failure",
    "INTERNAL_ERROR": "internal",
}


def classify_error(exc: BaseException) -> ErrorClassification:
    """Classify a client failure into a coarse category with retryability."""
    if isinstance(exc, ProtocolError):
        return _classification(_protocol_category(exc))
    if isinstance(exc, (QueryTimeoutError, TimeoutError)):
        return _classification("timeout")
    if isinstance(exc, TransportError):
        if exc.status_code in {429, 502, 503, 504}:
            return _classification("transient")
        if exc.status_code is not None and 400 <= exc.status_code < 500:
            return _classification("invalid_request")
        return _classification("connectivity")
    if isinstance(exc, MalformedResponseError):
        return _classification("malformed_response")
    if isinstance(exc, PollLimitExceededError):
        return _classification("limit_exceeded")
    return _classification("unknown")


def _protocol_category(exc: ProtocolError) -> str:
    name = (exc.error_name or "").upper()
    if "SYNTAX" in name or name == "INVALID_FUNCTION_ARGUMENT":
        return "syntax"
    if name in {"EXCEEDED_TIME_LIMIT", "ABANDONED_QUERY"}:
        return "timeout"
    if name.startswith("EXCEEDED_") or name == "CLUSTER_OUT_OF_MEMORY":
        return "resource_exhausted"
    if name in {"PERMISSION_DENIED", "ACCESS_DENIED"}:
        return "auth"
    return _ERROR_TYPE_CATEGORIES.get((exc.error_type or "").upper(), "unknown")


def _classification(category: str) -> ErrorClassification:
    return ErrorClassification(
        category=category,
        is_retryable=category in _RETRYABLE_CATEGORIES,
    )


def log_classified_error(exc: BaseException, operation: str, query_id: Optional[str]) -> None:
    """Emit one structured error log for a failed query."""
    info = classify_error(exc)
    logger.error(
        "presto_query_failed",
        extra={
            "event": "presto_query_failed",
            "operation": operation,
            "query_id": query_id,
            "error_category": info.category,
            "error_type": exc.__class__.__name__,
            "is_retryable": info.is_retryable,
        },
    )
