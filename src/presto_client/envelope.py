"""Decoding of statement-protocol response bodies.

Each HTTP response of the statement protocol carries one JSON document, the
envelope. Only the fields the client acts on are modeled; unknown fields are
ignored so newer coordinators stay compatible.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from presto_client.errors import MalformedResponseError

FAILED = "FAILED"

ColumnMeta = Dict[str, Any]
Row = List[Any]


@dataclass(frozen=True)
class QueryStats:
    """Progress block of an envelope; ``state`` drives failure detection."""

    state: str
    queued: Optional[bool] = None
    scheduled: Optional[bool] = None
    processed_rows: Optional[int] = None
    elapsed_time_millis: Optional[int] = None


@dataclass(frozen=True)
class QueryError:
    """Failure details attached to a ``FAILED`` envelope."""

    error_name: str
    message: str
    error_code: Optional[int] = None
    error_type: Optional[str] = None


@dataclass(frozen=True)
class ResponseEnvelope:
    """One decoded round of the statement protocol."""

    stats: QueryStats
    id: Optional[str] = None
    error: Optional[QueryError] = None
    next_uri: Optional[str] = None
    columns: Optional[List[ColumnMeta]] = None
    data: Optional[List[Row]] = None

    @property
    def failed(self) -> bool:
        """Return True when the engine reports the query as failed."""
        return self.stats.state == FAILED

    @property
    def has_next(self) -> bool:
        """Return True when the server supplied a continuation URI."""
        return self.next_uri is not None

    @property
    def column_names(self) -> Optional[List[str]]:
        """Return the announced column names, or None without a column block."""
        if self.columns is None:
            return None
        return [column["name"] for column in self.columns]


def decode_envelope(body: Union[bytes, str]) -> ResponseEnvelope:
    """Decode a raw response body into a :class:`ResponseEnvelope`.

    Raises:
        MalformedResponseError: the body is not JSON or lacks the expected shape.
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise MalformedResponseError(f"Response body is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedResponseError("Response body must be a JSON object.")

    stats = _parse_stats(payload.get("stats"))
    error = _parse_error(payload.get("error"))
    if stats.state == FAILED:
        if error is None:
            raise MalformedResponseError("FAILED response is missing error details.")
        # Rows and continuation of a failed round are not trustworthy.
        return ResponseEnvelope(stats=stats, id=_optional_str(payload, "id"), error=error)

    return ResponseEnvelope(
        stats=stats,
        id=_optional_str(payload, "id"),
        error=error,
        next_uri=_parse_next_uri(payload.get("nextUri")),
        columns=_parse_columns(payload.get("columns")),
        data=_parse_data(payload.get("data")),
    )


def _parse_stats(raw: Any) -> QueryStats:
    if not isinstance(raw, dict):
        raise MalformedResponseError("Response is missing the 'stats' object.")
    state = raw.get("state")
    if not isinstance(state, str):
        raise MalformedResponseError("Response 'stats.state' must be a string.")
    return QueryStats(
        state=state,
        queued=raw.get("queued"),
        scheduled=raw.get("scheduled"),
        processed_rows=raw.get("processedRows"),
        elapsed_time_millis=raw.get("elapsedTimeMillis"),
    )


def _parse_error(raw: Any) -> Optional[QueryError]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise MalformedResponseError("Response 'error' must be an object.")
    error_name = raw.get("errorName")
    message = raw.get("message")
    if not isinstance(error_name, str) or not isinstance(message, str):
        raise MalformedResponseError("Response 'error' requires 'errorName' and 'message'.")
    return QueryError(
        error_name=error_name,
        message=message,
        error_code=raw.get("errorCode"),
        error_type=raw.get("errorType"),
    )


def _parse_next_uri(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise MalformedResponseError("Response 'nextUri' must be a string.")
    # An empty continuation carries nowhere to poll; it ends the query like an absent one.
    return raw or None


def _parse_columns(raw: Any) -> Optional[List[ColumnMeta]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise MalformedResponseError("Response 'columns' must be a list.")
    for column in raw:
        if not isinstance(column, dict) or not isinstance(column.get("name"), str):
            raise MalformedResponseError("Every column must be an object with a 'name'.")
    return raw


def _parse_data(raw: Any) -> Optional[List[Row]]:
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(row, list) for row in raw):
        raise MalformedResponseError("Response 'data' must be a list of row arrays.")
    return raw


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) else None
