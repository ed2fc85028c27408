"""Async client for the Presto statement protocol."""

from .client import PrestoClient
from .collectors import AssocCollector, Collector, Collectorable
from .config import PrestoConfig
from .connection import Connection
from .envelope import ResponseEnvelope, decode_envelope
from .errors import (
    MalformedResponseError,
    PollLimitExceededError,
    PrestoError,
    ProtocolError,
    QueryTimeoutError,
    TransportError,
)
from .processor import Processor
from .query_builder import QueryBuilder
from .result import TabularResult
from .transport import HttpxTransport, RawResponse, Transport

__all__ = [
    "AssocCollector",
    "Collector",
    "Collectorable",
    "Connection",
    "HttpxTransport",
    "MalformedResponseError",
    "PollLimitExceededError",
    "PrestoClient",
    "PrestoConfig",
    "PrestoError",
    "Processor",
    "ProtocolError",
    "QueryBuilder",
    "QueryTimeoutError",
    "RawResponse",
    "ResponseEnvelope",
    "TabularResult",
    "Transport",
    "TransportError",
    "decode_envelope",
]
