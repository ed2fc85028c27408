import hashlib
from typing import Awaitable, Optional, TypeVar

from presto_client.observability.context import run_id_var
from presto_client.observability.exporter import is_tracing_enabled

T = TypeVar("T")

PROVIDER = "presto"


def trace_enabled() -> bool:
    """Return True when query tracing is enabled or OTEL exporter defaults apply."""
    return is_tracing_enabled("PRESTO_TRACE_QUERIES")


def _hash_sql(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


async def trace_query_operation(
    name: str,
    sql: Optional[str],
    operation: Awaitable[T],
    round_number: Optional[int] = None,
) -> T:
    """Trace one protocol request with OTEL when enabled."""
    if not trace_enabled():
        return await operation

    from opentelemetry import trace

    tracer = trace.get_tracer("presto_client")
    with tracer.start_as_current_span(name) as span:
        run_id = run_id_var.get()
        if run_id:
            span.set_attribute("run_id", run_id)
        span.set_attribute("db.provider", PROVIDER)
        span.set_attribute("db.execution_model", "async")
        if sql:
            span.set_attribute("db.statement_hash", _hash_sql(sql))
        if round_number is not None:
            span.set_attribute("presto.poll_round", round_number)
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise
