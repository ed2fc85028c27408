"""Observability hooks shared by the Presto client."""

from .context import run_id_var
from .exporter import is_otel_exporter_configured, is_tracing_enabled

__all__ = ["is_otel_exporter_configured", "is_tracing_enabled", "run_id_var"]
