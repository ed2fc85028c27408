from contextvars import ContextVar
from typing import Optional

# Caller-provided correlation id attached to every query span.
run_id_var: ContextVar[Optional[str]] = ContextVar("presto_run_id", default=None)
