from dataclasses import dataclass
from typing import Optional

from presto_client.config.env import get_env_float, get_env_int, get_env_str

DEFAULT_POLL_INTERVAL_SECONDS = 0.05
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class PrestoConfig:
    """Configuration required to reach a Presto coordinator."""

    host: str
    user: str
    schema: str
    catalog: str
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_polls: Optional[int] = None
    query_timeout_seconds: Optional[float] = None
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "PrestoConfig":
        """Load Presto config from environment variables."""
        host = get_env_str("PRESTO_HOST")
        user = get_env_str("PRESTO_USER")
        schema = get_env_str("PRESTO_SCHEMA")
        catalog = get_env_str("PRESTO_CATALOG")
        poll_interval_seconds = get_env_float(
            "PRESTO_POLL_INTERVAL_SECS", DEFAULT_POLL_INTERVAL_SECONDS
        )
        max_polls = get_env_int("PRESTO_MAX_POLLS")
        query_timeout_seconds = get_env_float("PRESTO_QUERY_TIMEOUT_SECS")
        http_timeout_seconds = get_env_float(
            "PRESTO_HTTP_TIMEOUT_SECS", DEFAULT_HTTP_TIMEOUT_SECONDS
        )

        missing = [
            name
            for name, value in {
                "PRESTO_HOST": host,
                "PRESTO_USER": user,
                "PRESTO_SCHEMA": schema,
                "PRESTO_CATALOG": catalog,
            }.items()
            if not value
        ]
        if missing:
            missing_list = ", ".join(missing)
            raise ValueError(
                f"Presto client missing required config: {missing_list}. "
                "Set PRESTO_HOST, PRESTO_USER, PRESTO_SCHEMA, and PRESTO_CATALOG."
            )

        if poll_interval_seconds < 0:
            raise ValueError("PRESTO_POLL_INTERVAL_SECS must be >= 0.")
        if max_polls is not None and max_polls < 0:
            raise ValueError("PRESTO_MAX_POLLS must be >= 0 when set.")

        return cls(
            host=host,
            user=user,
            schema=schema,
            catalog=catalog,
            poll_interval_seconds=poll_interval_seconds,
            max_polls=max_polls,
            query_timeout_seconds=query_timeout_seconds,
            http_timeout_seconds=http_timeout_seconds,
        )
