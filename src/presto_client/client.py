import logging
from typing import Optional

from presto_client.config.settings import DEFAULT_POLL_INTERVAL_SECONDS, PrestoConfig
from presto_client.connection import Connection
from presto_client.processor import Processor, SleepFunc
from presto_client.query_builder import QueryBuilder
from presto_client.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


class PrestoClient:
    """Entry point: one coordinator, one transport, any number of queries."""

    def __init__(
        self,
        connection: Connection,
        transport: Optional[Transport] = None,
        *,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_polls: Optional[int] = None,
        query_timeout_seconds: Optional[float] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        """Create a client; an ``HttpxTransport`` is built when none is given."""
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport()
        processor_kwargs = {}
        if sleep is not None:
            processor_kwargs["sleep"] = sleep
        self._processor = Processor(
            connection,
            self._transport,
            poll_interval_seconds=poll_interval_seconds,
            max_polls=max_polls,
            query_timeout_seconds=query_timeout_seconds,
            **processor_kwargs,
        )

    @classmethod
    def from_config(
        cls, config: PrestoConfig, transport: Optional[Transport] = None
    ) -> "PrestoClient":
        """Build a client from a :class:`PrestoConfig`."""
        connection = Connection(
            host=config.host,
            user=config.user,
            schema=config.schema,
            catalog=config.catalog,
        )
        owns_transport = transport is None
        client = cls(
            connection,
            transport or HttpxTransport(timeout_seconds=config.http_timeout_seconds),
            poll_interval_seconds=config.poll_interval_seconds,
            max_polls=config.max_polls,
            query_timeout_seconds=config.query_timeout_seconds,
        )
        client._owns_transport = owns_transport
        return client

    @classmethod
    def from_env(cls) -> "PrestoClient":
        """Build a client from ``PRESTO_*`` environment variables."""
        config = PrestoConfig.from_env()
        logger.info("Initializing Presto client for %s (catalog=%s)", config.host, config.catalog)
        return cls.from_config(config)

    @property
    def connection(self) -> Connection:
        """Return the connection descriptor."""
        return self._processor.connection

    def query(self) -> QueryBuilder:
        """Return a fresh query builder."""
        return QueryBuilder(self._processor)

    def raw(self, sql: str) -> QueryBuilder:
        """Return a query builder preloaded with ``sql``."""
        return self.query().raw(sql)

    async def aclose(self) -> None:
        """Close the transport when this client created it."""
        if self._owns_transport and hasattr(self._transport, "aclose"):
            await self._transport.aclose()

    async def __aenter__(self) -> "PrestoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
