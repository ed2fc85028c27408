"""Protocol driver for the Presto statement API.

A statement is POSTed once; every response names the URI to poll next until
the engine omits it. Each response is resolved in a fixed order: decode,
fail fast on ``FAILED``, record the continuation, hand the rows to the
collector. Continuation state lives on the stack of :meth:`Processor.execute`
so one processor can serve concurrent executions.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from presto_client.async_utils import with_timeout
from presto_client.collectors import Collectorable
from presto_client.config.settings import DEFAULT_POLL_INTERVAL_SECONDS
from presto_client.connection import Connection
from presto_client.envelope import ResponseEnvelope, decode_envelope
from presto_client.errors import (
    PollLimitExceededError,
    PrestoError,
    ProtocolError,
    log_classified_error,
)
from presto_client.result import TabularResult
from presto_client.tracing import trace_query_operation
from presto_client.transport import RawResponse, Transport

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class Processor:
    """Submits statements and follows continuations until the engine is done."""

    def __init__(
        self,
        connection: Connection,
        transport: Transport,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_polls: Optional[int] = None,
        query_timeout_seconds: Optional[float] = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the driver.

        Args:
            connection: Coordinator address and identity headers.
            transport: Performs the POST and continuation GETs.
            poll_interval_seconds: Constant wait before every continuation GET.
            max_polls: Upper bound on continuation GETs per execution; None is unbounded.
            query_timeout_seconds: Deadline for a whole execution; None is unbounded.
            sleep: Awaitable used for the inter-poll wait.
        """
        self._connection = connection
        self._transport = transport
        self._poll_interval_seconds = poll_interval_seconds
        self._max_polls = max_polls
        self._query_timeout_seconds = query_timeout_seconds
        self._sleep = sleep

    @property
    def connection(self) -> Connection:
        """Return the connection descriptor used for submissions."""
        return self._connection

    async def execute(self, sql: str, collector: Collectorable) -> TabularResult:
        """Run ``sql`` to completion and return what ``collector`` accumulated.

        Raises:
            TransportError: a request could not be completed.
            MalformedResponseError: a response body could not be decoded.
            ProtocolError: the engine reported the query as failed.
            PollLimitExceededError: ``max_polls`` continuations were not enough.
            QueryTimeoutError: ``query_timeout_seconds`` elapsed.
        """
        try:
            return await with_timeout(self._run(sql, collector), self._query_timeout_seconds)
        except PrestoError as exc:
            log_classified_error(exc, "execute", getattr(exc, "query_id", None))
            raise

    async def _run(self, sql: str, collector: Collectorable) -> TabularResult:
        envelope = self._resolve(await self._send_query(sql), collector, round_number=0)
        next_uri = envelope.next_uri
        query_id = envelope.id
        polls = 0

        while next_uri is not None:
            if self._max_polls is not None and polls >= self._max_polls:
                raise PollLimitExceededError(self._max_polls, query_id)
            await self._sleep(self._poll_interval_seconds)
            polls += 1
            envelope = self._resolve(
                await self._send_next(next_uri, polls), collector, round_number=polls
            )
            next_uri = envelope.next_uri
            query_id = envelope.id or query_id

        logger.debug("Presto query %s finished after %d continuation(s).", query_id, polls)
        return collector.get()

    async def _send_query(self, sql: str) -> RawResponse:
        return await trace_query_operation(
            "presto.query.submit",
            sql=sql,
            operation=self._transport.post_statement(
                self._connection.statement_uri(),
                self._connection.headers(),
                sql.encode("utf-8"),
            ),
        )

    async def _send_next(self, next_uri: str, round_number: int) -> RawResponse:
        return await trace_query_operation(
            "presto.query.poll",
            sql=None,
            operation=self._transport.get_continuation(next_uri),
            round_number=round_number,
        )

    def _resolve(
        self, response: RawResponse, collector: Collectorable, round_number: int
    ) -> ResponseEnvelope:
        envelope = decode_envelope(response.body)

        if envelope.failed:
            error = envelope.error
            raise ProtocolError(
                error.error_name,
                error.message,
                error_code=error.error_code,
                error_type=error.error_type,
                query_id=envelope.id,
            )

        logger.debug(
            "Presto query %s round %d: state=%s rows=%d next=%s",
            envelope.id,
            round_number,
            envelope.stats.state,
            len(envelope.data or []),
            envelope.next_uri,
        )
        collector.collect(envelope)
        return envelope
