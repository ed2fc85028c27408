import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, runtime_checkable

import httpx

from presto_client.config.settings import DEFAULT_HTTP_TIMEOUT_SECONDS
from presto_client.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Undecoded body of one protocol response."""

    body: bytes
    status_code: int = 200

    @property
    def text(self) -> str:
        """Return the body decoded as UTF-8."""
        return self.body.decode("utf-8")


@runtime_checkable
class Transport(Protocol):
    """The two HTTP operations the statement protocol needs."""

    async def post_statement(
        self, uri: str, headers: Mapping[str, str], body: bytes
    ) -> RawResponse:
        """Submit a statement and return the first response."""
        ...

    async def get_continuation(self, uri: str) -> RawResponse:
        """Fetch the next round from a server-supplied URI."""
        ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ) -> None:
        """Wrap ``client`` or create an owned client with ``timeout_seconds``."""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def post_statement(
        self, uri: str, headers: Mapping[str, str], body: bytes
    ) -> RawResponse:
        return await self._send("POST", uri, headers=dict(headers), content=body)

    async def get_continuation(self, uri: str) -> RawResponse:
        return await self._send("GET", uri)

    async def _send(self, method: str, uri: str, **kwargs) -> RawResponse:
        logger.debug("Presto request %s %s", method, uri)
        try:
            response = await self._client.request(method, uri, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {uri} failed: {exc}", uri=uri) from exc

        if response.is_error:
            raise TransportError(
                f"{method} {uri} returned HTTP {response.status_code}.",
                uri=uri,
                status_code=response.status_code,
            )
        return RawResponse(body=response.content, status_code=response.status_code)

    async def aclose(self) -> None:
        """Close the underlying client when this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
