import asyncio
from typing import Awaitable, Optional, TypeVar

from presto_client.errors import QueryTimeoutError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_seconds: Optional[float]) -> T:
    """Await ``awaitable``, bounded by ``timeout_seconds`` when one is given.

    Raises:
        QueryTimeoutError: the deadline passed before the awaitable finished.
    """
    if timeout_seconds is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError as exc:
        raise QueryTimeoutError(timeout_seconds) from exc
