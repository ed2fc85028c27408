"""Shared fixtures for Presto client unit tests."""

from typing import Any, List

import pytest

from presto_client.connection import Connection
from presto_client.processor import Processor
from tests._support.presto_fakes import RecordingSleep, ScriptedTransport


@pytest.fixture
def connection() -> Connection:
    """Connection descriptor pointing at a fake coordinator."""
    return Connection(
        host="http://presto.example:8080",
        user="analyst",
        schema="default",
        catalog="hive",
    )


@pytest.fixture
def make_processor(connection):
    """Factory building a processor around scripted responses."""

    def _make(responses: List[Any], **kwargs: Any):
        transport = ScriptedTransport(responses)
        sleep = RecordingSleep(transport)
        kwargs.setdefault("poll_interval_seconds", 0.05)
        processor = Processor(connection, transport, sleep=sleep, **kwargs)
        return processor, transport, sleep

    return _make
