import json

import pytest

from presto_client.envelope import decode_envelope
from presto_client.errors import MalformedResponseError


def _body(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_decode_running_envelope():
    """Fields the client acts on are decoded; unknown fields are ignored."""
    env = decode_envelope(
        _body(
            {
                "id": "q1",
                "infoUri": "http://presto/ui/query.html?q1",
                "nextUri": "http://presto/v1/statement/q1/2",
                "columns": [{"name": "a", "type": "bigint"}, {"name": "b", "type": "varchar"}],
                "data": [[1, "x"]],
                "stats": {
                    "state": "RUNNING",
                    "queued": False,
                    "scheduled": True,
                    "processedRows": 10,
                    "elapsedTimeMillis": 42,
                },
            }
        )
    )

    assert env.id == "q1"
    assert env.stats.state == "RUNNING"
    assert env.stats.processed_rows == 10
    assert env.stats.elapsed_time_millis == 42
    assert env.has_next is True
    assert env.failed is False
    assert env.column_names == ["a", "b"]
    assert env.data == [[1, "x"]]
    assert env.error is None


def test_decode_accepts_str_body():
    env = decode_envelope('{"stats": {"state": "FINISHED"}}')

    assert env.has_next is False
    assert env.columns is None
    assert env.column_names is None
    assert env.data is None


def test_decode_failed_envelope_keeps_error_details():
    env = decode_envelope(
        _body(
            {
                "id": "q1",
                "stats": {"state": "FAILED"},
                "error": {
                    "errorName": "SYNTAX_ERROR",
                    "message": "line 1:1: mismatched input",
                    "errorCode": 1,
                    "errorType": "USER_ERROR",
                },
                "nextUri": "http://presto/ignored",
                "data": "garbage",
            }
        )
    )

    assert env.failed is True
    assert env.error.error_name == "SYNTAX_ERROR"
    assert env.error.error_code == 1
    assert env.error.error_type == "USER_ERROR"
    # Continuation and rows of a failed round are dropped.
    assert env.next_uri is None
    assert env.data is None


def test_failed_state_is_case_sensitive():
    env = decode_envelope(_body({"stats": {"state": "failed"}}))

    assert env.failed is False


def test_empty_next_uri_is_absent():
    env = decode_envelope(_body({"stats": {"state": "FINISHED"}, "nextUri": ""}))

    assert env.next_uri is None
    assert env.has_next is False


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b"",
        b"[1, 2]",
        b'{"data": []}',
        b'{"stats": "RUNNING"}',
        b'{"stats": {"state": 3}}',
        b'{"stats": {"state": "FAILED"}}',
        b'{"stats": {"state": "FAILED"}, "error": {"message": "no name"}}',
        b'{"stats": {"state": "RUNNING"}, "nextUri": 5}',
        b'{"stats": {"state": "RUNNING"}, "columns": [{"type": "bigint"}]}',
        b'{"stats": {"state": "RUNNING"}, "columns": {"name": "a"}}',
        b'{"stats": {"state": "RUNNING"}, "data": [1, 2]}',
    ],
)
def test_malformed_bodies_raise(body):
    with pytest.raises(MalformedResponseError):
        decode_envelope(body)
