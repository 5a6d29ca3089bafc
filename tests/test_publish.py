"""Publish engine."""

import logging

import pytest

from conftest import FakeTransport, json_response
from pubnub_lite import PublishClient
from pubnub_lite.errors import DecodeError, InitializeError, PublishError, PublishResponseError, PublishWriteError
from pubnub_lite.transport.tcp import SocketTransport, TransportError

SENT = json_response([1, "Sent", "14966874430000000"])


def make_client(*chunks: bytes, fail_writes=()) -> tuple[PublishClient, FakeTransport]:
    transport = FakeTransport(*chunks, fail_writes=fail_writes)
    return PublishClient("pub-key", "sub-key", transport=transport), transport


def test_publish_returns_timetoken():
    client, t = make_client(SENT)
    assert client.publish("room", "hello world") == "14966874430000000"
    assert t.writes == [
        "GET /publish/pub-key/sub-key/0/room/0/hello%20world?pnsdk=PubNub-Publish-Client HTTP/1.1\r\n"
        "Host: pubnub\r\n\r\n"
    ]


def test_construction_does_no_io():
    _, t = make_client()
    assert t.write_attempts == 0


def test_sequential_publishes_share_connection():
    client, t = make_client(SENT, json_response([1, "Sent", "14966874430000001"]))
    assert client.publish("room", "a") == "14966874430000000"
    assert client.publish("room", "b") == "14966874430000001"
    assert len(t.writes) == 2


def test_write_failure_skips_read():
    client, t = make_client(SENT, fail_writes=[0])
    with pytest.raises(PublishWriteError):
        client.publish("room", "hello")
    assert t.line_reads == 0
    assert t.reads == []


def test_read_timeout():
    client, t = make_client()
    with pytest.raises(PublishResponseError) as exc:
        client.publish("room", "hello")
    assert exc.value.code == "publish_response_error"
    assert len(t.writes) == 1


def test_rejected_publish():
    client, _ = make_client(json_response([0, "Message Too Large", "14966874430000000"]))
    with pytest.raises(PublishError) as exc:
        client.publish("room", "x" * 10)
    assert exc.value.details == {"status": 0, "timetoken": "14966874430000000"}
    assert "Message Too Large" in str(exc.value)


def test_short_ack_is_decode_error():
    client, _ = make_client(json_response([1, "Sent"]))
    with pytest.raises(DecodeError):
        client.publish("room", "hello")


def test_connect_failure(monkeypatch):
    def connect(cls, host, agent, timeout):
        assert (agent, timeout) == ("PubNub-Publish-Client", 5.0)
        raise TransportError("refused")

    monkeypatch.setattr(SocketTransport, "connect", classmethod(connect))
    with pytest.raises(InitializeError):
        PublishClient("pub-key", "sub-key")


def test_secret_key_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="pubnub_lite.publish"):
        PublishClient("pub-key", "sub-key", secret_key="sec", transport=FakeTransport())
    assert "signing is not supported" in caplog.text


def test_context_manager_closes_transport():
    client, t = make_client()
    with client:
        pass
    assert t.closed
