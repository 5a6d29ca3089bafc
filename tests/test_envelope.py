"""Envelope and acknowledgment decoding."""

import pytest

from conftest import envelope
from pubnub_lite.errors import DecodeError
from pubnub_lite.models.message import NO_METADATA, Message
from pubnub_lite.transport.envelope import parse_publish_ack, parse_subscribe_envelope, stringify


def test_subscribe_envelope_messages_in_order():
    timetoken, messages = parse_subscribe_envelope(
        envelope("15000000000000002", ("demo", "one", "15000000000000001"), ("demo", "two", "15000000000000002"))
    )
    assert timetoken == "15000000000000002"
    assert [m.data for m in messages] == ["one", "two"]
    assert messages[0] == Message(channel="demo", data="one", metadata=NO_METADATA, id="15000000000000001")


def test_empty_envelope():
    timetoken, messages = parse_subscribe_envelope(envelope("15000000000000000"))
    assert timetoken == "15000000000000000"
    assert messages == []


def test_missing_message_list_means_no_messages():
    assert parse_subscribe_envelope({"t": {"t": "1"}}) == ("1", [])


def test_integer_timetokens_coerced():
    timetoken, messages = parse_subscribe_envelope({"t": {"t": 42}, "m": [{"c": "demo", "d": "x", "p": {"t": 41}}]})
    assert timetoken == "42"
    assert messages[0].id == "41"


def test_json_payloads_stringified():
    _, messages = parse_subscribe_envelope(envelope("2", ("demo", {"text": "hi", "n": 1}, "1"), ("demo", 7, "1")))
    assert messages[0].data == '{"text":"hi","n":1}'
    assert messages[1].data == "7"


@pytest.mark.parametrize("raw", [
    None,
    [],
    {"m": []},
    {"t": "123", "m": []},
    {"t": {"t": "1"}, "m": [{"d": "no channel", "p": {"t": "1"}}]},
    {"t": {"t": "1"}, "m": [{"c": "demo", "d": "no timetoken"}]},
])
def test_malformed_envelope(raw):
    with pytest.raises(DecodeError):
        parse_subscribe_envelope(raw)


def test_message_is_immutable():
    message = Message(channel="demo", data="x", id="1")
    with pytest.raises(Exception):
        message.data = "y"


def test_publish_ack():
    ack = parse_publish_ack([1, "Sent", "14966874430000000"])
    assert ack.status == 1
    assert ack.text == "Sent"
    assert ack.timetoken == "14966874430000000"


def test_publish_ack_numeric_timetoken():
    assert parse_publish_ack([1, "Sent", 14966874430000000]).timetoken == "14966874430000000"


@pytest.mark.parametrize("raw", [None, {}, [1, "Sent"], ["1", "Sent", "1"], [True, "Sent", "1"], [1, "Sent", None]])
def test_malformed_publish_ack(raw):
    with pytest.raises(DecodeError):
        parse_publish_ack(raw)


def test_stringify():
    assert stringify("plain") == "plain"
    assert stringify(None) == "null"
    assert stringify([1, "a"]) == '[1,"a"]'


def test_non_ascii_payloads_kept_verbatim():
    _, messages = parse_subscribe_envelope(envelope("3", ("demo", {"msg": "héllo"}, "2"), ("demo", ["日本"], "2")))
    assert messages[0].data == '{"msg":"héllo"}'
    assert messages[1].data == '["日本"]'
