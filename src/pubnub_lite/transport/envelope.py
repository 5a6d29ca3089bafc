"""
Turns parsed JSON response bodies into typed results.
"""

import json
from typing import Any

from pydantic import ValidationError

from pubnub_lite.errors import DecodeError
from pubnub_lite.models.envelope import PublishAck, SubscribeEnvelope
from pubnub_lite.models.message import Message


def stringify(value: Any) -> str:
    """Strings pass through untouched; any other JSON value is re-serialized compactly."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def parse_subscribe_envelope(raw: Any) -> tuple[str, list[Message]]:
    """Decode ``{"t": {"t": cursor}, "m": [...]}``. Returns (next cursor, messages in envelope order)."""
    try:
        envelope = SubscribeEnvelope.model_validate(raw)
    except ValidationError as e:
        raise DecodeError(f"malformed subscribe envelope ({e.error_count()} errors)") from None
    messages = [
        Message(channel=m.c, data=stringify(m.d), id=m.p.t)
        for m in envelope.m
    ]
    return envelope.t.t, messages


def parse_publish_ack(raw: Any) -> PublishAck:
    """Decode ``[status, "text", "timetoken"]``."""
    if not isinstance(raw, list) or len(raw) < 3:
        raise DecodeError(f"malformed publish response: {stringify(raw)[:200]}")
    status, text, timetoken = raw[0], raw[1], raw[2]
    if not isinstance(status, int) or isinstance(status, bool):
        raise DecodeError(f"publish status is not an integer: {status!r}")
    if timetoken is None:
        raise DecodeError("publish response carries no timetoken")
    return PublishAck(status=status, text=stringify(text), timetoken=stringify(timetoken))
