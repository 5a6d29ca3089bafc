"""
Hand-rolled HTTP/1.1 framing for the PubNub long-poll endpoints.

Requests are plain GET lines; responses are read header by header until the
blank line, then exactly Content-Length body bytes are decoded as JSON.
"""

import json
import logging
from typing import Any
from urllib.parse import quote

from pubnub_lite.errors import HTTPResponseError
from pubnub_lite.transport.tcp import Transport, TransportError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "ps.pndsn.com:80"
HOST_HEADER = "pubnub"
CONTENT_LENGTH = b"Content-Length"
HEADER_END_LENGTH = 2  # bare "\r\n"


def encode_channel(channel: str) -> str:
    return quote(channel, safe=",")


def encode_message(message: str) -> str:
    """Percent-encode a payload for use as a single path segment."""
    return quote(message, safe="")


def subscribe_uri(subscribe_key: str, channel: str, timetoken: str, agent: str) -> str:
    return f"/v2/subscribe/{subscribe_key}/{encode_channel(channel)}/0/{timetoken}?pnsdk={agent}"


def publish_uri(publish_key: str, subscribe_key: str, channel: str, message: str, agent: str) -> str:
    # The two literal zeros are the signature and callback slots, unused here.
    return (
        f"/publish/{publish_key}/{subscribe_key}/0/{encode_channel(channel)}"
        f"/0/{encode_message(message)}?pnsdk={agent}"
    )


def build_request(uri: str) -> str:
    return f"GET {uri} HTTP/1.1\r\nHost: {HOST_HEADER}\r\n\r\n"


def _content_length(line: bytes) -> int:
    parts = line.split()
    if len(parts) < 2 or not parts[1].isdigit():
        raise HTTPResponseError(f"bad Content-Length header: {line!r}")
    return int(parts[1])


def read_response(transport: Transport) -> Any:
    """Read one HTTP response from ``transport`` and return its JSON body.

    Only the first Content-Length header is honoured. A response without one
    yields an empty body, which then fails to decode. Every failure, framing
    or payload, surfaces as HTTPResponseError.
    """
    body_length = 0
    while True:
        try:
            line = transport.read_line()
        except (TransportError, OSError):
            raise HTTPResponseError("failed reading response headers") from None

        if body_length == 0 and CONTENT_LENGTH in line:
            body_length = _content_length(line)

        if len(line) == HEADER_END_LENGTH:
            break

    try:
        payload = transport.read_exact(body_length)
    except (TransportError, OSError):
        raise HTTPResponseError(f"failed reading {body_length} byte response body") from None
    logger.debug(f"read {body_length} byte response body")

    try:
        return json.loads(payload)
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise HTTPResponseError("response body is not valid JSON", details={"length": body_length}) from None
