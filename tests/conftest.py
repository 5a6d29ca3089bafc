import json
from typing import Any, Iterable, Optional

import pytest

from pubnub_lite.transport.tcp import TransportError


def http_response(body: bytes, content_length: Optional[int] = None, headers: Iterable[str] = ()) -> bytes:
    """Build a raw HTTP/1.1 response. ``content_length=-1`` omits the header."""
    lines = ["HTTP/1.1 200 OK", "Content-Type: text/javascript; charset=\"UTF-8\"", *headers]
    if content_length != -1:
        lines.append(f"Content-Length: {len(body) if content_length is None else content_length}")
    lines.append("Connection: keep-alive")
    return ("\r\n".join(lines) + "\r\n\r\n").encode() + body


def json_response(value: Any) -> bytes:
    return http_response(json.dumps(value).encode())


def envelope(timetoken: str, *messages: tuple[str, Any, str]) -> dict[str, Any]:
    return {
        "t": {"t": timetoken, "r": 1},
        "m": [{"a": "0", "f": 0, "c": c, "d": d, "p": {"t": t, "r": 1}, "k": "demo"} for c, d, t in messages],
    }


class FakeTransport:
    """In-memory transport. Reads come from a scripted byte stream; running dry acts like a timeout."""

    def __init__(self, *chunks: bytes, fail_writes: Iterable[int] = ()):
        self.stream = bytearray(b"".join(chunks))
        self.fail_writes = set(fail_writes)
        self.write_attempts = 0
        self.writes: list[str] = []
        self.line_reads = 0
        self.reads: list[int] = []
        self.closed = False

    def feed(self, data: bytes) -> None:
        self.stream += data

    def read_line(self) -> bytes:
        self.line_reads += 1
        idx = self.stream.find(b"\n")
        if idx < 0:
            raise TransportError("timed out")
        line = bytes(self.stream[:idx + 1])
        del self.stream[:idx + 1]
        return line

    def read_exact(self, n: int) -> bytes:
        self.reads.append(n)
        if len(self.stream) < n:
            raise TransportError("timed out")
        data = bytes(self.stream[:n])
        del self.stream[:n]
        return data

    def write(self, text: str) -> int:
        attempt = self.write_attempts
        self.write_attempts += 1
        if attempt in self.fail_writes:
            raise TransportError("broken pipe")
        self.writes.append(text)
        return len(text)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
