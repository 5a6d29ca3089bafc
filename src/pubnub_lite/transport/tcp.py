"""
Blocking TCP transport with line reads, fixed-length reads and writes over one socket.
"""

from __future__ import annotations

import logging
import socket
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_PORT = 80
RECV_SIZE = 4096


class TransportError(Exception):
    """Any socket failure, including timeouts and the peer closing early."""


class Transport(Protocol):
    def read_line(self) -> bytes: ...

    def read_exact(self, n: int) -> bytes: ...

    def write(self, text: str) -> int: ...

    def close(self) -> None: ...


def split_host(host: str) -> tuple[str, int]:
    """Split ``"name:port"`` into its parts; the port defaults to 80."""
    name, sep, port = host.rpartition(":")
    if not sep:
        return host, DEFAULT_PORT
    if not port.isdigit():
        raise TransportError(f"invalid port in host {host!r}")
    return name, int(port)


class SocketTransport:
    def __init__(self, sock: socket.socket, agent: str = ""):
        self.sock = sock
        self.agent = agent
        self.buf = b""

    @classmethod
    def connect(cls, host: str, agent: str, timeout: float) -> "SocketTransport":
        name, port = split_host(host)
        try:
            sock = socket.create_connection((name, port), timeout=timeout)
        except OSError as e:
            raise TransportError(f"connect to {host} failed: {e}") from e
        logger.debug(f"{agent} connected to {name}:{port} (timeout={timeout}s)")
        return cls(sock, agent)

    def _fill(self) -> None:
        try:
            chunk = self.sock.recv(RECV_SIZE)
        except OSError as e:
            raise TransportError(f"recv failed: {e}") from e
        if not chunk:
            raise TransportError("connection closed")
        self.buf += chunk

    def read_line(self) -> bytes:
        """Return the next line with its terminator still attached."""
        while True:
            idx = self.buf.find(b"\n")
            if idx >= 0:
                line, self.buf = self.buf[:idx + 1], self.buf[idx + 1:]
                return line
            self._fill()

    def read_exact(self, n: int) -> bytes:
        while len(self.buf) < n:
            self._fill()
        data, self.buf = self.buf[:n], self.buf[n:]
        return data

    def write(self, text: str) -> int:
        data = text.encode("utf-8")
        try:
            self.sock.sendall(data)
        except OSError as e:
            raise TransportError(f"send failed: {e}") from e
        return len(data)

    def close(self) -> None:
        try:
            self.sock.close()
        except OSError:
            pass
