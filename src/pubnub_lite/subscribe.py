"""
Subscribe engine — long-poll loop over one channel.

Each successful poll yields a new cursor and zero or more messages. Messages are
buffered and handed out one at a time; the next poll is written as soon as a
response has been read so the server can hold it open while the caller drains
the buffer.
"""

import logging
import time
from collections import deque
from typing import Iterator, Optional

from pubnub_lite.errors import (
    DecodeError,
    HTTPResponseError,
    InitializeError,
    MissingChannelError,
    PubNubError,
    SubscribeError,
    SubscribeReadError,
    SubscribeWriteError,
)
from pubnub_lite.models.message import Message
from pubnub_lite.models.retry import RetryPolicy
from pubnub_lite.transport.envelope import parse_subscribe_envelope
from pubnub_lite.transport.http import DEFAULT_HOST, build_request, read_response, subscribe_uri
from pubnub_lite.transport.tcp import SocketTransport, Transport, TransportError

logger = logging.getLogger(__name__)

SUBSCRIBE_AGENT = "PubNub-Subscribe-Client"
SUBSCRIBE_TIMEOUT_S = 30.0
INITIAL_TIMETOKEN = "0"


class SubscribeClient:
    """Pull messages from one channel.

    Construction connects and writes the first poll; it raises
    MissingChannelError for an empty channel (before any I/O),
    InitializeError if the connection fails and SubscribeError if the first
    poll cannot be written.
    """

    def __init__(
        self,
        channel: str,
        subscribe_key: str,
        *,
        host: str = DEFAULT_HOST,
        secret_key: Optional[str] = None,
        retry: Optional[RetryPolicy] = None,
        timeout: float = SUBSCRIBE_TIMEOUT_S,
        transport: Optional[Transport] = None,
    ):
        if not channel:
            raise MissingChannelError("a channel name is required to subscribe")
        if secret_key:
            logger.warning("secret_key given but request signing is not supported; ignoring it")

        self._channel = channel
        self._subscribe_key = subscribe_key
        self._agent = SUBSCRIBE_AGENT
        self._retry = retry or RetryPolicy()
        self._timetoken = INITIAL_TIMETOKEN
        self._messages: deque[Message] = deque()
        self._polling = False
        self.last_error: Optional[PubNubError] = None
        self.recovery_count = 0

        if transport is None:
            try:
                transport = SocketTransport.connect(host, self._agent, timeout)
            except TransportError as e:
                raise InitializeError(f"could not connect to {host}: {e}") from None
        self._transport = transport

        try:
            self._poll()
        except PubNubError:
            self.close()
            raise SubscribeError(f"initial subscribe to {channel!r} failed") from None

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def timetoken(self) -> str:
        """Cursor sent with the next poll."""
        return self._timetoken

    @property
    def pending(self) -> int:
        """Messages buffered and not yet returned."""
        return len(self._messages)

    def _poll(self) -> None:
        if not self._channel:
            raise MissingChannelError("a channel name is required to subscribe")
        uri = subscribe_uri(self._subscribe_key, self._channel, self._timetoken, self._agent)
        logger.debug(f"GET {uri}")
        try:
            self._transport.write(build_request(uri))
        except (TransportError, OSError):
            raise SubscribeWriteError(f"failed writing subscribe request for {self._channel!r}") from None
        self._polling = True

    def _recover(self) -> None:
        """Best-effort re-poll after a failed read. Failures here are logged, never raised."""
        for attempt in range(1, self._retry.attempts + 1):
            delay = self._retry.delay(attempt)
            if delay:
                time.sleep(delay)
            self.recovery_count += 1
            logger.warning(f"recovery poll {attempt}/{self._retry.attempts} on {self._channel!r}")
            try:
                self._poll()
                return
            except PubNubError as e:
                logger.warning(f"recovery poll {attempt} failed: {e}")

    def fetch(self) -> int:
        """Read the outstanding poll's response into the buffer.

        Writes a poll first if none is outstanding. Returns the number of
        messages added; the cursor is advanced to the envelope's time field.
        """
        if not self._polling:
            self._poll()
        self._polling = False

        try:
            raw = read_response(self._transport)
        except HTTPResponseError:
            self._recover()
            raise SubscribeReadError(f"failed reading subscribe response for {self._channel!r}") from None

        try:
            timetoken, messages = parse_subscribe_envelope(raw)
        except DecodeError:
            self._recover()
            raise

        self._timetoken = timetoken
        self._messages.extend(messages)
        logger.debug(f"{len(messages)} message(s) on {self._channel!r}, timetoken={timetoken}")

        try:
            self._poll()
            self.last_error = None
        except PubNubError as e:
            # Buffered messages stay deliverable; the next fetch re-issues the poll.
            self.last_error = e
            logger.warning(f"follow-up poll failed with {len(self._messages)} message(s) buffered: {e}")
            if not self._messages:
                raise
        return len(messages)

    def pull_one_message(self, max_polls: Optional[int] = None) -> Optional[Message]:
        """Return the next message, polling until one arrives.

        Buffered messages are returned oldest first without touching the
        network. With ``max_polls``, gives up and returns None after that many
        polls came back empty.
        """
        polls = 0
        while not self._messages:
            if max_polls is not None and polls >= max_polls:
                return None
            self.fetch()
            polls += 1
        return self._messages.popleft()

    def __iter__(self) -> Iterator[Message]:
        while True:
            message = self.pull_one_message()
            if message is not None:
                yield message

    def close(self) -> None:
        self._polling = False
        self._transport.close()

    def __enter__(self) -> "SubscribeClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
