"""
Publish engine: one GET request, one acknowledgment.
"""

import logging
from typing import Optional

from pubnub_lite.errors import HTTPResponseError, InitializeError, PublishError, PublishResponseError, PublishWriteError
from pubnub_lite.transport.envelope import parse_publish_ack
from pubnub_lite.transport.http import DEFAULT_HOST, build_request, publish_uri, read_response
from pubnub_lite.transport.tcp import SocketTransport, Transport, TransportError

logger = logging.getLogger(__name__)

PUBLISH_AGENT = "PubNub-Publish-Client"
PUBLISH_TIMEOUT_S = 5.0
PUBLISH_SUCCESS = 1


class PublishClient:
    def __init__(
        self,
        publish_key: str,
        subscribe_key: str,
        *,
        host: str = DEFAULT_HOST,
        secret_key: Optional[str] = None,
        timeout: float = PUBLISH_TIMEOUT_S,
        transport: Optional[Transport] = None,
    ):
        if secret_key:
            logger.warning("secret_key given but request signing is not supported; ignoring it")
        self._publish_key = publish_key
        self._subscribe_key = subscribe_key
        self._agent = PUBLISH_AGENT

        if transport is None:
            try:
                transport = SocketTransport.connect(host, self._agent, timeout)
            except TransportError as e:
                raise InitializeError(f"could not connect to {host}: {e}") from None
        self._transport = transport

    def publish(self, channel: str, message: str) -> str:
        """Publish ``message`` to ``channel`` and return the assigned timetoken.

        Raises PublishWriteError if the request cannot be sent (no read is
        attempted), PublishResponseError if the response cannot be read,
        DecodeError if it has the wrong shape and PublishError if the service
        rejected the message.
        """
        uri = publish_uri(self._publish_key, self._subscribe_key, channel, message, self._agent)
        logger.debug(f"GET {uri}")
        try:
            self._transport.write(build_request(uri))
        except (TransportError, OSError):
            raise PublishWriteError(f"failed writing publish request for {channel!r}") from None

        try:
            raw = read_response(self._transport)
        except HTTPResponseError:
            raise PublishResponseError(f"failed reading publish response for {channel!r}") from None

        ack = parse_publish_ack(raw)
        if ack.status != PUBLISH_SUCCESS:
            raise PublishError(
                f"publish to {channel!r} rejected: {ack.text}",
                details={"status": ack.status, "timetoken": ack.timetoken},
            )
        return ack.timetoken

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "PublishClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
