"""
PubNub — combined publish/subscribe client for a single channel.
"""

from typing import Iterator, Optional

from pubnub_lite.models.message import Message
from pubnub_lite.models.retry import RetryPolicy
from pubnub_lite.publish import PublishClient
from pubnub_lite.subscribe import SubscribeClient
from pubnub_lite.transport.http import DEFAULT_HOST
from pubnub_lite.transport.tcp import Transport


class PubNub:
    """Publish and subscribe on one channel.

    Each side opens its own connection the first time it is used, so a
    publish-only caller never starts a long-poll.

        pubnub = PubNub("demo", publish_key="demo", subscribe_key="demo")
        pubnub.subscribe()
        pubnub.publish("hello")
        message = pubnub.next_message()
    """

    def __init__(
        self,
        channel: str,
        publish_key: str,
        subscribe_key: str,
        *,
        host: str = DEFAULT_HOST,
        secret_key: Optional[str] = None,
        retry: Optional[RetryPolicy] = None,
        subscribe_transport: Optional[Transport] = None,
        publish_transport: Optional[Transport] = None,
    ):
        self._channel = channel
        self._publish_key = publish_key
        self._subscribe_key = subscribe_key
        self._host = host
        self._secret_key = secret_key
        self._retry = retry
        self._subscribe_transport = subscribe_transport
        self._publish_transport = publish_transport
        self._publisher: Optional[PublishClient] = None
        self._subscriber: Optional[SubscribeClient] = None

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def subscribed(self) -> bool:
        return self._subscriber is not None

    def subscribe(self) -> SubscribeClient:
        """Start the long-poll loop (idempotent)."""
        if self._subscriber is None:
            self._subscriber = SubscribeClient(
                self._channel,
                self._subscribe_key,
                host=self._host,
                secret_key=self._secret_key,
                retry=self._retry,
                transport=self._subscribe_transport,
            )
        return self._subscriber

    def publish(self, message: str, channel: Optional[str] = None) -> str:
        """Publish to this client's channel, or to ``channel`` if given. Returns the timetoken."""
        if self._publisher is None:
            self._publisher = PublishClient(
                self._publish_key,
                self._subscribe_key,
                host=self._host,
                secret_key=self._secret_key,
                transport=self._publish_transport,
            )
        return self._publisher.publish(channel or self._channel, message)

    def next_message(self, max_polls: Optional[int] = None) -> Optional[Message]:
        return self.subscribe().pull_one_message(max_polls=max_polls)

    def messages(self) -> Iterator[Message]:
        return iter(self.subscribe())

    def close(self) -> None:
        if self._subscriber:
            self._subscriber.close()
            self._subscriber = None
        if self._publisher:
            self._publisher.close()
            self._publisher = None
        # Injected transports are owned by the engines and closed with them.
        self._subscribe_transport = None
        self._publish_transport = None

    def __enter__(self) -> "PubNub":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
