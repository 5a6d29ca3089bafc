"""
pubnub-lite — minimal PubNub client for Python.

Long-poll subscribe and publish over a raw socket, no HTTP library.
"""

from pubnub_lite.client import PubNub
from pubnub_lite.publish import PublishClient
from pubnub_lite.subscribe import SubscribeClient
from pubnub_lite.models.message import Message
from pubnub_lite.models.retry import RetryPolicy
from pubnub_lite.errors import (
    DecodeError,
    HTTPResponseError,
    InitializeError,
    MissingChannelError,
    PubNubError,
    PublishError,
    PublishResponseError,
    PublishWriteError,
    SubscribeError,
    SubscribeReadError,
    SubscribeWriteError,
)

__version__ = "0.1.0"
__all__ = [
    "PubNub",
    "PublishClient",
    "SubscribeClient",
    "Message",
    "RetryPolicy",
    "PubNubError",
    "InitializeError",
    "PublishError",
    "PublishWriteError",
    "PublishResponseError",
    "SubscribeError",
    "SubscribeWriteError",
    "SubscribeReadError",
    "MissingChannelError",
    "HTTPResponseError",
    "DecodeError",
]
