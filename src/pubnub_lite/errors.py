"""
PubNub client error types — one kind per failure point.
"""

from typing import Any, Optional


class PubNubError(Exception):
    code = "pubnub_error"

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code or self.code
        self.details = details


class InitializeError(PubNubError):
    code = "initialize_error"


class PublishError(PubNubError):
    code = "publish_error"


class PublishWriteError(PubNubError):
    code = "publish_write_error"


class PublishResponseError(PubNubError):
    code = "publish_response_error"


class SubscribeError(PubNubError):
    code = "subscribe_error"


class SubscribeWriteError(PubNubError):
    code = "subscribe_write_error"


class SubscribeReadError(PubNubError):
    code = "subscribe_read_error"


class MissingChannelError(PubNubError):
    code = "missing_channel"


class HTTPResponseError(PubNubError):
    code = "http_response_error"


class DecodeError(PubNubError):
    code = "decode_error"
