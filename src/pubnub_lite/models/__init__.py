from pubnub_lite.models.envelope import EnvelopeMessage, PublishAck, SubscribeEnvelope, Timetoken
from pubnub_lite.models.message import NO_METADATA, Message
from pubnub_lite.models.retry import RetryPolicy

__all__ = [
    "EnvelopeMessage",
    "Message",
    "NO_METADATA",
    "PublishAck",
    "RetryPolicy",
    "SubscribeEnvelope",
    "Timetoken",
]
