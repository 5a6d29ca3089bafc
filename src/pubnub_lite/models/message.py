"""
Delivered message model.
"""

from pydantic import BaseModel, ConfigDict

# Per-message metadata is not decoded yet; every message carries this value.
NO_METADATA = ""


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str
    data: str
    metadata: str = NO_METADATA
    id: str  # publish timetoken of this message
