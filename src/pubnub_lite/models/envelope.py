"""
Wire shapes — subscribe envelope and publish acknowledgment.
"""

from typing import Any

from pydantic import BaseModel, field_validator


class Timetoken(BaseModel):
    t: str

    @field_validator("t", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        # The service sends timetokens as strings, older nodes as integers.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class EnvelopeMessage(BaseModel):
    c: str           # channel
    d: Any = None    # payload, any JSON value
    p: Timetoken     # publish timetoken


class SubscribeEnvelope(BaseModel):
    t: Timetoken
    m: list[EnvelopeMessage] = []


class PublishAck(BaseModel):
    """[status, status_text, timetoken]"""
    status: int
    text: str = ""
    timetoken: str
