"""
Recovery policy for failed subscribe reads.
"""

from pydantic import BaseModel, Field


class RetryPolicy(BaseModel):
    attempts: int = Field(default=1, ge=0)        # recovery polls per failed read
    backoff_s: float = Field(default=0.0, ge=0.0)  # grows linearly with the attempt number

    def delay(self, attempt: int) -> float:
        return self.backoff_s * attempt
