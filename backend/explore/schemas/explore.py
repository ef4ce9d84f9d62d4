"""Explore Schemas: request/response contracts for the four decision RPCs.

Invariants:
    - actor_id and recipient_id are non-empty strings of ASCII digits
    - PutDecisionRequest rejects actor_id == recipient_id
    - Liker exposes created_at only as whole unix seconds
    - next_pagination_token is None at end of stream
"""

from typing import Annotated

from pydantic import BaseModel, Field, model_validator

USER_ID_PATTERN = r"^[0-9]+$"

NumericUserId = Annotated[str, Field(min_length=1, pattern=USER_ID_PATTERN)]


class PutDecisionRequest(BaseModel):
    """Like (liked=True) or pass (liked=False) from actor toward recipient."""
    actor_id: NumericUserId
    recipient_id: NumericUserId
    liked: bool

    @model_validator(mode="after")
    def reject_self_decision(self):
        if self.actor_id == self.recipient_id:
            raise ValueError("you can't like yourself")
        return self


class PutDecisionResponse(BaseModel):
    mutual_likes: bool


class CountLikedYouResponse(BaseModel):
    count: int = Field(ge=0)


class Liker(BaseModel):
    """One actor who liked the recipient."""
    actor_id: str
    unix_timestamp: int = Field(ge=0)


class ListLikedYouResponse(BaseModel):
    """One page of likers plus the token for the next page."""
    likers: list[Liker]
    next_pagination_token: str | None = None
