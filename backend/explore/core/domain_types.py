"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps str; numeric format is enforced at the API boundary, never here
    - DecisionRecord is immutable; callers never receive live ORM instances
    - StoreOperation names every storage statement (query registry keys, error context)

Design Decisions:
    - NewType over dataclass wrappers for identifiers
    - str Enums: serialize to JSON and log extras without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class DecisionRecord:
    """A stored like/pass decision from actor toward recipient."""
    actor_id: UserId
    recipient_id: UserId
    liked: bool
    created_at: datetime
    updated_at: datetime


# ─── Enums ───────────────────────────────────────────────────────

class StoreOperation(str, Enum):
    """Decision store operations: one per SQL statement shape."""
    PUT_DECISION = "put_decision"
    GET_DECISION = "get_decision"
    IS_MUTUAL = "is_mutual"
    COUNT_LIKED_YOU = "count_liked_you"
    LIST_LIKED_YOU = "list_liked_you"
    LIST_NEW_LIKED_YOU = "list_new_liked_you"
