"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Implementations provided by shell via dependency injection
    - Absence is a value (None / False / 0), never an exception

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from explore.core.domain_types import DecisionRecord
from explore.core.pagination import Page


class DecisionRepository(Protocol):
    """Contract for decision persistence, implemented by the shell."""
    async def put_decision(
        self, actor_id: str, recipient_id: str, liked: bool,
    ) -> None: ...
    async def get_decision(
        self, actor_id: str, recipient_id: str,
    ) -> DecisionRecord | None: ...
    async def is_mutual(self, actor_a: str, actor_b: str) -> bool: ...
    async def count_liked_you(self, recipient_id: str) -> int: ...
    async def list_liked_you(
        self, recipient_id: str, cursor: str | None = None,
    ) -> Page[DecisionRecord]: ...
    async def list_new_liked_you(
        self, recipient_id: str, cursor: str | None = None,
    ) -> Page[DecisionRecord]: ...
