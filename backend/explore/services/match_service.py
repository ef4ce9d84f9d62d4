"""Match Service: decision writes, mutual-match detection, and liker listings.

Invariants:
    - mutual_likes is True only when the incoming decision is a like AND the reverse
      decision is a like after this write is durable; a pass never matches
    - The mutual check runs only for likes
    - Every operation runs under one deadline (timeout_seconds); expiry raises
      RequestCancelledError, caller cancellation (CancelledError) propagates as-is
    - created_at leaves the service only as unix seconds or inside the pagination token
    - No retries; store errors propagate unchanged
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from explore.core.domain_types import DecisionRecord, StoreOperation
from explore.core.errors import ErrorContext, RequestCancelledError
from explore.core.matching import mutual_match, unix_timestamp
from explore.core.pagination import Page
from explore.core.repository_protocols import DecisionRepository
from explore.schemas.explore import (
    CountLikedYouResponse, Liker, ListLikedYouResponse, PutDecisionResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 3.0


def _likers_response(page: Page[DecisionRecord]) -> ListLikedYouResponse:
    return ListLikedYouResponse(
        likers=[
            Liker(actor_id=d.actor_id, unix_timestamp=unix_timestamp(d.created_at))
            for d in page.items
        ],
        next_pagination_token=page.next_cursor,
    )


class MatchService:
    """Request-facing operations over a DecisionRepository."""

    def __init__(
        self,
        store: DecisionRepository,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.store = store
        self.timeout_seconds = timeout_seconds

    async def _bounded(
        self,
        operation: StoreOperation,
        call: Awaitable[T],
        actor_id: str | None = None,
        recipient_id: str | None = None,
    ) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                f"{operation.value} exceeded {self.timeout_seconds:g}s deadline",
                extra={
                    "operation": operation.value,
                    "actor_id": actor_id,
                    "recipient_id": recipient_id,
                },
            )
            raise RequestCancelledError(
                operation.value, self.timeout_seconds,
                ErrorContext(actor_id=actor_id, recipient_id=recipient_id),
            ) from None

    async def put_decision(
        self, actor_id: str, recipient_id: str, liked: bool,
    ) -> PutDecisionResponse:
        """Store the decision and report whether it completes a mutual like."""
        mutual = await self._bounded(
            StoreOperation.PUT_DECISION,
            self._put_and_check(actor_id, recipient_id, liked),
            actor_id, recipient_id,
        )
        if mutual:
            logger.info(
                "Mutual like",
                extra={"actor_id": actor_id, "recipient_id": recipient_id},
            )
        return PutDecisionResponse(mutual_likes=mutual)

    async def _put_and_check(
        self, actor_id: str, recipient_id: str, liked: bool,
    ) -> bool:
        await self.store.put_decision(actor_id, recipient_id, liked)
        if not liked:
            return False
        both_liked = await self.store.is_mutual(actor_id, recipient_id)
        return mutual_match(liked, both_liked)

    async def count_liked_you(self, recipient_id: str) -> CountLikedYouResponse:
        count = await self._bounded(
            StoreOperation.COUNT_LIKED_YOU,
            self.store.count_liked_you(recipient_id),
            recipient_id=recipient_id,
        )
        return CountLikedYouResponse(count=count)

    async def list_liked_you(
        self, recipient_id: str, pagination_token: str | None = None,
    ) -> ListLikedYouResponse:
        page = await self._bounded(
            StoreOperation.LIST_LIKED_YOU,
            self.store.list_liked_you(recipient_id, pagination_token or None),
            recipient_id=recipient_id,
        )
        return _likers_response(page)

    async def list_new_liked_you(
        self, recipient_id: str, pagination_token: str | None = None,
    ) -> ListLikedYouResponse:
        """Likers of recipient_id who have not been liked back."""
        page = await self._bounded(
            StoreOperation.LIST_NEW_LIKED_YOU,
            self.store.list_new_liked_you(recipient_id, pagination_token or None),
            recipient_id=recipient_id,
        )
        return _likers_response(page)
