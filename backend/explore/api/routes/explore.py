"""Explore Routes: HTTP surface of the PutDecision, CountLikedYou, ListLikedYou
and ListNewLikedYou RPCs.

Invariants:
    - Identifiers are validated here (numeric, non-empty, no self-decision); the
      service and store receive sanitized values only
    - One MatchService per request, bound to the request's DB session
    - pagination_token is passed through opaque; bad tokens surface as 400
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from explore.config import get_settings
from explore.infrastructure.database import get_db
from explore.infrastructure.decision_store import DecisionStore
from explore.schemas.explore import (
    USER_ID_PATTERN,
    CountLikedYouResponse,
    ListLikedYouResponse,
    PutDecisionRequest,
    PutDecisionResponse,
)
from explore.services.match_service import MatchService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/explore", tags=["explore"])

RecipientId = Annotated[str, Path(min_length=1, pattern=USER_ID_PATTERN)]
PaginationToken = Annotated[str | None, Query(max_length=512)]


def get_match_service(db: AsyncSession = Depends(get_db)) -> MatchService:
    return MatchService(
        DecisionStore(db),
        timeout_seconds=get_settings().request_timeout_seconds,
    )


@router.post("/decisions", response_model=PutDecisionResponse)
async def put_decision(
    body: PutDecisionRequest,
    service: MatchService = Depends(get_match_service),
):
    """Record a like or pass; reports whether it completes a mutual like."""
    return await service.put_decision(
        body.actor_id, body.recipient_id, body.liked,
    )


@router.get(
    "/recipients/{recipient_id}/likes/count",
    response_model=CountLikedYouResponse,
)
async def count_liked_you(
    recipient_id: RecipientId,
    service: MatchService = Depends(get_match_service),
):
    return await service.count_liked_you(recipient_id)


@router.get(
    "/recipients/{recipient_id}/likes",
    response_model=ListLikedYouResponse,
)
async def list_liked_you(
    recipient_id: RecipientId,
    pagination_token: PaginationToken = None,
    service: MatchService = Depends(get_match_service),
):
    """Everyone who liked recipient_id, newest first."""
    return await service.list_liked_you(recipient_id, pagination_token)


@router.get(
    "/recipients/{recipient_id}/likes/new",
    response_model=ListLikedYouResponse,
)
async def list_new_liked_you(
    recipient_id: RecipientId,
    pagination_token: PaginationToken = None,
    service: MatchService = Depends(get_match_service),
):
    """Likers of recipient_id not yet liked back, newest first."""
    return await service.list_new_liked_you(recipient_id, pagination_token)
