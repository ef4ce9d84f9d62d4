"""Decision Store: persistence and queries for like/pass decisions.

Invariants:
    - put_decision is one INSERT ... ON CONFLICT DO UPDATE statement, committed on its own
    - created_at is only ever written by the INSERT branch; the UPDATE branch touches liked and updated_at
    - updated_at never moves backwards: the UPDATE branch keeps the later of stored and incoming
    - A missing row is absence (None / False / 0), never an error
    - list_new_liked_you excludes reciprocated likes in the same statement (NOT EXISTS)
    - Every SQLAlchemy failure leaves as DatabaseError with operation and identifiers, no SQL text

Design Decisions:
    - Fixed-shape reads live in _QUERIES, built once with bound parameters; the upsert
      is built once per dialect (PostgreSQL or SQLite) and cached in _UPSERTS
    - is_mutual is two point lookups without an enclosing transaction; under READ COMMITTED
      each sees the latest committed row, a write landing between them is not isolated
    - Rows leave the store as DecisionRecord with UTC-aware timestamps
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import Insert, Select, and_, bindparam, func, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from explore.core.domain_types import DecisionRecord, StoreOperation, UserId
from explore.core.errors import DatabaseError, ErrorContext
from explore.core.pagination import (
    PAGE_SIZE, Cursor, Page, as_utc, decode_cursor, encode_cursor, paginate,
)
from explore.models.decision import Decision

logger = logging.getLogger(__name__)

_decisions = Decision.__table__
_reverse = _decisions.alias("reverse")

_COLUMNS = (
    _decisions.c.actor_id,
    _decisions.c.recipient_id,
    _decisions.c.liked,
    _decisions.c.created_at,
    _decisions.c.updated_at,
)

_PAIR = and_(
    _decisions.c.actor_id == bindparam("actor_id"),
    _decisions.c.recipient_id == bindparam("recipient_id"),
)

_QUERIES: dict[StoreOperation, Select] = {
    StoreOperation.GET_DECISION: select(*_COLUMNS).where(_PAIR),
    StoreOperation.IS_MUTUAL: select(_decisions.c.liked).where(_PAIR),
    StoreOperation.COUNT_LIKED_YOU: (
        select(func.count())
        .select_from(_decisions)
        .where(
            _decisions.c.recipient_id == bindparam("recipient_id"),
            _decisions.c.liked.is_(True),
        )
    ),
}

# insert builder and two-argument maximum per dialect
_DIALECT_UPSERTS = {
    "postgresql": (postgresql.insert, func.greatest),
    "sqlite": (sqlite.insert, func.max),
}

_UPSERTS: dict[str, Insert] = {}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_record(row) -> DecisionRecord:
    return DecisionRecord(
        actor_id=UserId(row.actor_id),
        recipient_id=UserId(row.recipient_id),
        liked=bool(row.liked),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _record_cursor(record: DecisionRecord) -> str:
    return encode_cursor(record.created_at, record.actor_id)


def _before(cursor: Cursor):
    """Rows strictly after the cursor row in (created_at DESC, actor_id DESC) order."""
    created_at = _decisions.c.created_at
    if cursor.tie_break_actor_id is None:
        return created_at < cursor.created_at
    return or_(
        created_at < cursor.created_at,
        and_(
            created_at == cursor.created_at,
            _decisions.c.actor_id < cursor.tie_break_actor_id,
        ),
    )


class DecisionStore:
    """Decision persistence over one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        clock: Callable[[], datetime] = _utcnow,
        page_size: int = PAGE_SIZE,
    ):
        self.db = db
        self._clock = clock
        self._page_size = page_size

    @asynccontextmanager
    async def _storage_errors(
        self,
        operation: StoreOperation,
        actor_id: str | None = None,
        recipient_id: str | None = None,
    ) -> AsyncGenerator[None, None]:
        """Roll back and re-raise SQLAlchemy failures as DatabaseError."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Decision store {operation.value} failed: {e}",
                extra={
                    "operation": operation.value,
                    "actor_id": actor_id,
                    "recipient_id": recipient_id,
                },
            )
            raise DatabaseError(
                type(e).__name__, operation.value,
                ErrorContext(actor_id=actor_id, recipient_id=recipient_id),
            ) from e

    def _upsert(self, actor_id: str, recipient_id: str):
        dialect = self.db.get_bind().dialect.name
        stmt = _UPSERTS.get(dialect)
        if stmt is not None:
            return stmt
        builders = _DIALECT_UPSERTS.get(dialect)
        if builders is None:
            raise DatabaseError(
                f"upsert not supported on {dialect}",
                StoreOperation.PUT_DECISION.value,
                ErrorContext(actor_id=actor_id, recipient_id=recipient_id),
            )
        insert, greatest = builders
        base = insert(_decisions)
        stmt = base.on_conflict_do_update(
            index_elements=["actor_id", "recipient_id"],
            set_={
                "liked": base.excluded.liked,
                "updated_at": greatest(
                    _decisions.c.updated_at, base.excluded.updated_at,
                ),
            },
        )
        _UPSERTS[dialect] = stmt
        return stmt

    async def put_decision(
        self, actor_id: str, recipient_id: str, liked: bool,
    ) -> None:
        """Insert or replace the decision for (actor_id, recipient_id)."""
        stmt = self._upsert(actor_id, recipient_id)
        now = self._clock()
        async with self._storage_errors(
            StoreOperation.PUT_DECISION, actor_id, recipient_id,
        ):
            await self.db.execute(stmt, {
                "actor_id": actor_id,
                "recipient_id": recipient_id,
                "liked": liked,
                "created_at": now,
                "updated_at": now,
            })
            await self.db.commit()

    async def get_decision(
        self, actor_id: str, recipient_id: str,
    ) -> DecisionRecord | None:
        async with self._storage_errors(
            StoreOperation.GET_DECISION, actor_id, recipient_id,
        ):
            result = await self.db.execute(
                _QUERIES[StoreOperation.GET_DECISION],
                {"actor_id": actor_id, "recipient_id": recipient_id},
            )
            row = result.one_or_none()
        return _to_record(row) if row is not None else None

    async def _liked(self, actor_id: str, recipient_id: str) -> bool:
        async with self._storage_errors(
            StoreOperation.IS_MUTUAL, actor_id, recipient_id,
        ):
            result = await self.db.execute(
                _QUERIES[StoreOperation.IS_MUTUAL],
                {"actor_id": actor_id, "recipient_id": recipient_id},
            )
            liked = result.scalar_one_or_none()
        return bool(liked)

    async def is_mutual(self, actor_a: str, actor_b: str) -> bool:
        """True iff both directions hold a like. Missing rows count as a pass."""
        forward = await self._liked(actor_a, actor_b)
        backward = await self._liked(actor_b, actor_a)
        return forward and backward

    async def count_liked_you(self, recipient_id: str) -> int:
        async with self._storage_errors(
            StoreOperation.COUNT_LIKED_YOU, recipient_id=recipient_id,
        ):
            result = await self.db.execute(
                _QUERIES[StoreOperation.COUNT_LIKED_YOU],
                {"recipient_id": recipient_id},
            )
            return int(result.scalar_one())

    async def list_liked_you(
        self, recipient_id: str, cursor: str | None = None,
    ) -> Page[DecisionRecord]:
        """Likes received by recipient_id, newest first."""
        stmt = select(*_COLUMNS).where(
            _decisions.c.recipient_id == recipient_id,
            _decisions.c.liked.is_(True),
        )
        return await self._fetch_page(
            StoreOperation.LIST_LIKED_YOU, stmt, recipient_id, cursor,
        )

    async def list_new_liked_you(
        self, recipient_id: str, cursor: str | None = None,
    ) -> Page[DecisionRecord]:
        """Likes received by recipient_id that recipient_id has not liked back."""
        reciprocated = (
            select(_reverse.c.actor_id)
            .where(
                _reverse.c.actor_id == recipient_id,
                _reverse.c.recipient_id == _decisions.c.actor_id,
                _reverse.c.liked.is_(True),
            )
            .exists()
        )
        stmt = select(*_COLUMNS).where(
            _decisions.c.recipient_id == recipient_id,
            _decisions.c.liked.is_(True),
            ~reciprocated,
        )
        return await self._fetch_page(
            StoreOperation.LIST_NEW_LIKED_YOU, stmt, recipient_id, cursor,
        )

    async def _fetch_page(
        self,
        operation: StoreOperation,
        stmt: Select,
        recipient_id: str,
        cursor: str | None,
    ) -> Page[DecisionRecord]:
        if cursor:
            stmt = stmt.where(_before(decode_cursor(cursor)))
        stmt = stmt.order_by(
            _decisions.c.created_at.desc(), _decisions.c.actor_id.desc(),
        ).limit(self._page_size + 1)

        async with self._storage_errors(operation, recipient_id=recipient_id):
            result = await self.db.execute(stmt)
            records = [_to_record(row) for row in result]
        return paginate(records, self._page_size, _record_cursor)
