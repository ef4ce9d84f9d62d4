"""Pagination: keyset cursor protocol shared by both liker list queries.

Invariants:
    - Pages hold at most PAGE_SIZE items; callers fetch PAGE_SIZE + 1 rows
    - next_cursor is set only when a row beyond the page exists
    - A cursor always points at the last *kept* row; rows at or after it in
      (created_at DESC, actor_id DESC) order are excluded from the next page
    - Timestamps are normalized to UTC; naive values are taken as UTC

Design Decisions:
    - Token is unpadded URL-safe base64 of "<iso created_at>|<actor_id>"
    - A token holding only a timestamp is accepted (tie_break_actor_id=None)
"""

import base64
import binascii
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar

from explore.core.errors import InvalidCursorError

PAGE_SIZE = 30

_SEPARATOR = "|"

T = TypeVar("T")


@dataclass(frozen=True)
class Cursor:
    """Decoded pagination boundary."""
    created_at: datetime
    tie_break_actor_id: str | None = None


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the token for the next one (None at end)."""
    items: list[T]
    next_cursor: str | None = None


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def encode_cursor(created_at: datetime, actor_id: str | None = None) -> str:
    raw = as_utc(created_at).isoformat(timespec="microseconds")
    if actor_id is not None:
        raw = f"{raw}{_SEPARATOR}{actor_id}"
    return base64.urlsafe_b64encode(raw.encode()).decode().rstrip("=")


def decode_cursor(token: str) -> Cursor:
    """Decode a pagination token. Raises InvalidCursorError on garbage."""
    try:
        padded = token + "=" * (-len(token) % 4)
        raw = base64.urlsafe_b64decode(padded.encode()).decode()
        timestamp, _, actor_id = raw.partition(_SEPARATOR)
        created_at = datetime.fromisoformat(timestamp)
    except (binascii.Error, UnicodeError, ValueError):
        raise InvalidCursorError(token) from None
    return Cursor(created_at=as_utc(created_at), tie_break_actor_id=actor_id or None)


def paginate(
    rows: Sequence[T],
    page_size: int,
    cursor_of: Callable[[T], str],
) -> Page[T]:
    """Trim a PAGE_SIZE + 1 fetch to a page and derive the next cursor."""
    if len(rows) <= page_size:
        return Page(items=list(rows))
    kept = list(rows[:page_size])
    return Page(items=kept, next_cursor=cursor_of(kept[-1]))
