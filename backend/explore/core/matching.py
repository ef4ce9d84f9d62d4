"""Matching: pure rules for mutual likes and response timestamps."""

from datetime import datetime

from explore.core.pagination import as_utc


def mutual_match(liked: bool, reverse_liked: bool) -> bool:
    """A match needs the incoming decision AND the reverse one to be likes."""
    return liked and reverse_liked


def unix_timestamp(value: datetime) -> int:
    """Whole seconds since epoch; naive values are taken as UTC."""
    return int(as_utc(value).timestamp())
