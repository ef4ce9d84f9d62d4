"""Domain Types: identifier wrapper, immutable records, store operation names."""

import dataclasses
from datetime import datetime, timezone

import pytest

from explore.core.domain_types import DecisionRecord, StoreOperation, UserId


def test_user_id_wraps_str():
    assert UserId("55") == "55"


def test_decision_record_is_frozen():
    now = datetime.now(timezone.utc)
    record = DecisionRecord(UserId("1"), UserId("2"), True, now, now)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.liked = False


def test_store_operations_serialize_to_snake_case():
    assert StoreOperation.PUT_DECISION.value == "put_decision"
    assert StoreOperation.LIST_NEW_LIKED_YOU.value == "list_new_liked_you"
    assert len(StoreOperation) == 6
