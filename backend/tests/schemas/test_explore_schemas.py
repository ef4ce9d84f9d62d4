"""Explore Schemas: identifier format, self-decision rule and response shapes."""

import pytest
from pydantic import ValidationError

from explore.schemas.explore import (
    CountLikedYouResponse, ListLikedYouResponse, PutDecisionRequest,
)


def test_valid_request_passes():
    req = PutDecisionRequest(actor_id="55", recipient_id="44", liked=True)
    assert req.actor_id == "55"
    assert req.liked is True


def test_leading_zeros_are_kept_verbatim():
    req = PutDecisionRequest(actor_id="007", recipient_id="7", liked=False)
    assert req.actor_id == "007"


def test_self_decision_is_rejected():
    with pytest.raises(ValidationError, match="can't like yourself"):
        PutDecisionRequest(actor_id="5", recipient_id="5", liked=False)


@pytest.mark.parametrize("bad", ["", " 1", "1.0", "one", "１２"])
def test_identifier_must_be_ascii_digits(bad):
    with pytest.raises(ValidationError):
        PutDecisionRequest(actor_id=bad, recipient_id="2", liked=True)


def test_count_cannot_be_negative():
    with pytest.raises(ValidationError):
        CountLikedYouResponse(count=-1)


def test_list_response_defaults_to_end_of_stream():
    assert ListLikedYouResponse(likers=[]).next_pagination_token is None
