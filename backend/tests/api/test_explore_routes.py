"""Explore Routes: HTTP surface of the four decision RPCs.

Tests cover:
    - POST /decisions reports mutual_likes on the second like of a pair
    - Self-likes and non-numeric identifiers rejected with 400 before the store
    - Count and both listings, including cursor pagination over HTTP
    - Bad pagination tokens -> 400 INVALID_PAGINATION_TOKEN
"""

import pytest

BASE = "/api/v1/explore"


async def _decide(client, actor_id, recipient_id, liked=True):
    res = await client.post(
        f"{BASE}/decisions",
        json={"actor_id": actor_id, "recipient_id": recipient_id, "liked": liked},
    )
    assert res.status_code == 200, res.text
    return res.json()


async def test_put_decision_reports_match_on_second_like(client):
    assert await _decide(client, "55", "44") == {"mutual_likes": False}
    assert await _decide(client, "44", "55") == {"mutual_likes": True}


async def test_pass_does_not_match(client):
    await _decide(client, "44", "55")
    assert await _decide(client, "55", "44", liked=False) == {"mutual_likes": False}


async def test_self_like_is_rejected(client):
    res = await client.post(
        f"{BASE}/decisions",
        json={"actor_id": "7", "recipient_id": "7", "liked": True},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("actor_id, recipient_id", [
    ("abc", "1"),
    ("1", "12x"),
    ("", "1"),
    ("-1", "2"),
])
async def test_non_numeric_ids_are_rejected(client, actor_id, recipient_id):
    res = await client.post(
        f"{BASE}/decisions",
        json={"actor_id": actor_id, "recipient_id": recipient_id, "liked": True},
    )
    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["error"]["details"]}
    assert fields & {"body.actor_id", "body.recipient_id"}


async def test_missing_liked_is_rejected(client):
    res = await client.post(
        f"{BASE}/decisions", json={"actor_id": "1", "recipient_id": "2"},
    )
    assert res.status_code == 400


async def test_count_liked_you(client):
    await _decide(client, "1", "9")
    await _decide(client, "2", "9")
    await _decide(client, "3", "9", liked=False)

    res = await client.get(f"{BASE}/recipients/9/likes/count")

    assert res.status_code == 200
    assert res.json() == {"count": 2}


async def test_count_rejects_non_numeric_recipient(client):
    res = await client.get(f"{BASE}/recipients/abc/likes/count")
    assert res.status_code == 400


async def test_list_liked_you_shape(client):
    await _decide(client, "1", "9")

    res = await client.get(f"{BASE}/recipients/9/likes")

    body = res.json()
    assert res.status_code == 200
    assert [liker["actor_id"] for liker in body["likers"]] == ["1"]
    assert isinstance(body["likers"][0]["unix_timestamp"], int)
    assert body["next_pagination_token"] is None


async def test_list_new_liked_you_hides_matches(client):
    await _decide(client, "1", "9")
    await _decide(client, "2", "9")
    await _decide(client, "9", "2")

    res = await client.get(f"{BASE}/recipients/9/likes/new")

    assert [liker["actor_id"] for liker in res.json()["likers"]] == ["1"]


async def test_pages_over_http_cover_every_liker_once(client):
    actors = [str(n) for n in range(1000, 1065)]
    for actor in actors:
        await _decide(client, actor, "9")

    delivered, sizes, token = [], [], None
    while True:
        params = {"pagination_token": token} if token else {}
        body = (await client.get(f"{BASE}/recipients/9/likes", params=params)).json()
        delivered += [liker["actor_id"] for liker in body["likers"]]
        sizes.append(len(body["likers"]))
        token = body["next_pagination_token"]
        if token is None:
            break

    assert sizes == [30, 30, 5]
    assert sorted(delivered) == actors


async def test_bad_pagination_token_is_400(client):
    res = await client.get(
        f"{BASE}/recipients/9/likes/new", params={"pagination_token": "garbage"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAGINATION_TOKEN"


async def test_liveness_probe(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_probe_checks_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}
