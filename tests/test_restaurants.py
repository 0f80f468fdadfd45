import asyncio

import pytest


def _add(client, name, cuisine="Italian", region="North"):
    return client.post("/restaurants", json={"name": name, "cuisine": cuisine, "region": region})


def _rate(client, name, rating):
    return client.post("/restaurants/rating", json={"name": name, "rating": rating})


# ── Create / get ─────────────────────────────────────────────────────────


def test_create_then_get(client):
    resp = _add(client, "A", cuisine="X", region="Y")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    resp = client.get("/restaurants/A")
    assert resp.status_code == 200
    assert resp.json() == {"name": "A", "cuisine": "X", "region": "Y", "rating": 0}


def test_create_duplicate_conflicts_and_keeps_original(client):
    assert _add(client, "Luigi", cuisine="Italian", region="North").status_code == 200
    assert _rate(client, "Luigi", 4).status_code == 200

    resp = _add(client, "Luigi", cuisine="Thai", region="South")
    assert resp.status_code == 409
    assert resp.json() == {"success": False, "message": "Restaurant already exists"}

    body = client.get("/restaurants/Luigi").json()
    assert body == {"name": "Luigi", "cuisine": "Italian", "region": "North", "rating": 4}


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"cuisine": "X", "region": "Y"},
        {"name": "A", "region": "Y"},
        {"name": "A", "cuisine": "X"},
        {"name": "", "cuisine": "X", "region": "Y"},
    ],
)
def test_create_missing_fields(client, payload):
    resp = client.post("/restaurants", json=payload)
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_create_rejects_non_object_body(client):
    assert client.post("/restaurants", json=["A", "X", "Y"]).status_code == 400
    assert client.post("/restaurants").status_code == 400


def test_get_missing_restaurant(client):
    resp = client.get("/restaurants/nowhere")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Restaurant not found"


def test_name_with_spaces_round_trips(client):
    assert _add(client, "Chez Marie").status_code == 200
    assert client.get("/restaurants/Chez Marie").json()["name"] == "Chez Marie"


# ── Delete ───────────────────────────────────────────────────────────────


def test_delete_missing_restaurant(client):
    assert client.delete("/restaurants/ghost").status_code == 404


def test_delete_then_get(client):
    _add(client, "Gone")
    resp = client.delete("/restaurants/Gone")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get("/restaurants/Gone").status_code == 404
    assert client.delete("/restaurants/Gone").status_code == 404


def test_name_can_be_reused_after_delete(client):
    _add(client, "Phoenix", cuisine="Greek")
    _rate(client, "Phoenix", 5)
    client.delete("/restaurants/Phoenix")

    assert _add(client, "Phoenix", cuisine="Greek").status_code == 200
    assert client.get("/restaurants/Phoenix").json()["rating"] == 0


# ── Ratings ──────────────────────────────────────────────────────────────


def test_two_ratings_average(client, service):
    _add(client, "Duo")
    assert _rate(client, "Duo", 5).json() == {"success": True}
    _rate(client, "Duo", 3)

    assert client.get("/restaurants/Duo").json()["rating"] == 4

    record = asyncio.run(service.get_record("Duo"))
    assert record.rating_count == 2


def test_running_average_matches_mean(client, service):
    ratings = [4.5, 2, 3.25, 5, 1, 4]
    _add(client, "Many")
    for r in ratings:
        assert _rate(client, "Many", r).status_code == 200

    record = asyncio.run(service.get_record("Many"))
    assert record.rating_count == len(ratings)
    assert record.rating == pytest.approx(sum(ratings) / len(ratings))


def test_rating_missing_restaurant(client):
    resp = _rate(client, "nobody", 4)
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"name": "Duo"},
        {"rating": 4},
        {"name": "", "rating": 4},
        {"name": "Duo", "rating": 0},
        {"name": "Duo", "rating": "excellent"},
    ],
)
def test_rating_invalid_payload(client, payload):
    _add(client, "Duo")
    resp = client.post("/restaurants/rating", json=payload)
    assert resp.status_code == 400
    assert client.get("/restaurants/Duo").json()["rating"] == 0


@pytest.mark.parametrize("raw_rating", ["1e999", "-1e999", "NaN", "Infinity"])
def test_rating_must_be_finite(client, raw_rating):
    # Python's json module reads these as inf/nan; they are sent verbatim.
    _add(client, "Duo")
    resp = client.post(
        "/restaurants/rating",
        content='{"name": "Duo", "rating": ' + raw_rating + "}",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    body = client.get("/restaurants/Duo").json()
    assert body["rating"] == 0
    assert _rate(client, "Duo", 3).status_code == 200
    assert client.get("/restaurants/Duo").json()["rating"] == 3


def test_rating_out_of_range_is_accepted(client):
    # Submitted ratings are not bounds checked, unlike the minRating filter.
    _add(client, "Loud")
    assert _rate(client, "Loud", 7).status_code == 200
    assert client.get("/restaurants/Loud").json()["rating"] == 7


# ── API schema ───────────────────────────────────────────────────────────


def test_error_responses_are_documented(client):
    schema = client.get("/openapi.json").json()
    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {"success", "message"}
    paths = schema["paths"]
    ref = "#/components/schemas/ErrorResponse"

    def error_ref(path, method, code):
        return paths[path][method]["responses"][code]["content"]["application/json"]["schema"]["$ref"]

    assert error_ref("/restaurants", "post", "409") == ref
    assert error_ref("/restaurants/rating", "post", "404") == ref
    assert error_ref("/restaurants/{name}", "get", "404") == ref
    assert error_ref("/restaurants/{name}", "delete", "500") == ref
    assert error_ref("/restaurants/cuisine/{cuisine}", "get", "400") == ref
