from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from lunchmap.app import app
from lunchmap.ingestion.fetch import FetchFailure
from lunchmap.ingestion.models import Place
from lunchmap.ranking.data_store import get_store

client = TestClient(app)

LAB = (48.20131190157764, 16.36347258815447)

SAMPLE_PLACES = [
    Place(name="Far Thai", lat=LAB[0] + 0.01, lng=LAB[1], price=14.0, vegan=True, cuisine="Thai"),
    Place(name="Near Pizza", lat=LAB[0] + 0.001, lng=LAB[1], price=9.0, avg_rating=4.5, cuisine="Italian"),
    Place(name="Mid Curry", lat=LAB[0] + 0.005, lng=LAB[1], veggie=True, vegan=True, cuisine="Indian"),
    Place(name="Lost", price=8.0, cuisine="Thai"),
]


@pytest.fixture(autouse=True)
def _reset_store():
    get_store().clear()
    yield
    get_store().clear()


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_places_ranked_by_distance(mock_load):
    resp = client.get("/places")
    assert resp.status_code == 200
    body = resp.json()
    assert [p["name"] for p in body["places"]] == ["Near Pizza", "Mid Curry", "Far Thai"]
    assert [p["rank"] for p in body["places"]] == [1, 2, 3]
    assert body["total_places"] == 4
    assert body["total_ranked"] == 3
    assert body["origin"]["name"]

    first = body["places"][0]
    assert first["price_band"] == "€"
    assert first["stars"]["text"] == "★★★★⯪"
    assert first["distance_label"].endswith(" m")


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_places_loads_feed_once(mock_load):
    client.get("/places")
    client.get("/places?vegan=true")
    assert mock_load.call_count == 1


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_filtered_places_keep_ranks(mock_load):
    body = client.get("/places", params={"vegan": "true"}).json()
    assert [(p["name"], p["rank"]) for p in body["places"]] == [("Mid Curry", 2), ("Far Thai", 3)]
    assert body["filters"]["vegan"] is True
    assert body["total_ranked"] == 3


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_cuisine_filter(mock_load):
    body = client.get("/places", params={"cuisine": "Thai"}).json()
    assert [p["name"] for p in body["places"]] == ["Far Thai"]


@patch("lunchmap.app.load_places", side_effect=FetchFailure("http://feed.test", "timed out"))
def test_fetch_failure_is_bad_gateway(mock_load):
    resp = client.get("/places")
    assert resp.status_code == 502
    assert "timed out" in resp.json()["detail"]


@patch("lunchmap.app.load_places")
def test_refresh_replaces_places(mock_load):
    mock_load.return_value = SAMPLE_PLACES
    client.get("/places")

    mock_load.return_value = SAMPLE_PLACES[:1]
    resp = client.post("/refresh")
    assert resp.status_code == 200
    assert resp.json() == {"status": "refreshed", "total_places": 1, "total_ranked": 1}

    body = client.get("/places").json()
    assert [p["name"] for p in body["places"]] == ["Far Thai"]


@patch("lunchmap.app.load_places")
def test_failed_refresh_keeps_previous_places(mock_load):
    mock_load.return_value = SAMPLE_PLACES
    client.get("/places")

    mock_load.side_effect = FetchFailure("http://feed.test", "connection refused")
    assert client.post("/refresh").status_code == 502

    body = client.get("/places").json()
    assert body["total_places"] == 4


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_metadata_lists_cuisines(mock_load):
    resp = client.get("/metadata")
    assert resp.status_code == 200
    body = resp.json()
    assert body["cuisines"] == ["Indian", "Italian", "Thai"]
    assert body["total_places"] == 4


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_places_ordered_by_name(mock_load):
    body = client.get("/places", params={"order": "name"}).json()
    assert body["order"] == "name"
    assert [(p["name"], p["rank"]) for p in body["places"]] == [
        ("Far Thai", 3),
        ("Mid Curry", 2),
        ("Near Pizza", 1),
    ]
    assert body["places"][2]["price_label"] == "9 €"


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_places_rejects_unknown_order(mock_load):
    assert client.get("/places", params={"order": "price"}).status_code == 422


@patch("lunchmap.app.load_places", return_value=SAMPLE_PLACES)
def test_directory_lists_every_place_alphabetically(mock_load):
    resp = client.get("/directory")
    assert resp.status_code == 200
    body = resp.json()
    assert [p["name"] for p in body["places"]] == ["Far Thai", "Lost", "Mid Curry", "Near Pizza"]
    assert [p["price_label"] for p in body["places"]] == ["14 €", "8 €", "—", "9 €"]
    assert body["total_places"] == 4
