import pytest

from landing_pages.vendors import mapbox


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(mapbox, "_SESSION", session)
    return session


def test_search_places_builds_request(patch_session):
    patch_session.response = DummyResponse(payload={"features": [{"text": "Austin"}]})

    payload = mapbox.search_places("Austin, TX, United States", "pk.key", limit=1)

    assert payload["features"][0]["text"] == "Austin"
    url, params, timeout = patch_session.calls[0]
    assert url.endswith("/Austin%2C%20TX%2C%20United%20States.json") or url.endswith("/Austin,%20TX,%20United%20States.json")
    assert params == {"access_token": "pk.key", "types": "place", "country": "US", "limit": 1}
    assert timeout == 10


def test_search_places_passes_bbox_and_keeps_coordinate_query(patch_session):
    patch_session.response = DummyResponse(payload={"features": []})

    mapbox.search_places("-74.006,40.7128", "pk.key", limit=50, bbox="-74.3,40.3,-73.6,41.0", timeout=5)

    url, params, timeout = patch_session.calls[0]
    assert url == f"{mapbox._BASE_URL}/-74.006,40.7128.json"
    assert params["bbox"] == "-74.3,40.3,-73.6,41.0"
    assert params["limit"] == 50
    assert timeout == 5


def test_search_places_normalizes_missing_features(patch_session):
    patch_session.response = DummyResponse(payload={"type": "FeatureCollection"})
    assert mapbox.search_places("x", "k", limit=1)["features"] == []


def test_search_places_raises_with_status(patch_session):
    patch_session.response = DummyResponse(status_code=429, payload={"message": "Rate limit exceeded"})

    with pytest.raises(mapbox.MapboxError) as excinfo:
        mapbox.search_places("x", "k", limit=1)

    assert excinfo.value.status_code == 429
    assert "Rate limit exceeded" in str(excinfo.value)


def test_search_places_error_without_json_body(patch_session):
    patch_session.response = DummyResponse(status_code=500, payload=ValueError("no json"))

    with pytest.raises(mapbox.MapboxError) as excinfo:
        mapbox.search_places("x", "k", limit=1)

    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "HTTP 500"
