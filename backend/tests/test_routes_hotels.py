import math

import pytest
from fastapi.testclient import TestClient

from app.api import routes_hotels
from app.api.routes_hotels import parse_search_params
from app.core.errors import InvalidSearchParams
from app.storage.repository import SearchContext
from main import create_app, parse_args
from tests.factories import IN_DATE, OUT_DATE

VALID = {"inDate": IN_DATE, "outDate": OUT_DATE, "lat": "40.0", "lon": "-73.0"}


@pytest.fixture
def client(context: SearchContext) -> TestClient:
    return TestClient(create_app(context=context))


def _query(**overrides) -> dict:
    params = dict(VALID)
    for key, value in overrides.items():
        if value is None:
            params.pop(key, None)
        else:
            params[key] = value
    return params


def test_hotels_returns_feature_collection(client: TestClient):
    r = client.get("/hotels", params=VALID)

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.headers["access-control-allow-origin"] == "*"
    body = r.json()
    assert body["type"] == "FeatureCollection"
    assert [f["id"] for f in body["features"]] == ["a", "d"]
    assert body["features"][0]["geometry"] == {"type": "Point", "coordinates": [-73.0, 40.0]}
    assert body["features"][0]["properties"]["name"] == "Hotel a"


def test_far_center_gives_empty_features(client: TestClient):
    r = client.get("/hotels", params=_query(lat="-33.86", lon="151.2"))

    assert r.status_code == 200
    assert r.json() == {"type": "FeatureCollection", "features": []}


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"inDate": None}, "inDate/outDate params not specified"),
        ({"outDate": None}, "inDate/outDate params not specified"),
        ({"outDate": ""}, "inDate/outDate params not specified"),
        ({"inDate": None, "lat": "bad"}, "inDate/outDate params not specified"),
        ({"lat": None}, "lon/lat params not specified"),
        ({"lon": ""}, "lon/lat params not specified"),
        ({"lat": "notanumber", "lon": "1.0"}, "invalid latitude"),
        ({"lat": "bad", "lon": "bad"}, "invalid latitude"),
        ({"lat": "   "}, "invalid latitude"),
        ({"lat": "1_0"}, "invalid latitude"),
        ({"lat": "1e400"}, "invalid latitude"),
        ({"lat": "0x10"}, "invalid latitude"),
        ({"lon": "-1e999"}, "invalid longitude"),
        ({"lon": "east"}, "invalid longitude"),
    ],
)
def test_bad_params_are_client_errors(client: TestClient, overrides, message):
    r = client.get("/hotels", params=_query(**overrides))

    assert r.status_code == 400
    assert r.text == message
    assert r.headers["content-type"].startswith("text/plain")
    assert r.headers["access-control-allow-origin"] == "*"


def test_coordinates_are_trimmed(client: TestClient):
    r = client.get("/hotels", params=_query(lat=" 40.0 ", lon="\t-73.0"))

    assert r.status_code == 200
    assert len(r.json()["features"]) == 2


def test_cors_header_with_origin(client: TestClient):
    r = client.get("/hotels", params=VALID, headers={"Origin": "http://maps.example.com"})

    assert r.headers["access-control-allow-origin"] == "*"


def test_serialization_failure_is_server_error(client: TestClient, monkeypatch):
    class Unserializable:
        def model_dump_json(self) -> str:
            raise ValueError("cannot encode response")

    monkeypatch.setattr(routes_hotels, "geojson_response", lambda hotels: Unserializable())

    r = client.get("/hotels", params=VALID)

    assert r.status_code == 500
    assert r.text == "cannot encode response"
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        ("40.5", "-73.25", (40.5, -73.25)),
        ("0x1.4p5", "-0x1.24p6", (40.0, -73.0)),
        ("4e1", " -7.3E1 ", (40.0, -73.0)),
    ],
)
def test_parse_search_params_values(lat, lon, expected):
    params = parse_search_params(IN_DATE, OUT_DATE, lat, lon)

    assert (params.lat, params.lon) == expected
    assert (params.in_date, params.out_date) == (IN_DATE, OUT_DATE)


def test_parse_search_params_checks_latitude_first():
    with pytest.raises(InvalidSearchParams) as exc_info:
        parse_search_params(IN_DATE, OUT_DATE, "x", "y")

    assert str(exc_info.value) == "invalid latitude"


def test_health_reports_loaded_data(client: TestClient):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "points": 5, "hotels": 4, "rate_plans": 5}


def test_port_flag():
    assert parse_args(["--port", "9090"]).port == 9090


def test_spelled_out_infinity_parses():
    params = parse_search_params(IN_DATE, OUT_DATE, "Infinity", "-inf")

    assert math.isinf(params.lat) and math.isinf(params.lon)


def test_hex_float_coordinates_search(client: TestClient):
    r = client.get("/hotels", params=_query(lat="0x1.4p5", lon="-0x1.24p6"))

    assert r.status_code == 200
    assert [f["id"] for f in r.json()["features"]] == ["a", "d"]


def test_repeated_param_uses_first_value(client: TestClient):
    r = client.get(
        "/hotels",
        params=[
            ("inDate", IN_DATE),
            ("outDate", OUT_DATE),
            ("lat", "40.0"),
            ("lat", "bad"),
            ("lon", "-73.0"),
        ],
    )

    assert r.status_code == 200
    assert len(r.json()["features"]) == 2


def test_default_app_loads_packaged_data():
    client = TestClient(create_app())

    r = client.get("/health")

    assert r.status_code == 200
    assert r.json()["hotels"] == 6
