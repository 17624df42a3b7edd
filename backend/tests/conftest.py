import pytest

from app.models.domain import GeoPoint
from app.storage.repository import SearchContext
from tests.factories import make_plan, make_profile


@pytest.fixture
def context() -> SearchContext:
    """
    Hotels strung north of (40.0, -73.0) along one meridian:
    a at 0 km, b about 2.2 km, c about 5.6 km, far about 22 km.
    b has no profile, c has no rate plan for the default stay.
    """
    points = [
        GeoPoint(id="c", lat=40.05, lon=-73.0),
        GeoPoint(id="far", lat=40.2, lon=-73.0),
        GeoPoint(id="a", lat=40.0, lon=-73.0),
        GeoPoint(id="b", lat=40.02, lon=-73.0),
        GeoPoint(id="d", lat=40.03, lon=-73.0),
    ]
    profiles = [
        make_profile("a", 40.0, -73.0),
        make_profile("c", 40.05, -73.0),
        make_profile("d", 40.03, -73.0),
        make_profile("far", 40.2, -73.0),
    ]
    plans = [
        make_plan("a"),
        make_plan("b"),
        make_plan("c", out_date="2015-04-11"),
        make_plan("d"),
        make_plan("far"),
    ]
    return SearchContext.build(points=points, profiles=profiles, rate_plans=plans)
