from typing import Iterable

from app.models.domain import HotelProfile
from app.models.schemas import Feature, FeatureCollection


def geojson_response(hotels: Iterable[HotelProfile]) -> FeatureCollection:
    """Render hotels as a GeoJSON FeatureCollection of Points, in input order."""
    return FeatureCollection(features=[Feature.from_domain(h) for h in hotels])
