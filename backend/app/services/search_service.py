import logging
from typing import List

from app.geo.index import accept_all, km
from app.models.domain import GeoPoint, HotelProfile, RatePlan, Stay
from app.storage.repository import SearchContext

logger = logging.getLogger(__name__)

# Radius is in kilometres. The result cap is large enough that only the
# radius limits the candidate set.
MAX_SEARCH_RADIUS_KM = 10
MAX_SEARCH_RESULTS = 1_000_000_000


class SearchService:
    """
    Three independent stages: spatial filter, availability filter, profile
    enrichment. Each keeps the order of its input, so results stay
    nearest-first.
    """

    def __init__(self, context: SearchContext):
        self.context = context

    def nearby_points(self, lat: float, lon: float) -> List[GeoPoint]:
        center = GeoPoint(id="", lat=lat, lon=lon)
        return self.context.geo_index.nearest(
            center,
            max_results=MAX_SEARCH_RESULTS,
            max_radius_km=km(MAX_SEARCH_RADIUS_KM),
            predicate=accept_all,
        )

    def rate_plans(self, points: List[GeoPoint], in_date: str, out_date: str) -> List[RatePlan]:
        plans: List[RatePlan] = []
        for point in points:
            stay = Stay(hotel_id=point.id, in_date=in_date, out_date=out_date)
            plan = self.context.rate_table.lookup(stay)
            if plan is not None:
                plans.append(plan)
        return plans

    def hotels(self, rate_plans: List[RatePlan]) -> List[HotelProfile]:
        hotels: List[HotelProfile] = []
        for plan in rate_plans:
            profile = self.context.profiles.lookup(plan.hotel_id)
            if profile is not None:
                hotels.append(profile)
        return hotels

    def search(self, lat: float, lon: float, in_date: str, out_date: str) -> List[HotelProfile]:
        points = self.nearby_points(lat, lon)
        plans = self.rate_plans(points, in_date, out_date)
        hotels = self.hotels(plans)
        logger.debug(
            "Search (%s, %s) %s..%s: %d nearby, %d available, %d with profile",
            lat,
            lon,
            in_date,
            out_date,
            len(points),
            len(plans),
            len(hotels),
        )
        return hotels
