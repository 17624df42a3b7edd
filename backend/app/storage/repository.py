from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from app.geo.index import GeoIndex
from app.models.domain import GeoPoint, HotelProfile, RatePlan, Stay


class RateTable:
    def __init__(self) -> None:
        self.plans: Dict[Stay, RatePlan] = {}

    @classmethod
    def from_plans(cls, plans: Iterable[RatePlan]) -> "RateTable":
        table = cls()
        for plan in plans:
            table.plans[plan.stay] = plan
        return table

    def lookup(self, stay: Stay) -> Optional[RatePlan]:
        return self.plans.get(stay)

    def __len__(self) -> int:
        return len(self.plans)


class ProfileStore:
    def __init__(self) -> None:
        self.profiles: Dict[str, HotelProfile] = {}

    @classmethod
    def from_profiles(cls, profiles: Iterable[HotelProfile]) -> "ProfileStore":
        store = cls()
        for profile in profiles:
            store.profiles[profile.id] = profile
        return store

    def lookup(self, hotel_id: str) -> Optional[HotelProfile]:
        return self.profiles.get(hotel_id)

    def __len__(self) -> int:
        return len(self.profiles)


@dataclass
class SearchContext:
    """
    Reference data for a running process. Built once before serving starts
    and only read afterwards, so request threads share it without locking.
    """

    geo_index: GeoIndex = field(default_factory=GeoIndex)
    rate_table: RateTable = field(default_factory=RateTable)
    profiles: ProfileStore = field(default_factory=ProfileStore)

    @classmethod
    def build(
        cls,
        points: Iterable[GeoPoint],
        profiles: Iterable[HotelProfile],
        rate_plans: Iterable[RatePlan],
    ) -> "SearchContext":
        index = GeoIndex()
        index.add_all(points)
        return cls(
            geo_index=index,
            rate_table=RateTable.from_plans(rate_plans),
            profiles=ProfileStore.from_profiles(profiles),
        )
