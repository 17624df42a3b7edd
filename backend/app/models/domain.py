from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class GeoPoint:
    id: str
    lat: float
    lon: float


@dataclass(frozen=True)
class Stay:
    hotel_id: str
    in_date: str
    out_date: str


@dataclass
class RoomType:
    bookable_rate: float
    total_rate: float
    total_rate_inclusive: float
    code: str
    currency: str
    room_description: str


@dataclass
class RatePlan:
    hotel_id: str
    code: str
    in_date: str
    out_date: str
    room_type: RoomType

    @property
    def stay(self) -> Stay:
        return Stay(hotel_id=self.hotel_id, in_date=self.in_date, out_date=self.out_date)


@dataclass
class Address:
    street_number: str
    street_name: str
    city: str
    state: str
    country: str
    postal_code: str
    lat: float
    lon: float


@dataclass
class Image:
    url: str
    default: bool = False


@dataclass
class HotelProfile:
    id: str
    name: str
    phone_number: str
    description: str
    address: Address
    images: List[Image] = field(default_factory=list)
