from typing import List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

from app.models.domain import (
    Address,
    GeoPoint,
    HotelProfile,
    Image,
    RatePlan,
    RoomType,
)


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PointRecord(_Record):
    hotel_id: str = Field(alias="hotelId")
    lat: float
    lon: float

    def to_domain(self) -> GeoPoint:
        return GeoPoint(id=self.hotel_id, lat=self.lat, lon=self.lon)


class AddressRecord(_Record):
    street_number: str = Field("", alias="streetNumber")
    street_name: str = Field("", alias="streetName")
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = Field("", alias="postalCode")
    lat: float
    lon: float

    def to_domain(self) -> Address:
        return Address(
            street_number=self.street_number,
            street_name=self.street_name,
            city=self.city,
            state=self.state,
            country=self.country,
            postal_code=self.postal_code,
            lat=self.lat,
            lon=self.lon,
        )


class ImageRecord(_Record):
    url: str
    default: bool = False


class HotelRecord(_Record):
    id: str
    name: str = ""
    phone_number: str = Field("", alias="phoneNumber")
    description: str = ""
    address: AddressRecord
    images: List[ImageRecord] = Field(default_factory=list)

    def to_domain(self) -> HotelProfile:
        return HotelProfile(
            id=self.id,
            name=self.name,
            phone_number=self.phone_number,
            description=self.description,
            address=self.address.to_domain(),
            images=[Image(url=i.url, default=i.default) for i in self.images],
        )


class RoomTypeRecord(_Record):
    bookable_rate: float = Field(0.0, alias="bookableRate")
    total_rate: float = Field(0.0, alias="totalRate")
    total_rate_inclusive: float = Field(0.0, alias="totalRateInclusive")
    code: str = ""
    currency: str = ""
    room_description: str = Field("", alias="roomDescription")


class RatePlanRecord(_Record):
    hotel_id: str = Field(alias="hotelId")
    code: str = ""
    in_date: str = Field(alias="inDate")
    out_date: str = Field(alias="outDate")
    room_type: RoomTypeRecord = Field(default_factory=RoomTypeRecord, alias="roomType")

    def to_domain(self) -> RatePlan:
        room = self.room_type
        return RatePlan(
            hotel_id=self.hotel_id,
            code=self.code,
            in_date=self.in_date,
            out_date=self.out_date,
            room_type=RoomType(
                bookable_rate=room.bookable_rate,
                total_rate=room.total_rate,
                total_rate_inclusive=room.total_rate_inclusive,
                code=room.code,
                currency=room.currency,
                room_description=room.room_description,
            ),
        )


class FeatureProperties(BaseModel):
    name: str
    phone_number: str


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    # GeoJSON order: longitude, latitude
    coordinates: Tuple[float, float]


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    id: str
    properties: FeatureProperties
    geometry: PointGeometry

    @classmethod
    def from_domain(cls, obj: HotelProfile) -> "Feature":
        return cls(
            id=obj.id,
            properties=FeatureProperties(name=obj.name, phone_number=obj.phone_number),
            geometry=PointGeometry(coordinates=(obj.address.lon, obj.address.lat)),
        )


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[Feature] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    points: int
    hotels: int
    rate_plans: int
