import logging
from pathlib import Path
from typing import List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from app.core.errors import AssetLoadError
from app.models.domain import GeoPoint, HotelProfile, RatePlan
from app.models.schemas import HotelRecord, PointRecord, RatePlanRecord
from app.storage.repository import SearchContext

logger = logging.getLogger(__name__)

GEO_ASSET = "geo.json"
HOTELS_ASSET = "hotels.json"
INVENTORY_ASSET = "inventory.json"

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

R = TypeVar("R", bound=BaseModel)


def read_asset(data_dir: str | Path, name: str) -> bytes:
    path = Path(data_dir) / name
    try:
        return path.read_bytes()
    except OSError as exc:
        raise AssetLoadError(f"Failed to read asset {path}: {exc}") from exc


def _decode(raw: bytes, record_type: Type[R], name: str) -> List[R]:
    try:
        return TypeAdapter(List[record_type]).validate_json(raw)
    except ValidationError as exc:
        raise AssetLoadError(f"Failed to decode {name}: {exc}") from exc


def decode_points(raw: bytes) -> List[GeoPoint]:
    return [r.to_domain() for r in _decode(raw, PointRecord, GEO_ASSET)]


def decode_profiles(raw: bytes) -> List[HotelProfile]:
    return [r.to_domain() for r in _decode(raw, HotelRecord, HOTELS_ASSET)]


def decode_rate_plans(raw: bytes) -> List[RatePlan]:
    return [r.to_domain() for r in _decode(raw, RatePlanRecord, INVENTORY_ASSET)]


def load_context(data_dir: str | Path = DEFAULT_DATA_DIR) -> SearchContext:
    """
    Read and decode every reference asset under data_dir. Any missing or
    malformed asset raises AssetLoadError; there is no partial context.
    """
    try:
        points = decode_points(read_asset(data_dir, GEO_ASSET))
        profiles = decode_profiles(read_asset(data_dir, HOTELS_ASSET))
        rate_plans = decode_rate_plans(read_asset(data_dir, INVENTORY_ASSET))
    except AssetLoadError as exc:
        logger.error("Reference data unavailable: %s", exc)
        raise

    context = SearchContext.build(points=points, profiles=profiles, rate_plans=rate_plans)
    logger.info(
        "Loaded %d geo points, %d hotel profiles, %d rate plans from %s",
        len(context.geo_index),
        len(context.profiles),
        len(context.rate_table),
        data_dir,
    )
    return context
