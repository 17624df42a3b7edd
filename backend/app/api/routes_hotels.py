import logging
import math
from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from app.api import get_context
from app.core.errors import InvalidSearchParams
from app.services.geojson import geojson_response
from app.services.search_service import SearchService
from app.storage.repository import SearchContext

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


@dataclass
class SearchParams:
    in_date: str
    out_date: str
    lat: float
    lon: float


SPECIAL_FLOATS = {"inf", "infinity", "nan"}


def _parse_float(raw: str) -> Optional[float]:
    value = raw.strip()
    # float() accepts digit-group underscores, which are not valid here.
    if "_" in value:
        return None
    lowered = value.lower()
    try:
        if "0x" in lowered:
            # Hex floats need a binary exponent, e.g. 0x1.4p5.
            if "p" not in lowered:
                return None
            result = float.fromhex(value)
        else:
            result = float(value)
    except (ValueError, OverflowError):
        return None
    # Out-of-range literals such as 1e400 overflow to inf; only the
    # spelled-out specials may produce a non-finite value.
    if not math.isfinite(result) and lowered.lstrip("+-") not in SPECIAL_FLOATS:
        return None
    return result



def parse_search_params(
    in_date: Optional[str],
    out_date: Optional[str],
    lat: Optional[str],
    lon: Optional[str],
) -> SearchParams:
    """
    Validate raw query strings. Checks run in a fixed order: dates present,
    coordinates present, latitude parses, longitude parses.
    """
    if not in_date or not out_date:
        raise InvalidSearchParams("inDate/outDate params not specified")
    if not lat or not lon:
        raise InvalidSearchParams("lon/lat params not specified")

    lat_value = _parse_float(lat)
    if lat_value is None:
        raise InvalidSearchParams("invalid latitude")
    lon_value = _parse_float(lon)
    if lon_value is None:
        raise InvalidSearchParams("invalid longitude")

    return SearchParams(in_date=in_date, out_date=out_date, lat=lat_value, lon=lon_value)


def get_search_service(context: SearchContext = Depends(get_context)) -> SearchService:
    return SearchService(context=context)


def _first(request: Request, name: str) -> Optional[str]:
    # A repeated parameter resolves to its first value.
    values = request.query_params.getlist(name)
    return values[0] if values else None


@router.get("/hotels")
def search_hotels(
    request: Request,
    service: SearchService = Depends(get_search_service),
) -> Response:
    try:
        params = parse_search_params(
            _first(request, "inDate"),
            _first(request, "outDate"),
            _first(request, "lat"),
            _first(request, "lon"),
        )
    except InvalidSearchParams as exc:
        logger.info("Rejected hotel search: %s", exc.message)
        return PlainTextResponse(exc.message, status_code=400, headers=CORS_HEADERS)

    hotels = service.search(params.lat, params.lon, params.in_date, params.out_date)

    try:
        body = geojson_response(hotels).model_dump_json()
    except (TypeError, ValueError) as exc:
        logger.exception("Failed to serialize hotel search response")
        return PlainTextResponse(str(exc), status_code=500, headers=CORS_HEADERS)

    return Response(content=body, media_type="application/json", headers=CORS_HEADERS)
