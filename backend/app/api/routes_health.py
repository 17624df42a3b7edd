from fastapi import APIRouter, Depends

from app.api import get_context
from app.models.schemas import HealthResponse
from app.storage.repository import SearchContext

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def healthcheck(context: SearchContext = Depends(get_context)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        points=len(context.geo_index),
        hotels=len(context.profiles),
        rate_plans=len(context.rate_table),
    )
