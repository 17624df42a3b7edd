from fastapi import HTTPException
from starlette.requests import Request

from app.storage.repository import SearchContext


def get_context(request: Request) -> SearchContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise HTTPException(status_code=500, detail="Search context not initialized")
    return context
