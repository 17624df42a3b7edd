import argparse
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routes_health, routes_hotels
from app.core.config import settings
from app.core.logging import configure_logging
from app.storage.loader import load_context
from app.storage.repository import SearchContext


def create_app(context: Optional[SearchContext] = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Reference data is loaded before the app can take traffic; a missing or
    # malformed asset raises here and the process never starts serving.
    if context is None:
        context = load_context(settings.data_dir)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_hotels.router, tags=["hotels"])

    app.state.context = context
    app.state.settings = settings
    return app


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hotel geo search service")
    parser.add_argument("--port", type=int, default=settings.port, help="The service port")
    parser.add_argument("--host", default=settings.host)
    return parser.parse_args(argv)


if __name__ == "__main__":
    import uvicorn

    args = parse_args()
    # Also runnable as `uvicorn main:create_app --factory`.
    uvicorn.run("main:create_app", factory=True, host=args.host, port=args.port, log_config=None)
