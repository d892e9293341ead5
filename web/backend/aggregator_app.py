import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from music_relay.domain.sync.aggregator import Aggregator

STATIC_DIR = Path(__file__).parent / "static"


def create_aggregator_app(
    aggregator: Aggregator,
    static_dir: Optional[Path] = None,
    manage_pollers: bool = True,
) -> FastAPI:
    """Build the aggregator app reading from ``aggregator``'s mirrors.

    Args:
        aggregator: Owner of all mirrors and pollers
        static_dir: Directory holding index.html (default: bundled static/)
        manage_pollers: Start pollers on startup and signal them on shutdown
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if manage_pollers:
            aggregator.start()
        yield
        if manage_pollers:
            aggregator.stop()

    app = FastAPI(title="Music Relay Aggregator", version="1.0.0", lifespan=lifespan)
    app.state.aggregator = aggregator
    app.state.static_dir = static_dir or STATIC_DIR

    # CORS: Allow environment override for production
    allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "")
    allowed_origins = (
        allowed_origins_env.split(",")
        if allowed_origins_env
        else ["http://localhost:5173"]  # Dev default
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from web.backend.routers import home

    app.include_router(home.router, tags=["home"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
