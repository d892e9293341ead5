from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from music_relay.core.config import NodeConfig
from music_relay.domain.catalog.exceptions import LocalIOError, MalformedRequest, NotFound
from music_relay.domain.catalog.models import Catalog


def _plain_error(status_code: int, exc: Exception) -> PlainTextResponse:
    return PlainTextResponse(f"ERROR: {exc}\n", status_code=status_code)


async def not_found_handler(request: Request, exc: NotFound) -> PlainTextResponse:
    return _plain_error(404, exc)


async def local_io_handler(request: Request, exc: LocalIOError) -> PlainTextResponse:
    logger.warning(f"Couldn't read {exc.path} for {request.url.path}: {exc.reason}")
    return _plain_error(403, exc)


async def malformed_request_handler(
    request: Request, exc: MalformedRequest
) -> PlainTextResponse:
    return _plain_error(400, exc)


def create_node_app(catalog: Catalog, config: NodeConfig) -> FastAPI:
    """Build the media node app serving ``catalog``.

    The catalog is read-only for the life of the app.
    """
    app = FastAPI(title="Music Relay Node", version="1.0.0")
    app.state.catalog = catalog
    app.state.config = config

    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(LocalIOError, local_io_handler)
    app.add_exception_handler(MalformedRequest, malformed_request_handler)

    from web.backend.routers import files, listing

    app.include_router(listing.router, tags=["listing"])
    app.include_router(files.router, tags=["files"])

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
