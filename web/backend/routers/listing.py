from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from loguru import logger

from music_relay.core.config import NodeConfig
from music_relay.domain.catalog.listing import encode_listing
from music_relay.domain.catalog.models import Catalog
from ..deps import get_catalog, get_node_config

router = APIRouter()


def listing_base_url(request: Request, config: NodeConfig) -> str:
    """Pure function - base URL listing links point at.

    Falls back to the URL the client used to reach this node.
    """
    if config.public_url:
        return config.public_url
    return str(request.base_url).rstrip("/")


@router.get("/list", response_class=PlainTextResponse)
def get_listing(
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    config: NodeConfig = Depends(get_node_config),
):
    client = request.client.host if request.client else "unknown"
    logger.info(f"Listing fetched by {client}")
    return PlainTextResponse(encode_listing(catalog, listing_base_url(request, config)))
