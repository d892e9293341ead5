from pathlib import Path
import mimetypes

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from loguru import logger

from music_relay.domain.catalog.exceptions import MalformedRequest
from music_relay.domain.catalog.lookup import resolve_cover, resolve_track
from music_relay.domain.catalog.models import Catalog
from ..deps import get_catalog

router = APIRouter()

TRACK_MIME_TYPE = "audio/mpeg"


def get_mime_type(file_path: Path) -> str:
    """Pure function - deterministic MIME type detection for cover images."""
    guessed, _ = mimetypes.guess_type(str(file_path))
    return guessed or "application/octet-stream"


@router.get("/cover")
def cover_without_path():
    raise MalformedRequest("Malformed cover request")


@router.get("/cover/{resource_path:path}")
def get_cover(resource_path: str, catalog: Catalog = Depends(get_catalog)):
    cover = resolve_cover(catalog, resource_path)
    logger.debug(f"Serving cover {resource_path}: {cover.name}")
    return FileResponse(cover, media_type=get_mime_type(cover))


@router.get("/track")
def track_without_path():
    raise MalformedRequest("Malformed track request")


@router.get("/track/{resource_path:path}")
def get_track(resource_path: str, catalog: Catalog = Depends(get_catalog)):
    track = resolve_track(catalog, resource_path)
    logger.info(f"Streaming track {resource_path}: {track.name}")
    return FileResponse(track, media_type=TRACK_MIME_TYPE)
