"""
Aggregator views of the mirrored catalogs.

Every handler reads the mirrors through ``snapshot()`` only; none of them
waits on a remote fetch.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from loguru import logger
from pydantic import ValidationError

from music_relay.domain.sync.aggregator import Aggregator
from ..deps import get_aggregator
from ..rendering import render_home
from ..schemas import node_snapshot

router = APIRouter()


@router.get("/")
def index(request: Request):
    """Serve the static front-end page."""
    index_path: Path = request.app.state.static_dir / "index.html"
    try:
        content = index_path.read_bytes()
    except OSError as e:
        logger.warning(f"Front-end asset unreadable: {index_path}: {e}")
        return PlainTextResponse(f"ERROR: Couldn't read front-end page: {e}\n", status_code=403)
    return HTMLResponse(content)


@router.get("/api/home")
def home(aggregator: Aggregator = Depends(get_aggregator)):
    """JSON array with one snapshot per configured node."""
    try:
        payload = [
            node_snapshot(snapshot).model_dump(mode="json")
            for snapshot in aggregator.snapshots()
        ]
    except (ValidationError, ValueError, TypeError) as e:
        logger.exception("Failed to serialize node snapshots")
        return PlainTextResponse(f"ERROR: Couldn't serialize catalog: {e}\n", status_code=403)
    return JSONResponse(payload)


@router.get("/view", response_class=HTMLResponse)
def view(aggregator: Aggregator = Depends(get_aggregator)):
    """Server-rendered page of every node's albums and tracks."""
    return HTMLResponse(render_home(aggregator.snapshots()))
