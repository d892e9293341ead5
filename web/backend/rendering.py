"""
Server-side HTML view of every mirror.

Each node gets a heading, its albums with cover image and numbered track
links, and its last sync error when there is one. Stale data is shown next
to the error rather than hidden.
"""

import html
from datetime import datetime
from typing import Iterable, List

from music_relay.domain.sync.mirror import MirrorSnapshot

WEB_URL_SCHEMES = ("http://", "https://")


def _e(value: str) -> str:
    return html.escape(value, quote=True)


def is_web_url(url: str) -> bool:
    """Pure function - only http(s) URLs from a remote listing become links."""
    return url.strip().lower().startswith(WEB_URL_SCHEMES)


def _format_time(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def render_node(snapshot: MirrorSnapshot) -> str:
    parts: List[str] = [f"<section class=\"node\"><h3>{_e(snapshot.address)}</h3>"]

    if snapshot.error is not None:
        parts.append(f"<p class=\"error\">Sync error: {_e(snapshot.error_message)}</p>")
        if snapshot.last_success_at is not None:
            parts.append(
                f"<p class=\"stale\">Showing data from {_format_time(snapshot.last_success_at)}</p>"
            )
    elif snapshot.last_success_at is None:
        parts.append("<p class=\"pending\">Waiting for first sync</p>")

    for artist in snapshot.catalog.artists.values():
        for album in artist.albums.values():
            parts.append(f"<h4>&quot;{_e(album.name)}&quot; by {_e(artist.name)}</h4>")
            if is_web_url(album.cover):
                parts.append(
                    f"<img src=\"{_e(album.cover)}\" alt=\"{_e(album.name)} cover\" "
                    f"style=\"max-width: 250px;\"><br/>"
                )
            for number, track in enumerate(album.tracks.values(), start=1):
                if is_web_url(track.locator):
                    parts.append(
                        f"{number}) <a href=\"{_e(track.locator)}\">{_e(track.name)}</a><br/>"
                    )
                else:
                    parts.append(f"{number}) {_e(track.name)}<br/>")

    parts.append("</section>")
    return "".join(parts)


def render_home(snapshots: Iterable[MirrorSnapshot]) -> str:
    body = "".join(render_node(s) for s in snapshots)
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        "<title>Music Relay</title></head>"
        f"<body>{body}</body></html>"
    )
