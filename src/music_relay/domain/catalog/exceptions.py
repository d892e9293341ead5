"""Catalog exceptions for listing decode and file retrieval."""

from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog operations."""

    pass


class ProtocolViolation(CatalogError):
    """Raised when a listing cannot be decoded into a catalog tree."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} on line #{line_number}"
        super().__init__(message)


class NotFound(CatalogError):
    """Raised when a requested artist, album or track does not exist."""

    default_message = "Not found"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class ArtistNotFound(NotFound):
    default_message = "Artist not found"


class AlbumNotFound(NotFound):
    default_message = "Album not found"


class TrackNotFound(NotFound):
    default_message = "Track not found"


class LocalIOError(CatalogError):
    """Raised when a configured cover or track file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Internal error retrieving file: {reason}")


class MalformedRequest(CatalogError):
    """Raised when a retrieval path does not have the expected shape."""

    pass
