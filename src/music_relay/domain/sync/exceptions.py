"""Sync exceptions for remote node polling."""


class TransportError(Exception):
    """Raised when fetching a node's listing fails at the HTTP level."""

    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f"Fetching listing from {address} failed: {reason}")
