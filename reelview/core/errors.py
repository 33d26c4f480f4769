"""
Typed failures shared by the catalog client, favorites store and controller.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for every catalog lookup failure."""


class NetworkError(CatalogError):
    """Transport-level failure (DNS, refused connection, timeout...)."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class RemoteError(CatalogError):
    """The catalog answered, but not with a usable success response."""

    def __init__(self, status: int, message: str = ""):
        super().__init__(message or f"HTTP error! Status: {status}")
        self.status = status


class MalformedDataError(Exception):
    """Persisted favorites could not be decoded."""
