"""Exceptions raised while talking to the Strava API."""
from __future__ import annotations


class StravaError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(StravaError):
    """Transport-level failure (connection refused, DNS, timeout...)."""


class HTTPStatusError(StravaError):
    """The API answered with a non-success status."""

    def __init__(self, message: str, status: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason


class AuthError(HTTPStatusError):
    """Authorization code could not be exchanged for tokens."""


class FetchError(HTTPStatusError):
    """A page of athlete activities could not be retrieved."""


class ProfileError(HTTPStatusError):
    """The authenticated athlete profile could not be retrieved."""
