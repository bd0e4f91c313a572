"""Exception types raised by og-check."""

from typing import Optional


class OgCheckError(Exception):
    """Base class for og-check errors."""


class UsageError(OgCheckError):
    """Bad command-line input (missing or invalid URL, bad option value)."""


class FetchError(OgCheckError):
    """The page could not be fetched.

    Attributes:
        url: URL being requested when the failure happened
        hint: Optional extra guidance shown to the user
    """

    def __init__(self, message: str, url: Optional[str] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.url = url
        self.hint = hint


class FetchTimeoutError(FetchError):
    """The whole fetch, redirects included, exceeded the timeout."""


class TooManyRedirectsError(FetchError):
    """The redirect chain exceeded the hop limit."""


class HostNotFoundError(FetchError):
    """DNS resolution failed for the target host."""
