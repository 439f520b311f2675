"""Exceptions raised when a forecast page cannot be scraped.

Only whole-page failures are raised. Problems with a single cell, row or
the elevation indicator are logged and degrade to partial data instead.
"""

from typing import Optional


class ScrapeError(Exception):
    """Base class for errors that make a page unscrapable."""


class FetchError(ScrapeError):
    """The page fetch failed or returned a non-success status.

    Attributes:
        url: URL that was requested
        status_code: HTTP status, or None for transport errors
    """

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DocumentParseError(ScrapeError):
    """The fetched markup could not be loaded as a document."""
