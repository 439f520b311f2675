"""Scrape API for snowscrape.

This module provides:

- create_app: Factory function to create FastAPI application
- ScrapeResponse: Response schema with cached flag and forecast data
- ErrorResponse: Error response schema

Note: FastAPI-dependent exports (create_app, build_cache) are lazy-loaded
to allow importing schemas without FastAPI installed.
"""

# Schemas can be imported directly (only depend on pydantic)
from snowscrape.api.schemas import (
    CacheStatusEntry,
    CacheStatusResponse,
    ErrorResponse,
    HealthResponse,
    ScrapeData,
    ScrapeResponse,
)


# Lazy imports for FastAPI-dependent components
def __getattr__(name):
    """Lazy load FastAPI-dependent components."""
    if name in ("create_app", "build_cache"):
        from snowscrape.api.app import build_cache, create_app
        if name == "create_app":
            return create_app
        return build_cache
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "create_app",
    "build_cache",
    "CacheStatusEntry",
    "CacheStatusResponse",
    "ErrorResponse",
    "HealthResponse",
    "ScrapeData",
    "ScrapeResponse",
]
