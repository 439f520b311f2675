"""FastAPI application for forecast scraping.

Provides REST API endpoints for:
- Scraping a forecast page (served through the stale-while-revalidate cache)
- Cache status
- Health checks

Example:
    >>> from snowscrape.api import create_app
    >>> app = create_app()
    >>> # Run with: uvicorn snowscrape.api.app:app --reload
"""

import logging
from datetime import datetime
from functools import partial
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snowscrape import __version__
from snowscrape.api.schemas import (
    CacheStatusEntry,
    CacheStatusResponse,
    ErrorResponse,
    HealthResponse,
    ScrapeData,
    ScrapeResponse,
)
from snowscrape.cache import ScrapeCache
from snowscrape.config import Settings
from snowscrape.scrape.page import scrape_url

logger = logging.getLogger(__name__)

API_VERSION = __version__


def build_cache(settings: Settings) -> ScrapeCache:
    """Create a scrape cache configured from settings."""
    scraper = partial(
        scrape_url,
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )
    return ScrapeCache(
        scraper=scraper,
        max_workers=settings.refresh_workers,
        single_flight=settings.single_flight,
    )


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[ScrapeCache] = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Service settings (read from the environment if not given)
        cache: Scrape cache to serve from. If not given, one is built from
            settings and closed on shutdown; a given cache is left open.

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()
    owns_cache = cache is None
    if cache is None:
        cache = build_cache(settings)

    app = FastAPI(
        title="Snow Forecast Scraper API",
        description="Forecast table data scraped from resort forecast pages",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.cache = cache
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("shutdown")
    async def shutdown_event():
        """Stop background refreshes."""
        if owns_cache:
            cache.close(wait=False)
            logger.info("Scrape cache closed on shutdown")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with the error response schema."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
        )

    @app.get("/", tags=["info"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Snow Forecast Scraper API",
            "version": API_VERSION,
            "docs": "/docs",
        }

    @app.get("/health", response_model=HealthResponse, tags=["info"])
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            cached_urls=len(cache),
        )

    @app.get(
        "/scrape",
        response_model=ScrapeResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Missing url parameter"},
            500: {"model": ErrorResponse, "description": "Scrape failed"},
        },
        tags=["scrape"],
    )
    def scrape(url: Optional[str] = None):
        """Scrape a forecast page.

        The first request for a URL scrapes it synchronously. Later requests
        return the cached data at once and refresh it in the background.
        """
        if not url:
            raise HTTPException(status_code=400, detail="Missing ?url=")

        try:
            lookup = cache.get(url)
        except Exception as e:
            logger.error(f"Scraping error for {url}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return ScrapeResponse(
            cached=lookup.cached,
            data=ScrapeData.from_result(lookup.result),
        )

    @app.get("/cache/status", response_model=CacheStatusResponse, tags=["info"])
    async def cache_status():
        """List cached URLs with their age and refresh state."""
        now = datetime.utcnow()
        entries = [
            CacheStatusEntry(
                url=item["url"],
                fetched_at=item["fetched_at"],
                age_seconds=round((now - item["fetched_at"]).total_seconds(), 1),
                refreshing=item["refreshing"],
            )
            for item in cache.status()
        ]
        return CacheStatusResponse(count=len(entries), entries=entries)

    return app


# Default app instance for uvicorn
app = create_app()
