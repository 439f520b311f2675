"""In-memory caching layer for scrape results.

Serves the last scraped result for a URL immediately and refreshes it in
the background (stale-while-revalidate). State lives only in the process;
nothing is persisted across restarts.
"""

from snowscrape.cache.scrape_cache import (
    CacheLookup,
    ScrapeCache,
)

__all__ = [
    "CacheLookup",
    "ScrapeCache",
]
