"""Stale-while-revalidate cache for scrape results.

A URL is either absent or cached. The first request for a URL scrapes
synchronously and stores the result. Every later request returns the stored
result immediately and refreshes it on a background thread; a successful
refresh replaces the entry, a failed one is logged and leaves it untouched.
Entries never expire.

Background refreshes only ever overwrite an entry, so they are not cancelled
or timed out; the fetch timeout bounds how long one can run.

Example:
    >>> cache = ScrapeCache()
    >>> first = cache.get("https://www.snow-forecast.com/resorts/Alta/6day/mid")
    >>> first.cached
    False
    >>> second = cache.get("https://www.snow-forecast.com/resorts/Alta/6day/mid")
    >>> second.cached, second.result is first.result
    (True, True)
    >>> cache.close()
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from snowscrape.scrape.models import CacheEntry, ScrapeResult
from snowscrape.scrape.page import scrape_url

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4

Scraper = Callable[[str], ScrapeResult]


@dataclass
class CacheLookup:
    """Outcome of a cache lookup.

    Attributes:
        cached: Whether the result came from the cache
        result: The scrape result
        refresh: Background refresh scheduled by this lookup, if any
    """

    cached: bool
    result: ScrapeResult
    refresh: Optional[Future] = None


class ScrapeCache:
    """In-memory stale-while-revalidate cache keyed by URL.

    Thread-safe: the entry map is guarded by a lock, and scraping is never
    done while holding it.

    Attributes:
        scraper: Callable that scrapes a URL into a ScrapeResult
        single_flight: If True, a hit does not schedule a refresh while one
            is already running for the same URL
    """

    def __init__(
        self,
        scraper: Optional[Scraper] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        single_flight: bool = True,
    ):
        """Initialize cache.

        Args:
            scraper: Scrape callable (defaults to scrape_url)
            max_workers: Number of background refresh threads
            single_flight: Suppress duplicate concurrent refreshes per URL
        """
        self.scraper = scraper or scrape_url
        self.single_flight = single_flight
        self._entries: dict[str, CacheEntry] = {}
        self._refreshing: dict[str, int] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="snowscrape-refresh",
        )
        self._closed = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._entries

    def __enter__(self) -> "ScrapeCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def peek(self, url: str) -> Optional[CacheEntry]:
        """Get the stored entry without triggering a refresh."""
        with self._lock:
            return self._entries.get(url)

    def get(self, url: str) -> CacheLookup:
        """Get the result for a URL.

        On a miss the URL is scraped synchronously. On a hit the stored
        result is returned and a background refresh is scheduled.

        Args:
            url: Forecast page URL

        Returns:
            CacheLookup with the result

        Raises:
            ScrapeError: On a miss, if scraping fails (nothing is stored)
        """
        entry = self.peek(url)

        if entry is None:
            logger.debug(f"Cache MISS for {url}")
            result = self.scraper(url)
            self._store(url, result)
            return CacheLookup(cached=False, result=result)

        logger.debug(f"Cache HIT for {url} (fetched_at={entry.fetched_at})")
        return CacheLookup(cached=True, result=entry.result, refresh=self.refresh(url))

    def refresh(self, url: str) -> Optional[Future]:
        """Schedule a background scrape of a URL.

        Returns:
            Future resolving to True if the entry was replaced, False if the
            scrape failed. None if no refresh was scheduled (cache closed, or
            one already running with single_flight).
        """
        with self._lock:
            if self._closed:
                logger.warning(f"Cache closed, not refreshing {url}")
                return None
            if self.single_flight and self._refreshing.get(url):
                logger.debug(f"Refresh already running for {url}")
                return None
            self._refreshing[url] = self._refreshing.get(url, 0) + 1
            return self._executor.submit(self._refresh, url)

    def _refresh(self, url: str) -> bool:
        try:
            result = self.scraper(url)
        except Exception as e:
            logger.error(f"Error refreshing cache for {url}: {e}")
            return False
        else:
            self._store(url, result)
            return True
        finally:
            with self._lock:
                remaining = self._refreshing.get(url, 1) - 1
                if remaining > 0:
                    self._refreshing[url] = remaining
                else:
                    self._refreshing.pop(url, None)

    def _store(self, url: str, result: ScrapeResult) -> CacheEntry:
        entry = CacheEntry(key=url, result=result)
        with self._lock:
            self._entries[url] = entry
        logger.info(f"Cached scrape result for {url}")
        return entry

    def is_refreshing(self, url: str) -> bool:
        """Check whether a background refresh is running for a URL."""
        with self._lock:
            return bool(self._refreshing.get(url))

    def status(self) -> list[dict]:
        """Per-URL cache status, sorted by URL."""
        with self._lock:
            return [
                {
                    "url": url,
                    "fetched_at": entry.fetched_at,
                    "refreshing": bool(self._refreshing.get(url)),
                }
                for url, entry in sorted(self._entries.items())
            ]

    def clear(self) -> None:
        """Drop all entries."""
        with self._lock:
            self._entries.clear()

    def close(self, wait: bool = True) -> None:
        """Stop accepting refreshes and shut down the refresh threads.

        Args:
            wait: Wait for running refreshes to finish
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)
        logger.debug("Scrape cache closed")
