"""Snow forecast page scraper.

Extracts the forecast table of a resort page into per-day blocks and serves
the result through a stale-while-revalidate cache.
"""

__version__ = "1.0.0"
