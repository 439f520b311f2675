"""Forecast table scraping.

Fetches resort forecast pages and segments each forecast row
(snow, temperature, wind, freezing level, rain, phrases) into
per-day blocks.
"""

from snowscrape.scrape.blocks import segment_row
from snowscrape.scrape.cells import CELL_RULES, CellRule, extract_cell
from snowscrape.scrape.errors import DocumentParseError, FetchError, ScrapeError
from snowscrape.scrape.models import (
    MISSING,
    Block,
    CacheEntry,
    CellExtraction,
    CellValue,
    DataType,
    Missing,
    Numeric,
    ScrapeResult,
    Text,
    max_block_length,
)
from snowscrape.scrape.page import (
    extract_all,
    extract_blocks,
    extract_bottom_elevation,
    fetch_page,
    parse_page,
    scrape_url,
)

__all__ = [
    "Block",
    "CacheEntry",
    "CELL_RULES",
    "CellExtraction",
    "CellRule",
    "CellValue",
    "DataType",
    "DocumentParseError",
    "FetchError",
    "MISSING",
    "Missing",
    "Numeric",
    "ScrapeError",
    "ScrapeResult",
    "Text",
    "extract_all",
    "extract_blocks",
    "extract_bottom_elevation",
    "extract_cell",
    "fetch_page",
    "max_block_length",
    "parse_page",
    "scrape_url",
    "segment_row",
]
