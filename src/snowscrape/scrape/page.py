"""Forecast page scraping: fetch, parse and extract.

Fetches a snow-forecast.com style resort page, loads it with BeautifulSoup
and extracts every forecast row into blocks, plus the resort's bottom
elevation.

Only whole-page failures raise (FetchError, DocumentParseError). A broken
row, cell or elevation indicator is logged and yields partial data.

Example:
    >>> result = scrape_url("https://www.snow-forecast.com/resorts/Alta/6day/mid")
    >>> result.max_snow_block_length
    3
"""

import logging
import re
from typing import Optional

import requests
from bs4 import BeautifulSoup

from snowscrape import __version__
from snowscrape.scrape.blocks import segment_row
from snowscrape.scrape.errors import DocumentParseError, FetchError
from snowscrape.scrape.models import DataType, ScrapeResult

logger = logging.getLogger(__name__)

# Request timeout in seconds
REQUEST_TIMEOUT = 30

DEFAULT_USER_AGENT = f"snowscrape/{__version__}"

ROW_SELECTOR = '.forecast-table__row[data-row="{row_id}"]'
CELL_SELECTOR = "td.forecast-table__cell"

ELEVATION_LIST_SELECTOR = ".elevation-control__list"
BOTTOM_ELEVATION_SELECTOR = ".elevation-control__link--bot .height"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def fetch_page(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Download page markup.

    Args:
        url: Page URL
        session: Optional requests session to reuse connections
        timeout: Request timeout in seconds
        user_agent: User-Agent header value

    Returns:
        Response body as text

    Raises:
        FetchError: On transport errors or a non-success status
    """
    http = session or requests
    try:
        response = http.get(url, timeout=timeout, headers={"User-Agent": user_agent})
    except requests.RequestException as e:
        raise FetchError(f"Request failed: {e}", url=url) from e

    if not response.ok:
        raise FetchError(
            f"HTTP error! Status: {response.status_code}",
            url=url,
            status_code=response.status_code,
        )

    return response.text


def parse_page(markup: str) -> BeautifulSoup:
    """Load markup into a queryable document.

    Raises:
        DocumentParseError: If the markup cannot be loaded
    """
    if not isinstance(markup, str):
        raise DocumentParseError(f"Expected markup text, got {type(markup).__name__}")
    try:
        return BeautifulSoup(markup, "html.parser")
    except Exception as e:
        raise DocumentParseError(f"Could not parse document: {e}") from e


def extract_bottom_elevation(document: BeautifulSoup) -> Optional[int]:
    """Read the resort's bottom elevation from the elevation switcher.

    The text is parsed as a leading base-10 integer, so ``"1850m"`` gives 1850.

    Returns:
        Elevation in metres, or None if absent or unparsable
    """
    try:
        elevation_list = document.select_one(ELEVATION_LIST_SELECTOR)
        if elevation_list is None:
            logger.debug("No elevation list in document")
            return None

        node = elevation_list.select_one(BOTTOM_ELEVATION_SELECTOR)
        text = node.get_text() if node is not None else ""
        match = _LEADING_INT.match(text)
        if match is None:
            if text:
                logger.warning(f"Unparsable bottom elevation: {text!r}")
            return None

        return int(match.group(1))
    except Exception as e:
        logger.warning(f"Error getting elevation: {e}")
        return None


def extract_blocks(document: BeautifulSoup, data_type: DataType) -> list:
    """Extract one data type's blocks; a missing or broken row gives []."""
    try:
        selector = f"{ROW_SELECTOR.format(row_id=data_type.row_id)} {CELL_SELECTOR}"
        cells = document.select(selector)
        if not cells:
            logger.debug(f"No {data_type.value} row in document")
            return []
        return segment_row(cells, data_type)
    except Exception as e:
        logger.warning(f"Error extracting {data_type.value} data: {e}")
        return []


def extract_all(document: BeautifulSoup, url: str) -> ScrapeResult:
    """Extract every forecast row and the bottom elevation.

    Args:
        document: Parsed forecast page
        url: URL the page came from

    Returns:
        ScrapeResult, partial where rows are missing or broken
    """
    blocks = {data_type: tuple(extract_blocks(document, data_type)) for data_type in DataType}

    return ScrapeResult(
        url=url,
        bottom_elevation=extract_bottom_elevation(document),
        snow_blocks=blocks[DataType.SNOW],
        temperature_blocks=blocks[DataType.TEMPERATURE],
        wind_blocks=blocks[DataType.WIND],
        freezing_level_blocks=blocks[DataType.FREEZING_LEVEL],
        rain_blocks=blocks[DataType.RAIN],
        phrases_blocks=blocks[DataType.PHRASES],
    )


def scrape_url(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> ScrapeResult:
    """Fetch a forecast page and extract its data.

    Raises:
        FetchError: If the page cannot be fetched
        DocumentParseError: If the page cannot be parsed
    """
    logger.info(f"Scraping {url}")
    markup = fetch_page(url, session=session, timeout=timeout, user_agent=user_agent)
    document = parse_page(markup)
    result = extract_all(document, url)
    logger.info(
        f"Scraped {url}: {len(result.snow_blocks)} snow blocks, "
        f"bottom elevation {result.bottom_elevation}"
    )
    return result
