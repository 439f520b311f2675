"""Command line interface.

Usage:
    python -m snowscrape scrape URL [URL ...]   # Scrape pages, print JSON
    python -m snowscrape serve                  # Run the API server
    python -m snowscrape serve --port 8080 -v   # Custom port, debug logging
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

from snowscrape import __version__
from snowscrape.config import Settings
from snowscrape.scrape.models import ScrapeResult
from snowscrape.scrape.page import scrape_url

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ScrapeRunResult:
    """Result of scraping a batch of URLs."""

    total: int
    success: int
    failed: int
    duration_ms: int

    @property
    def success_rate(self) -> float:
        """Percentage of successful scrapes."""
        if self.total == 0:
            return 0.0
        return (self.success / self.total) * 100

    def __str__(self) -> str:
        return (
            f"Scrape complete: {self.success}/{self.total} successful, "
            f"{self.failed} failed ({self.duration_ms}ms)"
        )


def scrape_urls(
    urls: list[str],
    scraper: Callable[[str], ScrapeResult] = scrape_url,
) -> tuple[list[ScrapeResult], ScrapeRunResult]:
    """Scrape each URL in turn, logging and counting failures.

    Args:
        urls: Forecast page URLs
        scraper: Scrape callable

    Returns:
        Tuple of (successful results in input order, ScrapeRunResult)
    """
    start_time = time.time()
    results = []
    failed = 0
    total = len(urls)

    for i, url in enumerate(urls, 1):
        try:
            results.append(scraper(url))
        except Exception as e:
            logger.error(f"[{i}/{total}] {url}: failed - {e}")
            failed += 1

    run = ScrapeRunResult(
        total=total,
        success=len(results),
        failed=failed,
        duration_ms=int((time.time() - start_time) * 1000),
    )
    logger.info(str(run))
    return results, run


def configure_logging(args: argparse.Namespace, settings: Settings) -> None:
    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level, logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snowscrape",
        description="Scrape snow forecast tables from resort forecast pages",
        epilog="""
Examples:
  snowscrape scrape https://www.snow-forecast.com/resorts/Alta/6day/mid
  snowscrape serve --port 8080
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress output except errors",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape_parser = subparsers.add_parser("scrape", help="Scrape pages and print JSON")
    scrape_parser.add_argument("urls", nargs="+", metavar="URL", help="Forecast page URL")
    scrape_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent (default: 2)",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: $HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: $PORT)")

    return parser


def run_scrape(args: argparse.Namespace, settings: Settings) -> int:
    def scraper(url: str) -> ScrapeResult:
        return scrape_url(url, timeout=settings.request_timeout, user_agent=settings.user_agent)

    results, run = scrape_urls(args.urls, scraper)
    payload = [result.to_dict() for result in results]

    if len(args.urls) > 1:
        print(json.dumps(payload, indent=args.indent))
    elif payload:
        print(json.dumps(payload[0], indent=args.indent))

    return 1 if run.failed > 0 else 0


def run_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    from snowscrape.api.app import create_app

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info(f"Server running on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))

    configure_logging(args, settings)

    if args.command == "scrape":
        return run_scrape(args, settings)
    return run_serve(args, settings)


if __name__ == "__main__":
    sys.exit(main())
