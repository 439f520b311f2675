"""Shared pytest fixtures for snowscrape tests.

Test Tiers:
- unit: Fast tests with fixtures, no network (default)
- integration: Tests with recorded page markup
- live: Real page fetches, slow, requires network

Run live tests with: pytest -m live --run-live
"""

from unittest.mock import Mock

import pytest
from bs4 import BeautifulSoup

SAMPLE_URL = "https://www.snow-forecast.com/resorts/Alta/6day/mid"

# Trimmed-down resort forecast page. Expected extraction:
#   snow:           [[0, 2, 5], [0, '-', 10], [3]]
#   temperature:    [[6, -1, 1]]
#   wind:           [[15, 20], [25, '-']]
#   freezing-level: [[1100, 1600]]
#   rain:           [[2, 0, 0.5]]
#   phrases:        [['light snow'], ['heavy snow', 'clear']]
#   bottom elevation: 2600
SAMPLE_FORECAST_HTML = """
<html>
<body>
<div class="elevation-control">
  <ul class="elevation-control__list">
    <li><a class="elevation-control__link elevation-control__link--top" href="/top"><span class="height">3216</span>m</a></li>
    <li><a class="elevation-control__link elevation-control__link--mid" href="/mid"><span class="height">2900</span>m</a></li>
    <li><a class="elevation-control__link elevation-control__link--bot" href="/bot"><span class="height">2600</span>m</a></li>
  </ul>
</div>
<table class="forecast-table__table">
<tbody>
<tr class="forecast-table__row" data-row="phrases">
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--border"><span class="forecast-table__phrase"> light snow </span></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container"><span class="forecast-table__phrase">heavy snow</span></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--border"><span class="forecast-table__phrase">clear</span></div></td>
</tr>
<tr class="forecast-table__row" data-row="snow">
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow"><div class="snow-amount" data-value="0"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow"><div class="snow-amount" data-value="2"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow forecast-table__container--border"><div class="snow-amount" data-value="5"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow"><div class="snow-amount" data-value="0"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow"><div class="snow-amount"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow forecast-table__container--border"><div class="snow-amount" data-value="10"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--snow"><div class="snow-amount" data-value="3"></div></div></td>
</tr>
<tr class="forecast-table__row" data-row="temperature-max">
  <td class="forecast-table__cell"><div class="forecast-table__container"><div class="temp-value" data-value="5"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container"><div class="temp-value" data-value="-2"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container"><div class="temp-value" data-value="0"></div></div></td>
</tr>
<tr class="forecast-table__row" data-row="wind">
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--wind"><div class="wind-icon" data-speed="15"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--wind forecast-table__container--border"><div class="wind-icon" data-speed="20"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--wind"><div class="wind-icon" data-speed="25"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--wind"><div class="wind-icon"></div></div></td>
</tr>
<tr class="forecast-table__row" data-row="freezing-level">
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--blue"><div class="level-value" data-value="1000"></div></div></td>
  <td class="forecast-table__cell"></td>
  <td class="forecast-table__cell"><div class="forecast-table__container forecast-table__container--blue"><div class="level-value" data-value="1500"></div></div></td>
</tr>
<tr class="forecast-table__row" data-row="rain">
  <td class="forecast-table__cell"><div class="forecast-table__container"><div class="rain-amount" data-value="20"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container"><div class="rain-amount" data-value="0"></div></div></td>
  <td class="forecast-table__cell"><div class="forecast-table__container"><div class="rain-amount" data-value="5"></div></div></td>
</tr>
</tbody>
</table>
</body>
</html>
"""

EXPECTED_SAMPLE_DATA = {
    "resort": SAMPLE_URL,
    "bottomElevation": 2600,
    "snowBlocks": [[0, 2, 5], [0, "-", 10], [3]],
    "temperatureBlocks": [[6, -1, 1]],
    "windBlocks": [[15, 20], [25, "-"]],
    "freezinglevelBlocks": [[1100, 1600]],
    "rainBlocks": [[2, 0, 0.5]],
    "phrasesBlocks": [["light snow"], ["heavy snow", "clear"]],
    "maxSnowBlockLength": 3,
}


def pytest_addoption(parser):
    """Add command line options for test configuration."""
    parser.addoption(
        "--run-live",
        action="store_true",
        default=False,
        help="Run live scrape tests (slow, requires network)",
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests using fixtures")
    config.addinivalue_line("markers", "integration: tests with recorded page markup")
    config.addinivalue_line("markers", "live: real page fetches (slow, requires network)")


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --run-live is specified."""
    if config.getoption("--run-live"):
        # --run-live given: don't skip live tests
        return

    skip_live = pytest.mark.skip(reason="need --run-live option to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture
def sample_url() -> str:
    """URL the sample page is served from."""
    return SAMPLE_URL


@pytest.fixture
def forecast_html() -> str:
    """Markup of the sample forecast page."""
    return SAMPLE_FORECAST_HTML


@pytest.fixture
def forecast_document(forecast_html) -> BeautifulSoup:
    """Parsed sample forecast page."""
    return BeautifulSoup(forecast_html, "html.parser")


@pytest.fixture
def expected_data() -> dict:
    """Wire-format data extracted from the sample page."""
    return dict(EXPECTED_SAMPLE_DATA)


@pytest.fixture
def mock_session(forecast_html):
    """requests session stub returning the sample page."""
    response = Mock()
    response.ok = True
    response.status_code = 200
    response.text = forecast_html

    session = Mock()
    session.get.return_value = response
    return session
