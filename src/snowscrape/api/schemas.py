"""Pydantic schemas for API responses.

Scrape data uses the camelCase field names of the original wire format
(``snowBlocks``, ``bottomElevation``...).
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from snowscrape.scrape.models import ScrapeResult

# Block cells are numbers, '-' for missing readings, or phrase text
BlockValue = Union[int, float, str]


class ScrapeData(BaseModel):
    """Forecast data scraped from one page."""

    resort: str = Field(..., description="URL of the scraped page")
    bottom_elevation: Optional[int] = Field(
        default=None,
        alias="bottomElevation",
        description="Resort bottom elevation in metres",
    )
    snow_blocks: list[list[BlockValue]] = Field(default_factory=list, alias="snowBlocks")
    temperature_blocks: list[list[BlockValue]] = Field(
        default_factory=list, alias="temperatureBlocks"
    )
    wind_blocks: list[list[BlockValue]] = Field(default_factory=list, alias="windBlocks")
    freezing_level_blocks: list[list[BlockValue]] = Field(
        default_factory=list, alias="freezinglevelBlocks"
    )
    rain_blocks: list[list[BlockValue]] = Field(default_factory=list, alias="rainBlocks")
    phrases_blocks: list[list[BlockValue]] = Field(default_factory=list, alias="phrasesBlocks")
    max_snow_block_length: int = Field(
        default=0,
        ge=0,
        alias="maxSnowBlockLength",
        description="Length of the longest snow block",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: ScrapeResult) -> "ScrapeData":
        """Build from a ScrapeResult."""
        return cls.model_validate(result.to_dict())


class ScrapeResponse(BaseModel):
    """Successful scrape response.

    Attributes:
        success: Always True
        cached: Whether the data was served from the cache
        data: Scraped forecast data
    """

    success: bool = True
    cached: bool
    data: ScrapeData


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Service status")
    version: str = Field(..., description="API version")
    cached_urls: int = Field(default=0, ge=0, description="Number of cached URLs")


class CacheStatusEntry(BaseModel):
    """Status of one cached URL."""

    url: str
    fetched_at: datetime
    age_seconds: float
    refreshing: bool


class CacheStatusResponse(BaseModel):
    """Status of all cached URLs."""

    count: int
    entries: list[CacheStatusEntry] = Field(default_factory=list)
