"""Data models for scraped forecast tables."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class DataType(str, Enum):
    """Forecast metrics extracted from the forecast table.

    Each member maps to one ``data-row`` attribute in the page markup.
    """

    SNOW = "snow"
    TEMPERATURE = "temperature"
    WIND = "wind"
    FREEZING_LEVEL = "freezing-level"
    RAIN = "rain"
    PHRASES = "phrases"

    @property
    def row_id(self) -> str:
        """Value of the ``data-row`` attribute for this metric's table row."""
        return _ROW_IDS[self]

    @property
    def is_numeric(self) -> bool:
        return self is not DataType.PHRASES


_ROW_IDS = {
    DataType.SNOW: "snow",
    DataType.TEMPERATURE: "temperature-max",
    DataType.WIND: "wind",
    DataType.FREEZING_LEVEL: "freezing-level",
    DataType.RAIN: "rain",
    DataType.PHRASES: "phrases",
}


@dataclass(frozen=True)
class Numeric:
    """A numeric reading (snow cm, degrees, km/h, metres, mm)."""

    value: float

    def to_json(self) -> Union[int, float]:
        # Integral readings render as ints, e.g. 6 rather than 6.0
        if self.value.is_integer():
            return int(self.value)
        return self.value


@dataclass(frozen=True)
class Missing:
    """A cell whose container exists but holds no reading."""

    def to_json(self) -> str:
        return "-"


@dataclass(frozen=True)
class Text:
    """A text reading, used for forecast phrases."""

    value: str

    def to_json(self) -> str:
        return self.value


MISSING = Missing()

CellValue = Union[Numeric, Missing, Text]
Block = tuple[CellValue, ...]


@dataclass(frozen=True)
class CellExtraction:
    """Result of extracting one cell for one data type.

    Attributes:
        present: Whether the cell has a container for the data type
        value: Extracted value (None when not present)
        boundary: Whether the container carries the block boundary marker
    """

    present: bool
    value: Optional[CellValue] = None
    boundary: bool = False


NOT_PRESENT = CellExtraction(present=False)


def max_block_length(blocks) -> int:
    """Length of the longest block, or 0 when there are no blocks.

    Example:
        >>> max_block_length([[1, 2], [3]])
        2
        >>> max_block_length([])
        0
    """
    if not blocks:
        return 0
    return max(len(block) for block in blocks)


def blocks_to_json(blocks: tuple[Block, ...]) -> list[list]:
    """Render blocks as nested JSON-compatible lists."""
    return [[value.to_json() for value in block] for block in blocks]


@dataclass(frozen=True)
class ScrapeResult:
    """Forecast data scraped from one page.

    Attributes:
        url: Page the data was scraped from
        bottom_elevation: Resort bottom elevation in metres, if found
        snow_blocks: Snowfall blocks, one per forecast day
        temperature_blocks: Max temperature blocks
        wind_blocks: Wind speed blocks
        freezing_level_blocks: Freezing level blocks
        rain_blocks: Rainfall blocks
        phrases_blocks: Forecast phrase blocks
    """

    url: str
    bottom_elevation: Optional[int] = None
    snow_blocks: tuple[Block, ...] = ()
    temperature_blocks: tuple[Block, ...] = ()
    wind_blocks: tuple[Block, ...] = ()
    freezing_level_blocks: tuple[Block, ...] = ()
    rain_blocks: tuple[Block, ...] = ()
    phrases_blocks: tuple[Block, ...] = ()

    @property
    def max_snow_block_length(self) -> int:
        """Length of the longest snow block (0 if none)."""
        return max_block_length(self.snow_blocks)

    def blocks_for(self, data_type: DataType) -> tuple[Block, ...]:
        """Get the block sequence for a data type."""
        return getattr(self, _BLOCK_FIELDS[data_type])

    def to_dict(self) -> dict:
        """Render in the camelCase wire format served by the API."""
        return {
            "resort": self.url,
            "bottomElevation": self.bottom_elevation,
            "snowBlocks": blocks_to_json(self.snow_blocks),
            "temperatureBlocks": blocks_to_json(self.temperature_blocks),
            "windBlocks": blocks_to_json(self.wind_blocks),
            "freezinglevelBlocks": blocks_to_json(self.freezing_level_blocks),
            "rainBlocks": blocks_to_json(self.rain_blocks),
            "phrasesBlocks": blocks_to_json(self.phrases_blocks),
            "maxSnowBlockLength": self.max_snow_block_length,
        }


_BLOCK_FIELDS = {
    DataType.SNOW: "snow_blocks",
    DataType.TEMPERATURE: "temperature_blocks",
    DataType.WIND: "wind_blocks",
    DataType.FREEZING_LEVEL: "freezing_level_blocks",
    DataType.RAIN: "rain_blocks",
    DataType.PHRASES: "phrases_blocks",
}


@dataclass(frozen=True)
class CacheEntry:
    """Cached scrape result for one URL. Replaced wholesale on refresh."""

    key: str
    result: ScrapeResult
    fetched_at: datetime = field(default_factory=datetime.utcnow)
