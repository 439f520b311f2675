"""Tests for scrape data models."""

import dataclasses

import pytest

from snowscrape.scrape.models import (
    MISSING,
    DataType,
    Missing,
    Numeric,
    ScrapeResult,
    Text,
    max_block_length,
)


class TestDataType:
    """Tests for DataType enum."""

    def test_values(self):
        """Enum values are the row kinds of the forecast table."""
        assert {t.value for t in DataType} == {
            "snow", "temperature", "wind", "freezing-level", "rain", "phrases"
        }

    def test_temperature_row_id(self):
        """Temperature is read from the max temperature row."""
        assert DataType.TEMPERATURE.row_id == "temperature-max"

    def test_other_row_ids_match_value(self):
        """Other types use their own name as the row id."""
        for data_type in DataType:
            if data_type is not DataType.TEMPERATURE:
                assert data_type.row_id == data_type.value

    def test_is_numeric(self):
        """Only phrases hold text."""
        assert not DataType.PHRASES.is_numeric
        assert DataType.RAIN.is_numeric


class TestCellValues:
    """Tests for the cell value variants."""

    def test_integral_numeric_renders_as_int(self):
        assert Numeric(6.0).to_json() == 6
        assert isinstance(Numeric(6.0).to_json(), int)

    def test_fractional_numeric_renders_as_float(self):
        assert Numeric(0.5).to_json() == 0.5

    def test_missing_renders_as_dash(self):
        assert MISSING.to_json() == "-"
        assert Missing() == MISSING

    def test_text_renders_as_string(self):
        assert Text("light snow").to_json() == "light snow"

    def test_missing_never_equals_numeric(self):
        """Sentinel and numbers are distinct values."""
        assert MISSING != Numeric(0.0)


class TestMaxBlockLength:
    """Tests for max_block_length."""

    def test_longest_block(self):
        assert max_block_length([[1, 2], [3]]) == 2

    def test_no_blocks(self):
        assert max_block_length([]) == 0

    def test_none(self):
        assert max_block_length(None) == 0


class TestScrapeResult:
    """Tests for ScrapeResult."""

    def test_defaults_are_empty(self):
        """Missing data types yield empty block sequences."""
        result = ScrapeResult(url="https://example.com")

        for data_type in DataType:
            assert result.blocks_for(data_type) == ()
        assert result.bottom_elevation is None
        assert result.max_snow_block_length == 0

    def test_max_snow_block_length(self):
        result = ScrapeResult(
            url="https://example.com",
            snow_blocks=((Numeric(1.0), Numeric(2.0)), (Numeric(3.0),)),
        )
        assert result.max_snow_block_length == 2

    def test_blocks_for(self):
        blocks = ((Numeric(1100.0),),)
        result = ScrapeResult(url="https://example.com", freezing_level_blocks=blocks)
        assert result.blocks_for(DataType.FREEZING_LEVEL) == blocks

    def test_is_immutable(self):
        result = ScrapeResult(url="https://example.com")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.bottom_elevation = 100

    def test_to_dict(self):
        """to_dict renders the camelCase wire format."""
        result = ScrapeResult(
            url="https://example.com",
            bottom_elevation=1850,
            snow_blocks=((Numeric(0.0), MISSING), (Numeric(2.5),)),
            phrases_blocks=((Text("clear"),),),
        )

        data = result.to_dict()

        assert data == {
            "resort": "https://example.com",
            "bottomElevation": 1850,
            "snowBlocks": [[0, "-"], [2.5]],
            "temperatureBlocks": [],
            "windBlocks": [],
            "freezinglevelBlocks": [],
            "rainBlocks": [],
            "phrasesBlocks": [["clear"]],
            "maxSnowBlockLength": 2,
        }
