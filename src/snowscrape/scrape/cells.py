"""Typed value extraction from single forecast table cells.

Every data type has a rule describing where its value lives inside a
``td.forecast-table__cell``:

- a container element, whose presence decides whether the cell counts at all
- an optional value node inside the container (the container itself otherwise)
- the attribute holding the raw number, or the node's text for phrases
- a transform applied to numeric readings (unit offsets)

Example:
    >>> from bs4 import BeautifulSoup
    >>> soup = BeautifulSoup(
    ...     '<td class="forecast-table__cell">'
    ...     '<div class="temp-value" data-value="5"></div></td>',
    ...     "html.parser",
    ... )
    >>> extract_cell(soup.td, DataType.TEMPERATURE).value
    Numeric(value=6.0)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from bs4 import Tag

from snowscrape.scrape.models import (
    MISSING,
    NOT_PRESENT,
    CellExtraction,
    CellValue,
    DataType,
    Numeric,
    Text,
)

logger = logging.getLogger(__name__)

# Class on a cell container that closes the current block
BORDER_CLASS = "forecast-table__container--border"


def _identity(value: float) -> float:
    return value


@dataclass(frozen=True)
class CellRule:
    """Where a data type's value lives inside a cell.

    Attributes:
        container: CSS selector of the value-bearing container
        value_node: Selector of the value node inside the container,
            or None to read from the container itself
        attribute: Attribute holding the raw number, or None to read
            the node's trimmed text
        transform: Applied to numeric readings
    """

    container: str
    value_node: Optional[str] = None
    attribute: Optional[str] = "data-value"
    transform: Callable[[float], float] = _identity


CELL_RULES: dict[DataType, CellRule] = {
    DataType.SNOW: CellRule(
        container=".forecast-table__container--snow",
        value_node=".snow-amount",
    ),
    DataType.TEMPERATURE: CellRule(
        container=".temp-value",
        transform=lambda v: v + 1,
    ),
    DataType.WIND: CellRule(
        container=".forecast-table__container--wind",
        value_node=".wind-icon",
        attribute="data-speed",
    ),
    DataType.FREEZING_LEVEL: CellRule(
        container=".forecast-table__container--blue",
        value_node=".level-value",
        transform=lambda v: v + 100,
    ),
    DataType.RAIN: CellRule(
        container=".rain-amount",
        transform=lambda v: v / 10,
    ),
    DataType.PHRASES: CellRule(
        container=".forecast-table__container",
        value_node=".forecast-table__phrase",
        attribute=None,
    ),
}

_unruled = set(DataType) - set(CELL_RULES)
if _unruled:
    raise RuntimeError(f"No cell rule for data types: {sorted(t.value for t in _unruled)}")


def has_border(container: Tag) -> bool:
    """Check whether a container carries the block boundary marker."""
    return BORDER_CLASS in (container.get("class") or [])


def _read_value(container: Tag, rule: CellRule) -> CellValue:
    node = container if rule.value_node is None else container.select_one(rule.value_node)

    if rule.attribute is None:
        return Text(node.get_text().strip() if node is not None else "")

    raw = node.get(rule.attribute) if node is not None else None
    if raw is None or raw.strip() == "":
        return MISSING

    return Numeric(rule.transform(float(raw)))


def extract_cell(cell: Tag, data_type: DataType) -> CellExtraction:
    """Extract the typed value of one cell.

    Args:
        cell: A ``td.forecast-table__cell`` element
        data_type: Data type of the row the cell belongs to

    Returns:
        CellExtraction. ``present`` is False when the cell has no container
        for the data type, or when its raw value could not be parsed.
    """
    rule = CELL_RULES[data_type]

    try:
        container = cell.select_one(rule.container)
        if container is None:
            return NOT_PRESENT

        return CellExtraction(
            present=True,
            value=_read_value(container, rule),
            boundary=has_border(container),
        )
    except Exception as e:
        logger.warning(f"Error extracting {data_type.value} cell: {e}")
        return NOT_PRESENT
