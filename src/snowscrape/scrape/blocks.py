"""Segmentation of a forecast table row into per-period blocks.

A forecast row holds one cell per time slot (morning, afternoon, night...).
The page marks the last slot of each day with a border class on the cell's
container. Segmentation walks the row in order, accumulating values until a
marked cell or the end of the row closes the block. Blocks therefore vary in
length (the first day is often partial) and are never empty.
"""

import logging
from typing import Iterable

from bs4 import Tag

from snowscrape.scrape.cells import extract_cell
from snowscrape.scrape.models import Block, CellValue, DataType

logger = logging.getLogger(__name__)


def segment_row(cells: Iterable[Tag], data_type: DataType) -> list[Block]:
    """Group a row's cell values into blocks.

    Cells without a container for ``data_type`` are skipped entirely; they
    neither open nor close a block.

    Args:
        cells: Row cells in document order
        data_type: Data type of the row

    Returns:
        List of non-empty blocks. Concatenated, they hold every present
        cell value in row order.
    """
    cells = list(cells)
    blocks: list[Block] = []
    current: list[CellValue] = []

    for i, cell in enumerate(cells):
        extraction = extract_cell(cell, data_type)
        if not extraction.present:
            continue

        current.append(extraction.value)

        if extraction.boundary or i == len(cells) - 1:
            blocks.append(tuple(current))
            current = []

    # Last cell had no container; close out the trailing values
    if current:
        blocks.append(tuple(current))

    logger.debug(
        f"Segmented {len(cells)} {data_type.value} cells into {len(blocks)} blocks"
    )
    return blocks
