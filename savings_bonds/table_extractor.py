"""
Bond data extractor for TreasuryDirect savings bond calculator pages.

The calculator answers a form submission with an HTML page whose bond table
mixes header rows and data rows. The row holding the requested bond's values
is tagged with a row-level class inside a class-tagged container:

  <table class="bnddata">
    <tr><th>Serial #</th><th>Series</th>...</tr>
    <tr class="altrow1">
      <td><input type="hidden" .../></td>    skipped
      <td>C123456789EE</td>                  plain text
      <td><strong>$103.68</strong></td>      emphasis
      <td><a href="#">MA</a></td>            hyperlink
    </tr>
  </table>

Matching by class rather than row index tolerates minor template changes
upstream while still requiring the exact row.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from .errors import MalformedCellError
from .nodes import Node, find_by_class, find_by_tag, parse_html

logger = logging.getLogger(__name__)


BOND_DATA_CLASS = "bnddata"
DATA_ROW_CLASS = "altrow1"

EMPHASIS_TAGS = frozenset({"strong", "b", "em"})
HYPERLINK_TAGS = frozenset({"a"})
INPUT_TAGS = frozenset({"input"})


class CellKind(Enum):
    """How a cell presents its value. Declaration order is match precedence."""

    EMPHASIS = "emphasis"
    HYPERLINK = "hyperlink"
    INPUT = "input"
    PLAIN_TEXT = "plain_text"


_KIND_TAGS = (
    (CellKind.EMPHASIS, EMPHASIS_TAGS),
    (CellKind.HYPERLINK, HYPERLINK_TAGS),
    (CellKind.INPUT, INPUT_TAGS),
)


def cell_kind(cell: Node) -> CellKind:
    """
    Decide which representation a cell uses from its first child.

    Raises:
        MalformedCellError: if the cell has no children at all
    """
    first = cell.first_child
    if first is None:
        raise MalformedCellError("table cell has no content")

    for kind, tags in _KIND_TAGS:
        if first.tag in tags:
            return kind
    return CellKind.PLAIN_TEXT


def classify_cell(cell: Node) -> Tuple[CellKind, Optional[str]]:
    """
    Classify a table cell and extract its raw text.

    Returns:
        (kind, text) where text is None for INPUT cells, which carry no value.

    Raises:
        MalformedCellError: if the cell, or the emphasis/link element it
            wraps its value in, has no content to read
    """
    kind = cell_kind(cell)
    first = cell.first_child

    if kind is CellKind.INPUT:
        return kind, None

    if kind in (CellKind.EMPHASIS, CellKind.HYPERLINK):
        inner = first.first_child
        if inner is None:
            raise MalformedCellError(f"<{first.tag}> element in table cell has no content")
        return kind, inner.get_text()

    return kind, first.get_text()


def extract_row_values(document: Union[Node, str]) -> List[str]:
    """
    Collect the trimmed values of every bond data row in *document*.

    Containers tagged ``bnddata`` are located first, then rows tagged
    ``altrow1`` within each of them; every ``td`` of those rows is classified
    in document order. Input cells contribute nothing. A document without a
    container or a matching row yields an empty list.

    Args:
        document: parsed ``Node`` tree or raw HTML text

    Returns:
        Ordered list of cell values across all matched rows
    """
    if isinstance(document, str):
        document = parse_html(document)

    values: List[str] = []
    containers = find_by_class(document, BOND_DATA_CLASS)
    if not containers:
        logger.debug(f"No '{BOND_DATA_CLASS}' container found in document")

    for container in containers:
        rows = find_by_class(container, DATA_ROW_CLASS)
        logger.debug(f"Found {len(rows)} '{DATA_ROW_CLASS}' rows in container")
        for row in rows:
            for cell in find_by_tag(row, "td"):
                kind, text = classify_cell(cell)
                if kind is CellKind.INPUT:
                    logger.debug("Skipping input cell")
                    continue
                values.append(text.strip())

    logger.info(f"Extracted {len(values)} cell values")
    return values
