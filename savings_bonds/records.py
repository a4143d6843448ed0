"""
Bond records and the mapping from extracted row values onto them.
"""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Dict, Sequence, Union

from .errors import InvalidDataReturned
from .nodes import Node
from .table_extractor import extract_row_values

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BondRecord:
    """One bond as rendered by the calculator. Every field is the trimmed cell text."""

    serial: str
    series: str
    denomination: str
    issue_date: str
    next_accrual: str
    final_maturity: str
    issue_price: str
    interest: str
    interest_rate: str
    value: str
    note: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


# Column order of the calculator's data row
FIELD_ORDER = tuple(f.name for f in fields(BondRecord))


def map_record(values: Sequence[str]) -> BondRecord:
    """
    Map an extracted row onto a ``BondRecord`` by position.

    Raises:
        InvalidDataReturned: unless exactly one value per field was extracted
    """
    if len(values) != len(FIELD_ORDER):
        logger.debug(f"Expected {len(FIELD_ORDER)} values from bond table, got {len(values)}")
        raise InvalidDataReturned(values=values)

    return BondRecord(**{name: value.strip() for name, value in zip(FIELD_ORDER, values)})


def parse_bond_data(document: Union[Node, str]) -> BondRecord:
    """
    Extract the bond record from a calculator response page.

    Args:
        document: raw HTML or an already parsed ``Node`` tree

    Raises:
        InvalidDataReturned: the page does not hold exactly one well-formed bond row
    """
    record = map_record(extract_row_values(document))
    logger.debug(f"Parsed bond {record.serial} ({record.series})")
    return record
