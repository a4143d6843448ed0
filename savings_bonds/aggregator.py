"""
Aggregates over a collection of bond records.

Provides:
- Unmatured bond filtering
- Totals of the currency columns (purchase price, interest, value)
- A tabular view of the collection
"""

import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional

import pandas as pd

from .errors import NumericParseError
from .records import FIELD_ORDER, BondRecord

logger = logging.getLogger(__name__)

# Note column value the Treasury uses for a bond that has stopped earning interest
MATURED_MARKER = "MA"

CURRENCY_FIELDS = ("issue_price", "interest", "value")
CURRENCY_SYMBOL = "$"
_AMOUNT_RE = re.compile(r"-?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?$")


class BondCollection:
    """Bond records in request order. The same bond may appear more than once."""

    def __init__(self, records: Optional[Iterable[BondRecord]] = None):
        self._records: List[BondRecord] = list(records) if records is not None else []

    def append(self, record: BondRecord) -> None:
        self._records.append(record)

    def __iter__(self) -> Iterator[BondRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __repr__(self) -> str:
        return f"BondCollection({len(self._records)} bonds)"

    @property
    def records(self) -> List[BondRecord]:
        return list(self._records)

    def find_unmatured(self) -> List[BondRecord]:
        return filter_unmatured(self._records)

    def total_value(self) -> float:
        return sum_field(self._records, "value")

    def total_interest(self) -> float:
        return sum_field(self._records, "interest")

    def total_purchase_price(self) -> float:
        return sum_field(self._records, "issue_price")

    def to_dataframe(self) -> pd.DataFrame:
        """One row per bond, columns in table order, values as rendered."""
        return pd.DataFrame([r.to_dict() for r in self._records], columns=list(FIELD_ORDER))


def filter_unmatured(records: Iterable[BondRecord]) -> List[BondRecord]:
    """Records whose note is anything other than the matured marker, order preserved."""
    return [r for r in records if r.note != MATURED_MARKER]


def parse_currency(text: str, field: str = "value") -> float:
    """
    Parse a currency cell such as ``"$1,103.68"``.

    One currency symbol is removed; what remains must be a plain amount,
    with thousands separators only in groups of three.

    Raises:
        NumericParseError: if the remainder is not such an amount
    """
    m = _AMOUNT_RE.match(text.replace(CURRENCY_SYMBOL, "", 1).strip())
    if not m:
        raise NumericParseError(field, text)
    return float(m.group(0).replace(",", ""))


def sum_field(records: Iterable[BondRecord], field: str) -> float:
    """
    Sum a currency column over *records*.

    The first unparsable value aborts the whole sum.

    Args:
        records: bond records
        field: one of ``issue_price``, ``interest`` or ``value``

    Raises:
        ValueError: if *field* is not a currency column
        NumericParseError: if any record's value cannot be parsed
    """
    if field not in CURRENCY_FIELDS:
        raise ValueError(f"Cannot sum '{field}'; expected one of {', '.join(CURRENCY_FIELDS)}")

    total = 0.0
    for record in records:
        total += parse_currency(getattr(record, field), field)
    return total


def total_value(records: Iterable[BondRecord]) -> float:
    return sum_field(records, "value")


def total_interest(records: Iterable[BondRecord]) -> float:
    return sum_field(records, "interest")


def total_purchase_price(records: Iterable[BondRecord]) -> float:
    return sum_field(records, "issue_price")


_TOTALS = (
    ("total_value", "value"),
    ("total_interest", "interest"),
    ("total_purchase_price", "issue_price"),
)


def summarize(records: Iterable[BondRecord]) -> Dict[str, Any]:
    """
    Compute every total plus the unmatured bonds.

    Each total is an independent pass: a failing metric is reported as
    ``{"error": message}`` and the others are still computed.
    """
    records = list(records)
    summary: Dict[str, Any] = {"bond_count": len(records)}

    for key, field in _TOTALS:
        try:
            summary[key] = round(sum_field(records, field), 2)
        except NumericParseError as e:
            logger.error(f"Error getting {key.replace('_', ' ')}: {e}")
            summary[key] = {"error": str(e)}

    unmatured = filter_unmatured(records)
    summary["unmatured"] = [r.to_dict() for r in unmatured]
    logger.info(f"Found {len(unmatured)} bonds still to mature")
    return summary
