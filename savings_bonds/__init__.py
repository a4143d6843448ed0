"""
Savings Bonds Toolkit

Look up the current value of U.S. savings bonds on the TreasuryDirect
calculator, extract each bond's row from the returned page, and total the
purchase price, interest and value across bonds.
"""

__version__ = "0.1.0"

from .errors import (
    BondError,
    InvalidDataReturned,
    MalformedCellError,
    NumericParseError,
    FetchError,
    ConfigError,
)
from .nodes import Node, parse_html
from .table_extractor import CellKind, classify_cell, extract_row_values
from .records import BondRecord, FIELD_ORDER, map_record, parse_bond_data
from .aggregator import (
    BondCollection,
    filter_unmatured,
    sum_field,
    total_value,
    total_interest,
    total_purchase_price,
    summarize,
)
from .config import BondRequest, Config, load_config, parse_config
from .fetcher import build_form_data, fetch_bond_page, get_bond, load_bonds

__all__ = [
    "BondError",
    "InvalidDataReturned",
    "MalformedCellError",
    "NumericParseError",
    "FetchError",
    "ConfigError",
    "Node",
    "parse_html",
    "CellKind",
    "classify_cell",
    "extract_row_values",
    "BondRecord",
    "FIELD_ORDER",
    "map_record",
    "parse_bond_data",
    "BondCollection",
    "filter_unmatured",
    "sum_field",
    "total_value",
    "total_interest",
    "total_purchase_price",
    "summarize",
    "BondRequest",
    "Config",
    "load_config",
    "parse_config",
    "build_form_data",
    "fetch_bond_page",
    "get_bond",
    "load_bonds",
]
