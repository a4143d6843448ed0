"""
CLI entry point for the savings bonds toolkit.
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Dict, List, Optional

from .aggregator import BondCollection, summarize
from .config import DEFAULT_CONFIG_PATH, load_config
from .errors import BondError
from .fetcher import DEFAULT_TIMEOUT, load_bonds
from .records import parse_bond_data

_TOTAL_LABELS = (
    ("total_value", "Total Value"),
    ("total_interest", "Total Interest"),
    ("total_purchase_price", "Total Original Purchase Price"),
)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """
    Configure logging for the application.

    Args:
        verbose: Enable debug logging
        log_file: Optional path to log file
    """
    level = logging.DEBUG if verbose else logging.INFO

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console handler (less verbose)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING if not verbose else logging.DEBUG)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="savings-bonds",
        description="Look up current savings bond values on TreasuryDirect and total them.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Price the bonds listed in config.yaml
  python -m savings_bonds -c config.yaml

  # Value as of a given month, as JSON
  python -m savings_bonds -c config.yaml --redemption-date 06/2025 --format json --pretty

  # Parse previously saved calculator pages instead of fetching
  python -m savings_bonds --html bond1.html --html bond2.html --format table
        """
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})"
    )

    parser.add_argument(
        "--html",
        action="append",
        dest="html_files",
        help="Saved calculator response page to parse instead of fetching (can be specified multiple times)"
    )

    parser.add_argument(
        "--redemption-date",
        type=str,
        help="Redemption month as MM/YYYY (default: current month)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT:g})"
    )

    parser.add_argument(
        "--format",
        choices=("text", "json", "table"),
        default="text",
        help="Output format (default: text)"
    )

    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Path to log file"
    )

    return parser


def read_saved_pages(paths: List[str]) -> BondCollection:
    """Parse saved calculator pages, in the order given."""
    bonds = BondCollection()
    for path in paths:
        html = Path(path).read_text(encoding="utf-8", errors="replace")
        bonds.append(parse_bond_data(html))
    return bonds


def render_text(summary: Dict) -> str:
    lines = []
    for key, label in _TOTAL_LABELS:
        total = summary[key]
        if isinstance(total, dict):
            lines.append(f"{label} = unavailable ({total['error']})")
        else:
            lines.append(f"{label} = ${total:.2f}")

    unmatured = summary["unmatured"]
    lines.append(f"Found {len(unmatured)} bonds still to mature")
    for bond in unmatured:
        lines.append(f"Bond {bond['serial']} will mature on {bond['final_maturity']}")
    return "\n".join(lines)


def render_table(bonds: BondCollection, summary: Dict) -> str:
    df = bonds.to_dataframe()
    table = df.to_string(index=False) if len(df) else "(no bonds)"
    return table + "\n\n" + render_text(summary)


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logger = setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger.info("Starting savings bond lookup")

    try:
        if args.html_files:
            logger.info(f"Parsing {len(args.html_files)} saved pages")
            bonds = read_saved_pages(args.html_files)
        else:
            config = load_config(args.config)
            bonds = load_bonds(
                config,
                timeout=args.timeout,
                redemption_date=args.redemption_date,
            )
    except (BondError, OSError) as e:
        logger.error(f"Error retrieving bonds: {e}", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    summary = summarize(bonds)

    if args.format == "json":
        result = {"bonds": [b.to_dict() for b in bonds], **summary}
        print(json.dumps(result, indent=2 if args.pretty else None))
    elif args.format == "table":
        print(render_table(bonds, summary))
    else:
        print(render_text(summary))

    if any(isinstance(summary[key], dict) for key, _ in _TOTAL_LABELS):
        logger.warning("Exiting with code 2: not every total could be computed")
        sys.exit(2)

    logger.info("Completed successfully")
    sys.exit(0)


if __name__ == "__main__":
    main()
