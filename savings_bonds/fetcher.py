"""
TreasuryDirect savings bond calculator client.

Each bond is priced by submitting the calculator form and parsing the
returned page. Bonds are requested one at a time, in configuration order.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

import requests

from .aggregator import BondCollection
from .config import BondRequest, Config
from .errors import BondError, FetchError
from .records import BondRecord, parse_bond_data

logger = logging.getLogger(__name__)

BASE_URL = "https://treasurydirect.gov"
CALCULATOR_PATH = "/BC/SBCPrice"
DEFAULT_TIMEOUT = 30.0

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def format_redemption_date(when: Optional[datetime] = None) -> str:
    """Calculator redemption date (``MM/YYYY``), defaulting to the current month."""
    return (when or datetime.now()).strftime("%m/%Y")


def build_form_data(request: BondRequest, redemption_date: Optional[str] = None) -> Dict[str, str]:
    """
    Form fields for one calculator submission.

    Args:
        request: bond to price
        redemption_date: ``MM/YYYY``; current month when omitted
    """
    return {
        "Denomination": str(request.denomination),
        "SerialNumber": request.serial,
        "IssueDate": request.issue_date,
        "RedemptionDate": redemption_date or format_redemption_date(),
        "Series": request.series,
        "btnAdd.x": "Calculate",
        "Version": "6",
    }


def fetch_bond_page(
    request: BondRequest,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    redemption_date: Optional[str] = None,
    base_url: str = BASE_URL,
) -> str:
    """
    Submit the calculator form for *request* and return the response body.

    Raises:
        FetchError: on transport failure or a non-success status
    """
    url = base_url.rstrip("/") + CALCULATOR_PATH
    data = build_form_data(request, redemption_date)
    http = session or requests.Session()

    logger.info(f"Requesting {request.series} bond {request.serial} (issued {request.issue_date})")
    try:
        response = http.post(url, data=data, headers=FORM_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.debug(
            f"Error fetching bond {request.serial}: {e}",
            extra={"serial": request.serial, "url": url},
            exc_info=True,
        )
        raise FetchError(f"request for bond {request.serial} failed: {e}") from e
    finally:
        if session is None:
            http.close()

    logger.debug(f"Received {len(response.text)} characters for bond {request.serial}")
    return response.text


def get_bond(
    request: BondRequest,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    redemption_date: Optional[str] = None,
) -> BondRecord:
    """
    Fetch and parse the current value of one bond.

    Raises:
        FetchError: if the calculator could not be reached
        InvalidDataReturned: if the page does not contain the bond row
    """
    page = fetch_bond_page(request, session=session, timeout=timeout, redemption_date=redemption_date)
    return parse_bond_data(page)


def load_bonds(
    config: Config,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    redemption_date: Optional[str] = None,
) -> BondCollection:
    """
    Price every configured bond, sequentially and in order.

    The first failure aborts the batch; no partial collection is returned.
    """
    logger.info("Retrieving bond values")
    bonds = BondCollection()
    owns_session = session is None
    http = session or requests.Session()

    try:
        for request in config.bonds:
            try:
                bonds.append(get_bond(request, session=http, timeout=timeout, redemption_date=redemption_date))
            except BondError as e:
                logger.debug(f"Stopping at bond {request.serial}: {e}")
                raise
    finally:
        if owns_session:
            http.close()

    logger.info(f"Retrieved {len(bonds)} bonds")
    return bonds
