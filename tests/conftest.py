"""Shared test fixtures: synthetic TreasuryDirect calculator pages."""

import pytest

from savings_bonds.records import BondRecord

PAGE_TEMPLATE = """
<html>
<head><title>Savings Bond Calculator</title>
<script>var rows = "<tr class='altrow1'><td>nope</td></tr>";</script>
</head>
<body>
<form method="post" action="/BC/SBCPrice">
<table class="bnddata">
  <tr>
    <th>&nbsp;</th><th>Serial #</th><th>Series</th><th>Denom</th><th>Issue Date</th>
    <th>Next Accrual</th><th>Final Maturity</th><th>Issue Price</th>
    <th>Interest</th><th>Interest Rate</th><th>Value</th><th>Note</th>
  </tr>
{rows}
</table>
<table class="bnddata totals">
  <tr class="altrow2"><td><strong>Total</strong></td><td>$25.00</td></tr>
</table>
</form>
</body>
</html>
"""

ROW_TEMPLATE = """
  <tr class="altrow1">
    <td><input type="checkbox" name="RemoveBond" value="{serial}"></td>
    <td>
      {serial}
    </td>
    <td>{series}</td>
    <td>{denomination}</td>
    <td>{issue_date}</td>
    <td>{next_accrual}&nbsp;</td>
    <td>{final_maturity}</td>
    <td>{issue_price}</td>
    <td>{interest}</td>
    <td>{interest_rate}&nbsp;</td>
    <td> <strong>{value}</strong></td>
    {note_cell}
  </tr>
"""

MATURED_BOND = BondRecord(
    serial="abcdef",
    series="EE",
    denomination="$50",
    issue_date="01/1990",
    next_accrual="",
    final_maturity="01/2020",
    issue_price="$25.00",
    interest="$78.68",
    interest_rate="",
    value="$103.68",
    note="MA",
)

UNMATURED_BOND = BondRecord(
    serial="ghijk",
    series="EE",
    denomination="$50",
    issue_date="01/2000",
    next_accrual="12/2026",
    final_maturity="01/2030",
    issue_price="$25.00",
    interest="$36.28",
    interest_rate="2.50%",
    value="$61.28",
    note="",
)


def note_cell(note: str) -> str:
    # The calculator links notes to their legend; an empty note is a blank cell
    if note:
        return f'<td><a href="/BC/SBCNote#{note}">{note}</a></td>'
    return "<td>&nbsp;</td>"


def render_page(*bonds: BondRecord) -> str:
    rows = "".join(
        ROW_TEMPLATE.format(note_cell=note_cell(b.note), **b.to_dict()) for b in bonds
    )
    return PAGE_TEMPLATE.replace("{rows}", rows)


@pytest.fixture
def matured_bond():
    return MATURED_BOND


@pytest.fixture
def unmatured_bond():
    return UNMATURED_BOND


@pytest.fixture
def matured_page():
    return render_page(MATURED_BOND)


@pytest.fixture
def unmatured_page():
    return render_page(UNMATURED_BOND)


@pytest.fixture
def page_for():
    """Factory building a calculator page holding the given bond rows."""
    return render_page
