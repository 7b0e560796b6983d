"""
CSV rendering of the extracted header record and line items.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from .models import HeaderRecord, LineItem

HEADER_COLUMNS = ["Customer", "Rep", "Date", "Invoice", "Zip"]
LINE_COLUMNS = ["Activity", "Description", "Qty", "Rate", "Amount"]

_SPECIAL_CHARS = (',', '\r', '\n', '"')


def escape_csv(value: Optional[str]) -> str:
    """Quote a cell when it holds a comma, quote or line break."""
    if value is None:
        return ""
    text = str(value)
    if any(char in text for char in _SPECIAL_CHARS):
        return '"' + text.replace('"', '""') + '"'
    return text


def format_number(value: Optional[Decimal]) -> str:
    """Render a number in plain form without trailing zeros, e.g. 100.00 -> 100."""
    if value is None:
        return ""
    if value == 0:
        return "0"
    return format(value.normalize(), 'f')


def render_rows(rows: Iterable[Sequence[Optional[str]]]) -> str:
    return "\n".join(",".join(escape_csv(cell) for cell in row) for row in rows)


def render_header_csv(header: HeaderRecord) -> str:
    """Render the single-row header table."""
    return render_rows([
        HEADER_COLUMNS,
        [header.customer, header.rep, header.date, header.invoice, header.zip],
    ])


def render_lines_csv(items: List[LineItem]) -> str:
    """Render one row per line item below the column headers."""
    rows = [LINE_COLUMNS]
    for item in items:
        rows.append([
            item.activity,
            item.description,
            format_number(item.qty),
            format_number(item.rate),
            format_number(item.amount),
        ])
    return render_rows(rows)
