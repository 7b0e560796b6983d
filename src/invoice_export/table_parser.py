#!/usr/bin/env python3
"""
Line item table parsing for invoice text.

The table is located by its header row (Activity / Description / Qty /
Rate / Amount). Rows below it are delimited by their trailing
qty, rate and amount numbers; description text that wraps onto following
lines is folded back into the row it belongs to.
"""

import re
import logging
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Sequence

from .models import LineItem
from .normalizer import trim

logger = logging.getLogger(__name__)

TABLE_NOT_FOUND = -1

# Money accepts an optional sign, dollar sign, thousands separators and cents.
# Numeric patterns are compiled with re.ASCII so only 0-9 count as digits.
MONEY_RE = r'-?\$?\d{1,3}(?:,\d{3})*(?:\.\d{2})?|-?\$?\d+(?:\.\d{2})?'
QTY_RE = r'\d+(?:\.\d+)?'

TAIL_RE = re.compile(r'(' + QTY_RE + r')\s+(' + MONEY_RE + r')\s+(' + MONEY_RE + r')$', re.ASCII)
LEADING_TOKEN_RE = re.compile(r'^([A-Za-z0-9._\-/]+)\s+(.*)$')

HEADER_KEYWORD_RES = (
    re.compile(r'ACTIVITY', re.IGNORECASE | re.ASCII),
    re.compile(r'DESCRIPTION', re.IGNORECASE | re.ASCII),
    re.compile(r'\bQTY\b|\bQUANTITY\b', re.IGNORECASE | re.ASCII),
    re.compile(r'\bRATE\b|\bPRICE\b', re.IGNORECASE | re.ASCII),
    re.compile(r'\bAMOUNT\b|\bEXT\.?\b|\bTOTAL\b', re.IGNORECASE | re.ASCII),
)

STOP_ROW_RES = (
    re.compile(r'^(?:Subtotal|Sub-Total|Tax|Sales Tax|Total|Balance Due)\b', re.IGNORECASE | re.ASCII),
    re.compile(r'^INVOICE\b', re.IGNORECASE | re.ASCII),
    re.compile(r'^Page \d+', re.IGNORECASE | re.ASCII),
)


def unmoney(value: Optional[str]) -> Optional[Decimal]:
    """Convert a money string such as "$1,234.56" into a Decimal."""
    if value is None:
        return None
    cleaned = trim(value.replace('$', '').replace(',', ''))
    if not cleaned:
        return None
    return Decimal(cleaned)


def find_table_start(lines: Sequence[str]) -> int:
    """
    Return the index of the line item header row.

    The header row must mention all five column kinds on the same line.
    Returns ``TABLE_NOT_FOUND`` when there is no such line.
    """
    for index, line in enumerate(lines):
        if all(keyword.search(line) for keyword in HEADER_KEYWORD_RES):
            logger.debug(f"Table header found at line {index}: {line!r}")
            return index
    return TABLE_NOT_FOUND


def is_stop_row(line: str) -> bool:
    """True for rows that end the table (totals, a new invoice, page footers)."""
    return any(pattern.search(line) for pattern in STOP_ROW_RES)


def _split_leading_token(text: str):
    """Split "CODE rest of text" into (activity, description)."""
    match = LEADING_TOKEN_RE.match(text)
    if match:
        return trim(match.group(1)), trim(match.group(2))
    return None


def match_tail(line: str) -> Optional[LineItem]:
    """Build a complete item from a line ending in qty, rate and amount."""
    match = TAIL_RE.search(line)
    if not match:
        return None

    left = trim(line[:match.start()])
    split = _split_leading_token(left)
    if split:
        activity, description = split
    else:
        activity, description = "", left

    return LineItem(
        activity=activity,
        description=description,
        qty=Decimal(match.group(1)),
        rate=unmoney(match.group(2)),
        amount=unmoney(match.group(3)),
    )


def match_seed(line: str) -> Optional[LineItem]:
    """Start an item without numbers from a line opening with an activity code."""
    split = _split_leading_token(line)
    if not split:
        return None
    activity, description = split
    return LineItem(activity=activity, description=description)


class RowState(Enum):
    NO_ITEMS = "no_items"
    ITEM_OPEN = "item_open"


class LineItemAssembler:
    """
    State machine that turns table lines into line items.

    While no item exists a line may seed one; once an item is open, lines
    without a numeric tail are appended to its description. A seeded item
    never picks up the numbers of a later line: such a line starts a new
    item of its own.
    """

    def __init__(self):
        self.items: List[LineItem] = []
        self.state = RowState.NO_ITEMS
        self.stopped = False

    def feed(self, line: str) -> bool:
        """
        Process one line.

        Returns:
            False once a stop row has been seen, True otherwise
        """
        if self.stopped:
            return False

        if is_stop_row(line):
            logger.debug(f"Stop row: {line!r}")
            self.stopped = True
            return False

        if not trim(line):
            return True

        item = match_tail(line)
        if item is not None:
            self._open(item)
            return True

        if self.state is RowState.NO_ITEMS:
            item = match_seed(line)
            if item is not None:
                logger.debug(f"Seeded item from {line!r}")
                self._open(item)
            else:
                logger.debug(f"Ignoring line before first item: {line!r}")
            return True

        self.items[-1].append_description(trim(line))
        return True

    def _open(self, item: LineItem) -> None:
        self.items.append(item)
        self.state = RowState.ITEM_OPEN


def parse_line_items(lines: Sequence[str], header_index: int) -> List[LineItem]:
    """
    Parse the line items that follow the table header.

    Args:
        lines: Cleaned document lines
        header_index: Index returned by ``find_table_start``

    Returns:
        Line items in document order; empty when there is no table
    """
    if header_index < 0:
        return []

    assembler = LineItemAssembler()
    for line in lines[header_index + 1:]:
        if not assembler.feed(line):
            break

    logger.info(f"Parsed {len(assembler.items)} line items")
    return assembler.items
