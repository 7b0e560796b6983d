#!/usr/bin/env python3
"""
Heuristic extraction of invoice header fields from cleaned text lines.

Each field is found by an ordered list of candidates. A candidate scans a
bounded window of lines and the first candidate producing a value wins,
so every strategy can be exercised on its own.
"""

import re
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .models import HeaderRecord
from .normalizer import trim

logger = logging.getLogger(__name__)

US_STATES = frozenset([
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN", "IA",
    "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT",
    "VA", "WA", "WV", "WI", "WY",
])

# Digits and word boundaries are ASCII only; state abbreviations match
# case-sensitively as whole words
STATE_RE = re.compile(r'\b(?:' + '|'.join(sorted(US_STATES)) + r')\b', re.ASCII)
ZIP_RE = re.compile(r'\b(\d{5}(?:-\d{4})?)\b', re.ASCII)

DATE_PATTERN = r'\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}'
DATE_PARTS_RE = re.compile(r'(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})', re.ASCII)

CUSTOMER_MARKER_RE = re.compile(r'Bill To|Sold To|Customer', re.IGNORECASE)
ADDRESS_LABEL_RE = re.compile(r'^(?:Address|Phone|Email|Fax|Attn|City|State|Zip)[:\s]', re.IGNORECASE)

CUSTOMER_WINDOW = 40
INVOICE_WINDOW = 80
DATE_LABELED_WINDOW = 80
DATE_BARE_WINDOW = 50
REP_WINDOW = 120
ZIP_WINDOW = 50

# Lines after a customer marker that may hold the customer name
CUSTOMER_LOOKAHEAD = 4


@dataclass(frozen=True)
class Candidate:
    """
    One extraction strategy: regex patterns applied to a window of lines.

    For each line in the window the patterns are tried in order; the first
    match is passed through ``transform`` and returned.
    """
    patterns: Tuple[re.Pattern, ...]
    window: int
    reverse: bool = False
    requires: Optional[re.Pattern] = None
    transform: Callable[[str], Optional[str]] = trim

    def __call__(self, lines: Sequence[str]) -> Optional[str]:
        window = list(lines[:self.window])
        if self.reverse:
            window.reverse()

        for line in window:
            if self.requires is not None and not self.requires.search(line):
                continue
            for pattern in self.patterns:
                match = pattern.search(line)
                if match:
                    return self.transform(match.group(1))
        return None


Strategy = Callable[[Sequence[str]], Optional[str]]


def first_match(lines: Sequence[str], candidates: Sequence[Strategy]) -> Optional[str]:
    """Run candidates in order and return the first value found."""
    for candidate in candidates:
        value = candidate(lines)
        if value is not None:
            return value
    return None


def parse_date(raw: Optional[str]) -> Optional[str]:
    """
    Parse a US style date (M/D/YY, MM-DD-YYYY, ...) into MM/DD/YYYY.

    Two digit years pivot at 70: 70-99 become 19xx, 00-69 become 20xx.
    """
    if not raw:
        return None

    match = DATE_PARTS_RE.search(raw)
    if not match:
        return None

    month, day, year = match.groups()
    if len(year) == 2:
        yy = int(year)
        year = str(1900 + yy if yy >= 70 else 2000 + yy)

    return f"{month.zfill(2)}/{day.zfill(2)}/{year}"


def _customer_after_marker(lines: Sequence[str]) -> Optional[str]:
    """Pick the first plausible line following a Bill To / Sold To block."""
    marker_index = next(
        (i for i, line in enumerate(lines) if CUSTOMER_MARKER_RE.search(line)),
        None,
    )
    if marker_index is None:
        return None

    start = marker_index + 1
    for line in lines[start:start + CUSTOMER_LOOKAHEAD]:
        if not ADDRESS_LABEL_RE.match(line) and len(line) > 3:
            return trim(line)
    return None


CUSTOMER_CANDIDATES: List[Strategy] = [
    Candidate(
        patterns=(
            re.compile(r'^(?:Customer|Bill To|Sold To)\s*:\s*(.+)$', re.IGNORECASE),
            re.compile(r'^(?:Customer|Bill To|Sold To)\s+(.+)$', re.IGNORECASE),
        ),
        window=CUSTOMER_WINDOW,
    ),
    _customer_after_marker,
]

INVOICE_CANDIDATES: List[Strategy] = [
    Candidate(
        patterns=(re.compile(r'Invoice\s*(?:#|No\.?|Number)?\s*[:\-]?\s*([A-Z0-9\-]+)', re.IGNORECASE | re.ASCII),),
        window=INVOICE_WINDOW,
    ),
    Candidate(
        patterns=(re.compile(r'\bINVOICE\s+([A-Z0-9\-]+)', re.IGNORECASE | re.ASCII),),
        window=INVOICE_WINDOW,
    ),
]

DATE_CANDIDATES: List[Strategy] = [
    Candidate(
        patterns=(re.compile(r'(?:Invoice\s*Date|Date)\s*[:\-]?\s*(' + DATE_PATTERN + r')', re.IGNORECASE | re.ASCII),),
        window=DATE_LABELED_WINDOW,
        transform=parse_date,
    ),
    Candidate(
        patterns=(re.compile(r'(' + DATE_PATTERN + r')', re.ASCII),),
        window=DATE_BARE_WINDOW,
        transform=parse_date,
    ),
]

REP_CANDIDATES: List[Strategy] = [
    Candidate(
        patterns=(
            re.compile(
                r"(?:Sales\s*Rep|Salesperson|Sold\s*By|Rep)\s*[:\-]?\s*([A-Za-z .,'-]+)(?:\s{2,}|$)",
                re.IGNORECASE | re.ASCII,
            ),
        ),
        window=REP_WINDOW,
    ),
]

ZIP_CANDIDATES: List[Strategy] = [
    # A ZIP on the same line as a state abbreviation is the best evidence
    Candidate(patterns=(ZIP_RE,), window=ZIP_WINDOW, requires=STATE_RE),
    Candidate(patterns=(ZIP_RE,), window=ZIP_WINDOW, reverse=True),
]


def find_customer(lines: Sequence[str]) -> Optional[str]:
    """Locate the customer name near the top of the invoice."""
    return first_match(lines, CUSTOMER_CANDIDATES)


def find_invoice(lines: Sequence[str]) -> Optional[str]:
    """Locate the invoice number following an "Invoice" label."""
    return first_match(lines, INVOICE_CANDIDATES)


def find_date(lines: Sequence[str]) -> Optional[str]:
    """Find the invoice date, preferring a labeled one, as MM/DD/YYYY."""
    return first_match(lines, DATE_CANDIDATES)


def find_rep(lines: Sequence[str]) -> Optional[str]:
    """Find the sales rep or salesperson."""
    return first_match(lines, REP_CANDIDATES)


def find_zip(lines: Sequence[str]) -> Optional[str]:
    """Extract a 5 or 9 digit ZIP code from the top of the invoice."""
    return first_match(lines, ZIP_CANDIDATES)


def extract_header(lines: Sequence[str]) -> HeaderRecord:
    """Run all field extractors over the same lines."""
    header = HeaderRecord(
        customer=find_customer(lines),
        rep=find_rep(lines),
        date=find_date(lines),
        invoice=find_invoice(lines),
        zip=find_zip(lines),
    )
    logger.info(
        f"Header fields: customer={header.customer!r}, rep={header.rep!r}, "
        f"date={header.date!r}, invoice={header.invoice!r}, zip={header.zip!r}"
    )
    return header
