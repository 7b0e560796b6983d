"""
Turns raw extracted PDF text into clean, non-empty lines.
"""

from typing import List, Optional

NBSP = "\u00a0"

# Characters trimmed from line ends: ASCII whitespace, Unicode space
# separators, line/paragraph separators and the byte order mark. The
# information separators \x1c-\x1f are kept.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim(text: Optional[str]) -> str:
    """Strip leading and trailing whitespace as defined by ``WHITESPACE``."""
    return (text or "").strip(WHITESPACE)


def clean_lines(text: str) -> List[str]:
    """
    Normalize PDF text into an ordered list of trimmed, non-empty lines.

    Carriage returns are dropped, non-breaking spaces become regular
    spaces and lines that are blank after trimming are skipped.

    Args:
        text: Raw text produced by the PDF extractor

    Returns:
        Cleaned lines in document order
    """
    if not text:
        return []

    lines = []
    for line in text.replace("\r", "").split("\n"):
        line = trim(line.replace(NBSP, " "))
        if line:
            lines.append(line)
    return lines
