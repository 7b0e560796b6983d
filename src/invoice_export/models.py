"""
Data models for the invoice CSV exporter.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class HeaderRecord:
    """Invoice-level fields. ``None`` means the field was not found."""
    customer: Optional[str] = None
    rep: Optional[str] = None
    date: Optional[str] = None
    invoice: Optional[str] = None
    zip: Optional[str] = None


@dataclass
class LineItem:
    """Represents a single line item of an invoice table."""
    activity: str
    description: str
    qty: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    amount: Optional[Decimal] = None

    def append_description(self, text: str) -> None:
        """Fold a wrapped continuation line into the description."""
        self.description = f"{self.description} {text}" if self.description else text


@dataclass
class InvoiceData:
    """Everything extracted from one document."""
    header: HeaderRecord
    line_items: List[LineItem] = field(default_factory=list)
    table_index: int = -1
