"""
Invoice CSV Export

Extracts header fields and line items from invoice PDFs and packages them
as two CSV files in a ZIP archive.
"""

__version__ = "1.0.0"

from .archive import InvoiceArchive, archive_filename, build_archive
from .field_extractors import extract_header
from .handler import ExportResponse, handle_export_request
from .models import HeaderRecord, InvoiceData, LineItem
from .normalizer import clean_lines
from .parser import InvoiceParser
from .table_parser import find_table_start, parse_line_items

__all__ = [
    "ExportResponse",
    "HeaderRecord",
    "InvoiceArchive",
    "InvoiceData",
    "InvoiceParser",
    "LineItem",
    "archive_filename",
    "build_archive",
    "clean_lines",
    "extract_header",
    "find_table_start",
    "handle_export_request",
    "parse_line_items",
]
