#!/usr/bin/env python3
"""
Invoice Parser
Turns the text of an invoice PDF into a header record and line items.
"""

import logging
from typing import Optional

from .archive import InvoiceArchive, build_archive
from .field_extractors import extract_header
from .models import InvoiceData
from .normalizer import clean_lines
from .pdf_extractor import PDFTextExtractor
from .table_parser import find_table_start, parse_line_items

logger = logging.getLogger(__name__)


class InvoiceParser:
    """Main parser class for extracting invoice data from PDFs."""

    def __init__(self, extractor: Optional[PDFTextExtractor] = None):
        self.extractor = extractor or PDFTextExtractor()

    def parse_text(self, text: str) -> InvoiceData:
        """Parse already extracted text."""
        lines = clean_lines(text)
        logger.info(f"Parsing {len(lines)} lines of invoice text")

        header = extract_header(lines)

        table_index = find_table_start(lines)
        if table_index >= 0:
            logger.info(f"Line item table header at line {table_index}")
        else:
            logger.warning("No line item table header found")
        line_items = parse_line_items(lines, table_index)

        return InvoiceData(header=header, line_items=line_items, table_index=table_index)

    def parse_pdf(self, pdf_bytes: bytes) -> InvoiceData:
        """Extract text from PDF bytes and parse it."""
        text = self.extractor.extract_text(pdf_bytes)
        logger.info(f"Extracted {len(text)} characters from PDF")
        return self.parse_text(text)

    def export_pdf(self, pdf_bytes: bytes) -> InvoiceArchive:
        """Parse a PDF and package the result as a ZIP of two CSV files."""
        return build_archive(self.parse_pdf(pdf_bytes))
