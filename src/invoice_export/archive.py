#!/usr/bin/env python3
"""
Packaging of the two CSV files into a downloadable ZIP archive.
"""

import io
import re
import logging
import zipfile
from dataclasses import dataclass
from typing import Optional

from .csv_writer import render_header_csv, render_lines_csv
from .models import HeaderRecord, InvoiceData

logger = logging.getLogger(__name__)

HEADER_ENTRY = "invoice_header.csv"
LINES_ENTRY = "invoice_lines.csv"
FALLBACK_ZIP_NAME = "invoice_extract.zip"
ZIP_CONTENT_TYPE = "application/zip"

_UNSAFE_RUN_RE = re.compile(r'[^A-Za-z0-9.-]+')


@dataclass
class InvoiceArchive:
    """A finished ZIP archive and the name to offer it under."""
    filename: str
    content: bytes

    @property
    def content_disposition(self) -> str:
        return f"attachment; filename={self.filename}"


def sanitize(value: Optional[str]) -> str:
    """Replace every run of unsafe filename characters with an underscore."""
    return _UNSAFE_RUN_RE.sub("_", value or "")


def archive_filename(header: HeaderRecord) -> str:
    """
    Build the download name from customer, rep and invoice number.

    Empty parts are skipped; with nothing to go on the fallback name is used.
    """
    parts = [sanitize(value) for value in (header.customer, header.rep, header.invoice)]
    parts = [part for part in parts if part]
    if not parts:
        return FALLBACK_ZIP_NAME
    return "_".join(parts) + "_extract.zip"


def build_zip(entries) -> bytes:
    """Write (name, text) pairs into an in-memory ZIP archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, text in entries:
            archive.writestr(name, text.encode("utf-8"))
    return buffer.getvalue()


def build_archive(invoice: InvoiceData) -> InvoiceArchive:
    """Render both CSV tables and package them as a ZIP."""
    content = build_zip([
        (HEADER_ENTRY, render_header_csv(invoice.header)),
        (LINES_ENTRY, render_lines_csv(invoice.line_items)),
    ])
    filename = archive_filename(invoice.header)
    logger.info(f"Built {filename} ({len(content)} bytes)")
    return InvoiceArchive(filename=filename, content=content)
