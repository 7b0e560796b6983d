#!/usr/bin/env python3
"""
PDF text extraction with a command-line fallback.
"""

import io
import logging
import shutil
import subprocess
from typing import List

import pdfplumber

from .exceptions import PDFExtractionError

logger = logging.getLogger(__name__)


class PDFTextExtractor:
    """PDF extractor trying several extraction strategies in order."""

    def __init__(self):
        self.extraction_methods = [
            self._extract_with_pdfplumber,
            self._extract_with_pdftotext,
        ]

    def extract_text(self, pdf_bytes: bytes) -> str:
        """
        Extract text from an in-memory PDF using multiple methods.

        Args:
            pdf_bytes: Raw PDF document

        Returns:
            Extracted text string, empty if the PDF holds no text

        Raises:
            PDFExtractionError: no method produced text and at least one failed
        """
        failures: List[str] = []
        for method in self.extraction_methods:
            try:
                text = method(pdf_bytes)
            except Exception as e:
                logger.warning(f"Method {method.__name__} failed: {e}")
                failures.append(f"{method.__name__}: {e}")
                continue

            if text and text.strip():
                logger.info(f"Successfully extracted {len(text)} characters using {method.__name__}")
                return text

        if failures:
            raise PDFExtractionError("Could not extract text from PDF (" + "; ".join(failures) + ")")

        logger.warning("PDF contains no extractable text")
        return ""

    def _extract_with_pdfplumber(self, pdf_bytes: bytes) -> str:
        """Extract text using pdfplumber, one block per page."""
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
        return "\n\n".join(pages)

    def _extract_with_pdftotext(self, pdf_bytes: bytes) -> str:
        """Extract text using the pdftotext command-line tool."""
        if shutil.which("pdftotext") is None:
            logger.debug("pdftotext not available")
            return ""

        result = subprocess.run(
            ["pdftotext", "-raw", "-", "-"],
            input=pdf_bytes,
            capture_output=True,
        )
        if result.returncode != 0:
            raise PDFExtractionError(result.stderr.decode("utf-8", errors="replace").strip())
        return result.stdout.decode("utf-8", errors="replace")


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Convenience function to extract text from PDF bytes.

    Args:
        pdf_bytes: Raw PDF document

    Returns:
        Extracted text
    """
    extractor = PDFTextExtractor()
    return extractor.extract_text(pdf_bytes)
