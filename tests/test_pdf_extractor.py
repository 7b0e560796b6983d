#!/usr/bin/env python3
"""
Tests for PDF text extraction.
"""

import subprocess
import unittest
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from invoice_export import pdf_extractor
from invoice_export.exceptions import PDFExtractionError
from invoice_export.pdf_extractor import PDFTextExtractor, extract_pdf_text


def fake_pdf(*page_texts):
    """Mimic pdfplumber.open(...) used as a context manager."""
    pages = []
    for text in page_texts:
        page = MagicMock()
        page.extract_text.return_value = text
        pages.append(page)
    opened = MagicMock()
    opened.__enter__.return_value.pages = pages
    return opened


class TestPDFTextExtractor(unittest.TestCase):
    """Test cases for PDFTextExtractor."""

    def setUp(self):
        self.extractor = PDFTextExtractor()

    @patch.object(pdf_extractor.pdfplumber, "open")
    def test_pdfplumber_pages_are_joined(self, mock_open):
        mock_open.return_value = fake_pdf("Page one", None, "Page three")
        text = self.extractor.extract_text(b"%PDF-1.4")
        self.assertEqual(text, "Page one\n\n\n\nPage three")

    @patch.object(pdf_extractor.shutil, "which", return_value=None)
    @patch.object(pdf_extractor.pdfplumber, "open")
    def test_pdf_without_text(self, mock_open, mock_which):
        mock_open.return_value = fake_pdf(None)
        self.assertEqual(self.extractor.extract_text(b"%PDF-1.4"), "")

    @patch.object(pdf_extractor.shutil, "which", return_value=None)
    @patch.object(pdf_extractor.pdfplumber, "open", side_effect=ValueError("not a PDF"))
    def test_failure_without_fallback_raises(self, mock_open, mock_which):
        with self.assertRaises(PDFExtractionError) as ctx:
            self.extractor.extract_text(b"garbage")
        self.assertIn("not a PDF", str(ctx.exception))

    @patch.object(pdf_extractor.subprocess, "run")
    @patch.object(pdf_extractor.shutil, "which", return_value="/usr/bin/pdftotext")
    @patch.object(pdf_extractor.pdfplumber, "open", side_effect=ValueError("broken xref"))
    def test_pdftotext_fallback(self, mock_open, mock_which, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["pdftotext"], returncode=0, stdout=b"Invoice # 42\n", stderr=b""
        )
        self.assertEqual(self.extractor.extract_text(b"%PDF"), "Invoice # 42\n")
        self.assertEqual(mock_run.call_args.kwargs["input"], b"%PDF")

    @patch.object(pdf_extractor.subprocess, "run")
    @patch.object(pdf_extractor.shutil, "which", return_value="/usr/bin/pdftotext")
    @patch.object(pdf_extractor.pdfplumber, "open", side_effect=ValueError("broken xref"))
    def test_all_methods_fail(self, mock_open, mock_which, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["pdftotext"], returncode=1, stdout=b"", stderr=b"Syntax Error"
        )
        with self.assertRaises(PDFExtractionError) as ctx:
            self.extractor.extract_text(b"%PDF")
        self.assertIn("broken xref", str(ctx.exception))
        self.assertIn("Syntax Error", str(ctx.exception))

    @patch.object(pdf_extractor.pdfplumber, "open")
    def test_convenience_function(self, mock_open):
        mock_open.return_value = fake_pdf("Hello")
        self.assertEqual(extract_pdf_text(b"%PDF"), "Hello")


if __name__ == '__main__':
    unittest.main()
