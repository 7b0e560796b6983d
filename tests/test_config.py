#!/usr/bin/env python3
"""
Tests for environment configuration.
"""

import os
import unittest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from invoice_export.config import Settings
from invoice_export.exceptions import ConfigurationError


@patch("invoice_export.config.load_dotenv")
class TestSettings(unittest.TestCase):
    """Test cases for Settings.from_env."""

    def test_defaults(self, mock_load_dotenv):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings, Settings(host="127.0.0.1", port=8000, log_level="INFO", max_upload_mb=16))
        self.assertEqual(settings.max_content_length, 16 * 1024 * 1024)
        mock_load_dotenv.assert_called_once()

    def test_environment_overrides(self, mock_load_dotenv):
        env = {
            "INVOICE_EXPORT_HOST": "0.0.0.0",
            "INVOICE_EXPORT_PORT": "9000",
            "INVOICE_EXPORT_LOG_LEVEL": "debug",
            "INVOICE_EXPORT_MAX_UPLOAD_MB": "2",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.host, "0.0.0.0")
        self.assertEqual(settings.port, 9000)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.max_content_length, 2 * 1024 * 1024)

    def test_blank_integer_uses_default(self, mock_load_dotenv):
        with patch.dict(os.environ, {"INVOICE_EXPORT_PORT": " "}, clear=True):
            self.assertEqual(Settings.from_env().port, 8000)

    def test_invalid_integer(self, mock_load_dotenv):
        with patch.dict(os.environ, {"INVOICE_EXPORT_PORT": "eighty"}, clear=True):
            with self.assertRaises(ConfigurationError):
                Settings.from_env()

    def test_log_level(self, mock_load_dotenv):
        test_cases = [
            ("warning", "WARNING"),
            (" Error ", "ERROR"),
            ("", "INFO"),
        ]
        for raw, expected in test_cases:
            with self.subTest(raw=raw):
                with patch.dict(os.environ, {"INVOICE_EXPORT_LOG_LEVEL": raw}, clear=True):
                    self.assertEqual(Settings.from_env().log_level, expected)

    def test_invalid_log_level(self, mock_load_dotenv):
        with patch.dict(os.environ, {"INVOICE_EXPORT_LOG_LEVEL": "LOUD"}, clear=True):
            with self.assertRaises(ConfigurationError) as ctx:
                Settings.from_env()
        self.assertIn("INVOICE_EXPORT_LOG_LEVEL", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
