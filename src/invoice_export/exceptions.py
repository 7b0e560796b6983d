"""
Exceptions raised by the invoice CSV exporter.
"""


class InvoiceExportError(Exception):
    """Base class for all exporter errors."""


class PDFExtractionError(InvoiceExportError):
    """The PDF could not be turned into text."""


class RequestError(InvoiceExportError):
    """A request was rejected before any parsing was attempted."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationError(InvoiceExportError):
    """An environment setting could not be interpreted."""
