#!/usr/bin/env python3
"""
Request handling for the PDF to CSV ZIP export.

Requests carry a JSON body ``{"filename", "mimeType", "base64"}`` where
``base64`` holds the PDF. Successful responses carry the ZIP archive,
failures a JSON object with a single ``error`` field.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .archive import ZIP_CONTENT_TYPE
from .exceptions import RequestError
from .parser import InvoiceParser

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

NOT_JSON_MESSAGE = "Send JSON: { filename, mimeType, base64 }"
INVALID_JSON_MESSAGE = "Request body is not valid JSON"
MISSING_PAYLOAD_MESSAGE = "Missing 'base64' PDF content"

DEFAULT_FILENAME = "invoice.pdf"
DEFAULT_MIME_TYPE = "application/pdf"


@dataclass
class ExportResponse:
    """Transport neutral response: status, headers and a byte body."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @classmethod
    def error(cls, message: str, status_code: int) -> "ExportResponse":
        return cls(
            status_code=status_code,
            headers={"Content-Type": JSON_CONTENT_TYPE},
            body=json.dumps({"error": message}).encode("utf-8"),
        )

    @property
    def is_binary(self) -> bool:
        return self.headers.get("Content-Type") == ZIP_CONTENT_TYPE

    def to_event(self) -> Dict[str, Any]:
        """Render as a serverless function response."""
        if self.is_binary:
            body = base64.b64encode(self.body).decode("ascii")
        else:
            body = self.body.decode("utf-8")
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": body,
            "isBase64Encoded": self.is_binary,
        }


def _get_header(headers: Optional[Mapping[str, str]], name: str) -> str:
    if not headers:
        return ""
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value or ""
    return ""


def decode_request(headers: Optional[Mapping[str, str]], body: Union[str, bytes, None]) -> Dict[str, Any]:
    """
    Validate an export request and return its JSON payload.

    Raises:
        RequestError: the request is not JSON or lacks the PDF content
    """
    if JSON_CONTENT_TYPE not in _get_header(headers, "Content-Type").lower():
        raise RequestError(NOT_JSON_MESSAGE)

    try:
        payload = json.loads(body or "{}")
    except ValueError:
        raise RequestError(INVALID_JSON_MESSAGE)

    if not isinstance(payload, dict) or not payload.get("base64"):
        raise RequestError(MISSING_PAYLOAD_MESSAGE)
    if not isinstance(payload["base64"], str):
        raise RequestError(MISSING_PAYLOAD_MESSAGE)

    payload.setdefault("filename", DEFAULT_FILENAME)
    payload.setdefault("mimeType", DEFAULT_MIME_TYPE)
    return payload


def handle_export_request(
    headers: Optional[Mapping[str, str]],
    body: Union[str, bytes, None],
    parser: Optional[InvoiceParser] = None,
) -> ExportResponse:
    """Turn an export request into a ZIP response or an error response."""
    try:
        payload = decode_request(headers, body)
    except RequestError as e:
        logger.warning(f"Rejected request: {e.message}")
        return ExportResponse.error(e.message, e.status_code)

    logger.info(f"Exporting {payload['filename']} ({payload['mimeType']})")

    try:
        pdf_bytes = base64.b64decode(payload["base64"])
        parser = parser or InvoiceParser()
        archive = parser.export_pdf(pdf_bytes)
    except Exception as e:
        logger.exception(f"Export failed: {e}")
        return ExportResponse.error(str(e), 500)

    return ExportResponse(
        status_code=200,
        headers={
            "Content-Type": ZIP_CONTENT_TYPE,
            "Content-Disposition": archive.content_disposition,
        },
        body=archive.content,
    )


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Serverless function entry point."""
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body)
        except (binascii.Error, ValueError):
            return ExportResponse.error(INVALID_JSON_MESSAGE, 400).to_event()

    return handle_export_request(event.get("headers") or {}, body).to_event()
