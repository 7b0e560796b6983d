"""
Flask application exposing the export over HTTP.
"""

import logging
from typing import Optional

from flask import Flask, Response, jsonify, request

from .config import Settings
from .handler import handle_export_request

logger = logging.getLogger(__name__)

EXPORT_ROUTES = ("/api/export-csv-zip", "/.netlify/functions/export-csv-zip")


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = settings.max_content_length

    def export_csv_zip():
        result = handle_export_request(request.headers, request.get_data())
        return Response(result.body, status=result.status_code, headers=result.headers)

    for index, rule in enumerate(EXPORT_ROUTES):
        app.add_url_rule(rule, f"export_csv_zip_{index}", export_csv_zip, methods=["POST"])

    @app.get("/health")
    def health():
        return jsonify(status="ok"), 200

    return app
