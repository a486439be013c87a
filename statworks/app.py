"""Flask application serving statworks SVG cards."""

from __future__ import annotations

from typing import Callable, Optional

from flask import Flask, Response, request

from .config import CACHE_CONTROL, ERROR_CACHE_CONTROL, Settings
from .github import GitHubClient, SummaryAggregator
from .logging import configure_logging
from .models import AccountSummary
from .service import CardService

SVG_MIMETYPE = "image/svg+xml"


def _svg_response(svg: str, cacheable: bool) -> Response:
    resp = Response(svg, status=200, mimetype=SVG_MIMETYPE)
    resp.headers["Cache-Control"] = CACHE_CONTROL if cacheable else ERROR_CACHE_CONTROL
    return resp


def create_app(
    settings: Optional[Settings] = None,
    fetch_summary: Optional[Callable[[str], AccountSummary]] = None,
    service: Optional[CardService] = None,
) -> Flask:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    if service is None:
        if fetch_summary is None:
            fetch_summary = SummaryAggregator(GitHubClient(settings)).fetch_summary
        service = CardService(settings, fetch_summary)

    app = Flask(__name__)
    app.config["STATWORKS_SETTINGS"] = settings
    app.extensions["statworks"] = service

    @app.after_request
    def _cors(resp: Response) -> Response:
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        return resp

    @app.route("/health", methods=["GET"])
    def health():
        return Response("statworks", status=200, mimetype="text/plain")

    @app.route("/summary", methods=["GET"])
    @app.route("/api/summary", methods=["GET"])
    def summary():
        result = service.serve(request.url, request.args)
        return _svg_response(result.svg, result.cacheable)

    return app
