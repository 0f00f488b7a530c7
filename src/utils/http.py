"""Helpers shared by the serverless endpoint handlers."""

import asyncio
import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Coroutine
from urllib.parse import parse_qs, urlsplit

from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)


def run_async(coro: Coroutine) -> Any:
    """Run a coroutine from a synchronous request handler."""
    return asyncio.run(coro)


def query_params(path: str) -> dict[str, list[str]]:
    """Parse the query string of a request path."""
    return parse_qs(urlsplit(path or "").query, keep_blank_values=True)


def send_json(handler, status: int, payload: dict, headers: dict[str, str] | None = None) -> None:
    """Write a JSON response on a BaseHTTPRequestHandler."""
    handler.send_response(status)
    handler.send_header('Content-Type', 'application/json')
    for name, value in (headers or {}).items():
        handler.send_header(name, value)
    handler.end_headers()
    handler.wfile.write(json.dumps(payload).encode('utf-8'))


class JsonHandler(BaseHTTPRequestHandler):
    """Base for GET endpoints returning JSON; subclasses implement handle_get."""

    def handle_get(self, params: dict[str, list[str]]) -> tuple[int, dict]:
        raise NotImplementedError

    def do_GET(self):
        """Handle GET request inside a correlation context."""
        LoggingConfig.setup_logging()
        header_name = LoggingConfig.LOG_CORRELATION_ID_HEADER
        incoming_id = self.headers.get(header_name) if self.headers else None

        with correlation_context(incoming_id) as correlation_id:
            try:
                status, payload = self.handle_get(query_params(self.path))
            except Exception as e:
                logger.exception("Error handling request", path=self.path, error=str(e))
                status, payload = 500, {"error": "internal server error"}

            send_json(self, status, payload, headers={header_name: correlation_id})
