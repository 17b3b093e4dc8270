"""Helpers shared by the Vercel ``BaseHTTPRequestHandler`` functions."""

import asyncio
import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse


def read_json_body(request: BaseHTTPRequestHandler) -> Any:
    """Parse the request body as JSON. Empty bodies parse as ``{}``.

    Raises ``ValueError`` on malformed JSON.
    """
    content_length = int(request.headers.get('Content-Length', 0) or 0)
    raw_body = request.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
    return json.loads(raw_body) if raw_body else {}


def query_param(request: BaseHTTPRequestHandler, name: str) -> Optional[str]:
    values = parse_qs(urlparse(request.path).query).get(name)
    return values[0] if values else None


def send_json(
    request: BaseHTTPRequestHandler,
    status: int,
    payload: Any,
    headers: Optional[dict] = None,
) -> None:
    request.send_response(status)
    request.send_header('Content-Type', 'application/json')
    for key, value in (headers or {}).items():
        request.send_header(key, value)
    request.end_headers()
    request.wfile.write(json.dumps(payload).encode('utf-8'))


def run_async(coro):
    """Run a coroutine to completion from a synchronous handler."""
    return asyncio.run(coro)
