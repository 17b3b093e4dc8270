"""Test helper functions."""

import json
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Dict, Optional
from unittest.mock import Mock

from src.models.wizard import EditingStep, Previewing, WizardState


@dataclass
class HandlerResponse:
    status: int
    headers: Dict[str, str]
    body: Any


def invoke_handler(
    handler_cls,
    method: str,
    path: str = "/",
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> HandlerResponse:
    """Drive a Vercel ``BaseHTTPRequestHandler`` without a socket."""
    if isinstance(body, (dict, list)):
        raw = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        raw = body.encode("utf-8")
    else:
        raw = body or b""

    h = handler_cls.__new__(handler_cls)
    h.command = method
    h.path = path
    h.headers = {"Content-Length": str(len(raw)), "Content-Type": "application/json", **(headers or {})}
    h.rfile = BytesIO(raw)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()

    getattr(h, f"do_{method}")()

    sent_headers = {call.args[0]: call.args[1] for call in h.send_header.call_args_list}
    written = h.wfile.getvalue()
    return HandlerResponse(
        status=h.send_response.call_args.args[0],
        headers=sent_headers,
        body=json.loads(written) if written else None,
    )


def state_at_step(step: int, draft=None) -> WizardState:
    kwargs = {"stage": EditingStep(step=step)}
    if draft is not None:
        kwargs["draft"] = draft
    return WizardState(**kwargs)


def state_in_preview(draft=None) -> WizardState:
    kwargs = {"stage": Previewing()}
    if draft is not None:
        kwargs["draft"] = draft
    return WizardState(**kwargs)
