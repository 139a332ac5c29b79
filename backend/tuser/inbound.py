from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from urllib.parse import parse_qs

from .models import InboundCommand
from .observability.logging import get_logger

log = get_logger("inbound")


def _field(form: dict[str, Any], key: str) -> str:
    v = form.get(key)
    if isinstance(v, list):
        v = v[0] if v else ""
    return "" if v is None else str(v)


def parse_command_body(body: bytes | str | None, content_type: str | None = None) -> InboundCommand:
    """
    Decode a slash-command body into an InboundCommand.

    Slack sends application/x-www-form-urlencoded; JSON is accepted too.
    Unparseable bodies yield empty fields, which authentication then rejects.
    """
    raw = body.decode("utf-8", errors="ignore") if isinstance(body, bytes) else str(body or "")
    ctype = str(content_type or "").split(";")[0].strip().lower()
    looks_json = ctype == "application/json" or (not ctype and raw.lstrip().startswith("{"))

    form: dict[str, Any] = {}
    if looks_json:
        try:
            obj = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            log.warning("slack_command_body_invalid_json", body_len=len(raw))
            obj = {}
        form = obj if isinstance(obj, dict) else {}
    else:
        form = parse_qs(raw, keep_blank_values=True)

    return InboundCommand(shared_secret=_field(form, "token"), text=_field(form, "text"))


def _header(headers: dict[str, Any] | None, name: str) -> str | None:
    for k, v in (headers or {}).items():
        if str(k).lower() == name.lower():
            return str(v) if v is not None else None
    return None


def parse_lambda_event(event: dict[str, Any]) -> InboundCommand:
    """Extract the command from an API Gateway proxy event."""
    body = event.get("body") if isinstance(event, dict) else None
    if isinstance(body, str) and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8", errors="ignore")
        except (binascii.Error, ValueError):
            log.warning("lambda_event_body_invalid_base64")
            body = ""
    headers = event.get("headers") if isinstance(event, dict) else None
    return parse_command_body(body, _header(headers if isinstance(headers, dict) else None, "content-type"))
