from __future__ import annotations

import json
from typing import Any

from .handler import handle_command
from .inbound import parse_lambda_event
from .observability.context import request_id_var
from .observability.logging import configure_logging, get_logger
from .settings import settings

configure_logging(level=settings.log_level)
log = get_logger("lambda")


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """
    API Gateway proxy entry point for the `/tuser` slash command.

    ConfigError propagates so the invocation fails visibly to operators
    instead of answering in Slack.
    """
    rid = str(getattr(context, "aws_request_id", "") or "") or None
    token = request_id_var.set(rid)
    try:
        command = parse_lambda_event(event or {})
        message = handle_command(command)
        return {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(message.to_payload()),
        }
    except Exception:
        log.exception("lambda_invocation_failed")
        raise
    finally:
        request_id_var.reset(token)
