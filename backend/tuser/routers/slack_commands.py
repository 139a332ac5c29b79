from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from ..handler import handle_command
from ..inbound import parse_command_body

router = APIRouter(tags=["slack"])


@router.post("/slack/commands")
async def slack_commands(request: Request) -> dict[str, Any]:
    # Slack sends application/x-www-form-urlencoded for slash commands.
    body = await request.body()
    command = parse_command_body(body, request.headers.get("content-type"))
    # Secrets Manager and Twitch calls are blocking.
    message = await run_in_threadpool(handle_command, command)
    return message.to_payload()
