from __future__ import annotations

from typing import Callable

import httpx

from .auth import authenticate
from .errors import AuthError, DirectoryError, QueryError
from .formatter import format_response
from .infrastructure.directory import fetch_users
from .infrastructure.secrets import fetch_secrets
from .models import BatchQuery, DirectoryResult, InboundCommand, OutboundMessage, SecretsBundle
from .observability.logging import get_logger
from .query import build_query

log = get_logger("tuser")


def handle_command(
    command: InboundCommand,
    *,
    secrets_provider: Callable[[], SecretsBundle] | None = None,
    http: httpx.Client | None = None,
) -> OutboundMessage:
    """
    Run one `/tuser` invocation: authenticate, build the query, look the users
    up, and render exactly one Slack message.

    ConfigError from the secrets provider is not caught here.
    """
    # An empty token is rejected without touching Secrets Manager.
    if not command.shared_secret:
        missing = authenticate(command.shared_secret, "")
        if missing is not None:
            return _failed(missing, command)

    secrets = (secrets_provider or fetch_secrets)()

    auth_error = authenticate(command.shared_secret, secrets.inbound_shared_secret)
    if auth_error is not None:
        return _failed(auth_error, command)

    match build_query(command.text):
        case QueryError() as query_error:
            return _failed(query_error, command)
        case BatchQuery() as query:
            pass

    match fetch_users(query=query, secrets=secrets, http=http):
        case DirectoryError() as directory_error:
            return _failed(directory_error, command)
        case DirectoryResult() as result:
            log.info(
                "user_lookup_succeeded",
                ids=len(query.numeric_ids),
                logins=len(query.login_names),
                resolved=len(result),
            )
            return format_response(result, command.text)


def _failed(error: AuthError | QueryError | DirectoryError, command: InboundCommand) -> OutboundMessage:
    log.warning(
        "user_lookup_failed",
        error_type=type(error).__name__,
        error_kind=error.kind.value,
        status_code=getattr(error, "status_code", None),
        reason=str(error),
    )
    return format_response(error, command.text)
