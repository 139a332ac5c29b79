from __future__ import annotations

import hmac

from .errors import AuthError, AuthErrorKind
from .observability.logging import get_logger

log = get_logger("auth")


def authenticate(provided_secret: str, expected_secret: str) -> AuthError | None:
    """
    Check the Slack verification token sent with a slash command.

    Returns None on success. Secret values are never logged.
    """
    provided = provided_secret or ""
    if not provided:
        log.error("slack_command_token_missing")
        return AuthError(AuthErrorKind.MISSING)

    if not hmac.compare_digest(provided.encode("utf-8"), (expected_secret or "").encode("utf-8")):
        log.error("slack_command_token_mismatch")
        return AuthError(AuthErrorKind.MISMATCH)

    return None
