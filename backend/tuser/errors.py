from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AuthErrorKind(str, Enum):
    MISSING = "missing"
    MISMATCH = "mismatch"


class QueryErrorKind(str, Enum):
    NO_IDENTIFIERS = "no_identifiers"


class DirectoryErrorKind(str, Enum):
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    DECODE = "decode"


class ConfigErrorKind(str, Enum):
    SECRET_UNAVAILABLE = "secret_unavailable"
    SECRET_MALFORMED = "secret_malformed"


@dataclass(frozen=True, slots=True)
class AuthError:
    """The inbound shared secret was absent or did not match."""

    kind: AuthErrorKind

    def __str__(self) -> str:
        if self.kind is AuthErrorKind.MISSING:
            return "No Slack token provided"
        return "Bad Slack token provided"


@dataclass(frozen=True, slots=True)
class QueryError:
    kind: QueryErrorKind = QueryErrorKind.NO_IDENTIFIERS

    def __str__(self) -> str:
        return "No valid Twitch usernames or IDs found"


@dataclass(frozen=True, slots=True)
class DirectoryError:
    """Failure talking to the user directory.

    `status_code` is only set for UPSTREAM; `detail` carries the underlying
    message for logs and is never shown to the Slack user.
    """

    kind: DirectoryErrorKind
    status_code: int | None = None
    detail: str | None = None

    def __str__(self) -> str:
        if self.kind is DirectoryErrorKind.UPSTREAM:
            return f"Received non-200 response from Twitch ({self.status_code})"
        if self.kind is DirectoryErrorKind.DECODE:
            return "Could not decode Twitch response"
        return "Request to Twitch failed"


# Errors that end up as the generic "lookup failed" chat message.
LookupFailure = AuthError | QueryError | DirectoryError


class ConfigError(RuntimeError):
    """Secrets could not be loaded. Unrecoverable for the invocation.

    Unlike the value-typed errors above this one is raised: it is an
    infrastructure failure for operators, not something to render in Slack.
    """

    def __init__(self, kind: ConfigErrorKind, *, secret_id: str, cause: Exception | None = None):
        self.kind = kind
        self.secret_id = secret_id
        self.cause = cause
        super().__init__(f"{kind.value}: {secret_id}")
