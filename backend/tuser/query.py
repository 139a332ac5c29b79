from __future__ import annotations

import re

from .errors import QueryError, QueryErrorKind
from .models import BatchQuery

# Whitespace and commas both separate identifiers.
_SEPARATOR_RE = re.compile(r"[\s,]+")
# Twitch user ids are unsigned 32-bit integers.
_NUMERIC_ID_RE = re.compile(r"\+?[0-9]+")
_MAX_NUMERIC_ID = 2**32 - 1


def is_numeric_id(value: str) -> bool:
    if not _NUMERIC_ID_RE.fullmatch(value):
        return False
    return int(value) <= _MAX_NUMERIC_ID


def build_query(text: str) -> BatchQuery | QueryError:
    """
    Turn `/tuser` command text into one batched lookup.

    Words are split on runs of whitespace and commas, so "123, foo 456,,bar"
    yields ids ["123", "456"] and logins ["foo", "bar"]. A token that is only
    commas contributes nothing. Order is kept and duplicates are passed
    through unchanged.
    """
    ids: list[str] = []
    logins: list[str] = []

    for item in _SEPARATOR_RE.split(text or ""):
        if not item:
            continue
        if is_numeric_id(item):
            ids.append(item)
        else:
            logins.append(item)

    if not ids and not logins:
        return QueryError(QueryErrorKind.NO_IDENTIFIERS)

    return BatchQuery(numeric_ids=tuple(ids), login_names=tuple(logins))
