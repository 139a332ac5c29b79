from __future__ import annotations

from .errors import AuthError, DirectoryError, LookupFailure, QueryError
from .models import BRAND_COLOR, AttachmentCard, DirectoryResult, OutboundMessage


def failure_text(original_text: str) -> str:
    return f"User lookup failed for {original_text}"


def format_response(result: DirectoryResult | LookupFailure, original_text: str) -> OutboundMessage:
    """
    Render a lookup outcome as an in-channel Slack message.

    Failures of any kind collapse to one generic line; details stay in logs.
    """
    match result:
        case DirectoryResult(records=records):
            return OutboundMessage(
                attachments=tuple(
                    AttachmentCard(
                        color=BRAND_COLOR,
                        author_name=f"{r.display_name}: {r.id}",
                        author_icon=r.avatar_url,
                    )
                    for r in records
                )
            )
        case AuthError() | QueryError() | DirectoryError():
            return OutboundMessage(text=failure_text(original_text))
    raise TypeError(f"unexpected lookup result: {type(result).__name__}")
