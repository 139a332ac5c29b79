from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Slack attachment accent color for every user card.
BRAND_COLOR = "#73535ad"


@dataclass(frozen=True, slots=True)
class InboundCommand:
    shared_secret: str
    text: str


class SecretsBundle(BaseModel):
    """Shape of the JSON stored in Secrets Manager."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    inbound_shared_secret: str = Field(alias="slack_token")
    directory_client_id: str = Field(alias="twitch_client_id")
    directory_client_secret: str = Field(alias="twitch_client_secret")
    directory_app_token: str = Field(alias="twitch_app_token")

    def __repr__(self) -> str:
        # Keep secret values out of logs and tracebacks.
        return f"SecretsBundle(directory_client_id={self.directory_client_id!r})"

    __str__ = __repr__


@dataclass(frozen=True, slots=True)
class BatchQuery:
    numeric_ids: tuple[str, ...] = ()
    login_names: tuple[str, ...] = ()

    def to_params(self) -> list[tuple[str, str]]:
        """Query-string parameters; numeric ids always precede logins."""
        return [("id", v) for v in self.numeric_ids] + [("login", v) for v in self.login_names]


class DirectoryRecord(BaseModel):
    """One user as returned by the Helix `users` endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(alias="type")
    id: str
    login: str
    display_name: str
    account_type: str = Field(alias="broadcaster_type")
    description: str
    avatar_url: str = Field(alias="profile_image_url")
    offline_image_url: str


class DirectoryResponse(BaseModel):
    data: list[DirectoryRecord]


@dataclass(frozen=True, slots=True)
class DirectoryResult:
    records: tuple[DirectoryRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class AttachmentCard:
    color: str
    author_name: str
    author_icon: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "color": self.color,
            "author_name": self.author_name,
            "author_icon": self.author_icon,
        }


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    visibility: str = "in_channel"
    text: str = ""
    attachments: tuple[AttachmentCard, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        """Slack response JSON. Empty `text` and `attachments` are omitted."""
        payload: dict[str, Any] = {"response_type": self.visibility}
        if self.text:
            payload["text"] = self.text
        if self.attachments:
            payload["attachments"] = [a.to_payload() for a in self.attachments]
        return payload
