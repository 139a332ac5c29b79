from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Ensure `backend/` is on sys.path so `import tuser.*` works in tests.
BACKEND_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_DIR))

from tuser.models import SecretsBundle  # noqa: E402

SECRET = "secret"


def twitch_user(**overrides: Any) -> dict[str, Any]:
    user = {
        "type": "",
        "id": "19571641",
        "login": "ninja",
        "display_name": "Ninja",
        "broadcaster_type": "partner",
        "description": "Professional gamer",
        "profile_image_url": "http://x/y.png",
        "offline_image_url": "http://x/offline.png",
    }
    user.update(overrides)
    return user


def make_secrets(token: str = SECRET) -> SecretsBundle:
    return SecretsBundle.model_validate(
        {
            "slack_token": token,
            "twitch_client_id": "client-id",
            "twitch_client_secret": "client-secret",
            "twitch_app_token": "app-token",
        }
    )


class FakeTwitch:
    """Routes directory calls through an httpx.MockTransport and records them."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda req: httpx.Response(
            200, json={"data": [twitch_user()]}
        )

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self._handle))


@pytest.fixture
def twitch(monkeypatch) -> FakeTwitch:
    from tuser.infrastructure import directory

    fake = FakeTwitch()

    def _get(http, url, **kwargs):
        with fake.client() as client:
            return client.get(url, **kwargs)

    monkeypatch.setattr(directory, "_get", _get)
    return fake


@pytest.fixture
def fake_secrets(monkeypatch) -> SecretsBundle:
    from tuser import handler

    bundle = make_secrets()
    monkeypatch.setattr(handler, "fetch_secrets", lambda: bundle)
    return bundle
