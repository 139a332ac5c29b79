from __future__ import annotations

import json
import time

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from ..errors import ConfigError, ConfigErrorKind
from ..models import SecretsBundle
from ..observability.logging import get_logger
from ..settings import settings
from .aws_clients import secretsmanager_client

log = get_logger("secrets")

# Optional in-process cache, only used when SECRETS_CACHE_TTL_SECONDS > 0.
_cache_value: SecretsBundle | None = None
_cache_at: float = 0.0


def _read_secret_string(secret_id: str) -> str:
    try:
        resp = secretsmanager_client().get_secret_value(SecretId=secret_id)
    except (ClientError, BotoCoreError) as e:
        log.error("secret_fetch_failed", secret_id=secret_id, error=str(e) or "unknown_error")
        raise ConfigError(ConfigErrorKind.SECRET_UNAVAILABLE, secret_id=secret_id, cause=e) from e

    raw = resp.get("SecretString")
    if not isinstance(raw, str) or not raw.strip():
        log.error("secret_string_missing", secret_id=secret_id)
        raise ConfigError(ConfigErrorKind.SECRET_UNAVAILABLE, secret_id=secret_id)
    return raw


def parse_secrets(raw: str, *, secret_id: str) -> SecretsBundle:
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        log.error("secret_not_json", secret_id=secret_id)
        raise ConfigError(ConfigErrorKind.SECRET_MALFORMED, secret_id=secret_id, cause=e) from e
    if not isinstance(obj, dict):
        log.error("secret_not_object", secret_id=secret_id)
        raise ConfigError(ConfigErrorKind.SECRET_MALFORMED, secret_id=secret_id)

    try:
        return SecretsBundle.model_validate(obj)
    except ValidationError as e:
        # Field names only; values may be secret.
        missing = [".".join(str(p) for p in err.get("loc") or ()) for err in e.errors()]
        log.error("secret_fields_invalid", secret_id=secret_id, fields=missing)
        raise ConfigError(ConfigErrorKind.SECRET_MALFORMED, secret_id=secret_id, cause=e) from e


def fetch_secrets(*, secret_id: str | None = None, force_refresh: bool = False) -> SecretsBundle:
    """
    Load the Slack/Twitch credential bundle from Secrets Manager.

    Raises ConfigError when the secret is absent or malformed.
    """
    sid = str(secret_id or settings.tuser_secret_id or "").strip()
    if not sid:
        raise ConfigError(ConfigErrorKind.SECRET_UNAVAILABLE, secret_id="")

    global _cache_value, _cache_at
    ttl = max(0, int(settings.secrets_cache_ttl_seconds or 0))
    now = time.time()
    if ttl and not force_refresh and _cache_value is not None and (now - _cache_at) < ttl:
        return _cache_value

    bundle = parse_secrets(_read_secret_string(sid), secret_id=sid)
    if ttl:
        _cache_value = bundle
        _cache_at = now
    return bundle


def clear_cache() -> None:
    global _cache_value, _cache_at
    _cache_value = None
    _cache_at = 0.0
