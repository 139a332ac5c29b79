from __future__ import annotations

import httpx
from pydantic import ValidationError

from ..errors import DirectoryError, DirectoryErrorKind
from ..models import BatchQuery, DirectoryResponse, DirectoryResult, SecretsBundle
from ..observability.logging import get_logger
from ..settings import settings

log = get_logger("twitch_directory")


def _headers(secrets: SecretsBundle) -> dict[str, str]:
    return {
        "Client-ID": secrets.directory_client_id,
        "Authorization": f"Bearer {secrets.directory_app_token}",
    }


def _get(http: httpx.Client | None, url: str, **kwargs) -> httpx.Response:
    if http is not None:
        return http.get(url, **kwargs)
    with httpx.Client() as client:
        return client.get(url, **kwargs)


def fetch_users(
    *,
    query: BatchQuery,
    secrets: SecretsBundle,
    http: httpx.Client | None = None,
) -> DirectoryResult | DirectoryError:
    """
    Resolve every identifier in `query` with a single Helix `users` call.

    Identifiers Twitch cannot resolve are simply absent from the result.
    """
    url = str(settings.directory_base_url or "").strip()
    params = query.to_params()

    try:
        resp = _get(http, url, params=params, headers=_headers(secrets), follow_redirects=False)
    except httpx.RequestError as e:
        log.error(
            "twitch_request_failed",
            error=str(e) or type(e).__name__,
            identifiers=len(params),
        )
        return DirectoryError(DirectoryErrorKind.TRANSPORT, detail=str(e) or type(e).__name__)

    if resp.status_code != 200:
        log.error(
            "twitch_response_error",
            status_code=resp.status_code,
            body_preview=(resp.text or "")[:300],
        )
        return DirectoryError(DirectoryErrorKind.UPSTREAM, status_code=resp.status_code)

    try:
        decoded = DirectoryResponse.model_validate_json(resp.content)
    except ValidationError as e:
        log.error("twitch_response_decode_failed", error=str(e))
        return DirectoryError(DirectoryErrorKind.DECODE, detail=str(e))

    log.info("twitch_users_resolved", requested=len(params), resolved=len(decoded.data))
    return DirectoryResult(records=tuple(decoded.data))
