from __future__ import annotations

import httpx

from tuser.errors import DirectoryError, DirectoryErrorKind
from tuser.infrastructure.directory import fetch_users
from tuser.models import BatchQuery, DirectoryResult

from conftest import make_secrets, twitch_user


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_single_batched_request_with_credentials():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [twitch_user(), twitch_user(id="2", login="foo")]})

    query = BatchQuery(numeric_ids=("123", "456"), login_names=("foo", "bar"))
    with _client(handler) as http:
        result = fetch_users(query=query, secrets=make_secrets(), http=http)

    assert len(seen) == 1
    req = seen[0]
    assert req.method == "GET"
    assert req.url.path == "/helix/users"
    assert req.url.params.multi_items() == [
        ("id", "123"),
        ("id", "456"),
        ("login", "foo"),
        ("login", "bar"),
    ]
    assert req.headers["Client-ID"] == "client-id"
    assert req.headers["Authorization"] == "Bearer app-token"

    assert isinstance(result, DirectoryResult)
    assert [r.id for r in result.records] == ["19571641", "2"]
    assert result.records[0].avatar_url == "http://x/y.png"
    assert result.records[0].account_type == "partner"


def test_empty_data_is_success():
    with _client(lambda req: httpx.Response(200, json={"data": []})) as http:
        result = fetch_users(query=BatchQuery(login_names=("ghost",)), secrets=make_secrets(), http=http)
    assert result == DirectoryResult()


def test_non_200_is_upstream_error():
    with _client(lambda req: httpx.Response(500, text="oops")) as http:
        result = fetch_users(query=BatchQuery(login_names=("ninja",)), secrets=make_secrets(), http=http)
    assert result == DirectoryError(DirectoryErrorKind.UPSTREAM, status_code=500)


def test_redirect_is_upstream_error_and_not_followed():
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(302, headers={"Location": "https://example.com/elsewhere"})

    with _client(handler) as http:
        result = fetch_users(query=BatchQuery(login_names=("ninja",)), secrets=make_secrets(), http=http)
    assert isinstance(result, DirectoryError)
    assert result.kind is DirectoryErrorKind.UPSTREAM
    assert result.status_code == 302
    assert len(calls) == 1


def test_201_is_not_success():
    with _client(lambda req: httpx.Response(201, json={"data": []})) as http:
        result = fetch_users(query=BatchQuery(login_names=("ninja",)), secrets=make_secrets(), http=http)
    assert isinstance(result, DirectoryError)
    assert result.status_code == 201


def test_invalid_json_is_decode_error():
    with _client(lambda req: httpx.Response(200, text="<html>")) as http:
        result = fetch_users(query=BatchQuery(login_names=("ninja",)), secrets=make_secrets(), http=http)
    assert isinstance(result, DirectoryError)
    assert result.kind is DirectoryErrorKind.DECODE


def test_wrong_shape_is_decode_error():
    bad = twitch_user()
    del bad["display_name"]
    with _client(lambda req: httpx.Response(200, json={"data": [bad]})) as http:
        result = fetch_users(query=BatchQuery(login_names=("ninja",)), secrets=make_secrets(), http=http)
    assert isinstance(result, DirectoryError)
    assert result.kind is DirectoryErrorKind.DECODE


def test_connection_failure_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as http:
        result = fetch_users(query=BatchQuery(login_names=("ninja",)), secrets=make_secrets(), http=http)
    assert isinstance(result, DirectoryError)
    assert result.kind is DirectoryErrorKind.TRANSPORT
    assert "connection refused" in str(result.detail)


def test_timeout_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _client(handler) as http:
        result = fetch_users(query=BatchQuery(numeric_ids=("1",)), secrets=make_secrets(), http=http)
    assert isinstance(result, DirectoryError)
    assert result.kind is DirectoryErrorKind.TRANSPORT
