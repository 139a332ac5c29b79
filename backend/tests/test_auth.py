from __future__ import annotations

import pytest
import structlog
from structlog.testing import capture_logs

from tuser import auth
from tuser.auth import authenticate
from tuser.errors import AuthError, AuthErrorKind


def test_missing_token():
    assert authenticate("", "secret") == AuthError(AuthErrorKind.MISSING)


def test_wrong_token():
    assert authenticate("wrong", "secret") == AuthError(AuthErrorKind.MISMATCH)


def test_comparison_is_case_sensitive():
    assert authenticate("Secret", "secret") == AuthError(AuthErrorKind.MISMATCH)


def test_matching_token():
    assert authenticate("secret", "secret") is None


def test_error_messages_do_not_echo_secrets():
    err = authenticate("wrong-value", "secret")
    assert err is not None
    assert "wrong-value" not in str(err)
    assert "wrong-value" not in repr(err)


@pytest.mark.parametrize(
    "provided,event",
    [
        ("", "slack_command_token_missing"),
        ("wrong-value", "slack_command_token_mismatch"),
    ],
)
def test_failures_log_error_without_secret_values(monkeypatch, provided, event):
    with capture_logs() as logs:
        # Fresh logger so an earlier cached processor chain can't bypass capture.
        monkeypatch.setattr(auth, "log", structlog.get_logger("auth"))
        authenticate(provided, "expected-value")

    assert [(e["event"], e["log_level"]) for e in logs] == [(event, "error")]
    dumped = repr(logs)
    assert "expected-value" not in dumped
    if provided:
        assert provided not in dumped


def test_success_logs_nothing(monkeypatch):
    with capture_logs() as logs:
        monkeypatch.setattr(auth, "log", structlog.get_logger("auth"))
        authenticate("expected-value", "expected-value")
    assert logs == []
