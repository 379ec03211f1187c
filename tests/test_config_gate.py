from __future__ import annotations

import pytest

from academy_portal.errors import PaymentConfigurationError
from academy_portal.payments.config_gate import (
    KEY_INVALID_FORMAT,
    KEY_MISSING,
    KEY_PLACEHOLDER,
    check_secret_key,
    evaluate,
    is_configured,
)
from academy_portal.settings import PaymentCredentials


def test_missing_key_is_not_configured() -> None:
    state = evaluate()
    assert state.is_configured is False
    assert state.error == KEY_MISSING
    assert state.publishable_key is None


def test_empty_key_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "")
    assert evaluate().error == KEY_MISSING


def test_placeholder_key_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_test_placeholder_key")
    state = evaluate()
    assert state.is_configured is False
    assert state.error == KEY_PLACEHOLDER
    assert state.publishable_key is None


@pytest.mark.parametrize("key", ["sk_test_123", "pub_live_abc", "PK_test_abc", "test"])
def test_wrong_prefix_is_invalid_format(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", key)
    state = evaluate()
    assert state.is_configured is False
    assert state.error == KEY_INVALID_FORMAT


@pytest.mark.parametrize("key", ["pk_test_51Habc", "pk_live_51Habc"])
def test_valid_key_is_configured(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", key)
    state = evaluate()
    assert state.is_configured is True
    assert state.error is None
    assert state.publishable_key == key


def test_public_env_alias_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEXT_PUBLIC_STRIPE_PUBLISHABLE_KEY", "pk_live_abc")
    assert evaluate().publishable_key == "pk_live_abc"


def test_environment_is_reread_on_every_call(monkeypatch: pytest.MonkeyPatch) -> None:
    assert is_configured() is False

    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_test_placeholder_key")
    assert evaluate().error == KEY_PLACEHOLDER

    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_test_fixed")
    assert is_configured() is True


def test_explicit_credentials_bypass_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_PUBLISHABLE_KEY", "pk_test_from_env")
    state = evaluate(PaymentCredentials(STRIPE_PUBLISHABLE_KEY="bad"))
    assert state.error == KEY_INVALID_FORMAT


def test_secret_key_must_be_present() -> None:
    with pytest.raises(PaymentConfigurationError, match="not set"):
        check_secret_key()


def test_secret_key_must_have_known_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", "pk_test_oops")
    with pytest.raises(PaymentConfigurationError) as exc_info:
        check_secret_key()
    assert "pk_test_oops" not in str(exc_info.value)
    assert exc_info.value.to_response() == {"error": "Stripe configuration error"}


@pytest.mark.parametrize("secret", ["sk_test_abc", "sk_live_abc"])
def test_secret_key_is_returned(monkeypatch: pytest.MonkeyPatch, secret: str) -> None:
    monkeypatch.setenv("STRIPE_SECRET_KEY", secret)
    assert check_secret_key() == secret
