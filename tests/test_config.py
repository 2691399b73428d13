"""Tests for settings and API key rotation."""

import pytest

from nutrilog.config import ApiKeyRing, Settings, parse_api_keys


def test_parse_api_keys_strips_and_dedupes() -> None:
    ring = parse_api_keys(" key-a, key-b,,key-a ")
    assert ring.keys == ["key-a", "key-b"]
    assert ring.current() == "key-a"


def test_parse_api_keys_requires_one_key() -> None:
    with pytest.raises(ValueError):
        parse_api_keys("")


def test_api_key_ring_wraps_around() -> None:
    ring = ApiKeyRing(["a", "b", "c"], cursor=2)

    assert ring.current() == "c"
    assert ring.rotate() == "a"
    assert len(ring) == 3


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "env-key")
    monkeypatch.setenv("OPENAI_API_KEYS", "k1,k2")
    monkeypatch.setenv("MEAL_TRANSACTION_TIMEOUT_MS", "2000")

    settings = Settings()

    assert settings.supabase_url == "https://env.supabase.co"
    assert settings.meal_transaction_timeout_ms == 2000
    assert settings.default_timezone == "UTC"
    assert not settings.push_configured


def test_push_configured_requires_both_values(settings) -> None:
    assert not settings.model_copy(update={"fcm_project_id": "demo"}).push_configured
    assert settings.model_copy(
        update={"fcm_project_id": "demo", "fcm_access_token": "token"}
    ).push_configured
