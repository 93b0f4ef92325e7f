from __future__ import annotations

import pytest

from wellness.core.config import AppEnv, Settings, load_settings

# ---- valid values ----


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APP_ENV",
        "LOG_LEVEL",
        "LOG_JSON",
        "PORT",
        "DATABASE_URL",
        "JWT_PUBLIC_KEY",
        "REVIEW_PREVIEW_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.app_env == "dev"
    assert settings.log_level == "info"
    assert settings.log_json is False
    assert settings.port == 8000
    assert settings.database_url is None
    assert settings.jwt_public_key is None
    assert settings.review_preview_limit == 2


def test_load_settings_respects_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://db/wellness")
    monkeypatch.setenv("REVIEW_PREVIEW_LIMIT", "5")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "error"
    assert settings.log_json is True
    assert settings.port == 9000
    assert settings.database_url == "postgresql+asyncpg://db/wellness"
    assert settings.review_preview_limit == 5


def test_load_settings_normalizes_case_and_whitespace(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "  PROD ")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "debug"


def test_jwt_public_key_unescapes_newlines(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_PUBLIC_KEY", "-----BEGIN PUBLIC KEY-----\\nabc\\n-----END")
    settings = load_settings()
    assert settings.jwt_public_key == "-----BEGIN PUBLIC KEY-----\nabc\n-----END"


def test_empty_database_url_means_in_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "   ")
    assert load_settings().database_url is None


# ---- invalid values ----


def test_load_settings_rejects_invalid_app_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "staging")
    with pytest.raises(ValueError, match="APP_ENV must be dev|test|prod"):
        load_settings()


def test_load_settings_rejects_invalid_log_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "dev")
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="LOG_LEVEL must be debug|info|warning|error"):
        load_settings()


def test_load_settings_rejects_bad_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ValueError, match="PORT must be an integer"):
        load_settings()


def test_load_settings_rejects_bad_log_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_JSON", "maybe")
    with pytest.raises(ValueError, match="LOG_JSON must be a boolean"):
        load_settings()


def test_load_settings_rejects_negative_preview_limit(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("REVIEW_PREVIEW_LIMIT", "-1")
    with pytest.raises(ValueError, match="REVIEW_PREVIEW_LIMIT must be >= 0"):
        load_settings()


# ---- Settings properties ----


def _make_settings(app_env: AppEnv = "dev") -> Settings:
    return Settings(  # type: ignore[arg-type]
        app_env=app_env,
        log_level="info",
        log_json=False,
        port=8000,
        database_url=None,
    )


def test_settings_env_flags() -> None:
    assert _make_settings("dev").is_dev is True
    assert _make_settings("test").is_test is True
    prod = _make_settings("prod")
    assert prod.is_prod is True
    assert prod.is_dev is False


def test_settings_is_frozen() -> None:
    s = _make_settings()
    with pytest.raises(AttributeError):
        s.app_env = "prod"  # type: ignore[misc]
