"""Testes de carregamento e validação das settings."""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    DedupeSettings,
    FirestoreSettings,
    MercadoPagoSettings,
    get_base_settings,
    get_dedupe_settings,
    get_firestore_settings,
    get_mercadopago_settings,
)


class TestMercadoPagoSettings:
    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MP_ACCESS_TOKEN", "APP_USR-123")
        monkeypatch.setenv("MP_WEBHOOK_SECRET", "s3cret")
        monkeypatch.setenv("MP_WEBHOOK_SIGNATURE_REQUIRED", "false")
        monkeypatch.setenv("MP_NOTIFICATION_URL", "https://loja.example/webhook")
        monkeypatch.setenv("MP_REQUEST_TIMEOUT_SECONDS", "5")

        settings = get_mercadopago_settings()

        assert settings.access_token == "APP_USR-123"
        assert settings.webhook_secret == "s3cret"
        assert settings.webhook_signature_required is False
        assert settings.notification_url == "https://loja.example/webhook"
        assert settings.request_timeout_seconds == 5.0

    def test_signature_required_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MP_WEBHOOK_SIGNATURE_REQUIRED", raising=False)
        assert get_mercadopago_settings().webhook_signature_required is True

    def test_api_base_url_defaults_to_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MP_API_BASE_URL", raising=False)
        assert get_mercadopago_settings().api_base_url == "https://api.mercadopago.com"

    def test_validate_reports_missing_credentials(self) -> None:
        errors = MercadoPagoSettings().validate()
        assert any("MP_ACCESS_TOKEN" in e for e in errors)
        assert any("MP_WEBHOOK_SECRET" in e for e in errors)

    def test_secret_optional_when_signature_not_required(self) -> None:
        settings = MercadoPagoSettings(access_token="x", webhook_signature_required=False)
        assert settings.validate() == []

    def test_validate_requires_https(self) -> None:
        settings = MercadoPagoSettings(
            access_token="x", webhook_secret="y", api_base_url="http://api.local"
        )
        assert settings.validate() == ["MP_API_BASE_URL deve usar https"]


class TestBaseSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("stage", "staging"), ("qualquer", "development")],
    )
    def test_environment_aliases(
        self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: str
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert get_base_settings().environment == expected

    def test_empty_service_name_is_invalid(self) -> None:
        assert BaseSettings(service_name="").validate() == ["SERVICE_NAME não pode ser vazio"]

    def test_redis_url_scheme_is_checked(self) -> None:
        assert BaseSettings(redis_url="rediss://default:x@upstash.io:6379").validate() == []
        assert BaseSettings(redis_url="http://cache").validate() == [
            "REDIS_URL deve usar redis:// ou rediss://"
        ]


class TestDedupeSettings:
    def test_default_backend_follows_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DEDUPE_BACKEND", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "prod")
        assert get_dedupe_settings().backend == "redis"

    def test_redis_requires_url(self) -> None:
        errors = DedupeSettings(backend="redis").validate(BaseSettings())
        assert errors == ["DEDUPE_BACKEND=redis requer REDIS_URL configurado"]

    def test_memory_forbidden_outside_development(self) -> None:
        errors = DedupeSettings(backend="memory").validate(BaseSettings(environment="staging"))
        assert len(errors) == 1


class TestFirestoreSettings:
    def test_firestore_backend_requires_project(self) -> None:
        errors = FirestoreSettings(audit_backend="firestore").validate("")
        assert errors

    def test_falls_back_to_gcp_project(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUDIT_BACKEND", "firestore")
        settings = get_firestore_settings()
        assert settings.audit_backend == "firestore"
        assert settings.validate("meu-projeto") == []
