"""Testes do composition root (validação de settings e factories)."""

from __future__ import annotations

import pytest

from app.bootstrap import (
    get_audit_store,
    get_card_payment_use_case,
    get_dedupe_store,
    get_payment_notification_use_case,
    get_pix_payment_use_case,
    validate_runtime_settings,
)
from app.bootstrap.dependencies import create_audit_store, create_dedupe_store
from app.infra.stores import (
    FirestoreAuditStore,
    MemoryAuditStore,
    MemoryDedupeStore,
    RedisDedupeStore,
)
from app.use_cases.payments import (
    CreateCardPaymentUseCase,
    CreatePixPaymentUseCase,
    ProcessPaymentNotificationUseCase,
)


@pytest.fixture
def dev_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEDUPE_BACKEND", "memory")
    monkeypatch.setenv("AUDIT_BACKEND", "memory")
    monkeypatch.setenv("MP_ACCESS_TOKEN", "TEST-token")
    monkeypatch.setenv("MP_WEBHOOK_SECRET", "secret")


class TestValidateRuntimeSettings:
    def test_valid_development_settings_pass(self, dev_env: None) -> None:
        validate_runtime_settings()

    def test_development_only_warns(
        self, dev_env: None, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("MP_ACCESS_TOKEN", "")

        with caplog.at_level("WARNING"):
            validate_runtime_settings()

        assert any(r.getMessage() == "settings_validation_failed" for r in caplog.records)

    def test_production_missing_token_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("MP_ACCESS_TOKEN", "")
        monkeypatch.delenv("REDIS_URL", raising=False)

        with pytest.raises(RuntimeError, match="MP_ACCESS_TOKEN"):
            validate_runtime_settings()

    def test_production_rejects_memory_dedupe(
        self, dev_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")

        with pytest.raises(RuntimeError, match="DEDUPE_BACKEND=memory"):
            validate_runtime_settings()


class TestFactories:
    def test_memory_backends(self, dev_env: None) -> None:
        assert isinstance(create_dedupe_store(), MemoryDedupeStore)
        assert isinstance(create_audit_store(), MemoryAuditStore)

    def test_redis_dedupe_backend(self, dev_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEDUPE_BACKEND", "redis")
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")

        assert isinstance(create_dedupe_store(), RedisDedupeStore)

    def test_redis_backend_without_url_raises(
        self, dev_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEDUPE_BACKEND", "redis")
        monkeypatch.delenv("REDIS_URL", raising=False)

        with pytest.raises(ValueError, match="REDIS_URL"):
            create_dedupe_store()

    def test_firestore_audit_backend(self, dev_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        from unittest.mock import MagicMock

        import app.bootstrap.dependencies as dependencies

        monkeypatch.setenv("AUDIT_BACKEND", "firestore")
        monkeypatch.setattr(dependencies, "create_firestore_client", lambda: MagicMock())

        assert isinstance(create_audit_store(), FirestoreAuditStore)


class TestGetters:
    def test_use_cases_are_wired(self, dev_env: None) -> None:
        assert isinstance(get_card_payment_use_case(), CreateCardPaymentUseCase)
        assert isinstance(get_pix_payment_use_case(), CreatePixPaymentUseCase)
        assert isinstance(get_payment_notification_use_case(), ProcessPaymentNotificationUseCase)

    def test_singletons_share_dedupe_store(self, dev_env: None) -> None:
        assert get_dedupe_store() is get_dedupe_store()
        assert get_audit_store() is get_audit_store()
