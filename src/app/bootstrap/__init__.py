"""Bootstrap da aplicação - inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_pix_payment_use_case

    # Na inicialização do serviço
    initialize_app()

    # Obter use case pronto
    use_case = get_pix_payment_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_firestore_settings,
    get_mercadopago_settings,
)

# Nome do serviço para logs
SERVICE_NAME = "checkout_pagamentos"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    Configura logging estruturado JSON com correlation_id.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"mercadopago: {error}" for error in get_mercadopago_settings().validate())
    errors.extend(f"dedupe: {error}" for error in get_dedupe_settings().validate(base))
    errors.extend(
        f"firestore: {error}" for error in get_firestore_settings().validate(base.gcp_project)
    )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_dedupe_store():
    """Obtém store de dedupe (singleton compartilhado por cobranças e webhook)."""
    from app.bootstrap.dependencies import create_dedupe_store
    return create_dedupe_store()


@lru_cache(maxsize=1)
def get_audit_store():
    """Obtém store de auditoria (singleton)."""
    from app.bootstrap.dependencies import create_audit_store
    return create_audit_store()


@lru_cache(maxsize=1)
def get_order_store():
    from app.bootstrap.dependencies import create_order_store
    return create_order_store()


@lru_cache(maxsize=1)
def get_payment_notifier():
    from app.bootstrap.dependencies import create_payment_notifier
    return create_payment_notifier()


@lru_cache(maxsize=1)
def get_payment_gateway():
    """Obtém gateway Mercado Pago (singleton)."""
    from app.bootstrap.dependencies import create_payment_gateway
    return create_payment_gateway()


@lru_cache(maxsize=1)
def get_card_payment_use_case():
    """Obtém use case de cobrança com cartão."""
    from app.bootstrap.dependencies import create_card_payment_use_case
    return create_card_payment_use_case(get_payment_gateway(), get_dedupe_store())


@lru_cache(maxsize=1)
def get_pix_payment_use_case():
    """Obtém use case de cobrança PIX."""
    from app.bootstrap.dependencies import create_pix_payment_use_case
    return create_pix_payment_use_case(get_payment_gateway(), get_dedupe_store())


@lru_cache(maxsize=1)
def get_payment_notification_use_case():
    """Obtém use case de notificações de pagamento."""
    from app.bootstrap.dependencies import create_payment_notification_use_case
    return create_payment_notification_use_case(
        get_payment_gateway(),
        get_dedupe_store(),
        get_audit_store(),
        get_order_store(),
        get_payment_notifier(),
    )


def reset_dependencies() -> None:
    """Limpa os singletons (testes e troca de settings em runtime)."""
    for getter in (
        get_dedupe_store,
        get_audit_store,
        get_order_store,
        get_payment_notifier,
        get_payment_gateway,
        get_card_payment_use_case,
        get_pix_payment_use_case,
        get_payment_notification_use_case,
    ):
        getter.cache_clear()
