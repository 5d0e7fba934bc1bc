"""Factories de stores, colaboradores e use cases.

Este módulo centraliza a criação de implementações concretas baseadas nas
configurações de ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.mercadopago.http_client import create_mercadopago_http_client
from api.payload_builders.mercadopago import CardPayloadBuilder, PixPayloadBuilder
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.stores import (
    FirestoreAuditStore,
    LoggingPaymentNotifier,
    MemoryAuditStore,
    MemoryDedupeStore,
    MemoryOrderStore,
    RedisDedupeStore,
)
from app.services.payment_status_dispatcher import PaymentStatusDispatcher
from app.use_cases.payments import (
    CreateCardPaymentUseCase,
    CreatePixPaymentUseCase,
    ProcessPaymentNotificationUseCase,
)
from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_firestore_settings,
    get_mercadopago_settings,
)

if TYPE_CHECKING:
    from app.protocols.audit_store import PaymentAuditStoreProtocol
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.notifier import PaymentNotifierProtocol
    from app.protocols.order_store import OrderStoreProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Stores
# ──────────────────────────────────────────────────────────────────────────────


def create_dedupe_store() -> AsyncDedupeProtocol:
    """Cria store de dedupe baseado na configuração.

    Lê DEDUPE_BACKEND (default: redis em staging/production, memory fora):
    - "memory": MemoryDedupeStore (dev only)
    - "redis": RedisDedupeStore (staging/production)
    """
    backend = get_dedupe_settings().backend

    if backend == "redis":
        store: AsyncDedupeProtocol = RedisDedupeStore(create_async_redis_client())
        logger.info("dedupe_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_dedupe_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        store = MemoryDedupeStore()
        logger.info("dedupe_store_created", extra={"backend": "memory"})
        return store

    msg = f"DEDUPE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_audit_store() -> PaymentAuditStoreProtocol:
    """Cria store de auditoria baseado na configuração.

    Lê AUDIT_BACKEND:
    - "memory": MemoryAuditStore (dev only)
    - "firestore": FirestoreAuditStore (staging/production)
    """
    settings = get_firestore_settings()

    if settings.audit_backend == "firestore":
        store: PaymentAuditStoreProtocol = FirestoreAuditStore(
            create_firestore_client(),
            collection_name=settings.collection_audit,
        )
        logger.info("audit_store_created", extra={"backend": "firestore"})
        return store

    if settings.audit_backend == "memory":
        store = MemoryAuditStore()
        logger.info("audit_store_created", extra={"backend": "memory"})
        return store

    msg = f"AUDIT_BACKEND inválido: {settings.audit_backend}"
    raise ValueError(msg)


def create_order_store() -> OrderStoreProtocol:
    """Order store padrão (persistência real do pedido é externa)."""
    return MemoryOrderStore()


def create_payment_notifier() -> PaymentNotifierProtocol:
    """Notificador padrão (entrega de e-mail é externa)."""
    return LoggingPaymentNotifier()


def create_payment_gateway() -> PaymentGatewayProtocol:
    """Cliente HTTP do Mercado Pago como gateway de pagamentos."""
    return create_mercadopago_http_client(get_mercadopago_settings())


# ──────────────────────────────────────────────────────────────────────────────
# Use cases
# ──────────────────────────────────────────────────────────────────────────────


def create_card_payment_use_case(
    gateway: PaymentGatewayProtocol,
    dedupe: AsyncDedupeProtocol,
) -> CreateCardPaymentUseCase:
    mercadopago = get_mercadopago_settings()
    dedupe_settings = get_dedupe_settings()
    return CreateCardPaymentUseCase(
        gateway=gateway,
        dedupe=dedupe,
        builder=CardPayloadBuilder(mercadopago.store_name, mercadopago.notification_url),
        dedupe_ttl=dedupe_settings.ttl_seconds,
        processing_ttl=dedupe_settings.processing_ttl_seconds,
    )


def create_pix_payment_use_case(
    gateway: PaymentGatewayProtocol,
    dedupe: AsyncDedupeProtocol,
) -> CreatePixPaymentUseCase:
    mercadopago = get_mercadopago_settings()
    dedupe_settings = get_dedupe_settings()
    return CreatePixPaymentUseCase(
        gateway=gateway,
        dedupe=dedupe,
        builder=PixPayloadBuilder(mercadopago.store_name, mercadopago.notification_url),
        dedupe_ttl=dedupe_settings.ttl_seconds,
        processing_ttl=dedupe_settings.processing_ttl_seconds,
    )


def create_payment_notification_use_case(
    gateway: PaymentGatewayProtocol,
    dedupe: AsyncDedupeProtocol,
    audit_store: PaymentAuditStoreProtocol,
    order_store: OrderStoreProtocol,
    notifier: PaymentNotifierProtocol,
) -> ProcessPaymentNotificationUseCase:
    dedupe_settings = get_dedupe_settings()
    return ProcessPaymentNotificationUseCase(
        gateway=gateway,
        dedupe=dedupe,
        audit_store=audit_store,
        dispatcher=PaymentStatusDispatcher(order_store, notifier),
        dedupe_ttl=dedupe_settings.ttl_seconds,
        processing_ttl=dedupe_settings.processing_ttl_seconds,
    )
