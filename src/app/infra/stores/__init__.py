"""Stores - implementações concretas de persistência.

Módulos disponíveis:
    - redis_dedupe_store: Store de dedupe usando Redis (Upstash)
    - firestore_audit_store: Store de auditoria usando Firestore
    - memory_stores: Stores em memória para desenvolvimento/testes
    - logging_notifier: Notificador padrão baseado em log
"""

from __future__ import annotations

from app.infra.stores.firestore_audit_store import FirestoreAuditStore
from app.infra.stores.logging_notifier import LoggingPaymentNotifier
from app.infra.stores.memory_stores import (
    MemoryAuditStore,
    MemoryDedupeStore,
    MemoryOrderStore,
)
from app.infra.stores.redis_dedupe_store import RedisDedupeStore

__all__ = [
    # Firestore
    "FirestoreAuditStore",
    # Memory (dev/test)
    "MemoryAuditStore",
    "MemoryDedupeStore",
    "MemoryOrderStore",
    # Notificação
    "LoggingPaymentNotifier",
    # Redis (Upstash)
    "RedisDedupeStore",
]
