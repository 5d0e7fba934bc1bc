"""Stores em memória - apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.protocols.audit_store import PaymentAuditStoreProtocol
from app.protocols.dedupe import AsyncDedupeProtocol

if TYPE_CHECKING:
    from app.domain.payment import OrderPaymentUpdate

logger = logging.getLogger(__name__)


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória - apenas para dev/test."""

    def __init__(self) -> None:
        self._processed: dict[str, float] = {}  # key -> expires_at
        self._processing: dict[str, float] = {}

    @staticmethod
    def _alive(store: dict[str, float], key: str, now: float) -> bool:
        expires_at = store.get(key)
        if expires_at is None:
            return False
        if expires_at <= now:
            del store[key]
            return False
        return True

    async def is_duplicate(self, key: str, ttl: int = 3600) -> bool:
        """Verifica se chave já foi processada ou está em processamento."""
        now = time.time()
        return self._alive(self._processed, key, now) or self._alive(
            self._processing, key, now
        )

    async def mark_processing(self, key: str, ttl: int = 30) -> bool:
        now = time.time()
        if self._alive(self._processed, key, now) or self._alive(self._processing, key, now):
            return False
        self._processing[key] = now + ttl
        return True

    async def mark_processed(self, key: str, ttl: int = 3600) -> None:
        """Marca chave como processada e solta o lock."""
        self._processed[key] = time.time() + ttl
        self._processing.pop(key, None)

    async def unmark_processing(self, key: str) -> None:
        self._processing.pop(key, None)


class MemoryAuditStore(PaymentAuditStoreProtocol):
    """Store de auditoria em memória - apenas para dev/test."""

    def __init__(self, max_records: int = 10000) -> None:
        self._records: list[dict[str, Any]] = []
        self._max_records = max_records

    def append(self, record: dict[str, Any]) -> None:
        """Append de registro de auditoria."""
        self._records.append(record)
        # Limita tamanho para evitar memory leak em dev
        if len(self._records) > self._max_records:
            self._records = self._records[-self._max_records :]

    def get_records(self) -> list[dict[str, Any]]:
        """Retorna todos os registros (apenas para testes)."""
        return list(self._records)


class MemoryOrderStore:
    """Order store em memória - guarda a última atualização por pedido.

    A persistência real do pedido é externa a este serviço; este store
    permite rodar o fluxo completo em dev e inspecioná-lo em testes.
    """

    def __init__(self) -> None:
        self._orders: dict[str, OrderPaymentUpdate] = {}
        self._history: list[OrderPaymentUpdate] = []

    async def apply_payment_update(self, update: OrderPaymentUpdate) -> None:
        """Registra a atualização (sobrescreve o estado anterior do pedido)."""
        self._history.append(update)
        key = update.order_id or f"payment:{update.payment_id}"
        self._orders[key] = update
        logger.info(
            "order_payment_status_updated",
            extra={
                "order_id": update.order_id,
                "payment_id": update.payment_id,
                "order_status": update.order_status,
            },
        )

    def get(self, order_id: str) -> OrderPaymentUpdate | None:
        return self._orders.get(order_id)

    def history(self) -> list[OrderPaymentUpdate]:
        """Retorna todas as atualizações recebidas (apenas para testes)."""
        return list(self._history)
