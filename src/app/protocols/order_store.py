"""Protocolo do store de pedidos (colaborador externo)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.payment import OrderPaymentUpdate


class OrderStoreProtocol(Protocol):
    """Contrato mínimo para refletir o status do pagamento no pedido.

    Implementações devem ser idempotentes: a mesma atualização pode chegar
    mais de uma vez e fora de ordem.
    """

    async def apply_payment_update(self, update: OrderPaymentUpdate) -> None: ...
