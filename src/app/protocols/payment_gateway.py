"""Protocolo do gateway de pagamentos.

Evita dependência direta da camada api nos use cases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from api.connectors.mercadopago.models import MercadoPagoPayment


class PaymentGatewayProtocol(Protocol):
    """Contrato mínimo para criar e consultar pagamentos no provedor.

    Falhas de rede ou status não-2xx levantam UpstreamError.
    """

    async def create_payment(
        self,
        payload: dict[str, Any],
        idempotency_key: str,
    ) -> MercadoPagoPayment: ...

    async def get_payment(self, payment_id: str) -> MercadoPagoPayment: ...
