"""Protocolo de notificação ao comprador (e-mail, WhatsApp etc.)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.payment import OrderPaymentUpdate


class PaymentNotifierProtocol(Protocol):
    """Contrato mínimo para avisar o comprador sobre mudança de pagamento."""

    async def notify_payment_update(self, update: OrderPaymentUpdate) -> None: ...
