"""Notificador padrão: registra o aviso ao comprador no log estruturado.

Entrega de e-mail/WhatsApp é externa; plugar uma implementação de
PaymentNotifierProtocol no composition root para envio real.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.payment import OrderPaymentUpdate

logger = logging.getLogger(__name__)


class LoggingPaymentNotifier:
    """Implementa PaymentNotifierProtocol apenas logando (sem PII)."""

    def __init__(self) -> None:
        self.sent: int = 0

    async def notify_payment_update(self, update: OrderPaymentUpdate) -> None:
        self.sent += 1
        logger.info(
            "payment_notification_queued",
            extra={
                "order_id": update.order_id,
                "payment_id": update.payment_id,
                "status": update.status,
                "has_payer_email": bool(update.payer_email),
            },
        )
