"""Despacho de notificações de pagamento por status.

Cada variante de PaymentStatus tem um handler; os handlers delegam a
colaboradores injetados (order store e notificador) e não fazem IO direto.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.payment import OrderPaymentUpdate
from app.domain.payment_status import ORDER_STATUS_BY_PAYMENT_STATUS, PaymentStatus

if TYPE_CHECKING:
    from api.connectors.mercadopago.models import MercadoPagoPayment
    from app.protocols.notifier import PaymentNotifierProtocol
    from app.protocols.order_store import OrderStoreProtocol

logger = logging.getLogger(__name__)


def build_order_update(
    payment: MercadoPagoPayment,
    order_status: str,
) -> OrderPaymentUpdate:
    """Converte o pagamento do provedor na atualização entregue ao pedido."""
    return OrderPaymentUpdate(
        order_id=payment.external_reference,
        payment_id=payment.id,
        status=payment.status,
        order_status=order_status,
        amount=payment.transaction_amount,
        payment_method=payment.payment_method_id,
        paid_at=payment.date_approved,
        payer_email=payment.payer_email,
    )


class PaymentStatusHandler:
    """Handler de uma variante de status.

    Atualiza o pedido para `order_status` e, se `notify_buyer`, avisa o
    comprador.
    """

    def __init__(
        self,
        status: PaymentStatus,
        order_status: str,
        order_store: OrderStoreProtocol,
        notifier: PaymentNotifierProtocol,
        *,
        notify_buyer: bool,
    ) -> None:
        self.status = status
        self.order_status = order_status
        self.notify_buyer = notify_buyer
        self._order_store = order_store
        self._notifier = notifier

    async def handle(self, payment: MercadoPagoPayment) -> None:
        update = build_order_update(payment, self.order_status)
        await self._order_store.apply_payment_update(update)
        if self.notify_buyer:
            await self._notifier.notify_payment_update(update)
        logger.info(
            "payment_status_handled",
            extra={
                "payment_id": payment.id,
                "payment_status": self.status.value,
                "order_status": self.order_status,
                "notified": self.notify_buyer,
            },
        )


class UnrecognizedStatusHandler:
    """Status fora do conjunto tratado: apenas registra aviso."""

    status = PaymentStatus.UNRECOGNIZED

    async def handle(self, payment: MercadoPagoPayment) -> None:
        logger.warning(
            "payment_status_unrecognized",
            extra={"payment_id": payment.id, "raw_status": payment.status},
        )


# Variantes que avisam o comprador (pending aguarda a confirmação do PIX)
_NOTIFY_STATUSES = frozenset(
    {
        PaymentStatus.APPROVED,
        PaymentStatus.REJECTED,
        PaymentStatus.CANCELLED,
        PaymentStatus.REFUNDED,
    }
)


class PaymentStatusDispatcher:
    """Seleciona o handler da variante e o executa."""

    def __init__(
        self,
        order_store: OrderStoreProtocol,
        notifier: PaymentNotifierProtocol,
    ) -> None:
        self._handlers: dict[PaymentStatus, PaymentStatusHandler | UnrecognizedStatusHandler] = {
            status: PaymentStatusHandler(
                status,
                order_status,
                order_store,
                notifier,
                notify_buyer=status in _NOTIFY_STATUSES,
            )
            for status, order_status in ORDER_STATUS_BY_PAYMENT_STATUS.items()
        }
        self._handlers[PaymentStatus.UNRECOGNIZED] = UnrecognizedStatusHandler()

    def handler_for(
        self, status: PaymentStatus
    ) -> PaymentStatusHandler | UnrecognizedStatusHandler:
        return self._handlers[status]

    async def dispatch(self, payment: MercadoPagoPayment) -> PaymentStatus:
        """Despacha o pagamento e retorna a variante aplicada."""
        status = PaymentStatus.parse(payment.status)
        await self._handlers[status].handle(payment)
        return status
