"""Use case de criação de cobrança com cartão tokenizado."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.mercadopago.idempotency import compute_idempotency_key
from app.domain.payment import CardPaymentRequest, PaymentResult
from app.domain.payment_status import PaymentStatus

from ._charge_helpers import create_once, parse_request

if TYPE_CHECKING:
    from api.payload_builders.mercadopago.card import CardPayloadBuilder
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol

logger = logging.getLogger(__name__)


class CreateCardPaymentUseCase:
    """Orquestra validação, build, dedupe e criação da cobrança de cartão."""

    payment_method = "credit_card"

    def __init__(
        self,
        gateway: PaymentGatewayProtocol,
        dedupe: AsyncDedupeProtocol,
        builder: CardPayloadBuilder,
        *,
        dedupe_ttl: int = 86400,
        processing_ttl: int = 30,
    ) -> None:
        self._gateway = gateway
        self._dedupe = dedupe
        self._builder = builder
        self._dedupe_ttl = dedupe_ttl
        self._processing_ttl = processing_ttl

    async def execute(self, body: Any) -> PaymentResult:
        """Cria a cobrança e devolve o resultado normalizado.

        `success` é True apenas quando o provedor aprova na hora.

        Raises:
            ValidationError: formData/orderData ausentes ou inválidos
            DuplicateRequestError: Mesmo pedido, valor e token já enviados
            UpstreamError: Falha do Mercado Pago
        """
        request = parse_request(CardPaymentRequest, body)
        order = request.order_data
        external_reference = order.resolve_external_reference()
        idempotency_key = compute_idempotency_key(
            self.payment_method,
            external_reference,
            order.total,
            card_token=request.form_data.token,
        )

        payload = self._builder.build(request.form_data, order, external_reference)
        payment = await create_once(
            self._gateway,
            self._dedupe,
            payload,
            idempotency_key,
            dedupe_ttl=self._dedupe_ttl,
            processing_ttl=self._processing_ttl,
        )

        logger.info(
            "card_payment_created",
            extra={
                "payment_id": payment.id,
                "payment_status": payment.status,
                "external_reference": external_reference,
            },
        )
        return PaymentResult(
            success=payment.status == PaymentStatus.APPROVED,
            payment_id=payment.id,
            status=payment.status,
            status_detail=payment.status_detail,
            payment_method="credit_card",
            external_reference=payment.external_reference or external_reference,
            transaction_amount=payment.transaction_amount,
            installments=payment.installments,
            card_last_four=payment.card_last_four,
        )
