"""Use case de criação de cobrança PIX."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.mercadopago.idempotency import compute_idempotency_key
from app.domain.payment import PaymentResult, PixPaymentRequest

from ._charge_helpers import create_once, parse_request

if TYPE_CHECKING:
    from api.payload_builders.mercadopago.pix import PixPayloadBuilder
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol

logger = logging.getLogger(__name__)


class CreatePixPaymentUseCase:
    """Orquestra validação, build, dedupe e criação da cobrança PIX.

    PIX nasce pendente e só liquida via webhook, por isso `success` é sempre
    False na criação; o checkout exibe o QR code e aguarda.
    """

    payment_method = "pix"

    def __init__(
        self,
        gateway: PaymentGatewayProtocol,
        dedupe: AsyncDedupeProtocol,
        builder: PixPayloadBuilder,
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
        """Cria a cobrança PIX e devolve os dados do QR code.

        Raises:
            ValidationError: orderData ausente ou inválido
            DuplicateRequestError: Mesmo pedido e valor já enviados
            UpstreamError: Falha do Mercado Pago
        """
        request = parse_request(PixPaymentRequest, body)
        order = request.order_data
        external_reference = order.resolve_external_reference()
        idempotency_key = compute_idempotency_key(
            self.payment_method, external_reference, order.total
        )

        payload = self._builder.build(order, external_reference)
        payment = await create_once(
            self._gateway,
            self._dedupe,
            payload,
            idempotency_key,
            dedupe_ttl=self._dedupe_ttl,
            processing_ttl=self._processing_ttl,
        )

        logger.info(
            "pix_payment_created",
            extra={
                "payment_id": payment.id,
                "payment_status": payment.status,
                "external_reference": external_reference,
                "has_qr_code": payment.qr_code is not None,
            },
        )
        return PaymentResult(
            success=False,
            payment_id=payment.id,
            status=payment.status,
            status_detail=payment.status_detail,
            payment_method="pix",
            external_reference=payment.external_reference or external_reference,
            transaction_amount=payment.transaction_amount,
            qr_code=payment.qr_code,
            qr_code_base64=payment.qr_code_base64,
            ticket_url=payment.ticket_url,
            expires_at=payment.date_of_expiration,
        )
