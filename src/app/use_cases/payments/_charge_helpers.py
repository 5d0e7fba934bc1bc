"""Helpers compartilhados pelos use cases de cobrança."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from app.protocols.validator import ValidationError
from utils.errors import DuplicateRequestError

if TYPE_CHECKING:
    from pydantic import BaseModel

    from api.connectors.mercadopago.models import MercadoPagoPayment
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol

logger = logging.getLogger(__name__)


def parse_request(model: type[BaseModel], body: Any) -> Any:
    """Valida o body contra o modelo, convertendo falhas em ValidationError.

    Raises:
        ValidationError: Body ausente, não-objeto ou com campos inválidos
    """
    if not isinstance(body, dict) or not body:
        raise ValidationError("Dados do pagamento ausentes")
    try:
        return model.model_validate(body)
    except PydanticValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise ValidationError(
            f"Dados do pagamento inválidos: {', '.join(fields)}",
            fields=fields,
        ) from exc


async def create_once(
    gateway: PaymentGatewayProtocol,
    dedupe: AsyncDedupeProtocol,
    payload: dict[str, Any],
    idempotency_key: str,
    *,
    dedupe_ttl: int,
    processing_ttl: int,
) -> MercadoPagoPayment:
    """Cria o pagamento no provedor no máximo uma vez por chave.

    Raises:
        DuplicateRequestError: Chave já processada ou em processamento
        UpstreamError: Falha do provedor (o lock é liberado para nova tentativa)
    """
    if await dedupe.is_duplicate(idempotency_key, ttl=dedupe_ttl):
        logger.info("payment_duplicate_request", extra={"idempotency_key": idempotency_key[:12]})
        raise DuplicateRequestError(idempotency_key)

    if not await dedupe.mark_processing(idempotency_key, ttl=processing_ttl):
        logger.info(
            "payment_duplicate_in_flight", extra={"idempotency_key": idempotency_key[:12]}
        )
        raise DuplicateRequestError(idempotency_key)

    try:
        payment = await gateway.create_payment(payload, idempotency_key)
    except Exception:
        await dedupe.unmark_processing(idempotency_key)
        raise
    await dedupe.mark_processed(idempotency_key, ttl=dedupe_ttl)
    return payment
