"""Endpoints de webhook do Mercado Pago.

Endpoints:
- GET /webhook: health simples do endpoint
- POST /webhook: recebimento de notificações de pagamento

Fluxo do POST:
1. JSON (objeto) e assinatura HMAC (x-signature, x-request-id)
2. Filtro por tipo: só `payment` consulta o provedor
3. Consulta do pagamento, dedupe por pagamento/status, despacho, auditoria

Segurança:
- Assinatura obrigatória por padrão; só é dispensada com
  MP_WEBHOOK_SIGNATURE_REQUIRED=false
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.connectors.mercadopago.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from app.bootstrap import get_payment_notification_use_case
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.use_cases.payments import PaymentIdMissingError, PaymentLookupError
from config.settings import get_mercadopago_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/webhook")
async def webhook_status() -> dict[str, Any]:
    """Confirma que o endpoint está no ar."""
    return {
        "status": "ok",
        "message": "Webhook endpoint ativo",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.post("/webhook", response_model=None)
async def receive_webhook(request: Request) -> JSONResponse:
    """Recebimento de notificações do Mercado Pago.

    Returns:
        200 com status do processamento, ou erro 400/401/500.
    """
    token = set_correlation_id(correlation_id_from_headers(request.headers))

    try:
        settings = get_mercadopago_settings()
        raw_body = await request.body()

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=request.headers,
                secret=settings.webhook_secret or None,
                signature_required=settings.webhook_signature_required,
                query_data_id=request.query_params.get("data.id"),
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"correlation_id": get_correlation_id(), "reason": exc.reason},
            )
            return JSONResponse(
                content={"error": "invalid_signature", "reason": exc.reason},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"correlation_id": get_correlation_id(), "error": str(exc)},
            )
            return JSONResponse(
                content={"error": "invalid_json"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "correlation_id": get_correlation_id(),
                "signature_valid": signature_result.valid,
                "signature_skipped": signature_result.skipped,
                "notification_type": payload.get("type"),
                "payload_size": len(raw_body),
            },
        )

        try:
            outcome = await get_payment_notification_use_case().execute(
                payload,
                payment_id=signature_result.data_id,
            )
        except PaymentIdMissingError:
            return JSONResponse(
                content={"error": "payment_id_missing", "message": "ID do pagamento não encontrado"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except PaymentLookupError:
            return JSONResponse(
                content={
                    "error": "payment_not_found",
                    "message": "Erro ao buscar detalhes do pagamento",
                },
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={"correlation_id": get_correlation_id()},
            )
            return JSONResponse(
                content={"error": "internal_error", "message": "Erro interno do servidor"},
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if outcome.kind == "ignored":
            return JSONResponse(
                content={
                    "status": "received",
                    "message": "Notificação recebida",
                    "type": outcome.notification_type,
                }
            )

        return JSONResponse(
            content={
                "status": "success",
                "message": "Webhook processado com sucesso",
                "payment_id": outcome.payment_id,
            }
        )
    finally:
        reset_correlation_id(token)
