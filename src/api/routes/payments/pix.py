"""Endpoint de cobrança PIX.

Endpoints:
- POST /create-payment: cria pagamento PIX e devolve QR code

PIX nasce pendente: success é sempre False na resposta; a confirmação
chega pelo webhook.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.routes.payments._common import payment_error_response, read_json_body
from app.bootstrap import get_pix_payment_use_case
from app.observability import (
    correlation_id_from_headers,
    reset_correlation_id,
    set_correlation_id,
)
from app.protocols.validator import ValidationError
from utils.errors import DuplicateRequestError, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter()

PAYMENT_METHOD = "pix"


@router.post("/create-payment", response_model=None)
async def create_pix_payment(request: Request) -> JSONResponse:
    """Cria cobrança PIX e devolve os dados do QR code ao checkout."""
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        body = await read_json_body(request)
        try:
            result = await get_pix_payment_use_case().execute(body)
        except ValidationError as exc:
            logger.info(
                "pix_payment_invalid",
                extra={"payment_method": PAYMENT_METHOD, "fields": exc.fields},
            )
            return payment_error_response(
                PAYMENT_METHOD, str(exc), "invalid", status.HTTP_400_BAD_REQUEST
            )
        except DuplicateRequestError:
            return payment_error_response(
                PAYMENT_METHOD,
                "Pagamento já enviado para este pedido",
                "duplicate",
                status.HTTP_409_CONFLICT,
            )
        except UpstreamError as exc:
            logger.warning(
                "pix_payment_failed",
                extra={"payment_method": PAYMENT_METHOD, "status_code": exc.status_code},
            )
            return payment_error_response(
                PAYMENT_METHOD,
                f"Erro no PIX: {exc}",
                "failed",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception:
            logger.exception("pix_payment_error", extra={"payment_method": PAYMENT_METHOD})
            return payment_error_response(
                PAYMENT_METHOD,
                "Erro no PIX: erro interno",
                "failed",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return JSONResponse(content=result.to_response())
    finally:
        reset_correlation_id(token)
