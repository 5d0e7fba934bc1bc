"""Helpers de logging para a API do Mercado Pago (sem PII)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import MercadoPagoApiError

logger = logging.getLogger(__name__)


def log_api_error(
    api_error: MercadoPagoApiError,
    method: str,
    endpoint: str,
) -> None:
    """Loga erro do Mercado Pago sem expor dados sensíveis."""
    logger.warning(
        "mercadopago_api_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": api_error.status_code,
            "error_code": api_error.error,
            "causes": api_error.causes,
        },
    )


def log_success(
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "mercadopago_request_ok",
        extra={
            "method": method,
            "endpoint": endpoint,
            "status_code": status_code,
        },
    )
