"""Helpers compartilhados pelas rotas de cobrança."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from fastapi import Request

    from app.domain.payment import PaymentMethod


async def read_json_body(request: Request) -> Any:
    """Lê o body como JSON; body vazio ou inválido vira None."""
    raw_body = await request.body()
    if not raw_body:
        return None
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def payment_error_response(
    payment_method: PaymentMethod,
    error: str,
    status_label: str,
    status_code: int,
) -> JSONResponse:
    """Body de erro no formato esperado pelo checkout."""
    return JSONResponse(
        content={
            "success": False,
            "error": error,
            "payment_method": payment_method,
            "status": status_label,
        },
        status_code=status_code,
    )
