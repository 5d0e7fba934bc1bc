"""Erros e helpers de parsing para a API do Mercado Pago."""

from __future__ import annotations

from typing import Any

from utils.errors import UpstreamError


class MercadoPagoApiError(UpstreamError):
    """Erro retornado pela API do Mercado Pago (status não-2xx).

    Attributes:
        status_code: Status HTTP da resposta
        error: Código textual do erro (ex.: bad_request)
        causes: Códigos/descrições de `cause[]`, quando presentes
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error: str | None = None,
        causes: list[str] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.error = error
        self.causes = causes or []

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


def _parse_causes(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    causes: list[str] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        description = item.get("description") or item.get("code")
        if description is not None:
            causes.append(str(description))
    return causes


def parse_mercadopago_error(
    status_code: int,
    response_data: Any,
) -> MercadoPagoApiError:
    """Monta MercadoPagoApiError a partir do body de erro.

    Body típico: `{"message": ..., "error": ..., "status": ..., "cause": [...]}`.
    Bodies fora desse formato viram `http_<status>`.

    Args:
        status_code: Status HTTP da resposta
        response_data: JSON decodificado (ou None se não era JSON)

    Returns:
        MercadoPagoApiError pronto para ser levantado
    """
    if not isinstance(response_data, dict):
        return MercadoPagoApiError(f"http_{status_code}", status_code=status_code)

    message = response_data.get("message") or response_data.get("error")
    return MercadoPagoApiError(
        str(message) if message else f"http_{status_code}",
        status_code=status_code,
        error=response_data.get("error"),
        causes=_parse_causes(response_data.get("cause")),
    )
