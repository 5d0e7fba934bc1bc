"""Cliente HTTP especializado para a API de pagamentos do Mercado Pago.

Estende HttpClient genérico com comportamentos específicos do provedor:
- Bearer token e X-Idempotency-Key nas criações
- Parsing de erros (message, error, cause[])
- Logging estruturado sem PII (tokens, e-mail, CPF)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from config.settings.mercadopago import MERCADOPAGO_API_BASE_URL, PAYMENTS_PATH

from .errors import MercadoPagoApiError, parse_mercadopago_error
from .http_base import HttpClient, HttpClientConfig, HttpError
from .models import MercadoPagoPayment
from .mp_logging import log_api_error, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import MercadoPagoSettings

logger: logging.Logger = logging.getLogger(__name__)


class MercadoPagoHttpClient(HttpClient):
    """Cliente HTTP para /v1/payments.

    Implementa PaymentGatewayProtocol: os use cases recebem uma instância
    pronta pelo composition root.
    """

    def __init__(
        self,
        access_token: str,
        config: HttpClientConfig | None = None,
        api_base_url: str = MERCADOPAGO_API_BASE_URL,
    ) -> None:
        """Inicializa cliente Mercado Pago.

        Args:
            access_token: Bearer token da API
            config: Configuração HTTP base
            api_base_url: URL base (sobrescrita em sandbox/testes)
        """
        super().__init__(config)
        self._access_token = access_token
        self._payments_endpoint = f"{api_base_url.rstrip('/')}{PAYMENTS_PATH}"

    async def create_payment(
        self,
        payload: dict[str, Any],
        idempotency_key: str,
    ) -> MercadoPagoPayment:
        """Cria pagamento (cartão ou PIX).

        Raises:
            ValueError: Se access_token ou idempotency_key estiverem vazios
            MercadoPagoApiError: Se o provedor responder não-2xx
            HttpError: Se houver falha de rede/timeout
        """
        if not idempotency_key:
            raise ValueError("idempotency_key é obrigatório para criar pagamentos")
        headers = self._build_headers()
        headers["X-Idempotency-Key"] = idempotency_key

        endpoint = self._payments_endpoint
        response = await self.post(endpoint, json=payload, headers=headers)
        data = self._process_response(response, "POST", endpoint)
        return MercadoPagoPayment.from_dict(data)

    async def get_payment(self, payment_id: str) -> MercadoPagoPayment:
        """Consulta detalhes de um pagamento.

        Raises:
            ValueError: Se access_token ou payment_id estiverem vazios
            MercadoPagoApiError: Se o provedor responder não-2xx (ex.: 404)
            HttpError: Se houver falha de rede/timeout
        """
        if not payment_id:
            raise ValueError("payment_id é obrigatório")
        headers = self._build_headers()

        endpoint = f"{self._payments_endpoint}/{payment_id}"
        response = await self.get(endpoint, headers=headers)
        data = self._process_response(response, "GET", PAYMENTS_PATH + "/{id}")
        return MercadoPagoPayment.from_dict(data)

    def _build_headers(self) -> dict[str, str]:
        if not self._access_token or not self._access_token.strip():
            logger.error("mercadopago_access_token_missing")
            raise ValueError(
                "access_token é obrigatório. Verifique se MP_ACCESS_TOKEN está configurado."
            )
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._access_token}",
        }

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        endpoint: str,
    ) -> dict[str, Any]:
        """Valida status e decodifica o JSON da resposta."""
        try:
            response_data = response.json()
        except json.JSONDecodeError:
            response_data = None

        if response.status_code >= 400:
            api_error = parse_mercadopago_error(response.status_code, response_data)
            log_api_error(api_error, method, endpoint)
            raise api_error

        if not isinstance(response_data, dict):
            logger.error(
                "mercadopago_invalid_response",
                extra={"method": method, "endpoint": endpoint},
            )
            raise HttpError("invalid_response_json", status_code=response.status_code)

        log_success(method, endpoint, response.status_code)
        return response_data


def create_mercadopago_http_client(
    settings: MercadoPagoSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MercadoPagoHttpClient:
    """Factory para criar cliente Mercado Pago com config das settings.

    Args:
        settings: MercadoPagoSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx alternativo (testes)

    Returns:
        Cliente HTTP configurado.
    """
    # Import local para evitar dependência circular
    from config.settings import get_mercadopago_settings

    mercadopago = settings or get_mercadopago_settings()
    config = HttpClientConfig(
        timeout_seconds=mercadopago.request_timeout_seconds,
        transport=transport,
    )
    return MercadoPagoHttpClient(
        access_token=mercadopago.access_token,
        config=config,
        api_base_url=mercadopago.api_base_url,
    )


__all__ = [
    "MercadoPagoApiError",
    "MercadoPagoHttpClient",
    "create_mercadopago_http_client",
]
