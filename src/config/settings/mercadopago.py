"""Settings específicas do Mercado Pago.

Credenciais e parâmetros da API de pagamentos. Tokens e secret vêm
exclusivamente do ambiente (ou Secret Manager exposto como env no Cloud Run),
sem valor padrão no código.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes da API
MERCADOPAGO_API_BASE_URL: str = "https://api.mercadopago.com"
PAYMENTS_PATH: str = "/v1/payments"
DEFAULT_STORE_NAME: str = "Fehuna Nutrition"


@dataclass(frozen=True)
class MercadoPagoSettings:
    """Configurações da integração Mercado Pago.

    Attributes:
        access_token: Bearer token da API (obrigatório)
        webhook_secret: Secret para validação HMAC das notificações
        webhook_signature_required: Exige assinatura em todo POST de webhook
        api_base_url: URL base da API
        notification_url: URL pública do webhook enviada na criação do pagamento
        request_timeout_seconds: Timeout para requisições HTTP
        store_name: Nome da loja usado na descrição do pedido
    """

    # Credenciais
    access_token: str = ""
    webhook_secret: str = ""

    # Webhook
    webhook_signature_required: bool = True

    # API
    api_base_url: str = MERCADOPAGO_API_BASE_URL
    notification_url: str = ""
    request_timeout_seconds: float = 20.0

    # Checkout
    store_name: str = DEFAULT_STORE_NAME

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Mercado Pago.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.access_token:
            errors.append("MP_ACCESS_TOKEN não configurado")

        if self.webhook_signature_required and not self.webhook_secret:
            errors.append(
                "MP_WEBHOOK_SECRET não configurado "
                "(obrigatório com MP_WEBHOOK_SIGNATURE_REQUIRED=true)"
            )

        if not self.api_base_url.startswith("https://"):
            errors.append("MP_API_BASE_URL deve usar https")

        if self.request_timeout_seconds <= 0:
            errors.append("MP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _load_from_env() -> MercadoPagoSettings:
    """Carrega MercadoPagoSettings a partir de variáveis de ambiente."""
    return MercadoPagoSettings(
        access_token=os.getenv("MP_ACCESS_TOKEN", ""),
        webhook_secret=os.getenv("MP_WEBHOOK_SECRET", ""),
        webhook_signature_required=_parse_bool(
            os.getenv("MP_WEBHOOK_SIGNATURE_REQUIRED", "true")
        ),
        api_base_url=os.getenv("MP_API_BASE_URL", MERCADOPAGO_API_BASE_URL),
        notification_url=os.getenv("MP_NOTIFICATION_URL", ""),
        request_timeout_seconds=float(os.getenv("MP_REQUEST_TIMEOUT_SECONDS", "20")),
        store_name=os.getenv("MP_STORE_NAME", DEFAULT_STORE_NAME),
    )


@lru_cache(maxsize=1)
def get_mercadopago_settings() -> MercadoPagoSettings:
    """Retorna instância cacheada de MercadoPagoSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
