"""Conector Mercado Pago - adapter de borda para a API de pagamentos.

Este módulo é o único ponto de IO com o provedor.
Responsabilidades:
- HTTP client para /v1/payments
- Modelo e erros da API
- Chave de idempotência das cobranças
- Webhook (assinatura, parsing)
"""

from .errors import MercadoPagoApiError, parse_mercadopago_error
from .http_client import MercadoPagoHttpClient, create_mercadopago_http_client
from .idempotency import compute_idempotency_key
from .models import MercadoPagoPayment
from .webhook import SignatureResult, verify_mercadopago_signature

__all__ = [
    "MercadoPagoApiError",
    "MercadoPagoHttpClient",
    "MercadoPagoPayment",
    "SignatureResult",
    "compute_idempotency_key",
    "create_mercadopago_http_client",
    "parse_mercadopago_error",
    "verify_mercadopago_signature",
]
