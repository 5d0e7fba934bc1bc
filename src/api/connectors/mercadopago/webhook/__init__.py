"""Webhook Mercado Pago: assinatura e parsing seguro."""

from .receive import (
    DataIdMismatchError,
    InvalidJsonError,
    InvalidSignatureError,
    InvalidSignatureFormatError,
    MissingSignatureError,
    MissingWebhookSecretError,
    SignatureMismatchError,
    WebhookRequestError,
    parse_webhook_request,
)
from .signature import (
    SignatureResult,
    build_signature_manifest,
    parse_signature_header,
    verify_mercadopago_signature,
)

__all__ = [
    "DataIdMismatchError",
    "InvalidJsonError",
    "InvalidSignatureError",
    "InvalidSignatureFormatError",
    "MissingSignatureError",
    "MissingWebhookSecretError",
    "SignatureMismatchError",
    "SignatureResult",
    "WebhookRequestError",
    "build_signature_manifest",
    "parse_signature_header",
    "parse_webhook_request",
    "verify_mercadopago_signature",
]
