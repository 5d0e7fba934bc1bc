"""Validação de assinatura HMAC-SHA256 das notificações do Mercado Pago.

Header `x-signature`: `ts=<timestamp>,v1=<hex>`. O valor assinado (manifest)
é `id:<data.id>;request-id:<x-request-id>;ts:<ts>;`, omitindo as partes
ausentes na notificação.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-signature"
REQUEST_ID_HEADER = "x-request-id"

MISSING_SIGNATURE = "missing_signature"
MISSING_SECRET = "missing_webhook_secret"
INVALID_FORMAT = "invalid_signature_format"
SIGNATURE_MISMATCH = "signature_mismatch"


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da verificação.

    skipped=True indica verificação desligada por configuração explícita.
    data_id é o identificador que compôs o manifest verificado.
    """

    valid: bool
    skipped: bool = False
    error: str | None = None
    data_id: str | None = None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name) or headers.get(name.title())
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_signature_header(value: str) -> dict[str, str]:
    """Converte `ts=...,v1=...` em dict (chaves e valores sem espaços).

    Partes sem `=` são ignoradas.
    """
    parts: dict[str, str] = {}
    for chunk in value.split(","):
        key, sep, raw = chunk.partition("=")
        if not sep:
            continue
        parts[key.strip()] = raw.strip()
    return parts


def build_signature_manifest(
    data_id: str | None,
    request_id: str | None,
    ts: str,
) -> str:
    """Monta o template assinado pelo Mercado Pago.

    O id entra exatamente como recebido na notificação.
    """
    manifest = ""
    if data_id:
        manifest += f"id:{data_id};"
    if request_id:
        manifest += f"request-id:{request_id};"
    manifest += f"ts:{ts};"
    return manifest


def compute_signature(secret: str, manifest: str) -> str:
    return hmac.new(secret.encode("utf-8"), manifest.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_mercadopago_signature(
    headers: Mapping[str, str],
    data_id: str | None,
    secret: str | None,
    *,
    required: bool = True,
) -> SignatureResult:
    """Valida assinatura de uma notificação.

    Args:
        headers: Headers recebidos
        data_id: data.id da notificação (query string ou body)
        secret: Secret do webhook
        required: Falha quando a assinatura não pode ser verificada

    Returns:
        SignatureResult; `error` traz o motivo quando inválida
    """
    signature = _header(headers, SIGNATURE_HEADER)

    if not required and (signature is None or not secret):
        logger.warning(
            "webhook_signature_check_skipped",
            extra={
                "has_signature": signature is not None,
                "has_secret": bool(secret),
            },
        )
        return SignatureResult(valid=True, skipped=True, data_id=data_id)

    if signature is None:
        return SignatureResult(valid=False, error=MISSING_SIGNATURE)

    if not secret:
        return SignatureResult(valid=False, error=MISSING_SECRET)

    parts = parse_signature_header(signature)
    ts = parts.get("ts")
    received = parts.get("v1")
    if not ts or not received:
        return SignatureResult(valid=False, error=INVALID_FORMAT)

    manifest = build_signature_manifest(data_id, _header(headers, REQUEST_ID_HEADER), ts)
    expected = compute_signature(secret, manifest)
    if not hmac.compare_digest(expected, received.lower()):
        return SignatureResult(valid=False, error=SIGNATURE_MISMATCH)

    return SignatureResult(valid=True, data_id=data_id)
