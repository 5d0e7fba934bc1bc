"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from .signature import (
    INVALID_FORMAT,
    MISSING_SECRET,
    MISSING_SIGNATURE,
    SIGNATURE_MISMATCH,
    SignatureResult,
    verify_mercadopago_signature,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""

    reason = "invalid_signature"

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or self.reason)
        if reason:
            self.reason = reason


class MissingSignatureError(InvalidSignatureError):
    """Header x-signature ausente com verificação obrigatória."""

    reason = MISSING_SIGNATURE


class MissingWebhookSecretError(InvalidSignatureError):
    """Secret não configurado quando a assinatura precisa ser verificada."""

    reason = MISSING_SECRET


class InvalidSignatureFormatError(InvalidSignatureError):
    """Header x-signature sem `ts` ou `v1`."""

    reason = INVALID_FORMAT


class SignatureMismatchError(InvalidSignatureError):
    """HMAC calculado difere do recebido."""

    reason = SIGNATURE_MISMATCH


class DataIdMismatchError(InvalidSignatureError):
    """`data.id` da query string difere do `data.id` do corpo."""

    reason = "data_id_mismatch"


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


_ERRORS_BY_REASON: dict[str, type[InvalidSignatureError]] = {
    MISSING_SIGNATURE: MissingSignatureError,
    MISSING_SECRET: MissingWebhookSecretError,
    INVALID_FORMAT: InvalidSignatureFormatError,
    SIGNATURE_MISMATCH: SignatureMismatchError,
}


def _extract_data_id(payload: dict[str, Any]) -> str | None:
    data = payload.get("data")
    if not isinstance(data, dict):
        return None
    value = data.get("id")
    if value is None or value == "":
        return None
    return str(value)


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    *,
    signature_required: bool = True,
    query_data_id: str | None = None,
) -> tuple[dict[str, Any], SignatureResult]:
    """Parseia JSON e valida assinatura do webhook.

    O JSON é lido antes da assinatura porque data.id compõe o manifest.
    Quando query string e corpo trazem `data.id`, os dois precisam coincidir;
    o id verificado volta em `SignatureResult.data_id`.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: Secret do webhook
        signature_required: Exige assinatura válida
        query_data_id: Valor de `data.id` na query string

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto
        InvalidSignatureError: Se assinatura for inválida (subclasse por motivo)
            ou se os ids de query e corpo divergirem

    Returns:
        (payload dict, SignatureResult)
    """
    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    body_data_id = _extract_data_id(payload)
    if query_data_id and body_data_id is not None and query_data_id != body_data_id:
        raise DataIdMismatchError

    data_id = query_data_id or body_data_id
    signature_result = verify_mercadopago_signature(
        headers,
        data_id,
        secret,
        required=signature_required,
    )
    if not signature_result.valid:
        reason = signature_result.error or "invalid_signature"
        raise _ERRORS_BY_REASON.get(reason, InvalidSignatureError)(reason)

    return payload, signature_result
