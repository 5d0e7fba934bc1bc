"""Modelo de pagamento devolvido pela API do Mercado Pago."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class MercadoPagoPayment:
    """Visão simplificada de um pagamento (cartão ou PIX) do Mercado Pago."""

    id: str
    status: str
    status_detail: str | None = None
    external_reference: str | None = None
    transaction_amount: float | None = None
    installments: int | None = None
    payment_method_id: str | None = None
    card_last_four: str | None = None
    qr_code: str | None = None
    qr_code_base64: str | None = None
    ticket_url: str | None = None
    date_of_expiration: str | None = None
    date_approved: str | None = None
    payer_email: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MercadoPagoPayment:
        point_of_interaction = data.get("point_of_interaction") or {}
        transaction_data = point_of_interaction.get("transaction_data") or {}
        card = data.get("card") or {}
        payer = data.get("payer") or {}

        qr_code_base64 = transaction_data.get("qr_code_base64")
        # Algumas respostas trazem o QR como objeto {"data": <base64>}.
        if isinstance(qr_code_base64, dict):
            qr_code_base64 = qr_code_base64.get("data")

        return cls(
            id=str(data.get("id", "")),
            status=str(data.get("status") or "unknown"),
            status_detail=_optional_str(data.get("status_detail")),
            external_reference=_optional_str(data.get("external_reference")),
            transaction_amount=_optional_float(data.get("transaction_amount")),
            installments=_optional_int(data.get("installments")),
            payment_method_id=_optional_str(data.get("payment_method_id")),
            card_last_four=_optional_str(card.get("last_four_digits")),
            qr_code=_optional_str(transaction_data.get("qr_code")),
            qr_code_base64=_optional_str(qr_code_base64),
            ticket_url=_optional_str(transaction_data.get("ticket_url")),
            date_of_expiration=_optional_str(data.get("date_of_expiration")),
            date_approved=_optional_str(data.get("date_approved")),
            payer_email=_optional_str(payer.get("email")),
            raw=data,
        )
