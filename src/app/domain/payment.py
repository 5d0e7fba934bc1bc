"""Modelos de domínio do checkout e do relay de pagamentos.

Payloads chegam do frontend com nomes em português (`cliente.nome`) e
camelCase (`orderId`, `formData`); os modelos aceitam esses nomes via alias.
"""

from __future__ import annotations

import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PaymentMethod = Literal["credit_card", "pix"]

_CENT = Decimal("0.01")


def default_external_reference() -> str:
    """Gera referência `ORDER_<epoch ms>` quando o pedido não traz orderId.

    Não é única sob requisições concorrentes no mesmo milissegundo.
    """
    return f"ORDER_{int(time.time() * 1000)}"


class Customer(BaseModel):
    """Comprador informado no checkout."""

    model_config = ConfigDict(extra="ignore")

    nome: str = Field(..., min_length=1, description="Nome completo do comprador.")
    email: str = Field(..., min_length=3, description="E-mail do comprador.")

    @property
    def first_name(self) -> str:
        return self.nome.strip().split(" ", 1)[0]

    @property
    def last_name(self) -> str:
        parts = self.nome.strip().split(" ", 1)
        rest = parts[1].strip() if len(parts) > 1 else ""
        return rest or "Cliente"


class OrderPayload(BaseModel):
    """Pedido enviado pelo checkout (orderData)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    order_id: str | None = Field(default=None, alias="orderId")
    total: Decimal = Field(..., description="Valor total do pedido em reais.")
    cliente: Customer
    items: list[Any] = Field(default_factory=list)

    @field_validator("order_id", mode="before")
    @classmethod
    def _coerce_order_id(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("total", mode="before")
    @classmethod
    def _parse_total(cls, value: Any) -> Decimal:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError("total deve ser numérico") from exc
        if not amount.is_finite() or amount <= 0:
            raise ValueError("total deve ser maior que zero")
        try:
            return amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValueError("total fora do intervalo suportado") from exc

    @field_validator("items", mode="before")
    @classmethod
    def _items_or_empty(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []

    def resolve_external_reference(self) -> str:
        """Retorna orderId ou gera referência ORDER_<timestamp>."""
        return self.order_id or default_external_reference()


class CardFormData(BaseModel):
    """Dados do formulário de cartão tokenizado no frontend (formData)."""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., min_length=1, description="Token do cartão gerado pelo SDK.")
    payment_method_id: str = Field(default="visa", min_length=1)
    installments: int = Field(default=1, ge=1)
    cpf: str = Field(..., min_length=1, description="CPF do titular.")

    @field_validator("payment_method_id", mode="before")
    @classmethod
    def _default_method(cls, value: Any) -> Any:
        return value or "visa"

    @field_validator("installments", mode="before")
    @classmethod
    def _default_installments(cls, value: Any) -> Any:
        return 1 if value in (None, "") else value

    @field_validator("cpf", mode="before")
    @classmethod
    def _digits_only(cls, value: Any) -> Any:
        if isinstance(value, str):
            return "".join(ch for ch in value if ch.isdigit())
        return value


class CardPaymentRequest(BaseModel):
    """Body de POST /create-card-payment."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    form_data: CardFormData = Field(..., alias="formData")
    order_data: OrderPayload = Field(..., alias="orderData")


class PixPaymentRequest(BaseModel):
    """Body de POST /create-payment."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    order_data: OrderPayload = Field(..., alias="orderData")


class PaymentResult(BaseModel):
    """Resposta normalizada devolvida ao checkout."""

    model_config = ConfigDict(extra="ignore")

    success: bool
    payment_id: str | None = None
    status: str
    payment_method: PaymentMethod
    external_reference: str | None = None
    transaction_amount: float | None = None
    installments: int | None = None
    card_last_four: str | None = None
    qr_code: str | None = None
    qr_code_base64: str | None = None
    ticket_url: str | None = None
    expires_at: str | None = None
    status_detail: str | None = None

    def to_response(self) -> dict[str, Any]:
        """Serializa omitindo campos ausentes."""
        return self.model_dump(exclude_none=True)


class NotificationData(BaseModel):
    """Bloco `data` da notificação."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)


class WebhookNotification(BaseModel):
    """Notificação assíncrona enviada pelo Mercado Pago."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    action: str | None = None
    data: NotificationData = Field(default_factory=NotificationData)
    date_created: str | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _data_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @property
    def payment_id(self) -> str | None:
        return self.data.id

    @property
    def is_payment(self) -> bool:
        return self.type == "payment"


class OrderPaymentUpdate(BaseModel):
    """Atualização de pedido derivada de um pagamento notificado."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    order_id: str | None
    payment_id: str
    status: str
    order_status: str
    amount: float | None = None
    payment_method: str | None = None
    paid_at: str | None = None
    payer_email: str | None = None


__all__ = [
    "CardFormData",
    "CardPaymentRequest",
    "Customer",
    "NotificationData",
    "OrderPayload",
    "OrderPaymentUpdate",
    "PaymentMethod",
    "PaymentResult",
    "PixPaymentRequest",
    "WebhookNotification",
    "default_external_reference",
]
