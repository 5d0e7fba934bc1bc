"""Status de pagamento do Mercado Pago como conjunto fechado.

O webhook despacha para um handler por variante; qualquer status fora da
lista (ex.: `in_process`, `charged_back`) vira UNRECOGNIZED.
"""

from __future__ import annotations

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Variantes de status tratadas pelo dispatcher de notificações."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, raw: str | None) -> PaymentStatus:
        """Converte status bruto do provedor, sem nunca levantar erro."""
        if not raw:
            return cls.UNRECOGNIZED
        try:
            status = cls(raw.strip().lower())
        except ValueError:
            return cls.UNRECOGNIZED
        return status


# Status do pedido registrado no order store para cada variante
ORDER_STATUS_BY_PAYMENT_STATUS: dict[PaymentStatus, str] = {
    PaymentStatus.APPROVED: "paid",
    PaymentStatus.PENDING: "awaiting_payment",
    PaymentStatus.REJECTED: "rejected",
    PaymentStatus.CANCELLED: "cancelled",
    PaymentStatus.REFUNDED: "refunded",
}

__all__ = ["ORDER_STATUS_BY_PAYMENT_STATUS", "PaymentStatus"]
