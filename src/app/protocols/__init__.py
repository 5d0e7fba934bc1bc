"""Protocolos e contratos do core da aplicação."""

from .audit_store import PaymentAuditStoreProtocol
from .dedupe import AsyncDedupeProtocol
from .notifier import PaymentNotifierProtocol
from .order_store import OrderStoreProtocol
from .payment_gateway import PaymentGatewayProtocol
from .validator import ValidationError

__all__ = [
    "AsyncDedupeProtocol",
    "OrderStoreProtocol",
    "PaymentAuditStoreProtocol",
    "PaymentGatewayProtocol",
    "PaymentNotifierProtocol",
    "ValidationError",
]
