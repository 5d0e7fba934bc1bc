"""Use cases de pagamento: cobranças de cartão/PIX e notificações."""

from .create_card_payment import CreateCardPaymentUseCase
from .create_pix_payment import CreatePixPaymentUseCase
from .process_payment_notification import (
    NotificationError,
    NotificationOutcome,
    PaymentIdMissingError,
    PaymentLookupError,
    ProcessPaymentNotificationUseCase,
)

__all__ = [
    "CreateCardPaymentUseCase",
    "CreatePixPaymentUseCase",
    "NotificationError",
    "NotificationOutcome",
    "PaymentIdMissingError",
    "PaymentLookupError",
    "ProcessPaymentNotificationUseCase",
]
