"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.payment_status_dispatcher import (
    PaymentStatusDispatcher,
    PaymentStatusHandler,
    UnrecognizedStatusHandler,
)

__all__ = [
    "PaymentStatusDispatcher",
    "PaymentStatusHandler",
    "UnrecognizedStatusHandler",
]
