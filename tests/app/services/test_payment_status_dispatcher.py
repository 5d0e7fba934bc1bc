"""Testes do PaymentStatusDispatcher."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from api.connectors.mercadopago.models import MercadoPagoPayment
from app.domain.payment_status import PaymentStatus
from app.infra.stores.memory_stores import MemoryOrderStore
from app.services.payment_status_dispatcher import (
    PaymentStatusDispatcher,
    UnrecognizedStatusHandler,
)
from tests.fakes.payments import card_payment_response


def _payment(status: str) -> MercadoPagoPayment:
    return MercadoPagoPayment.from_dict(card_payment_response(status=status))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "order_status", "notified"),
    [
        ("approved", "paid", True),
        ("pending", "awaiting_payment", False),
        ("rejected", "rejected", True),
        ("cancelled", "cancelled", True),
        ("refunded", "refunded", True),
    ],
)
async def test_known_statuses_update_order(status: str, order_status: str, notified: bool) -> None:
    order_store = MemoryOrderStore()
    notifier = AsyncMock()
    dispatcher = PaymentStatusDispatcher(order_store, notifier)

    result = await dispatcher.dispatch(_payment(status))

    assert result is PaymentStatus(status)
    update = order_store.get("ORDER_1")
    assert update is not None
    assert update.order_status == order_status
    assert update.payment_id == "1234567890"
    assert notifier.notify_payment_update.await_count == (1 if notified else 0)


@pytest.mark.asyncio
async def test_approved_update_carries_payment_data() -> None:
    order_store = MemoryOrderStore()
    dispatcher = PaymentStatusDispatcher(order_store, AsyncMock())

    await dispatcher.dispatch(_payment("approved"))

    update = order_store.get("ORDER_1")
    assert update.amount == 149.9
    assert update.payment_method == "visa"
    assert update.paid_at == "2026-01-10T10:00:00.000-03:00"


@pytest.mark.asyncio
async def test_unrecognized_status_only_logs(caplog: pytest.LogCaptureFixture) -> None:
    order_store = MemoryOrderStore()
    notifier = AsyncMock()
    dispatcher = PaymentStatusDispatcher(order_store, notifier)

    with caplog.at_level("WARNING"):
        result = await dispatcher.dispatch(_payment("in_process"))

    assert result is PaymentStatus.UNRECOGNIZED
    assert order_store.history() == []
    notifier.notify_payment_update.assert_not_awaited()
    assert any(r.getMessage() == "payment_status_unrecognized" for r in caplog.records)


def test_every_status_has_a_handler() -> None:
    dispatcher = PaymentStatusDispatcher(MemoryOrderStore(), AsyncMock())
    for status in PaymentStatus:
        assert dispatcher.handler_for(status).status is status
    assert isinstance(dispatcher.handler_for(PaymentStatus.UNRECOGNIZED), UnrecognizedStatusHandler)
