"""Testes dos endpoints GET/POST /webhook do Mercado Pago."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from api.connectors.mercadopago.errors import MercadoPagoApiError
from api.connectors.mercadopago.webhook.signature import (
    build_signature_manifest,
    compute_signature,
)
from api.routes.mercadopago import webhook
from app.infra.stores.memory_stores import MemoryAuditStore, MemoryDedupeStore, MemoryOrderStore
from app.services.payment_status_dispatcher import PaymentStatusDispatcher
from app.use_cases.payments import ProcessPaymentNotificationUseCase
from tests.fakes.asgi import build_request
from tests.fakes.payments import FakeGateway, card_payment_response

SECRET = "webhook-secret"


def _settings(required: bool = True, secret: str = SECRET) -> SimpleNamespace:
    return SimpleNamespace(webhook_secret=secret, webhook_signature_required=required)


def _install(
    monkeypatch: pytest.MonkeyPatch,
    gateway: FakeGateway | None = None,
    *,
    required: bool = True,
    secret: str = SECRET,
) -> SimpleNamespace:
    gateway = gateway or FakeGateway(payments={"1234567890": card_payment_response("approved")})
    harness = SimpleNamespace(
        gateway=gateway,
        audit=MemoryAuditStore(),
        orders=MemoryOrderStore(),
    )
    use_case = ProcessPaymentNotificationUseCase(
        gateway,
        MemoryDedupeStore(),
        harness.audit,
        PaymentStatusDispatcher(harness.orders, AsyncMock()),
    )
    monkeypatch.setattr(webhook, "get_mercadopago_settings", lambda: _settings(required, secret))
    monkeypatch.setattr(webhook, "get_payment_notification_use_case", lambda: use_case)
    return harness


def _body(type_: str = "payment", payment_id: str | None = "1234567890") -> bytes:
    data = {"id": payment_id} if payment_id is not None else {}
    return json.dumps({"type": type_, "action": "payment.updated", "data": data}).encode("utf-8")


def _signed_headers(data_id: str = "1234567890", request_id: str = "req-abc") -> dict[str, str]:
    ts = "1704900000"
    signature = compute_signature(SECRET, build_signature_manifest(data_id, request_id, ts))
    return {"x-signature": f"ts={ts},v1={signature}", "x-request-id": request_id}


def _json(response: object) -> dict[str, object]:
    return json.loads(response.body.decode("utf-8"))


@pytest.mark.asyncio
async def test_webhook_status_endpoint() -> None:
    payload = await webhook.webhook_status()
    assert payload["status"] == "ok"
    assert payload["message"] == "Webhook endpoint ativo"
    assert "timestamp" in payload


@pytest.mark.asyncio
async def test_signed_payment_notification_is_processed(monkeypatch: pytest.MonkeyPatch) -> None:
    harness = _install(monkeypatch)

    response = await webhook.receive_webhook(
        build_request(body=_body(), headers=_signed_headers())
    )

    assert response.status_code == 200
    assert _json(response) == {
        "status": "success",
        "message": "Webhook processado com sucesso",
        "payment_id": "1234567890",
    }
    assert harness.orders.get("ORDER_1").order_status == "paid"
    assert len(harness.audit.get_records()) == 1


@pytest.mark.asyncio
async def test_query_and_body_data_id_mismatch_returns_401(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    harness = _install(monkeypatch)

    response = await webhook.receive_webhook(
        build_request(
            query_string="data.id=1234567890&type=payment",
            body=_body(payment_id="999"),
            headers=_signed_headers("1234567890"),
        )
    )

    assert response.status_code == 401
    assert _json(response) == {"error": "invalid_signature", "reason": "data_id_mismatch"}
    assert harness.gateway.fetched == []


@pytest.mark.asyncio
async def test_query_data_id_is_used_when_body_has_no_id(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    harness = _install(monkeypatch)

    response = await webhook.receive_webhook(
        build_request(
            query_string="data.id=1234567890&type=payment",
            body=_body(payment_id=None),
            headers=_signed_headers("1234567890"),
        )
    )

    assert response.status_code == 200
    assert harness.gateway.fetched == ["1234567890"]


@pytest.mark.asyncio
async def test_missing_signature_returns_401(monkeypatch: pytest.MonkeyPatch) -> None:
    harness = _install(monkeypatch)

    response = await webhook.receive_webhook(build_request(body=_body()))

    assert response.status_code == 401
    assert _json(response) == {"error": "invalid_signature", "reason": "missing_signature"}
    assert harness.gateway.fetched == []


@pytest.mark.asyncio
async def test_tampered_signature_returns_401(monkeypatch: pytest.MonkeyPatch) -> None:
    harness = _install(monkeypatch)
    headers = _signed_headers(data_id="1")

    response = await webhook.receive_webhook(build_request(body=_body(), headers=headers))

    assert response.status_code == 401
    assert _json(response)["reason"] == "signature_mismatch"
    assert harness.gateway.fetched == []


@pytest.mark.asyncio
async def test_missing_secret_with_required_signature_returns_401(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _install(monkeypatch, secret="")

    response = await webhook.receive_webhook(
        build_request(body=_body(), headers=_signed_headers())
    )

    assert response.status_code == 401
    assert _json(response)["reason"] == "missing_webhook_secret"


@pytest.mark.asyncio
async def test_unsigned_notification_accepted_when_not_required(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _install(monkeypatch, required=False)

    response = await webhook.receive_webhook(build_request(body=_body()))

    assert response.status_code == 200
    assert _json(response)["status"] == "success"


@pytest.mark.asyncio
async def test_invalid_json_returns_400(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, required=False)

    response = await webhook.receive_webhook(build_request(body=b"{nope"))

    assert response.status_code == 400
    assert _json(response) == {"error": "invalid_json"}


@pytest.mark.asyncio
async def test_non_payment_notification_is_acknowledged(monkeypatch: pytest.MonkeyPatch) -> None:
    harness = _install(monkeypatch, required=False)

    response = await webhook.receive_webhook(
        build_request(body=_body(type_="merchant_order"))
    )

    assert response.status_code == 200
    assert _json(response) == {
        "status": "received",
        "message": "Notificação recebida",
        "type": "merchant_order",
    }
    assert harness.gateway.fetched == []


@pytest.mark.asyncio
async def test_payment_without_id_returns_400(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, required=False)

    response = await webhook.receive_webhook(build_request(body=_body(payment_id=None)))

    assert response.status_code == 400
    assert _json(response)["error"] == "payment_id_missing"


@pytest.mark.asyncio
async def test_provider_lookup_failure_returns_400(monkeypatch: pytest.MonkeyPatch) -> None:
    gateway = FakeGateway(lookup_error=MercadoPagoApiError("not_found", status_code=404))
    _install(monkeypatch, gateway, required=False)

    response = await webhook.receive_webhook(build_request(body=_body()))

    assert response.status_code == 400
    assert _json(response)["error"] == "payment_not_found"


@pytest.mark.asyncio
async def test_unexpected_failure_returns_500(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, required=False)
    failing = SimpleNamespace(execute=AsyncMock(side_effect=RuntimeError("boom")))
    monkeypatch.setattr(webhook, "get_payment_notification_use_case", lambda: failing)

    response = await webhook.receive_webhook(build_request(body=_body()))

    assert response.status_code == 500
    assert _json(response) == {"error": "internal_error", "message": "Erro interno do servidor"}


@pytest.mark.asyncio
async def test_redelivery_returns_success_without_second_update(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    harness = _install(monkeypatch)

    for _ in range(2):
        response = await webhook.receive_webhook(
            build_request(body=_body(), headers=_signed_headers())
        )
        assert response.status_code == 200

    assert len(harness.orders.history()) == 1
    assert [r["duplicate"] for r in harness.audit.get_records()] == [False, True]
