"""Testes dos builders de payload do Mercado Pago."""

from __future__ import annotations

from api.payload_builders.mercadopago import (
    CardPayloadBuilder,
    PixPayloadBuilder,
    build_description,
)
from app.domain.payment import CardFormData, Customer, OrderPayload
from tests.fakes.payments import card_form_data, order_data

NOTIFICATION_URL = "https://checkout.example.com/webhook"


def _order(**kwargs) -> OrderPayload:
    return OrderPayload.model_validate(order_data(**kwargs))


def test_description_counts_items() -> None:
    assert build_description("Fehuna Nutrition", 2) == "Pedido Fehuna Nutrition - 2 item(s)"


def test_card_payload() -> None:
    builder = CardPayloadBuilder("Fehuna Nutrition", NOTIFICATION_URL)
    payload = builder.build(
        CardFormData.model_validate(card_form_data()), _order(), "ORDER_1"
    )

    assert payload == {
        "transaction_amount": 149.9,
        "description": "Pedido Fehuna Nutrition - 2 item(s)",
        "external_reference": "ORDER_1",
        "notification_url": NOTIFICATION_URL,
        "token": "card-token-abc",
        "payment_method_id": "master",
        "installments": 3,
        "payer": {
            "email": "ana@example.com",
            "first_name": "Ana",
            "last_name": "Maria Souza",
            "identification": {"type": "CPF", "number": "12345678909"},
        },
    }


def test_pix_payload_has_no_card_fields() -> None:
    payload = PixPayloadBuilder("Fehuna Nutrition", NOTIFICATION_URL).build(
        _order(total="49.90"), "ORDER_1"
    )

    assert payload["payment_method_id"] == "pix"
    assert payload["transaction_amount"] == 49.9
    assert "token" not in payload
    assert "installments" not in payload
    assert "identification" not in payload["payer"]


def test_notification_url_omitted_when_not_configured() -> None:
    payload = PixPayloadBuilder("Loja", "").build(_order(), "ORDER_1")
    assert "notification_url" not in payload


def test_single_name_gets_default_last_name() -> None:
    customer = Customer(nome="Ana", email="ana@example.com")
    assert customer.first_name == "Ana"
    assert customer.last_name == "Cliente"
