"""Campos comuns aos bodies de criação de pagamento."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.payment import Customer, OrderPayload


def build_description(store_name: str, item_count: int) -> str:
    """Descrição exibida no extrato: `Pedido <loja> - <n> item(s)`."""
    return f"Pedido {store_name} - {item_count} item(s)"


def build_payer(customer: Customer) -> dict[str, Any]:
    """Dados do pagador (nome dividido em first_name/last_name)."""
    return {
        "email": customer.email,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
    }


def build_base_payload(
    order: OrderPayload,
    external_reference: str,
    store_name: str,
    notification_url: str | None = None,
) -> dict[str, Any]:
    """Monta o body base compartilhado por cartão e PIX.

    Args:
        order: Pedido validado
        external_reference: Referência do pedido devolvida nas notificações
        store_name: Nome da loja para a descrição
        notification_url: URL pública do webhook (omitida se vazia)

    Returns:
        Dict pronto para receber os campos específicos do método
    """
    payload: dict[str, Any] = {
        "transaction_amount": float(order.total),
        "description": build_description(store_name, len(order.items)),
        "external_reference": external_reference,
        "payer": build_payer(order.cliente),
    }
    if notification_url:
        payload["notification_url"] = notification_url
    return payload
