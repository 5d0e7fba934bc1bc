"""Chave de idempotência para criação de pagamentos."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decimal import Decimal

    from app.domain.payment import PaymentMethod


def compute_idempotency_key(
    payment_method: PaymentMethod,
    external_reference: str,
    amount: Decimal,
    card_token: str | None = None,
) -> str:
    """Gera chave determinística para X-Idempotency-Key.

    Reenvios do mesmo pedido com o mesmo valor produzem a mesma chave, de
    modo que o provedor e o dedupe local os tratam como uma única cobrança.
    No cartão o token entra na chave: nova tentativa com outro cartão
    (ou novo token após recusa) é uma cobrança distinta.

    Args:
        payment_method: "credit_card" ou "pix"
        external_reference: Referência do pedido
        amount: Valor já arredondado para centavos
        card_token: Token do cartão (apenas cartão)

    Returns:
        Hex SHA-256 de `<método>:<referência>:<valor>[:<token>]`
    """
    material = f"{payment_method}:{external_reference}:{amount}"
    if card_token:
        material += f":{card_token}"
    return hashlib.sha256(material.encode("utf-8")).hexdigest()
