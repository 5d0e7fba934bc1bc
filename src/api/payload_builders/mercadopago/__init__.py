"""Builders de payload para a API de pagamentos do Mercado Pago."""

from api.payload_builders.mercadopago.card import CardPayloadBuilder
from api.payload_builders.mercadopago.common import (
    build_base_payload,
    build_description,
    build_payer,
)
from api.payload_builders.mercadopago.pix import PixPayloadBuilder

__all__ = [
    "CardPayloadBuilder",
    "PixPayloadBuilder",
    "build_base_payload",
    "build_description",
    "build_payer",
]
