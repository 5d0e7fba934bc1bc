"""Builder do body de pagamento PIX."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .common import build_base_payload

if TYPE_CHECKING:
    from app.domain.payment import OrderPayload


class PixPayloadBuilder:
    """Builder para cobranças PIX (sem token, parcelas ou identificação)."""

    def __init__(self, store_name: str, notification_url: str | None = None) -> None:
        self._store_name = store_name
        self._notification_url = notification_url

    def build(self, order: OrderPayload, external_reference: str) -> dict[str, Any]:
        payload = build_base_payload(
            order,
            external_reference,
            self._store_name,
            self._notification_url,
        )
        payload["payment_method_id"] = "pix"
        return payload
