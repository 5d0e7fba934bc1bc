"""Builder do body de pagamento com cartão tokenizado."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .common import build_base_payload

if TYPE_CHECKING:
    from app.domain.payment import CardFormData, OrderPayload


class CardPayloadBuilder:
    """Builder para cobranças de cartão de crédito."""

    def __init__(self, store_name: str, notification_url: str | None = None) -> None:
        self._store_name = store_name
        self._notification_url = notification_url

    def build(
        self,
        form_data: CardFormData,
        order: OrderPayload,
        external_reference: str,
    ) -> dict[str, Any]:
        """Constrói payload de cartão.

        O cartão chega como token do SDK do Mercado Pago; o número nunca
        passa por aqui.
        """
        payload = build_base_payload(
            order,
            external_reference,
            self._store_name,
            self._notification_url,
        )
        payload["token"] = form_data.token
        payload["payment_method_id"] = form_data.payment_method_id
        payload["installments"] = form_data.installments
        payload["payer"]["identification"] = {"type": "CPF", "number": form_data.cpf}
        return payload
