"""Use case de processamento de notificações de pagamento (webhook)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from app.domain.payment import WebhookNotification
from utils.errors import UpstreamError

if TYPE_CHECKING:
    from api.connectors.mercadopago.models import MercadoPagoPayment
    from app.protocols.audit_store import PaymentAuditStoreProtocol
    from app.protocols.dedupe import AsyncDedupeProtocol
    from app.protocols.payment_gateway import PaymentGatewayProtocol
    from app.services.payment_status_dispatcher import PaymentStatusDispatcher

logger = logging.getLogger(__name__)

AUDIT_EVENT = "webhook_received"


class NotificationError(ValueError):
    """Erro base de notificações que não podem ser processadas (HTTP 400)."""


class PaymentIdMissingError(NotificationError):
    """Notificação de pagamento sem data.id."""


class PaymentLookupError(NotificationError):
    """Consulta do pagamento no provedor falhou."""


@dataclass(frozen=True, slots=True)
class NotificationOutcome:
    """Resultado do processamento devolvido à rota."""

    kind: Literal["ignored", "processed", "duplicate"]
    notification_type: str | None = None
    payment_id: str | None = None
    status: str | None = None


def webhook_dedupe_key(payment: MercadoPagoPayment) -> str:
    """Chave por pagamento e status: transições geram chaves novas."""
    return f"webhook:{payment.id}:{payment.status}"


def build_audit_record(
    payment: MercadoPagoPayment,
    *,
    duplicate: bool,
    action: str | None = None,
) -> dict[str, Any]:
    """Registro de auditoria sem PII."""
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "event": AUDIT_EVENT,
        "action": action,
        "payment_id": payment.id,
        "status": payment.status,
        "external_reference": payment.external_reference,
        "amount": payment.transaction_amount,
        "payment_method": payment.payment_method_id,
        "duplicate": duplicate,
    }


class ProcessPaymentNotificationUseCase:
    """Filtra, consulta, deduplica, despacha e audita uma notificação.

    Notificações que não são de pagamento retornam sem consultar o provedor.
    Reentregas do mesmo pagamento/status não repetem efeitos colaterais,
    mas continuam auditadas (duplicate=True).
    """

    def __init__(
        self,
        gateway: PaymentGatewayProtocol,
        dedupe: AsyncDedupeProtocol,
        audit_store: PaymentAuditStoreProtocol,
        dispatcher: PaymentStatusDispatcher,
        *,
        dedupe_ttl: int = 86400,
        processing_ttl: int = 30,
    ) -> None:
        self._gateway = gateway
        self._dedupe = dedupe
        self._audit_store = audit_store
        self._dispatcher = dispatcher
        self._dedupe_ttl = dedupe_ttl
        self._processing_ttl = processing_ttl

    async def execute(
        self,
        payload: dict[str, Any],
        *,
        payment_id: str | None = None,
    ) -> NotificationOutcome:
        """Processa a notificação já autenticada.

        Args:
            payload: Corpo da notificação
            payment_id: Id verificado na assinatura; prevalece sobre o corpo

        Raises:
            PaymentIdMissingError: type=payment sem data.id
            PaymentLookupError: Provedor não devolveu o pagamento
        """
        notification = WebhookNotification.model_validate(payload)
        if not notification.is_payment:
            logger.info(
                "webhook_notification_ignored",
                extra={"notification_type": notification.type},
            )
            return NotificationOutcome(kind="ignored", notification_type=notification.type)

        payment_id = payment_id or notification.payment_id
        if not payment_id:
            raise PaymentIdMissingError("payment_id_missing")

        payment = await self._fetch_payment(payment_id)
        duplicate = await self._dispatch_once(payment)
        await self._audit(payment, duplicate=duplicate, action=notification.action)

        logger.info(
            "webhook_payment_processed",
            extra={
                "payment_id": payment.id,
                "payment_status": payment.status,
                "duplicate": duplicate,
            },
        )
        return NotificationOutcome(
            kind="duplicate" if duplicate else "processed",
            notification_type=notification.type,
            payment_id=payment.id,
            status=payment.status,
        )

    async def _fetch_payment(self, payment_id: str) -> MercadoPagoPayment:
        try:
            return await self._gateway.get_payment(payment_id)
        except (UpstreamError, ValueError) as exc:
            logger.warning(
                "webhook_payment_lookup_failed",
                extra={
                    "payment_id": payment_id,
                    "error_type": type(exc).__name__,
                    "status_code": getattr(exc, "status_code", None),
                },
            )
            raise PaymentLookupError("payment_not_found") from exc

    async def _dispatch_once(self, payment: MercadoPagoPayment) -> bool:
        """Despacha se a chave for nova. Retorna True quando duplicada."""
        key = webhook_dedupe_key(payment)
        if await self._dedupe.is_duplicate(key, ttl=self._dedupe_ttl):
            logger.info("webhook_duplicate_skipped", extra={"payment_id": payment.id})
            return True

        if not await self._dedupe.mark_processing(key, ttl=self._processing_ttl):
            logger.info("webhook_duplicate_in_flight", extra={"payment_id": payment.id})
            return True

        try:
            await self._dispatcher.dispatch(payment)
        except Exception:
            await self._dedupe.unmark_processing(key)
            raise
        await self._dedupe.mark_processed(key, ttl=self._dedupe_ttl)
        return False

    async def _audit(
        self,
        payment: MercadoPagoPayment,
        *,
        duplicate: bool,
        action: str | None,
    ) -> None:
        record = build_audit_record(payment, duplicate=duplicate, action=action)
        try:
            await self._audit_store.append_async(record)
        except Exception as exc:
            logger.error(
                "payment_audit_failed",
                extra={"payment_id": payment.id, "error_type": type(exc).__name__},
            )
