"""Firestore Audit Store - trilha de auditoria das notificações de pagamento.

Append-only; um documento por notificação processada.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.protocols.audit_store import PaymentAuditStoreProtocol

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

# Collection para auditoria
AUDIT_COLLECTION = "payment_audit"


class FirestoreAuditStore(PaymentAuditStoreProtocol):
    """Store de auditoria usando Firestore.

    Características:
        - Append-only (sem updates)
        - Document ID por dia/pagamento para queries simples
        - TTL via Firestore TTL policies (campo created_at)
        - Sem PII nos registros

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: payment_audit)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = AUDIT_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def append(self, record: dict[str, Any]) -> None:
        """Append de registro de auditoria.

        Erros são logados e não propagam: auditoria nunca derruba o webhook.

        Args:
            record: Registro de auditoria (sem PII)
        """
        now = datetime.now(UTC)

        enriched = {
            **record,
            "timestamp": record.get("timestamp") or now.isoformat(),
            "created_at": now,  # Para TTL do Firestore
        }

        payment_id = record.get("payment_id", "unknown")
        doc_id = f"{now.strftime('%Y%m%d')}_{payment_id}_{now.timestamp()}"

        try:
            self._db.collection(self._collection).document(doc_id).set(enriched)
            logger.debug(
                "audit_record_appended",
                extra={
                    "doc_id": doc_id,
                    "audit_event": record.get("event", "unknown"),
                },
            )
        except Exception as e:
            logger.error(
                "audit_append_error",
                extra={"error": str(e), "doc_id": doc_id},
            )

    async def append_async(self, record: dict[str, Any]) -> None:
        """Append assíncrono de registro de auditoria.

        Usa asyncio.to_thread para não bloquear o event loop,
        já que Firestore Python SDK não tem async nativo.

        Args:
            record: Registro de auditoria (sem PII)
        """
        await asyncio.to_thread(self.append, record)
