"""Settings do Firestore.

Configurações para Google Cloud Firestore (trilha de auditoria de pagamentos).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

AuditBackend = Literal["memory", "firestore"]


@dataclass(frozen=True)
class FirestoreSettings:
    """Configurações do Firestore.

    Attributes:
        project_id: ID do projeto GCP (usa GCP_PROJECT se não definido)
        collection_audit: Collection para auditoria de eventos de pagamento
        audit_backend: Backend da auditoria (memory|firestore)
    """

    project_id: str = ""
    collection_audit: str = "payment_audit"
    audit_backend: AuditBackend = "memory"

    def validate(self, gcp_project: str) -> list[str]:
        """Valida configurações do Firestore.

        Args:
            gcp_project: Projeto GCP padrão para fallback.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.audit_backend not in ("memory", "firestore"):
            errors.append(f"AUDIT_BACKEND inválido: {self.audit_backend}")

        effective_project = self.project_id or gcp_project
        if self.audit_backend == "firestore" and not effective_project:
            errors.append(
                "AUDIT_BACKEND=firestore requer FIRESTORE_PROJECT_ID ou GCP_PROJECT"
            )

        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    """Carrega FirestoreSettings de variáveis de ambiente."""
    backend_str = os.getenv("AUDIT_BACKEND", "memory").lower()
    backend: AuditBackend = backend_str if backend_str in ("memory", "firestore") else "memory"
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_audit=os.getenv("FIRESTORE_COLLECTION_AUDIT", "payment_audit"),
        audit_backend=backend,
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Retorna instância cacheada de FirestoreSettings."""
    return _load_firestore_from_env()
