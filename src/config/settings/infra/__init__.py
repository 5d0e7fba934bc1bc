"""Agregador de settings de infraestrutura GCP."""

from __future__ import annotations

from config.settings.infra.firestore import (
    AuditBackend,
    FirestoreSettings,
    get_firestore_settings,
)

__all__ = [
    "AuditBackend",
    "FirestoreSettings",
    "get_firestore_settings",
]
