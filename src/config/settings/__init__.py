"""Agregador de settings do serviço de pagamentos.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    DedupeBackend,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)

# Infrastructure settings
from config.settings.infra import (
    AuditBackend,
    FirestoreSettings,
    get_firestore_settings,
)

# Provider settings
from config.settings.mercadopago import (
    MERCADOPAGO_API_BASE_URL,
    PAYMENTS_PATH,
    MercadoPagoSettings,
    get_mercadopago_settings,
)

__all__ = [
    # Constants
    "MERCADOPAGO_API_BASE_URL",
    "PAYMENTS_PATH",
    # Infrastructure
    "AuditBackend",
    # Base
    "BaseSettings",
    "DedupeBackend",
    "DedupeSettings",
    "Environment",
    "FirestoreSettings",
    # Provider
    "MercadoPagoSettings",
    "get_base_settings",
    "get_dedupe_settings",
    "get_firestore_settings",
    "get_mercadopago_settings",
]
