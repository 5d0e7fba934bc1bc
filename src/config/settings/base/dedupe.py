"""Settings de dedupe/idempotência.

Configurações para garantir cobrança e processamento de notificação únicos.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from config.settings.base.core import get_base_settings

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

DedupeBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe/idempotência.

    Attributes:
        backend: Backend para dedupe (memory|redis)
        ttl_seconds: TTL para chaves já processadas
        processing_ttl_seconds: TTL do lock enquanto a chamada ao provedor ocorre
    """

    backend: DedupeBackend = "memory"
    ttl_seconds: int = 86400  # 24h
    processing_ttl_seconds: int = 30

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de dedupe.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        valid_backends = {"memory", "redis"}

        if self.backend not in valid_backends:
            errors.append(f"DEDUPE_BACKEND inválido: {self.backend}")

        if self.backend == "memory" and not base.is_development:
            errors.append(
                "DEDUPE_BACKEND=memory proibido em staging/production. Use Redis."
            )

        if self.backend == "redis" and not base.redis_url:
            errors.append("DEDUPE_BACKEND=redis requer REDIS_URL configurado")

        if self.ttl_seconds <= 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser > 0")

        if self.processing_ttl_seconds <= 0:
            errors.append("DEDUPE_PROCESSING_TTL_SECONDS deve ser > 0")

        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    """Carrega DedupeSettings de variáveis de ambiente."""
    default_backend = "memory" if get_base_settings().is_development else "redis"
    backend_str = os.getenv("DEDUPE_BACKEND", default_backend).lower()
    backend: DedupeBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return DedupeSettings(
        backend=backend,
        ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", "86400")),
        processing_ttl_seconds=int(os.getenv("DEDUPE_PROCESSING_TTL_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
