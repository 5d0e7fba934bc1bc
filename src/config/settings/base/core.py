"""Settings comuns ao serviço de pagamentos.

Ambiente, identificação do serviço e recursos compartilhados (Redis do
dedupe, projeto GCP da auditoria).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}

_REDIS_SCHEMES = ("redis://", "rediss://")


@dataclass(frozen=True)
class BaseSettings:
    """Configurações lidas por bootstrap, health e stores.

    Attributes:
        environment: development|staging|production (aliases prod/stage)
        service_name: Nome exposto no health e nos logs
        gcp_project: Projeto padrão do Firestore de auditoria
        redis_url: URL do Redis usado pelo dedupe
    """

    environment: Environment = "development"
    service_name: str = "checkout-pagamentos"
    gcp_project: str = ""
    redis_url: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Retorna erros de configuração (vazia = OK)."""
        errors: list[str] = []

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.redis_url and not self.redis_url.startswith(_REDIS_SCHEMES):
            errors.append("REDIS_URL deve usar redis:// ou rediss://")

        return errors


def _parse_environment(raw: str) -> Environment:
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Carrega BaseSettings do ambiente (cacheado)."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "checkout-pagamentos"),
        gcp_project=os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", "")),
        redis_url=os.getenv("REDIS_URL", ""),
    )
