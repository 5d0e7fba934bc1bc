"""Protocolos de domínio para stores de dedupe.

Interfaces leves (ABCs) dependidas por Application.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato assíncrono de deduplicação com lock de processamento.

    Ciclo de uma chave:
    - is_duplicate: já processada ou em processamento?
    - mark_processing: reivindica o lock curto de forma atômica; False indica
      que outra execução já detém o lock ou concluiu a chave
    - mark_processed: promove a chave a processada (TTL longo) e solta o lock
    - unmark_processing: solta o lock em falha, permitindo nova tentativa

    Chaves devem ser opacas (hash, ids do provedor). Nunca usar PII.
    """

    @abstractmethod
    async def is_duplicate(self, key: str, ttl: int = 3600) -> bool:
        """Retorna True se a chave já foi processada ou está em processamento."""

    @abstractmethod
    async def mark_processing(self, key: str, ttl: int = 30) -> bool:
        """Reivindica o lock de processamento. Retorna True se obtido."""

    @abstractmethod
    async def mark_processed(self, key: str, ttl: int = 3600) -> None:
        """Marca a chave como processada e remove o lock de processamento."""

    @abstractmethod
    async def unmark_processing(self, key: str) -> None:
        """Remove o lock de processamento sem marcar como processada."""
