"""Redis Dedupe Store - deduplicação de cobranças e notificações.

Chave processada (`dedupe:<key>`, TTL longo) e lock de processamento
(`dedupe:processing:<key>`, TTL curto). O lock é reivindicado com SET NX
numa transação que também confere a chave processada.

Contrato de Keys:
    As keys devem ser IDs opacos ou hashes (ex.: payment_id, SHA256).
    NUNCA passar dados sensíveis (PII, e-mails, CPF) como key.
    Keys são logadas parcialmente em DEBUG; dados sensíveis vazariam.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.dedupe import AsyncDedupeProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Prefixo para namespace de dedupe
DEDUPE_PREFIX = "dedupe:"


def _mask(key: str) -> str:
    return key[:8] + "..." if len(key) > 8 else key


class RedisDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe usando redis.asyncio (Upstash compatível).

    Args:
        async_redis_client: Cliente Redis assíncrono
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._async_redis = async_redis_client

    def _key(self, key: str) -> str:
        """Gera chave Redis com namespace."""
        return f"{DEDUPE_PREFIX}{key}"

    def _processing_key(self, key: str) -> str:
        """Gera chave Redis para lock temporário de processamento."""
        return f"{DEDUPE_PREFIX}processing:{key}"

    async def is_duplicate(self, key: str, ttl: int = 3600) -> bool:
        """Verifica se chave já foi processada ou está em processamento.

        Args:
            key: Chave única (ex.: idempotency key)
            ttl: TTL padrão (não usado na verificação, apenas para compatibilidade)

        Returns:
            True se duplicado, False se novo
        """
        processed_key = self._key(key)
        processing_key = self._processing_key(key)

        try:
            # Verificação conjunta reduz janela de race entre check e mark.
            pipeline = self._async_redis.pipeline()
            pipeline.exists(processed_key)
            pipeline.exists(processing_key)
            exists_processed, exists_processing = await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar dedupe no Redis") from exc

        is_duplicate = bool(exists_processed or exists_processing)
        if is_duplicate:
            logger.debug("dedupe_duplicate_detected", extra={"key": _mask(key)})
        return is_duplicate

    async def mark_processing(self, key: str, ttl: int = 30) -> bool:
        """Reivindica o lock de processamento (SET NX EX).

        Returns:
            True se o lock foi obtido; False se outra execução o detém ou a
            chave já foi processada
        """
        processed_key = self._key(key)
        processing_key = self._processing_key(key)
        try:
            pipeline = self._async_redis.pipeline(transaction=True)
            pipeline.set(processing_key, "1", nx=True, ex=ttl)
            pipeline.exists(processed_key)
            was_set, exists_processed = await pipeline.execute()
            if was_set and exists_processed:
                await self._async_redis.delete(processing_key)
        except Exception as exc:
            raise RedisConnectionError("Falha ao marcar processamento no Redis") from exc

        claimed = bool(was_set) and not exists_processed
        if not claimed:
            logger.debug("dedupe_processing_lock_taken", extra={"key": _mask(key)})
        return claimed

    async def mark_processed(self, key: str, ttl: int = 3600) -> None:
        """Marca chave como processada e remove o lock.

        Args:
            key: Chave única
            ttl: TTL em segundos
        """
        processed_key = self._key(key)
        processing_key = self._processing_key(key)
        try:
            pipeline = self._async_redis.pipeline()
            pipeline.setex(processed_key, ttl, "1")
            pipeline.delete(processing_key)
            await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao concluir dedupe no Redis") from exc
        logger.debug("dedupe_marked", extra={"key": _mask(key), "ttl": ttl})

    async def unmark_processing(self, key: str) -> None:
        """Remove marca de processamento em falhas."""
        try:
            await self._async_redis.delete(self._processing_key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao remover lock de dedupe no Redis") from exc
