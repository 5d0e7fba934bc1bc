"""Testes do RedisDedupeStore com mock."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.infra.stores.redis_dedupe_store import RedisDedupeStore
from utils.errors import RedisConnectionError


def _pipeline(execute: AsyncMock) -> MagicMock:
    pipeline = MagicMock()
    pipeline.exists.return_value = pipeline
    pipeline.set.return_value = pipeline
    pipeline.setex.return_value = pipeline
    pipeline.delete.return_value = pipeline
    pipeline.execute = execute
    return pipeline


class TestRedisDedupeStore:
    """Testes do RedisDedupeStore."""

    @pytest.mark.anyio
    async def test_is_duplicate_checks_processed_and_processing(self) -> None:
        """is_duplicate deve considerar chave processada e lock de processamento."""
        async_redis = MagicMock()
        pipeline = _pipeline(AsyncMock(return_value=[0, 1]))
        async_redis.pipeline.return_value = pipeline
        store = RedisDedupeStore(async_redis)

        result = await store.is_duplicate("key-1")

        assert result is True
        pipeline.exists.assert_any_call("dedupe:key-1")
        pipeline.exists.assert_any_call("dedupe:processing:key-1")
        pipeline.execute.assert_awaited_once()

    @pytest.mark.anyio
    async def test_is_duplicate_false_for_new_key(self) -> None:
        async_redis = MagicMock()
        async_redis.pipeline.return_value = _pipeline(AsyncMock(return_value=[0, 0]))
        store = RedisDedupeStore(async_redis)

        assert await store.is_duplicate("key-new") is False

    @pytest.mark.anyio
    async def test_mark_processing_claims_lock_with_set_nx(self) -> None:
        """mark_processing deve reivindicar o lock com SET NX EX."""
        async_redis = MagicMock()
        pipeline = _pipeline(AsyncMock(return_value=[True, 0]))
        async_redis.pipeline.return_value = pipeline
        store = RedisDedupeStore(async_redis)

        assert await store.mark_processing("key-2", ttl=45) is True

        pipeline.set.assert_called_once_with("dedupe:processing:key-2", "1", nx=True, ex=45)
        pipeline.exists.assert_called_once_with("dedupe:key-2")

    @pytest.mark.anyio
    async def test_mark_processing_fails_when_lock_is_held(self) -> None:
        """Execução concorrente que perde o SET NX não obtém o lock."""
        async_redis = MagicMock()
        async_redis.delete = AsyncMock()
        async_redis.pipeline.return_value = _pipeline(AsyncMock(return_value=[None, 0]))
        store = RedisDedupeStore(async_redis)

        assert await store.mark_processing("key-2") is False
        async_redis.delete.assert_not_awaited()

    @pytest.mark.anyio
    async def test_mark_processing_releases_lock_when_already_processed(self) -> None:
        async_redis = MagicMock()
        async_redis.delete = AsyncMock()
        async_redis.pipeline.return_value = _pipeline(AsyncMock(return_value=[True, 1]))
        store = RedisDedupeStore(async_redis)

        assert await store.mark_processing("key-2") is False
        async_redis.delete.assert_awaited_once_with("dedupe:processing:key-2")

    @pytest.mark.anyio
    async def test_mark_processed_promotes_and_clears_processing_lock(self) -> None:
        """mark_processed deve salvar dedupe final e remover lock temporário."""
        async_redis = MagicMock()
        pipeline = _pipeline(AsyncMock())
        async_redis.pipeline.return_value = pipeline
        store = RedisDedupeStore(async_redis)

        await store.mark_processed("key-3", ttl=3600)

        pipeline.setex.assert_called_once_with("dedupe:key-3", 3600, "1")
        pipeline.delete.assert_called_once_with("dedupe:processing:key-3")
        pipeline.execute.assert_awaited_once()

    @pytest.mark.anyio
    async def test_unmark_processing_removes_lock(self) -> None:
        """unmark_processing deve liberar lock para retry."""
        async_redis = MagicMock()
        async_redis.delete = AsyncMock()
        store = RedisDedupeStore(async_redis)

        await store.unmark_processing("key-4")

        async_redis.delete.assert_awaited_once_with("dedupe:processing:key-4")

    @pytest.mark.anyio
    async def test_is_duplicate_wraps_pipeline_errors(self) -> None:
        async_redis = MagicMock()
        async_redis.pipeline.return_value = _pipeline(
            AsyncMock(side_effect=Exception("redis down"))
        )
        store = RedisDedupeStore(async_redis)

        with pytest.raises(RedisConnectionError, match="consultar dedupe"):
            await store.is_duplicate("key-5")

    @pytest.mark.anyio
    async def test_mark_processing_wraps_redis_errors(self) -> None:
        async_redis = MagicMock()
        async_redis.pipeline.return_value = _pipeline(
            AsyncMock(side_effect=Exception("redis down"))
        )
        store = RedisDedupeStore(async_redis)

        with pytest.raises(RedisConnectionError, match="marcar processamento"):
            await store.mark_processing("key-6")

    @pytest.mark.anyio
    async def test_mark_processed_wraps_pipeline_errors(self) -> None:
        async_redis = MagicMock()
        async_redis.pipeline.return_value = _pipeline(
            AsyncMock(side_effect=Exception("redis down"))
        )
        store = RedisDedupeStore(async_redis)

        with pytest.raises(RedisConnectionError, match="concluir dedupe"):
            await store.mark_processed("key-7")

    @pytest.mark.anyio
    async def test_unmark_processing_wraps_redis_errors(self) -> None:
        async_redis = MagicMock()
        async_redis.delete = AsyncMock(side_effect=Exception("redis down"))
        store = RedisDedupeStore(async_redis)

        with pytest.raises(RedisConnectionError, match="remover lock de dedupe"):
            await store.unmark_processing("key-8")
