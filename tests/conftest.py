"""Configuração do pytest para o serviço de checkout de pagamentos."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ (imports absolutos) e a raiz (tests.fakes) ao PYTHONPATH
root_path = Path(__file__).parent.parent
src_path = root_path / "src"
for path in (src_path, root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(autouse=True)
def _clear_cached_settings():
    """Settings e singletons são lru_cache: limpa entre testes."""
    from app.bootstrap import reset_dependencies
    from app.bootstrap.clients import create_async_redis_client, create_firestore_client
    from config.settings import (
        get_base_settings,
        get_dedupe_settings,
        get_firestore_settings,
        get_mercadopago_settings,
    )

    caches = (
        get_base_settings,
        get_dedupe_settings,
        get_firestore_settings,
        get_mercadopago_settings,
        create_async_redis_client,
        create_firestore_client,
    )
    for cached in caches:
        cached.cache_clear()
    reset_dependencies()
    yield
    for cached in caches:
        cached.cache_clear()
    reset_dependencies()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
