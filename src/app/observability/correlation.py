"""Correlation id por requisição, propagado para os logs.

Cada chamada do checkout ou notificação do Mercado Pago recebe um id que
aparece em todos os logs da requisição. ContextVar mantém o valor isolado
entre requisições concorrentes no mesmo event loop.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Headers aceitos como origem do id, em ordem de preferência
CORRELATION_HEADERS = ("x-correlation-id", "x-request-id")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Extrai correlation id dos headers da requisição.

    O Mercado Pago envia `x-request-id` em toda notificação; o checkout
    pode enviar `x-correlation-id`. Sem nenhum dos dois, retorna None.
    """
    for name in CORRELATION_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return None
