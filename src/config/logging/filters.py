"""Filters de logging para injeção de contexto e mascaramento.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: checkout_pagamentos)

Campos mascarados (quando passados via `extra`):
- SENSITIVE_FIELDS: tokens, CPF, e-mail, assinatura
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

SENSITIVE_FIELDS = frozenset(
    {
        "access_token",
        "authorization",
        "card_token",
        "cpf",
        "email",
        "payer_email",
        "token",
        "webhook_secret",
        "x_signature",
    }
)


def mask_value(value: object, visible: int = 4) -> str:
    """Mascara valor mantendo apenas os últimos `visible` caracteres."""
    text = str(value)
    if len(text) <= visible:
        return "***"
    return f"***{text[-visible:]}"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveFieldFilter(logging.Filter):
    """Mascara campos sensíveis de pagamento presentes no record.

    Nunca descarta o record; apenas reescreve os atributos listados.
    """

    def __init__(self, fields: frozenset[str] = SENSITIVE_FIELDS) -> None:
        super().__init__()
        self._fields = fields

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self._fields:
            value = getattr(record, field, None)
            if value:
                setattr(record, field, mask_value(value))
        return True
