"""Erro de validação de requisições do checkout."""

from __future__ import annotations


class ValidationError(Exception):
    """Body ausente ou inválido (mapeado para HTTP 400).

    Args:
        message: Descrição curta, segura para devolver ao cliente
        fields: Campos que falharam na validação
    """

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []
