"""Exceções compartilhadas entre camadas (infra, provedor e requisição)."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class UpstreamError(InfrastructureError):
    """Falha ao chamar o provedor de pagamentos (status não-2xx ou rede).

    Args:
        message: Mensagem com contexto, sem tokens ou PII
        status_code: Status HTTP devolvido pelo provedor (None em falha de rede)
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DuplicateRequestError(Exception):
    """Requisição com a mesma chave de idempotência já em curso ou concluída."""

    def __init__(self, idempotency_key: str) -> None:
        super().__init__("duplicate_request")
        self.idempotency_key = idempotency_key
