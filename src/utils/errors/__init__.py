"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    DuplicateRequestError,
    FirestoreUnavailableError,
    InfrastructureError,
    RedisConnectionError,
    UpstreamError,
)

__all__ = [
    "DuplicateRequestError",
    "FirestoreUnavailableError",
    "InfrastructureError",
    "RedisConnectionError",
    "UpstreamError",
]
