"""Protocolo de store de auditoria de eventos de pagamento."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class PaymentAuditStoreProtocol(ABC):
    """Contrato append-only para trilha de auditoria.

    Registros não devem conter PII (e-mail, CPF, token de cartão).
    """

    @abstractmethod
    def append(self, record: dict[str, Any]) -> None:
        """Acrescenta um registro de auditoria."""

    async def append_async(self, record: dict[str, Any]) -> None:
        """Versão assíncrona; por padrão delega para append."""
        self.append(record)
