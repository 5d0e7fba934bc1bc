"""Configuração de logging estruturado.

Re-exporta funções e classes para configuração de logging JSON.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="checkout_pagamentos")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("pix_payment_created", extra={"payment_id": "123"})

Campos obrigatórios em todo log:
- correlation_id
- service
- level
- logger
- message
- asctime

Dados de pagamento sensíveis (token de cartão, CPF, e-mail, bearer token)
nunca saem em claro: SensitiveFieldFilter mascara esses campos em `extra`.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import (
    SENSITIVE_FIELDS,
    CorrelationIdFilter,
    SensitiveFieldFilter,
    mask_value,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_FIELDS",
    # Filters
    "CorrelationIdFilter",
    "SensitiveFieldFilter",
    # Configuração principal
    "configure_logging",
    # Formatters
    "create_json_formatter",
    "get_logger",
    "mask_value",
]
