"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="pedido_bridge")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("airtable_record_created", extra={"attempts": 2})

Campos obrigatórios em todo log: correlation_id, service, level,
logger, message, asctime. Nunca logar nome, email ou telefone do cliente.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
