"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_process_order_use_case

    initialize_app()
    use_case = get_process_order_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_airtable_settings, get_base_settings, get_shopify_settings

if TYPE_CHECKING:
    from app.use_cases.shopify import ProcessOrderCreatedUseCase

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging JSON com correlation_id. Chamar uma vez no startup."""
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=get_base_settings().service_name,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de configuração de todos os módulos, prefixados pelo domínio."""
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in get_base_settings().validate())
    errors.extend(f"shopify: {error}" for error in get_shopify_settings().validate())
    errors.extend(f"airtable: {error}" for error in get_airtable_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    environment = get_base_settings().environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


@lru_cache(maxsize=1)
def get_process_order_use_case() -> ProcessOrderCreatedUseCase:
    """Obtém use case de pedidos (singleton, sem estado mutável)."""
    from app.bootstrap.shopify_factory import create_process_order_created_use_case

    return create_process_order_created_use_case()
