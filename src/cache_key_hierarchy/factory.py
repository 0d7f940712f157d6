"""Criação de CacheKeyBuilder a partir da configuração."""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from .config import KeyBuilderConfig
from .encoders import ToStringParameterEncoder
from .events import LoggingEventListener
from .key_builder import CacheKeyBuilder
from .protocols import EventListener, KeyMetrics, ParameterEncoder, ScopeProvider
from .scope import StaticScope

logger = logging.getLogger(__name__)


def create_key_builder(
    parameter_encoder: ParameterEncoder | Callable[[Any], str | None] | None = None,
    *,
    scope: str | None = None,
    scope_provider: ScopeProvider | Callable[[], str | None] | None = None,
    listeners: Iterable[EventListener | Callable[[str], Any]] | None = None,
    metrics: KeyMetrics | None = None,
    diagnostics: bool | None = None,
) -> CacheKeyBuilder:
    """Cria um CacheKeyBuilder com os defaults da biblioteca.

    Precedência do escopo: scope_provider > scope > CACHE_KEY_SCOPE.
    Sem listeners explícitos, registra um LoggingEventListener quando os
    diagnósticos estão habilitados (CACHE_KEY_DIAGNOSTICS, default true).

    Args:
        parameter_encoder: Codificador (default: ToStringParameterEncoder)
        scope: Escopo fixo
        scope_provider: Provedor de escopo dinâmico
        listeners: Listeners de diagnóstico
        metrics: Coletor de métricas
        diagnostics: Habilita o listener de log padrão

    Returns:
        Builder configurado

    Raises:
        CacheKeyConfigurationError: Se a configuração for inválida

    Example:
        ```python
        builder = create_key_builder(scope="tenant-a")
        builder.remove_key(OrderService)  # "myapp.services.OrderService"
        ```
    """
    actual_encoder = parameter_encoder if parameter_encoder is not None else ToStringParameterEncoder()

    actual_scope_provider = scope_provider
    if actual_scope_provider is None:
        static_scope = KeyBuilderConfig.resolve_scope(scope)
        if static_scope is not None:
            actual_scope_provider = StaticScope(static_scope)

    if listeners is None:
        listeners = [LoggingEventListener()] if KeyBuilderConfig.resolve_diagnostics_enabled(diagnostics) else []

    logger.debug(
        "Criando CacheKeyBuilder (encoder=%s, scope_provider=%s)",
        type(actual_encoder).__name__,
        type(actual_scope_provider).__name__ if actual_scope_provider is not None else None,
    )

    return CacheKeyBuilder(
        parameter_encoder=actual_encoder,
        scope_provider=actual_scope_provider,
        event_listeners=listeners,
        metrics=metrics,
    )
