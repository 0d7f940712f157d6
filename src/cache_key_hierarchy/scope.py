"""Provedores de escopo para chaves de cache.

O escopo é anexado como último campo da chave completa e permite entradas
distintas para chamadas idênticas em contextos diferentes, como tenants.

Uso:
    ```python
    from contextvars import ContextVar

    tenant: ContextVar[str | None] = ContextVar("tenant", default=None)
    builder = CacheKeyBuilder(ToStringParameterEncoder(), scope_provider=ContextVarScope(tenant))
    ```
"""

import os
from collections.abc import Callable
from contextvars import ContextVar

from .constants import ENV_SCOPE, ERROR_NOT_A_SCOPE_PROVIDER
from .exceptions import CacheKeyConfigurationError
from .protocols import ScopeProvider
from .validators import validate_scope


class StaticScope:
    """Escopo fixo definido na configuração.

    Raises:
        CacheKeyConfigurationError: Se o valor for vazio ou contiver '|'
    """

    def __init__(self, value: str) -> None:
        validate_scope(value)
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def scope(self) -> str | None:
        return self._value

    def __repr__(self) -> str:
        return f"StaticScope({self._value!r})"


class EnvironmentScope:
    """Escopo lido de uma variável de ambiente a cada chamada.

    Attributes:
        variable: Nome da variável (default: CACHE_KEY_SCOPE)
    """

    def __init__(self, variable: str = ENV_SCOPE) -> None:
        self._variable = variable

    @property
    def variable(self) -> str:
        return self._variable

    def scope(self) -> str | None:
        return os.getenv(self._variable)


class ContextVarScope:
    """Escopo lido de uma ContextVar (tenant por requisição ou task)."""

    def __init__(self, var: ContextVar[str | None]) -> None:
        self._var = var

    def scope(self) -> str | None:
        try:
            return self._var.get()
        except LookupError:
            return None


class CallableScope:
    """Adapta uma função sem argumentos ao protocol ScopeProvider."""

    def __init__(self, func: Callable[[], str | None]) -> None:
        self._func = func

    def scope(self) -> str | None:
        return self._func()


def as_scope_provider(provider: "ScopeProvider | Callable[[], str | None]") -> ScopeProvider:
    """Retorna provider como ScopeProvider, adaptando callables simples.

    Raises:
        CacheKeyConfigurationError: Se provider não for ScopeProvider nem callable
    """
    if callable(getattr(provider, "scope", None)):
        return provider  # type: ignore[return-value]
    if callable(provider):
        return CallableScope(provider)
    raise CacheKeyConfigurationError(ERROR_NOT_A_SCOPE_PROVIDER.format(type_name=type(provider).__name__))
