"""Protocols para extensibilidade da biblioteca.

Define interfaces que permitem implementações customizadas de:
- ParameterEncoder: Codificação de valores de parâmetros na chave
- ScopeProvider: Escopo contextual (tenant, locale) anexado à chave
- EventListener: Recebimento de avisos de diagnóstico
- CachingComponent: Componente dono dos métodos cacheados
- KeyMetrics: Coleta de métricas de construção de chaves
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ParameterEncoder(Protocol):
    """Protocol para codificadores de valores de parâmetros.

    Deve ser uma função pura do valor: argumentos "iguais" devem produzir
    a mesma string. Retornar None sinaliza que o valor não pode ser
    representado e retira a chamada do cache (não é um erro).

    Example:
        ```python
        class OrderEncoder:
            def encode(self, value: Any) -> str | None:
                if isinstance(value, Order):
                    return str(value.id)
                return None if value is not None else "null"
        ```
    """

    def encode(self, value: Any) -> str | None:
        """Codifica um valor de parâmetro.

        Args:
            value: Valor do argumento na chamada

        Returns:
            Fragmento da chave ou None para não cachear a chamada
        """
        ...


@runtime_checkable
class ScopeProvider(Protocol):
    """Protocol para provedores de escopo.

    O escopo é independente dos argumentos da chamada e normalmente vem
    do contexto (tenant, locale). Quando presente, vira o último campo
    da chave completa.
    """

    def scope(self) -> str | None:
        """Retorna o escopo atual ou None/"" quando não há escopo."""
        ...


@runtime_checkable
class EventListener(Protocol):
    """Protocol para listeners de avisos de diagnóstico."""

    def notify(self, message: str) -> None:
        """Recebe uma mensagem de aviso.

        Args:
            message: Texto do aviso
        """
        ...


@runtime_checkable
class CachingComponent(Protocol):
    """Protocol para componentes cujos métodos são cacheados."""

    @property
    def unique_id(self) -> str:
        """Identificador único do componente (sem o separador '|')."""
        ...


class KeyMetrics(Protocol):
    """Protocol para coleta de métricas de construção de chaves.

    Example:
        ```python
        class PrometheusKeyMetrics:
            def record_opt_out(self, method_name: str) -> None:
                opt_outs_total.labels(method=method_name).inc()
        ```
    """

    def record_key_built(self, key: str) -> None:
        """Registra chave completa construída."""
        ...

    def record_opt_out(self, method_name: str) -> None:
        """Registra chamada retirada do cache por falha de codificação."""
        ...

    def record_suspicious_parameter(self, type_name: str) -> None:
        """Registra parâmetro suspeito detectado."""
        ...
