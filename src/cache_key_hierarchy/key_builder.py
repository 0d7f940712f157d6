"""Construtor hierárquico de chaves de cache."""

import logging
from collections.abc import Callable, Iterable
from functools import partial
from typing import Any, overload

from .ancestors import derive_ancestor_keys
from .constants import PARAMETER_SEPARATOR, SEPARATOR
from .encoders import as_parameter_encoder
from .events import DiagnosticNotifier, is_suspicious_parameter
from .metrics import NoOpKeyMetrics
from .models import CallIdentity, KeyAndDependingKeys
from .protocols import CachingComponent, EventListener, KeyMetrics, ParameterEncoder, ScopeProvider
from .scope import as_scope_provider
from .signature import MethodSignature, resolve_method, type_name

logger = logging.getLogger(__name__)

ComponentType = type | str
Component = CachingComponent | str
Method = MethodSignature | Callable[..., Any]


class CacheKeyBuilder:
    """Construtor de chaves hierárquicas para chamadas de métodos.

    Gera chaves no formato:
    Type
    Type|Component
    Type|Component|Method|ParamType1|ParamType2
    Type|Component|Method|ParamType1|ParamType2|$Value1$Value2|Scope

    Cada nível é prefixo do seguinte, então qualquer prefixo terminado
    antes de um '|' invalida todas as entradas abaixo dele.

    Os fragmentos de tipo, id do componente, nome do método e escopo não
    podem conter '|'. Isso é um contrato com quem chama e não é validado
    a cada chamada.

    O builder é imutável após a construção e pode ser usado por várias
    threads ao mesmo tempo.

    Example:
        ```python
        builder = CacheKeyBuilder(ToStringParameterEncoder())

        result = builder.get_and_put_key("Repo", "c1", MethodSignature("Find", ("Int32",)), [7])
        result.key                # "Repo|c1|Find|Int32|$7"
        result.depending_keys()   # ["Repo", "Repo|c1", "Repo|c1|Find", "Repo|c1|Find|Int32"]
        ```
    """

    def __init__(
        self,
        parameter_encoder: ParameterEncoder | Callable[[Any], str | None],
        scope_provider: ScopeProvider | Callable[[], str | None] | None = None,
        event_listeners: Iterable[EventListener | Callable[[str], Any]] = (),
        metrics: KeyMetrics | None = None,
    ) -> None:
        """Inicializa o builder.

        Args:
            parameter_encoder: Codificador dos valores de parâmetros
            scope_provider: Provedor de escopo opcional
            event_listeners: Listeners dos avisos de diagnóstico
            metrics: Coletor de métricas (default: NoOpKeyMetrics)

        Raises:
            CacheKeyConfigurationError: Se encoder, provider ou listener forem inválidos
        """
        self._parameter_encoder = as_parameter_encoder(parameter_encoder)
        self._scope_provider = as_scope_provider(scope_provider) if scope_provider is not None else None
        self._notifier = DiagnosticNotifier(event_listeners)
        self._metrics: KeyMetrics = metrics or NoOpKeyMetrics()

    @property
    def parameter_encoder(self) -> ParameterEncoder:
        """Codificador de parâmetros em uso."""
        return self._parameter_encoder

    @property
    def scope_provider(self) -> ScopeProvider | None:
        """Provedor de escopo em uso."""
        return self._scope_provider

    @property
    def notifier(self) -> DiagnosticNotifier:
        """Notificador de avisos de diagnóstico."""
        return self._notifier

    def type_key(self, component_type: ComponentType) -> str:
        """Chave do nível de tipo: o nome do tipo."""
        if isinstance(component_type, type):
            return type_name(component_type)
        return str(component_type)

    def component_key(self, component_type: ComponentType, component: Component) -> str:
        """Chave do nível de componente: Type|Component."""
        return f"{self.type_key(component_type)}{SEPARATOR}{_unique_id(component)}"

    def signature_key(self, component_type: ComponentType, component: Component, method: Method) -> str:
        """Chave do nível de método: Type|Component|Method|ParamType1|...

        Args:
            component_type: Classe ou nome do tipo
            component: Componente dono do método
            method: Assinatura do método ou a própria função

        Returns:
            Chave com nome do método e tipos declarados dos parâmetros
        """
        return self._signature_key(component_type, component, resolve_method(method))

    def call_key(
        self,
        component_type: ComponentType,
        component: Component,
        method: Method,
        parameters: Iterable[Any],
    ) -> str | None:
        """Chave da chamada sem escopo: Type|...|ParamTypeN|$Value1$Value2

        Invalida a chamada com esses argumentos em todos os escopos.

        Args:
            component_type: Classe ou nome do tipo
            component: Componente dono do método
            method: Assinatura do método ou a própria função
            parameters: Valores dos argumentos na ordem da chamada

        Returns:
            Chave ou None se algum parâmetro não puder ser codificado
        """
        signature = resolve_method(method)
        parts = [self._signature_key(component_type, component, signature), SEPARATOR]

        for parameter in parameters:
            encoded = self._parameter_encoder.encode(parameter)
            if encoded is None:
                logger.debug(
                    "Parâmetro do tipo '%s' não codificável, chamada a '%s' não será cacheada",
                    type(parameter).__name__,
                    signature.name,
                )
                return None
            self._check_suspicious_parameter(parameter, encoded)
            parts.append(PARAMETER_SEPARATOR)
            parts.append(encoded)

        return "".join(parts)

    def full_key(
        self,
        component_type: ComponentType,
        component: Component,
        method: Method,
        parameters: Iterable[Any],
    ) -> str | None:
        """Chave completa da chamada, incluindo o escopo quando houver.

        O provedor de escopo é consultado uma única vez e só quando todos
        os parâmetros foram codificados.

        Returns:
            Chave completa ou None se a chamada não deve ser cacheada
        """
        signature = resolve_method(method)
        start_key = self.call_key(component_type, component, signature, parameters)
        if start_key is None:
            self._metrics.record_opt_out(signature.name)
            return None

        scope = self._current_scope()
        key = f"{start_key}{SEPARATOR}{scope}" if scope else start_key
        self._metrics.record_key_built(key)
        return key

    @overload
    def remove_key(self, component_type: ComponentType) -> str: ...

    @overload
    def remove_key(self, component_type: ComponentType, component: Component) -> str: ...

    @overload
    def remove_key(self, component_type: ComponentType, component: Component, method: Method) -> str: ...

    @overload
    def remove_key(
        self,
        component_type: ComponentType,
        component: Component,
        method: Method,
        parameters: Iterable[Any],
    ) -> str | None: ...

    def remove_key(
        self,
        component_type: ComponentType,
        component: Component | None = None,
        method: Method | None = None,
        parameters: Iterable[Any] | None = None,
    ) -> str | None:
        """Chave para invalidação no nível indicado pelos argumentos.

        Args:
            component_type: Classe ou nome do tipo
            component: Componente (nível 1)
            method: Método (nível 2)
            parameters: Valores dos argumentos (chave da chamada sem escopo)

        Returns:
            Chave do nível mais específico fornecido

        Raises:
            TypeError: Se um nível for informado sem os níveis anteriores
        """
        if component is None:
            if method is not None or parameters is not None:
                raise TypeError("remove_key requer component quando method ou parameters são informados")
            return self.type_key(component_type)
        if method is None:
            if parameters is not None:
                raise TypeError("remove_key requer method quando parameters são informados")
            return self.component_key(component_type, component)
        if parameters is None:
            return self.signature_key(component_type, component, method)
        return self.call_key(component_type, component, method, parameters)

    def get_and_put_key(
        self,
        component_type: ComponentType,
        component: Component,
        method: Method,
        parameters: Iterable[Any],
    ) -> KeyAndDependingKeys:
        """Chave completa da chamada e produtor das chaves ancestrais.

        Returns:
            KeyAndDependingKeys vazio se a chamada não deve ser cacheada
        """
        key = self.full_key(component_type, component, method, parameters)
        if key is None:
            return KeyAndDependingKeys()
        return KeyAndDependingKeys(key, partial(derive_ancestor_keys, key))

    def key_for(self, call: CallIdentity) -> KeyAndDependingKeys:
        """Atalho de get_and_put_key para uma CallIdentity."""
        return self.get_and_put_key(call.component_type, call.component, call.method, call.parameters)

    def _signature_key(self, component_type: ComponentType, component: Component, signature: MethodSignature) -> str:
        return SEPARATOR.join((self.component_key(component_type, component), signature.name, *signature.parameter_types))

    def _current_scope(self) -> str | None:
        if self._scope_provider is None:
            return None
        return self._scope_provider.scope()

    def _check_suspicious_parameter(self, parameter: Any, encoded: str) -> None:
        if is_suspicious_parameter(parameter, encoded):
            parameter_type = type(parameter)
            rendered = type_name(parameter_type)
            try:
                self._metrics.record_suspicious_parameter(rendered)
            except Exception as e:
                # Diagnostics must not break key building
                logger.warning("Metrics error in record_suspicious_parameter for type '%s': %s", rendered, e)
            self._notifier.warn_suspicious_parameter(parameter_type)


def _unique_id(component: Component) -> str:
    if isinstance(component, str):
        return component
    return str(component.unique_id)
