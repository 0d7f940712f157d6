"""Tipos de dados das chamadas e das chaves geradas."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .protocols import CachingComponent
from .signature import MethodSignature


def _no_depending_keys() -> list[str]:
    return []


@dataclass(frozen=True)
class ComponentRef:
    """Componente identificado apenas pelo seu id único.

    Attributes:
        unique_id: Identificador do componente (sem o separador '|')
    """

    unique_id: str


@dataclass(frozen=True)
class CallIdentity:
    """Identidade de uma chamada interceptada.

    Fornecida pela camada de interceptação; o builder apenas lê.

    Attributes:
        component_type: Classe ou nome do tipo configurado
        component: Componente dono do método (ou seu id como string)
        method: Assinatura do método ou a própria função
        parameters: Valores dos argumentos na ordem da chamada
    """

    component_type: type | str
    component: CachingComponent | str
    method: MethodSignature | Callable[..., Any]
    parameters: Sequence[Any] = ()


@dataclass(frozen=True)
class KeyAndDependingKeys:
    """Chave completa de uma chamada e suas chaves ancestrais.

    As chaves ancestrais são calculadas sob demanda a cada chamada de
    depending_keys(); nada é memorizado.

    Attributes:
        key: Chave completa ou None quando a chamada não deve ser cacheada
        depending_keys_factory: Produtor das chaves ancestrais
    """

    key: str | None = None
    depending_keys_factory: Callable[[], list[str]] = field(default=_no_depending_keys, repr=False, compare=False)

    @property
    def has_key(self) -> bool:
        """Indica se a chamada produziu chave."""
        return self.key is not None

    def depending_keys(self) -> list[str]:
        """Retorna as chaves ancestrais, da mais ampla para a mais específica."""
        return self.depending_keys_factory()
