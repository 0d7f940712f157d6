"""Configuração de fixtures para testes."""

import pytest

from cache_key_hierarchy import (
    CacheKeyBuilder,
    CollectingEventListener,
    ComponentRef,
    MethodSignature,
    ToStringParameterEncoder,
)


@pytest.fixture
def listener() -> CollectingEventListener:
    """Listener que guarda os avisos em memória."""
    return CollectingEventListener()


@pytest.fixture
def builder(listener: CollectingEventListener) -> CacheKeyBuilder:
    """Builder com encoder str() e sem escopo."""
    return CacheKeyBuilder(ToStringParameterEncoder(), event_listeners=[listener])


@pytest.fixture
def component() -> ComponentRef:
    """Componente de exemplo."""
    return ComponentRef("c1")


@pytest.fixture
def find_method() -> MethodSignature:
    """Assinatura Find(Int32)."""
    return MethodSignature("Find", ("Int32",))
