"""cache-key-hierarchy: Chaves hierárquicas para cache de métodos.

Constrói chaves de cache para chamadas interceptadas e deriva delas as
chaves ancestrais usadas para invalidação em massa (por tipo, componente
ou método).

Uso básico:
    ```python
    from cache_key_hierarchy import CacheKeyBuilder, ToStringParameterEncoder

    builder = CacheKeyBuilder(ToStringParameterEncoder())

    result = builder.get_and_put_key(OrderRepository, repo, OrderRepository.find, [42])
    if result.has_key:
        store.put(result.key, value, depends_on=result.depending_keys())

    # Invalidação de tudo que pertence ao tipo
    store.evict(builder.remove_key(OrderRepository))
    ```

Com escopo por tenant:
    ```python
    from cache_key_hierarchy import ContextVarScope, create_key_builder

    builder = create_key_builder(scope_provider=ContextVarScope(current_tenant))
    ```
"""

__version__ = "0.1.0"

# Construção de chaves
from .ancestors import derive_ancestor_keys
from .config import KeyBuilderConfig

# Codificadores de parâmetros
from .encoders import (
    CallableParameterEncoder,
    NormalizingParameterEncoder,
    ToStringParameterEncoder,
)

# Diagnóstico
from .events import (
    CallableEventListener,
    CollectingEventListener,
    DiagnosticNotifier,
    LoggingEventListener,
    is_suspicious_parameter,
)

# Exceções
from .exceptions import (
    CacheKeyConfigurationError,
    CacheKeyError,
    ParameterEncodingError,
)
from .factory import create_key_builder
from .key_builder import CacheKeyBuilder

# Métricas
from .metrics import (
    InMemoryKeyMetrics,
    KeyBuildStats,
    NoOpKeyMetrics,
    OpenTelemetryKeyMetrics,
)
from .models import CallIdentity, ComponentRef, KeyAndDependingKeys

# Protocols (para extensibilidade)
from .protocols import (
    CachingComponent,
    EventListener,
    KeyMetrics,
    ParameterEncoder,
    ScopeProvider,
)

# Escopo
from .scope import CallableScope, ContextVarScope, EnvironmentScope, StaticScope
from .signature import MethodSignature, bind_arguments, type_name

__all__ = [
    # Construção de chaves
    "CacheKeyBuilder",
    "create_key_builder",
    "derive_ancestor_keys",
    "KeyBuilderConfig",
    # Modelos
    "CallIdentity",
    "ComponentRef",
    "KeyAndDependingKeys",
    "MethodSignature",
    "bind_arguments",
    "type_name",
    # Codificadores
    "CallableParameterEncoder",
    "NormalizingParameterEncoder",
    "ToStringParameterEncoder",
    # Escopo
    "CallableScope",
    "ContextVarScope",
    "EnvironmentScope",
    "StaticScope",
    # Diagnóstico
    "CallableEventListener",
    "CollectingEventListener",
    "DiagnosticNotifier",
    "LoggingEventListener",
    "is_suspicious_parameter",
    # Métricas
    "InMemoryKeyMetrics",
    "KeyBuildStats",
    "NoOpKeyMetrics",
    "OpenTelemetryKeyMetrics",
    # Exceções
    "CacheKeyError",
    "CacheKeyConfigurationError",
    "ParameterEncodingError",
    # Protocols
    "CachingComponent",
    "EventListener",
    "KeyMetrics",
    "ParameterEncoder",
    "ScopeProvider",
]
