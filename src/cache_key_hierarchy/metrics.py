"""Métricas de construção de chaves usando OpenTelemetry."""

from collections import Counter
from dataclasses import dataclass, field
from threading import Lock

from opentelemetry import metrics as otel_metrics

from .constants import DEFAULT_METER_NAME


class NoOpKeyMetrics:
    """Coletor de métricas que não faz nada (default)."""

    def record_key_built(self, key: str) -> None:
        pass

    def record_opt_out(self, method_name: str) -> None:
        pass

    def record_suspicious_parameter(self, type_name: str) -> None:
        pass


@dataclass
class KeyBuildStats:
    """Estatísticas agregadas de construção de chaves."""

    keys_built: int = 0
    opt_outs: int = 0
    suspicious_parameters: int = 0
    opt_outs_by_method: dict[str, int] = field(default_factory=dict)
    suspicious_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def total_requests(self) -> int:
        return self.keys_built + self.opt_outs

    @property
    def opt_out_ratio(self) -> float:
        total = self.total_requests
        return self.opt_outs / total if total > 0 else 0.0


class OpenTelemetryKeyMetrics:
    """Coletor de métricas usando OpenTelemetry.

    Métricas exportadas:
    - cache_key.built (counter): Chaves completas construídas
    - cache_key.opt_outs (counter): Chamadas retiradas do cache
    - cache_key.suspicious_parameters (counter): Parâmetros suspeitos

    Example:
        ```python
        from opentelemetry import metrics
        from opentelemetry.sdk.metrics import MeterProvider

        metrics.set_meter_provider(MeterProvider())
        builder = CacheKeyBuilder(encoder, metrics=OpenTelemetryKeyMetrics())
        ```
    """

    def __init__(self, meter_name: str = DEFAULT_METER_NAME) -> None:
        """Inicializa métricas OpenTelemetry.

        Args:
            meter_name: Nome do meter para agrupar métricas
        """
        meter = otel_metrics.get_meter(meter_name)

        self._built_counter = meter.create_counter(
            "cache_key.built",
            description="Número de chaves completas construídas",
            unit="1",
        )
        self._opt_outs_counter = meter.create_counter(
            "cache_key.opt_outs",
            description="Número de chamadas retiradas do cache",
            unit="1",
        )
        self._suspicious_counter = meter.create_counter(
            "cache_key.suspicious_parameters",
            description="Número de parâmetros codificados como o próprio tipo",
            unit="1",
        )

    def record_key_built(self, key: str) -> None:
        # A chave completa tem cardinalidade alta demais para virar atributo
        self._built_counter.add(1)

    def record_opt_out(self, method_name: str) -> None:
        self._opt_outs_counter.add(1, {"method": method_name})

    def record_suspicious_parameter(self, type_name: str) -> None:
        self._suspicious_counter.add(1, {"parameter_type": type_name})


class InMemoryKeyMetrics:
    """Coletor de métricas em memória.

    Útil para desenvolvimento e testes. Thread-safe.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._keys_built = 0
        self._opt_outs: Counter[str] = Counter()
        self._suspicious: Counter[str] = Counter()

    def record_key_built(self, key: str) -> None:
        with self._lock:
            self._keys_built += 1

    def record_opt_out(self, method_name: str) -> None:
        with self._lock:
            self._opt_outs[method_name] += 1

    def record_suspicious_parameter(self, type_name: str) -> None:
        with self._lock:
            self._suspicious[type_name] += 1

    def get_stats(self) -> KeyBuildStats:
        """Retorna snapshot das estatísticas."""
        with self._lock:
            return KeyBuildStats(
                keys_built=self._keys_built,
                opt_outs=sum(self._opt_outs.values()),
                suspicious_parameters=sum(self._suspicious.values()),
                opt_outs_by_method=dict(self._opt_outs),
                suspicious_by_type=dict(self._suspicious),
            )

    def reset(self) -> None:
        """Reseta todas as estatísticas."""
        with self._lock:
            self._keys_built = 0
            self._opt_outs.clear()
            self._suspicious.clear()
