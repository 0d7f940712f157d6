"""
Parameter encoders.

A parameter encoder turns one argument value into the string fragment
placed after '$' in the value block of a full key. Returning None opts
the call out of caching.

Available strategies:
- ToStringParameterEncoder: str(value)
- NormalizingParameterEncoder: deterministic compact JSON of normalised values
- CallableParameterEncoder: adapts a plain function
"""

import base64
import inspect
import io
import json
import logging
from collections.abc import Callable, Iterator
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from .constants import ERROR_NOT_AN_ENCODER, NULL_PARAMETER_VALUE
from .exceptions import CacheKeyConfigurationError, ParameterEncodingError
from .protocols import ParameterEncoder

logger = logging.getLogger(__name__)


class ToStringParameterEncoder:
    """Codifica parâmetros com str(value).

    Adequado para tipos primitivos e objetos com __str__ estável.
    None vira o sentinela "null".

    Não distingue tipos: 1 e "1" geram "1", None e "null" geram "null".
    Para parâmetros em que isso importa, use NormalizingParameterEncoder.
    """

    def encode(self, value: Any) -> str | None:
        if value is None:
            return NULL_PARAMETER_VALUE
        return str(value)


class CallableParameterEncoder:
    """Adapta uma função simples ao protocol ParameterEncoder.

    Example:
        ```python
        encoder = CallableParameterEncoder(lambda value: str(value.id))
        ```
    """

    def __init__(self, func: Callable[[Any], str | None]) -> None:
        self._func = func

    def encode(self, value: Any) -> str | None:
        return self._func(value)

    def __repr__(self) -> str:
        return f"CallableParameterEncoder({self._func!r})"


class NormalizingParameterEncoder:
    """Codifica parâmetros como JSON compacto e determinístico.

    Normaliza tipos Python antes de serializar:
    - datetime, date, time -> ISO 8601
    - Decimal, UUID -> string
    - bytes -> base64
    - set, frozenset -> lista ordenada
    - dict -> chaves ordenadas
    - Enum -> valor
    - objetos com __dict__ -> seus atributos

    Todo valor passa por json.dumps, então strings saem entre aspas e não
    colidem com números, booleanos ou None ("1" -> '"1"', 1 -> '1',
    None -> 'null'). Valores que não podem ser representados (callables,
    generators, streams abertos) retiram a chamada do cache.
    """

    def encode(self, value: Any) -> str | None:
        try:
            normalized = normalize_parameter(value)
        except (ParameterEncodingError, RecursionError) as e:
            logger.debug("Parâmetro do tipo '%s' não codificável: %s", type(value).__name__, e)
            return None

        return json.dumps(normalized, separators=(",", ":"), sort_keys=True)


def normalize_parameter(obj: Any) -> Any:
    """Normalize a parameter value to JSON-serializable types.

    Recursively processes nested structures and converts special Python
    types to deterministic JSON-serializable equivalents.

    Args:
        obj: Parameter value

    Returns:
        JSON-serializable equivalent of the value

    Raises:
        ParameterEncodingError: If the value cannot be represented in a key
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, Enum):
        return normalize_parameter(obj.value)
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, (Decimal, UUID)):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")

    if _is_unrepresentable(obj):
        raise ParameterEncodingError(f"Object of type '{type(obj).__name__}' cannot be part of a cache key")

    if isinstance(obj, (set, frozenset)):
        # Sort by type name first so mixed-type sets do not raise TypeError
        items = [normalize_parameter(item) for item in obj]
        return sorted(items, key=lambda x: (type(x).__name__, json.dumps(x, sort_keys=True)))
    if isinstance(obj, (list, tuple)):
        return [normalize_parameter(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): normalize_parameter(value) for key, value in sorted(obj.items(), key=lambda kv: str(kv[0]))}

    if hasattr(obj, "__dict__"):
        return normalize_parameter(vars(obj))

    raise ParameterEncodingError(f"Object of type '{type(obj).__name__}' is not supported")


def _is_unrepresentable(obj: Any) -> bool:
    """Check for values whose identity is not their content."""
    return (
        callable(obj)
        or inspect.isgenerator(obj)
        or inspect.iscoroutine(obj)
        or isinstance(obj, (io.IOBase, Iterator))
    )


def as_parameter_encoder(encoder: "ParameterEncoder | Callable[[Any], str | None]") -> ParameterEncoder:
    """Return encoder as a ParameterEncoder, adapting plain callables.

    Raises:
        CacheKeyConfigurationError: If encoder is neither an encoder nor callable
    """
    if not isinstance(encoder, (str, bytes)):
        if callable(getattr(encoder, "encode", None)):
            return encoder  # type: ignore[return-value]
        if callable(encoder):
            return CallableParameterEncoder(encoder)
    raise CacheKeyConfigurationError(ERROR_NOT_AN_ENCODER.format(type_name=type(encoder).__name__))
