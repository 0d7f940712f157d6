"""
Method signature introspection for cache key generation.

Renders Python types as key fragments and extracts the method name and
declared parameter types of a callable, skipping the implicit self/cls
parameter of methods.
"""

import inspect
import types
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .constants import UNANNOTATED_PARAMETER_TYPE

_IMPLICIT_FIRST_PARAMETERS = ("self", "cls")
_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def type_name(tp: Any) -> str:
    """Render a type as a key fragment.

    Builtin classes render as their qualified name (``int``), other classes
    as ``module.QualName``. Generics render as ``origin[arg,arg]`` and unions
    as ``Union[...]`` so the result never contains the field separator.

    Args:
        tp: Class, generic alias, annotation or forward reference

    Returns:
        Type name string
    """
    if tp is Any:
        return "Any"
    if tp is None or tp is type(None):
        return "NoneType"
    if isinstance(tp, str):
        return _string_annotation_name(tp)
    if isinstance(tp, typing.ForwardRef):
        return _string_annotation_name(tp.__forward_arg__)

    origin = typing.get_origin(tp)
    if origin is not None:
        return _generic_name(origin, typing.get_args(tp))

    if isinstance(tp, type):
        module = getattr(tp, "__module__", None)
        qualname = getattr(tp, "__qualname__", tp.__name__)
        if module in (None, "builtins"):
            return qualname
        return f"{module}.{qualname}"

    return repr(tp)


def _generic_name(origin: Any, args: tuple[Any, ...]) -> str:
    """Render a parameterised generic without spaces."""
    if origin is typing.Union or origin is types.UnionType:
        name = "Union"
    elif isinstance(origin, type):
        name = type_name(origin)
    else:
        name = getattr(origin, "_name", None) or repr(origin)

    if not args:
        return name
    return f"{name}[{','.join(type_name(arg) for arg in args)}]"


def _string_annotation_name(text: str) -> str:
    """Render an unresolved string annotation like its resolved form.

    ``"Order | None"`` becomes ``Union[Order,NoneType]``. Whitespace and
    quotes are dropped.
    """
    compact = "".join(text.split()).replace("'", "").replace('"', "")
    return _render_union_text(compact)


def _render_union_text(text: str) -> str:
    members = [_render_generic_text(member) for member in _split_top_level(text, "|")]
    if len(members) > 1:
        return f"Union[{','.join(members)}]"
    return members[0]


def _render_generic_text(text: str) -> str:
    if text == "None":
        return "NoneType"
    start = text.find("[")
    if start == -1 or not text.endswith("]"):
        # Unbalanced text, the separator must still not survive
        return text.replace("|", ",")
    args = _split_top_level(text[start + 1 : -1], ",")
    return f"{text[:start]}[{','.join(_render_union_text(arg) for arg in args)}]"


def _split_top_level(text: str, separator: str) -> list[str]:
    """Split text on separator outside of brackets."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


@dataclass(frozen=True)
class MethodSignature:
    """Name and declared parameter types of a cached method.

    Attributes:
        name: Method name
        parameter_types: Rendered parameter types in declaration order
    """

    name: str
    parameter_types: tuple[str, ...] = ()

    @classmethod
    def from_callable(cls, func: Callable[..., Any]) -> "MethodSignature":
        """Build a signature from a function or method.

        Args:
            func: Function, bound method or unbound method

        Returns:
            MethodSignature with self/cls and variadic parameters removed
        """
        name = getattr(func, "__name__", None) or type(func).__name__
        parameters = _declared_parameters(func)
        return cls(
            name=name,
            parameter_types=tuple(_annotation_name(p.annotation) for p in parameters),
        )


def resolve_method(method: "MethodSignature | Callable[..., Any]") -> MethodSignature:
    """Return method as a MethodSignature, introspecting callables."""
    if isinstance(method, MethodSignature):
        return method
    return MethodSignature.from_callable(method)


def bind_arguments(func: Callable[..., Any], args: Sequence[Any], kwargs: dict[str, Any]) -> tuple[Any, ...]:
    """Order call arguments by declaration, applying defaults.

    Positional and keyword arguments of the same call produce the same
    sequence, which is what the interception layer passes as parameter
    values. The implicit self/cls argument is dropped, extra positional
    arguments are flattened and extra keyword arguments are appended as
    one key-sorted dict.

    Args:
        func: Function being called
        args: Positional arguments, including self/cls for unbound methods
        kwargs: Keyword arguments

    Returns:
        Argument values in declaration order

    Raises:
        TypeError: If the arguments do not match the signature
    """
    sig = _signature(func)
    bound = sig.bind(*args, **kwargs)
    bound.apply_defaults()

    values: list[Any] = []
    for index, (param_name, value) in enumerate(bound.arguments.items()):
        kind = sig.parameters[param_name].kind
        if index == 0 and param_name in _IMPLICIT_FIRST_PARAMETERS:
            continue
        if kind is inspect.Parameter.VAR_POSITIONAL:
            values.extend(value)
        elif kind is inspect.Parameter.VAR_KEYWORD:
            if value:
                values.append(dict(sorted(value.items())))
        else:
            values.append(value)
    return tuple(values)


def _signature(func: Callable[..., Any]) -> inspect.Signature:
    """Get signature resolving string annotations when possible."""
    try:
        return inspect.signature(func, eval_str=True)
    except (NameError, TypeError, SyntaxError):
        return inspect.signature(func)


def _declared_parameters(func: Callable[..., Any]) -> list[inspect.Parameter]:
    """Parameters that take part in the signature key."""
    try:
        params = list(_signature(func).parameters.values())
    except (ValueError, TypeError):
        return []

    if params and params[0].name in _IMPLICIT_FIRST_PARAMETERS:
        params = params[1:]
    return [p for p in params if p.kind not in _VARIADIC_KINDS]


def _annotation_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return UNANNOTATED_PARAMETER_TYPE
    return type_name(annotation)
