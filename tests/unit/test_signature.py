"""
Unit tests for signature module.

Tests type name rendering, method signature introspection and argument
binding following AAA pattern.
"""

from typing import Any, Optional

import pytest

from cache_key_hierarchy import (
    CacheKeyBuilder,
    MethodSignature,
    ToStringParameterEncoder,
    bind_arguments,
    derive_ancestor_keys,
    type_name,
)
from cache_key_hierarchy.signature import resolve_method


class Invoice:
    pass


class InvoiceService:
    def find(self, invoice_id: int, currency: str = "EUR") -> Invoice:
        return Invoice()

    @classmethod
    def create(cls, amount: float) -> "InvoiceService":
        return cls()

    @staticmethod
    def total(values: list[int]) -> int:
        return sum(values)


def search(term, limit: int = 10, *tags: str, **filters: Any) -> list:
    return []


def find_order(order: "UndefinedOrder | None", limit: int = 1) -> None:  # noqa: F821
    pass


class TestTypeName:
    """Test type_name rendering."""

    @pytest.mark.parametrize(
        ("tp", "expected"),
        [
            (int, "int"),
            (str, "str"),
            (type(None), "NoneType"),
            (None, "NoneType"),
            (Any, "Any"),
            (list[int], "list[int]"),
            (dict[str, int], "dict[str,int]"),
            (int | None, "Union[int,NoneType]"),
            (Optional[str], "Union[str,NoneType]"),
            ("ForwardRef", "ForwardRef"),
            ("Order | None", "Union[Order,NoneType]"),
            ("list[int | None]", "list[Union[int,NoneType]]"),
            ("dict[str, 'Order']", "dict[str,Order]"),
        ],
    )
    def test_type_name(self, tp: Any, expected: str) -> None:
        """Test rendering of builtins, generics and unions."""
        assert type_name(tp) == expected

    def test_custom_class_is_qualified(self) -> None:
        """Test custom classes include module and qualname."""
        assert type_name(Invoice) == f"{Invoice.__module__}.Invoice"

    def test_rendered_names_never_contain_separator(self) -> None:
        """Test unions do not leak the field separator."""
        assert "|" not in type_name(int | str | None)


class TestMethodSignature:
    """Test MethodSignature introspection."""

    def test_instance_method_skips_self(self) -> None:
        """Test self is not part of the signature."""
        # Act
        signature = MethodSignature.from_callable(InvoiceService.find)

        # Assert
        assert signature == MethodSignature("find", ("int", "str"))

    def test_bound_method(self) -> None:
        """Test bound methods produce the same signature."""
        assert MethodSignature.from_callable(InvoiceService().find) == MethodSignature("find", ("int", "str"))

    def test_class_method(self) -> None:
        """Test cls is not part of the signature."""
        assert MethodSignature.from_callable(InvoiceService.create) == MethodSignature("create", ("float",))

    def test_static_method(self) -> None:
        """Test static methods keep all parameters."""
        assert MethodSignature.from_callable(InvoiceService.total) == MethodSignature("total", ("list[int]",))

    def test_unannotated_and_variadic_parameters(self) -> None:
        """Test unannotated parameters render as Any and variadics are skipped."""
        assert MethodSignature.from_callable(search) == MethodSignature("search", ("Any", "int"))

    def test_unresolvable_string_annotation_is_normalized(self) -> None:
        """Test an unresolvable union annotation renders like a resolved union."""
        assert MethodSignature.from_callable(find_order) == MethodSignature(
            "find_order", ("Union[UndefinedOrder,NoneType]", "int")
        )

    def test_unresolvable_annotation_keeps_key_hierarchy(self) -> None:
        """Test the signature key gains no extra hierarchy level."""
        # Arrange
        builder = CacheKeyBuilder(ToStringParameterEncoder())

        # Act
        key = builder.signature_key("Repo", "c1", find_order)

        # Assert
        assert key == "Repo|c1|find_order|Union[UndefinedOrder,NoneType]|int"
        assert derive_ancestor_keys(key) == [
            "Repo",
            "Repo|c1",
            "Repo|c1|find_order",
            "Repo|c1|find_order|Union[UndefinedOrder,NoneType]",
        ]

    def test_resolve_method_keeps_signature(self) -> None:
        """Test explicit signatures pass through unchanged."""
        # Arrange
        signature = MethodSignature("Find", ("Int32",))

        # Act & Assert
        assert resolve_method(signature) is signature

    def test_resolve_method_introspects_callable(self) -> None:
        """Test callables are introspected."""
        assert resolve_method(search).name == "search"


class TestBindArguments:
    """Test bind_arguments ordering."""

    def test_positional_and_keyword_calls_match(self) -> None:
        """Test same call shape regardless of argument style."""
        # Act
        positional = bind_arguments(InvoiceService.find, (InvoiceService(), 1, "USD"), {})
        keyword = bind_arguments(InvoiceService.find, (InvoiceService(),), {"currency": "USD", "invoice_id": 1})

        # Assert
        assert positional == keyword == (1, "USD")

    def test_defaults_are_applied(self) -> None:
        """Test defaults fill missing arguments."""
        assert bind_arguments(InvoiceService().find, (1,), {}) == (1, "EUR")

    def test_variadic_arguments(self) -> None:
        """Test extra positionals are flattened and extra keywords appended sorted."""
        # Act
        values = bind_arguments(search, ("python", 5, "a", "b"), {"z": 1, "lang": "en"})

        # Assert
        assert values == ("python", 5, "a", "b", {"lang": "en", "z": 1})

    def test_no_extra_keywords_appends_nothing(self) -> None:
        """Test empty **kwargs adds no value."""
        assert bind_arguments(search, ("python",), {}) == ("python", 10)

    def test_invalid_arguments_raise_type_error(self) -> None:
        """Test arguments not matching the signature."""
        with pytest.raises(TypeError):
            bind_arguments(InvoiceService().find, (), {"unknown": 1})
