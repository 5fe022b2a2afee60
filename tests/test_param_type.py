"""Type acceptance and coercion tests.

These tests verify:
- Lenient acceptance for a single declared primitive type
- Strict per-branch acceptance for unions
- Nullability and class references
- Coercion narrowing to each primitive kind
"""

from __future__ import annotations

import types
from typing import Annotated, Any, Optional

import pytest
from pydantic import BaseModel

from invoker_core import Post
from invoker_core.binding import UriVar, accepts, coerce, coerce_to_declared, is_builtin, primitive_kind
from invoker_core.binding.param_type import (
    is_numeric,
    is_object,
    is_stringable,
    split_annotation,
)
from tests.fixtures.resources import UserResource
from tests.fixtures.value_objects import CompanyId


class Stringable:
    def __str__(self) -> str:
        return "stringable"


class LabelModel(BaseModel):
    label: str = "acme"

    def __str__(self) -> str:
        return self.label


class TestSplitAnnotation:
    """Test annotation splitting into declared types."""

    def test_plain_type(self):
        """Test a plain class yields one declared type."""
        assert split_annotation(int) == ((int,), False, ())

    def test_optional_is_nullable(self):
        """Test X | None and Optional[X] mark nullable."""
        assert split_annotation(str | None) == ((str,), True, ())
        assert split_annotation(Optional[str]) == ((str,), True, ())

    def test_union_keeps_order(self):
        """Test union members keep declaration order."""
        assert split_annotation(int | str) == ((int, str), False, ())

    def test_annotated_metadata(self):
        """Test Annotated extras are collected."""
        declared, nullable, metadata = split_annotation(
            Annotated[CompanyId | None, UriVar("companyId")]
        )
        assert declared == (CompanyId,)
        assert nullable is True
        assert metadata == (UriVar("companyId"),)

    def test_generic_alias_uses_origin(self):
        """Test list[int] is declared as list."""
        assert split_annotation(list[int])[0] == (list,)

    def test_empty_annotation(self):
        """Test a missing annotation declares nothing."""
        import inspect

        assert split_annotation(inspect.Parameter.empty) == ((), False, ())


class TestPrimitiveKinds:
    """Test primitive kind mapping."""

    @pytest.mark.parametrize(
        ("declared", "kind"),
        [
            (str, "string"),
            (int, "int"),
            (float, "float"),
            (bool, "bool"),
            (list, "array"),
            (dict, "array"),
            (object, "object"),
            (Any, "any"),
        ],
    )
    def test_builtin_kinds(self, declared, kind):
        """Test builtin types map to their kind."""
        assert primitive_kind(declared) == kind
        assert is_builtin(declared)

    def test_class_has_no_kind(self):
        """Test user classes are not builtin."""
        assert primitive_kind(CompanyId) is None
        assert not is_builtin(CompanyId)


class TestAcceptsSingleType:
    """Test lenient acceptance for a single declared type."""

    def test_int_accepts_numeric_string(self):
        """Test int accepts '123'."""
        assert accepts(int, "123")

    def test_int_rejects_non_numeric_string(self):
        """Test int rejects 'abc'."""
        assert not accepts(int, "abc")

    def test_int_rejects_numeric_string_without_finite_int(self):
        """Test int rejects numeric strings that overflow to infinity."""
        assert not accepts(int, "1e400")
        assert not accepts(int, "-1e999")
        assert accepts(int, "1e3")

    def test_int_rejects_float(self):
        """Test int rejects 1.5."""
        assert not accepts(int, 1.5)

    def test_int_rejects_bool(self):
        """Test bool is not accepted as int."""
        assert not accepts(int, True)

    def test_float_accepts_int_and_numeric_string(self):
        """Test float accepts ints and numeric strings."""
        assert accepts(float, 3)
        assert accepts(float, "2.5")
        assert not accepts(float, "two")

    def test_string_accepts_scalars_and_stringables(self):
        """Test string accepts numbers, bools and objects with __str__."""
        assert accepts(str, 42)
        assert accepts(str, 1.5)
        assert accepts(str, True)
        assert accepts(str, Stringable())
        assert not accepts(str, UserResource())
        assert not accepts(str, ["a"])

    def test_string_rejects_plain_models(self):
        """Test pydantic models only count as stringable with their own __str__."""
        assert not accepts(str, Post())
        assert accepts(str, LabelModel())

    def test_bool_literal_set(self):
        """Test bool accepts only its literal set."""
        for value in (True, False, "true", "false", "1", "0", 1, 0):
            assert accepts(bool, value), value
        for value in ("yes", 2, "TRUE", 1.0):
            assert not accepts(bool, value), value

    def test_array_and_object(self):
        """Test array accepts only arrays and object accepts only objects."""
        assert accepts(list, [1])
        assert accepts(list, {"a": 1})
        assert not accepts(list, "a")
        assert accepts(object, UserResource())
        assert not accepts(object, "a")
        assert not accepts(object, [1])

    def test_any_accepts_everything(self):
        """Test Any accepts every value, None included."""
        assert accepts(Any, object())
        assert accepts(Any, None)

    def test_untyped_accepts_everything(self):
        """Test an empty declaration accepts anything."""
        assert accepts((), "x")
        assert accepts((), None)


class TestAcceptsUnionsAndNull:
    """Test strict union acceptance and nullability."""

    def test_union_rejects_cross_kind(self):
        """Test str | int rejects a float."""
        assert not accepts(str | int, 1.5)

    def test_union_accepts_exact_branches(self):
        """Test str | int accepts a str and an int."""
        assert accepts(str | int, "x")
        assert accepts(str | int, 7)

    def test_union_does_not_coerce(self):
        """Test int | float rejects a numeric string."""
        assert not accepts(int | float, "12")

    def test_nullable_accepts_none(self):
        """Test nullable string accepts None."""
        assert accepts(str | None, None)
        assert accepts(Optional[int], None)

    def test_non_nullable_rejects_none(self):
        """Test a non-nullable type rejects None."""
        assert not accepts(str, None)
        assert not accepts(CompanyId, None)

    def test_class_reference(self):
        """Test class references accept instances only."""
        assert accepts(CompanyId, CompanyId("acme"))
        assert not accepts(CompanyId, "acme")
        assert accepts(UserResource | CompanyId, CompanyId("acme"))

    def test_tuple_declaration(self):
        """Test a tuple of types with None is a nullable union."""
        assert accepts((int, None), None)
        assert not accepts((int, str), 1.5)


class TestPredicates:
    """Test value predicates."""

    def test_is_numeric(self):
        """Test numeric detection excludes bools and words."""
        assert is_numeric("42")
        assert is_numeric(" -3.5e2 ")
        assert is_numeric(7)
        assert not is_numeric(True)
        assert not is_numeric("4 2")
        assert not is_numeric("٣")

    def test_is_object(self):
        """Test objects exclude None, scalars and arrays."""
        assert is_object(UserResource())
        assert is_object(types.SimpleNamespace())
        assert not is_object(None)
        assert not is_object("x")
        assert not is_object([])

    def test_is_stringable(self):
        """Test stringable requires a custom __str__."""
        assert is_stringable(Stringable())
        assert is_stringable(CompanyId("acme"))
        assert not is_stringable(UserResource())
        assert not is_stringable(Post())
        assert is_stringable(LabelModel())


class TestCoerce:
    """Test coercion to primitive kinds."""

    def test_int(self):
        """Test numeric strings become ints."""
        assert coerce("int", "456") == 456
        assert coerce("int", "4.0") == 4
        assert coerce("int", "abc") == "abc"

    def test_int_leaves_overflowing_values_unchanged(self):
        """Test values without a finite int form pass through unchanged."""
        assert coerce("int", "1e400") == "1e400"
        assert coerce("int", "-1e999") == "-1e999"
        assert coerce("int", float("inf")) == float("inf")
        assert coerce("int", "1e3") == 1000

    def test_float(self):
        """Test numeric strings and ints become floats."""
        assert coerce("float", "2.5") == 2.5
        assert coerce("float", 3) == 3.0
        assert isinstance(coerce("float", 3), float)

    def test_string(self):
        """Test scalars and stringables become strings."""
        assert coerce("string", 42) == "42"
        assert coerce("string", True) == "true"
        assert coerce("string", False) == "false"
        assert coerce("string", Stringable()) == "stringable"

    def test_string_leaves_plain_models_unchanged(self):
        """Test a pydantic model without its own __str__ is not stringified."""
        operation = Post()
        assert coerce("string", operation) is operation
        assert coerce("string", LabelModel()) == "acme"

    def test_bool(self):
        """Test bool literals and truthiness."""
        assert coerce("bool", "true") is True
        assert coerce("bool", "1") is True
        assert coerce("bool", 0) is False
        assert coerce("bool", "false") is False
        assert coerce("bool", "yes") is True
        assert coerce("bool", "") is False

    def test_array_wraps_scalars(self):
        """Test non-arrays are wrapped in a list."""
        assert coerce("array", "a") == ["a"]
        assert coerce("array", [1, 2]) == [1, 2]

    def test_object_wraps_mappings(self):
        """Test mappings become namespaces and objects pass through."""
        wrapped = coerce("object", {"name": "alice"})
        assert isinstance(wrapped, types.SimpleNamespace)
        assert wrapped.name == "alice"

        user = UserResource()
        assert coerce("object", user) is user

    def test_any_unchanged(self):
        """Test the any kind leaves the value alone."""
        value = object()
        assert coerce("any", value) is value

    def test_coerce_to_declared(self):
        """Test coercion applies to single primitive declarations only."""
        assert coerce_to_declared(int, "12") == 12
        assert coerce_to_declared(int | str, "12") == "12"
        assert coerce_to_declared(CompanyId, "acme") == "acme"
        assert coerce_to_declared(int | None, None) is None
