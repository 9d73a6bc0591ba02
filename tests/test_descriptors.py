"""Unit tests for descriptor classification."""

import pytest

from shapeguard import GuardError
from shapeguard.core.descriptors import (
    AnyType,
    ArrayOf,
    Literal,
    ObjectOf,
    OptionalArrayOf,
    OptionalLiteral,
    OptionalObjectOf,
    OptionalPrimitive,
    Primitive,
    classify,
    is_optional,
)


class TestClassify:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("string", Primitive("string")),
            ("number", Primitive("number")),
            ("boolean", Primitive("boolean")),
            ("any", AnyType("any")),
            ("unknown", AnyType("unknown")),
            ("?", AnyType("?")),
            ("string?", OptionalPrimitive("string")),
            ("any?", OptionalPrimitive("any")),
            (["string"], ArrayOf("string")),
            (["number?"], OptionalArrayOf("number")),
            (["red", "blue"], Literal(("red", "blue"))),
            (("red",), Literal(("red",))),
            (["red", None, "blue"], OptionalLiteral(("red", "blue"))),
        ],
    )
    def test_literal_descriptors(self, raw, expected):
        assert classify(raw) == expected

    def test_array_of_shapes(self):
        shape = {"name": "string"}
        assert classify([shape]) == ArrayOf(shape)
        assert classify([shape, "?"]) == OptionalArrayOf(shape)

    def test_nested_shapes(self):
        assert classify({"name": "string"}) == ObjectOf({"name": "string"})
        optional = {"name": "string", "?": "?"}
        assert classify(optional) == OptionalObjectOf(optional)

    def test_variants_pass_through(self):
        descriptor = Literal(("a",))
        assert classify(descriptor) is descriptor

    @pytest.mark.parametrize(
        "raw",
        ["strang", "string??", 5, None, [], [None], [{"a": "string"}, "x"], ["a", 1]],
    )
    def test_unknown_descriptors_raise(self, raw):
        with pytest.raises(GuardError):
            classify(raw)


class TestIsOptional:
    @pytest.mark.parametrize("raw", ["string?", ["string?"], ["a", None], [{"a": "string"}, "?"], {"?": "?"}])
    def test_optional_flavours(self, raw):
        assert is_optional(classify(raw))

    @pytest.mark.parametrize("raw", ["string", "any", "?", ["string"], ["a"], [{"a": "string"}], {"a": "string"}])
    def test_required_flavours(self, raw):
        assert not is_optional(classify(raw))
