"""Shape guards for request and response bodies."""

from .core.descriptors import (
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
)
from .core.errors import GuardError, ShapeValidationError
from .core.forms import get_strict_form
from .core.validation import (
    ValidationResult,
    assert_body,
    assert_strict,
    assert_strict_in_place,
    assert_valid,
    is_valid,
    is_valid_partial,
    strip_unknown,
    validate_body,
)

__version__ = "1.0.0"

__all__ = [
    "AnyType",
    "ArrayOf",
    "GuardError",
    "Literal",
    "ObjectOf",
    "OptionalArrayOf",
    "OptionalLiteral",
    "OptionalObjectOf",
    "OptionalPrimitive",
    "Primitive",
    "ShapeValidationError",
    "ValidationResult",
    "assert_body",
    "assert_strict",
    "assert_strict_in_place",
    "assert_valid",
    "classify",
    "get_strict_form",
    "is_valid",
    "is_valid_partial",
    "strip_unknown",
    "validate_body",
]
