"""Runtime validation of request and response bodies against shape guards.

``validate_body`` walks a guard depth-first, collecting one human-readable
error per offending field. The wording of those errors (for example
``".name is number, expected string"``) is relied upon by API clients and must
stay stable.

Values follow the JSON data model: a key missing from the candidate is
*undefined*, ``None`` is null (reported as ``object``), booleans are never
numbers.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

from fastapi import HTTPException

from .descriptors import (
    OPTIONAL_KEY,
    WILDCARDS,
    AnyType,
    ArrayOf,
    Descriptor,
    Literal,
    ObjectOf,
    OptionalArrayOf,
    OptionalLiteral,
    OptionalObjectOf,
    OptionalPrimitive,
    Primitive,
    classify,
    is_optional,
    is_optional_shape,
)
from .errors import GuardError, ShapeValidationError


logger = logging.getLogger(__name__)


class _Undefined:
    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

_ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    actual: Dict[str, Any] = field(default_factory=dict)
    original: Any = None

    @property
    def ok(self) -> bool:
        return not self.errors


def type_name(value: Any) -> str:
    """Name of a value's type as reported in error messages."""
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return "object"
    if callable(value):
        return "function"
    return "object"


def is_falsy(value: Any) -> bool:
    # Empty lists and dicts are truthy here, unlike Python truthiness.
    if value is UNDEFINED or value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return not value or value != value
    if isinstance(value, str):
        return value == ""
    return False


def display_value(value: Any) -> str:
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else display_value(item) for item in value)
    return str(value)


def _matches(value: Any, name: str) -> bool:
    return name in WILDCARDS or type_name(value) == name


def _read(candidate: Any, key: str, prop: str) -> Any:
    if candidate is None or candidate is UNDEFINED:
        return UNDEFINED
    if isinstance(candidate, Mapping):
        return candidate.get(key, UNDEFINED)
    if isinstance(candidate, (list, tuple)):
        # Arrays have no named fields
        return UNDEFINED
    try:
        return candidate[key]
    except KeyError:
        return UNDEFINED
    except (TypeError, IndexError) as ex:
        raise GuardError(f"{ex}: {prop}") from ex


def _shape_of(guard: Any) -> Mapping[str, Any]:
    if isinstance(guard, (ObjectOf, OptionalObjectOf)):
        return guard.shape
    if not isinstance(guard, Mapping):
        raise GuardError(f"Guard must be a mapping of field names, got {type(guard).__name__}")
    return guard


def validate_body(
    guard: Mapping[str, Any],
    candidate: Any,
    partial: bool = False,
    prefix: str = "",
) -> ValidationResult:
    """Check ``candidate`` against ``guard`` and collect every field error.

    Structural mismatches never raise; inspect ``errors`` on the result.

    Args:
        guard: Mapping of field name to type descriptor.
        candidate: Value to check, usually a parsed JSON object.
        partial: Tolerate required fields that are undefined.
        prefix: Dotted path prepended to field names in error messages.

    Returns:
        ValidationResult with the errors, the normalized ``actual`` copy and
        the untouched ``original``.

    Raises:
        GuardError: The guard holds an unknown descriptor, or ``candidate``
            cannot be read by key.
    """
    shape = _shape_of(guard)
    path_prefix = f"{prefix}." if prefix else ""
    result = ValidationResult(original=candidate)

    if is_falsy(candidate) and is_optional_shape(shape):
        return result

    for key, raw in shape.items():
        prop = f"{path_prefix}{key}"
        try:
            descriptor = classify(raw)
        except GuardError as ex:
            raise GuardError(f"{ex}: {prop}") from ex

        value = _read(candidate, key, prop)

        if value is UNDEFINED:
            if is_optional(descriptor) or (key == OPTIONAL_KEY and raw == OPTIONAL_KEY):
                continue
            if not partial:
                result.errors.append(f".{prop} is undefined")
            continue

        result.actual[key] = _check(descriptor, value, prop, partial, result.errors)

    return result


def _check(descriptor: Descriptor, value: Any, prop: str, partial: bool, errors: List[str]) -> Any:
    """Check a present value; returns what to record in ``actual``."""
    if isinstance(descriptor, AnyType):
        return value

    if isinstance(descriptor, Primitive):
        if not _matches(value, descriptor.name):
            errors.append(f".{prop} is {type_name(value)}, expected {descriptor.name}")
        return value

    if isinstance(descriptor, OptionalPrimitive):
        if not _matches(value, descriptor.name):
            errors.append(f".{prop} is {type_name(value)}, expected {descriptor.name} or undefined")
        return value

    if isinstance(descriptor, (ArrayOf, OptionalArrayOf)):
        if isinstance(descriptor.item, str):
            return _check_tuple(descriptor, value, prop, errors)
        return _check_tuple_body(descriptor, value, prop, partial, errors)

    if isinstance(descriptor, OptionalLiteral):
        if value is None:
            return value
        _check_literal(descriptor.values, value, prop, "undefined or literal of", errors)
        return value

    if isinstance(descriptor, Literal):
        _check_literal(descriptor.values, value, prop, "literal of", errors)
        return value

    # Nested shape. Unlike the array checks this merges and carries on.
    if isinstance(descriptor, OptionalObjectOf) and value is None:
        return value
    if type_name(value) != "object":
        errors.append(f"{prop} is {type_name(value)}, expected object")
        return value

    nested = validate_body(descriptor.shape, value, partial=partial, prefix=prop)
    errors.extend(nested.errors)
    return nested.actual


def _check_tuple(descriptor, value: Any, prop: str, errors: List[str]) -> Any:
    inner = descriptor.item
    if not isinstance(value, (list, tuple)):
        suffix = " or undefined" if isinstance(descriptor, OptionalArrayOf) else ""
        errors.append(f".{prop} is {type_name(value)}, expected Array<{inner}>{suffix}")
        return value

    for element in value:
        if _matches(element, inner):
            continue
        # Only the first mismatch is reported
        errors.append(f".{prop} element contains {type_name(element)}, expected {inner}")
        break
    return value


def _check_tuple_body(descriptor, value: Any, prop: str, partial: bool, errors: List[str]) -> Any:
    if isinstance(descriptor, OptionalArrayOf) and is_falsy(value):
        return value

    if not isinstance(value, (list, tuple)):
        errors.append(f".{prop} is {type_name(value)}, expected Array")
        return value

    elements = []
    for element in value:
        if type_name(element) != "object":
            errors.append(f".{prop} element contains {type_name(element)}, expected object")
            return value

        nested = validate_body(descriptor.item, element, partial=partial, prefix=prop)
        if nested.errors:
            errors.extend(nested.errors)
            return value
        elements.append(nested.actual)
    return elements


def _check_literal(allowed, value: Any, prop: str, expectation: str, errors: List[str]) -> None:
    literals = " | ".join(allowed)
    if not isinstance(value, str):
        errors.append(
            f".{prop} is {type_name(value)} ('{display_value(value)}'), expected {expectation} {literals}"
        )
    elif value not in allowed:
        errors.append(f".{prop} value is invalid ('{value}'), expected {expectation} {literals}")


def assert_body(guard: Mapping[str, Any], candidate: Any, partial: bool = False) -> ValidationResult:
    """Like ``validate_body`` but raises when any field is invalid."""
    result = validate_body(guard, candidate, partial=partial)
    if result.errors:
        raise ShapeValidationError(
            f"Object does not match type: {', '.join(result.errors)}", result.errors
        )
    return result


def is_valid(guard: Mapping[str, Any], candidate: Any) -> bool:
    return validate_body(guard, candidate).ok


def is_valid_partial(guard: Mapping[str, Any], candidate: Any) -> bool:
    return validate_body(guard, candidate, partial=True).ok


def assert_valid(guard: Mapping[str, Any], candidate: Any, partial: bool = False) -> None:
    errors = validate_body(guard, candidate, partial=partial).errors
    if errors:
        raise ShapeValidationError(f"Request body is invalid: {', '.join(errors)}", errors)


def strip_unknown(guard: Mapping[str, Any], candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``candidate`` holding only the guard's top-level keys."""
    shape = _shape_of(guard)
    if not isinstance(candidate, Mapping):
        raise GuardError(f"Only mappings can be narrowed, got {type(candidate).__name__}")
    return {key: value for key, value in candidate.items() if key in shape}


def assert_strict(
    guard: Mapping[str, Any],
    candidate: Any,
    partial: bool = False,
    error: Optional[str] = None,
) -> Dict[str, Any]:
    """Validate ``candidate`` and return it narrowed to the guard's keys.

    The caller's object is left untouched; see ``assert_strict_in_place`` for
    the destructive form.
    """
    errors = validate_body(guard, candidate, partial=partial).errors
    if errors:
        raise ShapeValidationError(f"{error or 'Request body is invalid'}: {', '.join(errors)}", errors)

    if not isinstance(candidate, Mapping):
        # Falsy candidates of an optional shape and arrays have no fields to keep
        return {}

    narrowed = strip_unknown(guard, candidate)
    if candidate and len(narrowed) != len(candidate):
        logger.debug("Dropped unknown fields: %s", sorted(set(candidate) - set(narrowed)))
    return narrowed


def assert_strict_in_place(
    guard: Mapping[str, Any],
    candidate: MutableMapping[str, Any],
    partial: bool = False,
    error: Optional[str] = None,
) -> None:
    """Validate ``candidate`` then delete its unrecognised top-level keys.

    Mutates the caller's mapping; there is no rollback.
    """
    narrowed = assert_strict(guard, candidate, partial=partial, error=error)
    if not isinstance(candidate, MutableMapping):
        return
    for key in [key for key in candidate if key not in narrowed]:
        del candidate[key]


def validate_inputs(user_id: Optional[str] = None) -> None:
    if user_id is not None and not _ID_PATTERN.match(user_id):
        raise HTTPException(status_code=400, detail="Invalid user_id format")
