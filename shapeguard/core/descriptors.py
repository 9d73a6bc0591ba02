"""Type descriptors used by shape guards.

Guards are authored as plain literals::

    {
        "name": "string",
        "avatar": "string?",
        "mode": ["light", "dark"],
        "tags": ["string"],
        "members": [{"userId": "string"}, "?"],
        "profile": {"handle": "string"},
    }

``classify`` turns each literal into one of the frozen variants below so the
validator can dispatch on a closed set of types. Guards may also be built
directly from the variants (``{"tags": ArrayOf("string")}``).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from .errors import GuardError


OPTIONAL_KEY = "?"
PRIMITIVES = frozenset({"string", "number", "boolean", "any", "unknown"})
WILDCARDS = frozenset({"any", "unknown", OPTIONAL_KEY})


@dataclass(frozen=True)
class AnyType:
    name: str = "any"


@dataclass(frozen=True)
class Primitive:
    name: str


@dataclass(frozen=True)
class OptionalPrimitive:
    # Stored without the trailing "?"
    name: str


@dataclass(frozen=True)
class Literal:
    values: Tuple[str, ...]


@dataclass(frozen=True)
class OptionalLiteral:
    values: Tuple[str, ...]


@dataclass(frozen=True)
class ArrayOf:
    """Array of a primitive tag (``["string"]``) or of objects (``[shape]``)."""

    item: Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class OptionalArrayOf:
    item: Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class ObjectOf:
    shape: Mapping[str, Any]


@dataclass(frozen=True)
class OptionalObjectOf:
    shape: Mapping[str, Any]


Descriptor = Union[
    AnyType,
    Primitive,
    OptionalPrimitive,
    Literal,
    OptionalLiteral,
    ArrayOf,
    OptionalArrayOf,
    ObjectOf,
    OptionalObjectOf,
]

DESCRIPTOR_TYPES = (
    AnyType,
    Primitive,
    OptionalPrimitive,
    Literal,
    OptionalLiteral,
    ArrayOf,
    OptionalArrayOf,
    ObjectOf,
    OptionalObjectOf,
)

OPTIONAL_TYPES = (OptionalPrimitive, OptionalLiteral, OptionalArrayOf, OptionalObjectOf)


def is_optional_tag(raw: Any) -> bool:
    return isinstance(raw, str) and raw.endswith(OPTIONAL_KEY) and raw[:-1] in PRIMITIVES


def is_optional_shape(shape: Any) -> bool:
    """True when a shape carries the ``"?": "?"`` sentinel."""
    return isinstance(shape, Mapping) and shape.get(OPTIONAL_KEY) == OPTIONAL_KEY


def is_optional(descriptor: Descriptor) -> bool:
    return isinstance(descriptor, OPTIONAL_TYPES)


def classify(raw: Any) -> Descriptor:
    """Map a literal type descriptor to its variant.

    Raises:
        GuardError: ``raw`` is not a recognised descriptor.
    """
    if isinstance(raw, DESCRIPTOR_TYPES):
        return raw

    if isinstance(raw, str):
        if raw in WILDCARDS:
            return AnyType(raw)
        if raw in PRIMITIVES:
            return Primitive(raw)
        if is_optional_tag(raw):
            return OptionalPrimitive(raw[:-1])
        raise GuardError(f"Unknown type descriptor '{raw}'")

    if isinstance(raw, (list, tuple)):
        return _classify_sequence(raw)

    if isinstance(raw, Mapping):
        if is_optional_shape(raw):
            return OptionalObjectOf(raw)
        return ObjectOf(raw)

    raise GuardError(f"Unknown type descriptor of type {type(raw).__name__}")


def _classify_sequence(raw) -> Descriptor:
    if len(raw) == 1 and isinstance(raw[0], str):
        if raw[0] in PRIMITIVES:
            return ArrayOf(raw[0])
        if is_optional_tag(raw[0]):
            return OptionalArrayOf(raw[0][:-1])

    if raw and isinstance(raw[0], Mapping):
        if len(raw) == 1:
            return ArrayOf(raw[0])
        if len(raw) == 2 and raw[1] == OPTIONAL_KEY:
            return OptionalArrayOf(raw[0])
        raise GuardError("Array body descriptors take the form [shape] or [shape, '?']")

    if raw and all(value is None or isinstance(value, str) for value in raw):
        literals = tuple(value for value in raw if value is not None)
        if not literals:
            raise GuardError("Literal union needs at least one string value")
        if len(literals) < len(raw):
            return OptionalLiteral(literals)
        return Literal(literals)

    raise GuardError(f"Unknown type descriptor {list(raw)!r}")
