import logging
import re
from typing import Any, Dict, Mapping

from .validation import UNDEFINED, assert_valid


logger = logging.getLogger(__name__)

BOOLEAN_TAGS = ("boolean", "boolean?")
NUMBER_TAGS = ("number", "number?")

_INTEGER = re.compile(r"^[+-]?\d+$")
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_PREFIXED = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY = re.compile(r"^[+-]?Infinity$")


def to_number(value: str) -> float:
    """Numeric conversion of submitted text, following the browser's rules.

    Blank is 0. Decimal and exponent notation, unsigned ``0x``/``0o``/``0b``
    literals and ``Infinity`` are accepted; anything else (``"1_000"``,
    ``"inf"``) is NaN.
    """
    text = value.strip()
    if not text:
        return 0
    if _PREFIXED.match(text):
        return int(text, 0)
    if _INFINITY.match(text):
        return float("-inf") if text.startswith("-") else float("inf")
    if not _DECIMAL.match(text):
        return float("nan")
    if _INTEGER.match(text):
        return int(text)
    return float(text)


def get_strict_form(form: Mapping[str, Any], guard: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """Read the guard's fields out of a submitted form and validate them.

    Checkbox fields arrive as ``"on"`` or not at all, and every other field
    arrives as text, so booleans and numbers are converted before the values
    are checked against ``guard``.

    Raises:
        ShapeValidationError: The converted values do not match ``guard``.
    """
    values: Dict[str, Any] = {}
    for key, descriptor in guard.items():
        raw = form.get(key)
        value: Any = UNDEFINED if raw is None else str(raw)

        if descriptor in BOOLEAN_TAGS:
            if value == "on":
                value = True
            if value is UNDEFINED or value == "off":
                value = False

        if descriptor in NUMBER_TAGS and value is not UNDEFINED:
            value = to_number(value)

        if value is not UNDEFINED:
            values[key] = value

    assert_valid(guard, values, partial)
    return values
