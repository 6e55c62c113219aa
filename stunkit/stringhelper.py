"""Small string utilities used by the command line tools."""

from __future__ import annotations

import re

# Characters 0x09..0x0d and space count as whitespace when trimming.
_TRIM_CHARS = "\t\n\v\f\r "

_LEADING_INT = re.compile(r"[\t\n\v\f\r ]*([+-]?\d+)")


def is_null_or_empty(text: str | None) -> bool:
    """Return True when ``text`` is None or the empty string."""
    return text is None or text == ""


def to_lower(text: str) -> str:
    """Lower-case ASCII letters only; every other character is kept as is."""
    return "".join(chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch for ch in text)


def trim(text: str) -> str:
    """Strip leading and trailing whitespace.

    A string made only of whitespace is returned unchanged.
    """
    stripped = text.strip(_TRIM_CHARS)
    return stripped if stripped else text


def parse_leading_int(text: str) -> int:
    """Parse a decimal integer at the start of ``text``, like C ``atoi``.

    Leading whitespace and one sign are allowed; parsing stops at the first
    non-digit. Returns 0 when no number is found.
    """
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def validate_number_string(text: str | None, min_value: int, max_value: int) -> int:
    """Parse ``text`` and check that it lies in ``[min_value, max_value]``.

    Raises ValueError if the text is empty or the value is out of range.
    """
    if is_null_or_empty(text):
        raise ValueError("empty number string")
    value = parse_leading_int(text)
    if value < min_value or value > max_value:
        raise ValueError(f"{value} is not between {min_value} and {max_value}")
    return value