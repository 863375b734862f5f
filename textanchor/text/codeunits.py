"""
UTF-16 code-unit helpers.

Python strings index code points. Chunks carry their text as *code-unit
strings* instead: every character above U+FFFF is stored as its two UTF-16
surrogates, so that string indices and lengths count code units. These
helpers convert between the two forms.
"""

from textanchor.config import (
    HIGH_SURROGATE_END,
    HIGH_SURROGATE_START,
    LOW_SURROGATE_END,
    LOW_SURROGATE_START,
)


def code_units(text: str) -> str:
    """Convert a string to its code-unit form (astral characters as surrogate pairs).

    Examples:
        >>> len(code_units("a😀b"))
        4
    """
    if all(ord(c) <= 0xFFFF for c in text):
        return text
    return "".join(_to_surrogates(c) if ord(c) > 0xFFFF else c for c in text)


def from_code_units(units: str) -> str:
    """Convert a code-unit string back to a regular string.

    Valid surrogate pairs are combined; unpaired surrogates are kept as-is.
    """
    return units.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


def code_points(units: str) -> list[str]:
    """Split a code-unit string into its code points.

    A surrogate pair becomes one character; an unpaired surrogate stays a
    character of its own.
    """
    result: list[str] = []
    i = 0
    while i < len(units):
        unit = units[i]
        if (
            is_high_surrogate(unit)
            and i + 1 < len(units)
            and is_low_surrogate(units[i + 1])
        ):
            result.append(from_code_units(units[i : i + 2]))
            i += 2
        else:
            result.append(unit)
            i += 1
    return result


def code_unit_length(text: str) -> int:
    """Length of a regular string measured in UTF-16 code units."""
    return sum(2 if ord(c) > 0xFFFF else 1 for c in text)


def is_high_surrogate(unit: str) -> bool:
    return HIGH_SURROGATE_START <= ord(unit) <= HIGH_SURROGATE_END


def is_low_surrogate(unit: str) -> bool:
    return LOW_SURROGATE_START <= ord(unit) <= LOW_SURROGATE_END


def ends_within_character(units: str) -> bool:
    """True if the string ends with the first half of a surrogate pair."""
    return bool(units) and is_high_surrogate(units[-1])


def starts_within_character(units: str) -> bool:
    """True if the string starts with the second half of a surrogate pair."""
    return bool(units) and is_low_surrogate(units[0])


def _to_surrogates(char: str) -> str:
    value = ord(char) - 0x10000
    return chr(HIGH_SURROGATE_START + (value >> 10)) + chr(
        LOW_SURROGATE_START + (value & 0x3FF)
    )
