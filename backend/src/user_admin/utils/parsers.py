"""Shared parsing utilities for directory attribute handling."""

from __future__ import annotations

from typing import Optional

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Characters that start a new word when camel-casing.
_WORD_SEPARATORS = frozenset("_ -.")


def parse_bool(value: Optional[str]) -> bool:
    """Parse a boolean from its textual form.

    Accepts 1, t, T, TRUE, true, True and 0, f, F, FALSE, false, False.

    Raises:
        ValueError: If the value is not one of the accepted spellings.
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def to_lower_camel(name: str) -> str:
    """Convert an attribute name to lowerCamelCase.

    ASCII letters and digits are kept. A separator (underscore, space,
    hyphen or dot) or a digit upper-cases the following letter; any other
    character is dropped. A capital directly after another capital is
    lower-cased, so runs of capitals collapse.

    Examples:
        >>> to_lower_camel("phone_number_verified")
        'phoneNumberVerified'
        >>> to_lower_camel("Given_Name")
        'givenName'
        >>> to_lower_camel("custom:foo")
        'customfoo'
        >>> to_lower_camel("userID")
        'userId'
    """
    name = name.strip()
    chars: list[str] = []
    cap_next = False
    prev_is_upper = False
    for index, char in enumerate(name):
        is_upper = "A" <= char <= "Z"
        is_lower = "a" <= char <= "z"
        if cap_next:
            if is_lower:
                char = char.upper()
        elif index == 0 or prev_is_upper:
            if is_upper:
                char = char.lower()
        prev_is_upper = is_upper

        if is_upper or is_lower:
            chars.append(char)
            cap_next = False
        elif "0" <= char <= "9":
            chars.append(char)
            cap_next = True
        else:
            cap_next = char in _WORD_SEPARATORS
    return "".join(chars)
