"""
Trimmed, length-checked text fields shared by the request models.

Whitespace is stripped before the length check, so "   Al   " is two
characters long. Errors carry the exact message shown next to the form
field.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 18
DESCRIPTION_MIN_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 140


def trim_string(value: Any) -> Any:
    """Strip surrounding whitespace from strings; pass anything else through."""
    if isinstance(value, str):
        return value.strip()
    return value


def length_between(min_length: int, max_length: int):
    """Build a validator that bounds the length of an already-trimmed string."""

    def check(value: str) -> str:
        if len(value) < min_length:
            raise PydanticCustomError(
                "string_too_short",
                "must contain at least {min_length} character(s)",
                {"min_length": min_length},
            )
        if len(value) > max_length:
            raise PydanticCustomError(
                "string_too_long",
                "must contain at most {max_length} character(s)",
                {"max_length": max_length},
            )
        return value

    return check


NameField = Annotated[
    str,
    BeforeValidator(trim_string),
    AfterValidator(length_between(NAME_MIN_LENGTH, NAME_MAX_LENGTH)),
]

DescriptionField = Annotated[
    str,
    BeforeValidator(trim_string),
    AfterValidator(length_between(DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH)),
]
