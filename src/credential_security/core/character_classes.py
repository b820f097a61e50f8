"""Character classes shared by the policy validator, scorer and generator."""

from __future__ import annotations

import string
from enum import Enum

DEFAULT_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"


class CharacterClass(str, Enum):
    """Composition classes, in the order policy rules evaluate them."""

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    DIGIT = "digit"
    SPECIAL = "special"


# ASCII pools used when drawing random characters for a class.
GENERATION_POOLS: dict[CharacterClass, str] = {
    CharacterClass.UPPERCASE: string.ascii_uppercase,
    CharacterClass.LOWERCASE: string.ascii_lowercase,
    CharacterClass.DIGIT: string.digits,
}


def contains_class(
    value: str,
    character_class: CharacterClass,
    *,
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS,
) -> bool:
    """Return ``True`` when ``value`` has at least one character of ``character_class``.

    Letter and digit checks are Unicode-aware; special characters come from a
    fixed punctuation set.
    """

    if character_class is CharacterClass.UPPERCASE:
        return any(character.isupper() for character in value)
    if character_class is CharacterClass.LOWERCASE:
        return any(character.islower() for character in value)
    if character_class is CharacterClass.DIGIT:
        return any(character.isdigit() for character in value)
    return any(character in special_characters for character in value)


__all__ = [
    "CharacterClass",
    "DEFAULT_SPECIAL_CHARACTERS",
    "GENERATION_POOLS",
    "contains_class",
]
