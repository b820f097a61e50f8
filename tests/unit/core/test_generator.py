from __future__ import annotations

import re

import pytest

from credential_security.core.character_classes import CharacterClass
from credential_security.core.generator import SecureGenerator, constant_time_compare
from credential_security.core.password_policy import (
    PasswordPolicyValidator,
    PolicyRule,
    PolicyRuleSet,
    PolicyViolation,
    ValidationOutcome,
    validate,
)

HEX_PATTERN = re.compile(r"^[0-9a-f]+$")


@pytest.fixture()
def generator() -> SecureGenerator:
    return SecureGenerator()


def test_temporary_password_defaults_to_twelve_characters(generator: SecureGenerator) -> None:
    assert len(generator.generate_temporary_password()) == 12


@pytest.mark.parametrize("length", [8, 9, 16, 32, 128])
def test_temporary_password_respects_length(generator: SecureGenerator, length: int) -> None:
    assert len(generator.generate_temporary_password(length)) == length


def test_temporary_password_always_validates(generator: SecureGenerator) -> None:
    for _ in range(200):
        password = generator.generate_temporary_password(8)
        assert validate(password).compliant, password


def test_temporary_password_contains_every_required_class(generator: SecureGenerator) -> None:
    password = generator.generate_temporary_password()

    assert any(character.isupper() for character in password)
    assert any(character.islower() for character in password)
    assert any(character.isdigit() for character in password)
    assert any(character in generator.validator.ruleset.special_characters for character in password)


def test_temporary_passwords_differ(generator: SecureGenerator) -> None:
    passwords = {generator.generate_temporary_password() for _ in range(50)}

    assert len(passwords) == 50


def test_required_characters_are_not_in_fixed_positions(generator: SecureGenerator) -> None:
    first_chars = {generator.generate_temporary_password()[0] for _ in range(100)}

    assert not all(character.isupper() for character in first_chars)


def test_temporary_password_rejects_length_below_policy(generator: SecureGenerator) -> None:
    with pytest.raises(ValueError, match="at least 8"):
        generator.generate_temporary_password(7)


def test_custom_ruleset_is_honoured() -> None:
    ruleset = PolicyRuleSet(
        min_length=4,
        required_classes=frozenset({CharacterClass.DIGIT, CharacterClass.SPECIAL}),
        special_characters="~",
    )
    validator = PasswordPolicyValidator(ruleset)
    generator = SecureGenerator(validator)

    for _ in range(50):
        password = generator.generate_temporary_password(4)
        assert "~" in password
        assert any(character.isdigit() for character in password)
        assert validator.validate(password).compliant


class _RejectingValidator:
    """Validator stand-in that rejects the first ``rejections`` candidates."""

    def __init__(self, rejections: int) -> None:
        self.ruleset = PolicyRuleSet()
        self.rejections = rejections
        self.calls = 0

    def validate(self, raw: str) -> ValidationOutcome:
        self.calls += 1
        if self.calls <= self.rejections:
            return ValidationOutcome(
                PolicyViolation(PolicyRule.DENYLIST, "too common, choose a different one")
            )
        return ValidationOutcome()


def test_rejected_candidates_are_regenerated() -> None:
    validator = _RejectingValidator(rejections=3)
    generator = SecureGenerator(validator)  # type: ignore[arg-type]

    password = generator.generate_temporary_password()

    assert validator.calls == 4
    assert len(password) == 12


def test_generator_gives_up_after_repeated_rejections() -> None:
    generator = SecureGenerator(_RejectingValidator(rejections=1000))  # type: ignore[arg-type]

    with pytest.raises(RuntimeError):
        generator.generate_temporary_password()


def test_secure_token_defaults_to_32_bytes(generator: SecureGenerator) -> None:
    token = generator.generate_secure_token()

    assert len(token) == 64
    assert HEX_PATTERN.match(token)


def test_secure_token_respects_byte_length(generator: SecureGenerator) -> None:
    token = generator.generate_secure_token(16)

    assert len(token) == 32
    assert HEX_PATTERN.match(token)


def test_secure_tokens_differ(generator: SecureGenerator) -> None:
    tokens = {generator.generate_secure_token() for _ in range(100)}

    assert len(tokens) == 100


@pytest.mark.parametrize("byte_length", [0, -1])
def test_secure_token_rejects_non_positive_length(
    generator: SecureGenerator,
    byte_length: int,
) -> None:
    with pytest.raises(ValueError):
        generator.generate_secure_token(byte_length)


def test_constant_time_compare_matches_issued_token(generator: SecureGenerator) -> None:
    token = generator.generate_secure_token()

    assert constant_time_compare(token, token) is True
    assert constant_time_compare(token, generator.generate_secure_token()) is False


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("abc", "abcd"),
        ("", "a"),
        ("a" * 64, "a" * 63),
    ],
)
def test_constant_time_compare_length_mismatch_is_false(left: str, right: str) -> None:
    assert constant_time_compare(left, right) is False


def test_constant_time_compare_handles_non_ascii() -> None:
    assert constant_time_compare("jeton-é", "jeton-é") is True
    assert constant_time_compare("jeton-é", "jeton-e") is False
