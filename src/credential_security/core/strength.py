"""Password strength scoring (0-4) with human-readable feedback."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .character_classes import DEFAULT_SPECIAL_CHARACTERS, CharacterClass, contains_class

MAX_SCORE = 4

# (threshold, feedback shown while the threshold is unmet)
LENGTH_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (8, "use at least 8 characters"),
    (12, "use 12 or more characters"),
    (16, "use 16 or more characters"),
)

CLASS_FEEDBACK: tuple[tuple[CharacterClass, str], ...] = (
    (CharacterClass.UPPERCASE, "add an uppercase letter"),
    (CharacterClass.LOWERCASE, "add a lowercase letter"),
    (CharacterClass.DIGIT, "add a digit"),
    (CharacterClass.SPECIAL, "add a special character"),
)

REPEAT_FEEDBACK = "avoid repeating the same character three times in a row"

_REPEATED_RUN = re.compile(r"(.)\1{2,}", re.DOTALL)


@dataclass(frozen=True, slots=True)
class StrengthAssessment:
    score: int
    feedback: tuple[str, ...] = ()


class StrengthScorer:
    """Score secrets independently of the policy validator's pass/fail gate.

    One point per length threshold crossed and per character class present,
    minus one for a run of three identical characters, clamped to ``[0, 4]``.
    Anything with outstanding feedback is capped at 3 so that a perfect score
    always comes with an empty feedback list.
    """

    def __init__(self, *, special_characters: str = DEFAULT_SPECIAL_CHARACTERS) -> None:
        self.special_characters = special_characters

    def score(self, raw: str) -> StrengthAssessment:
        raw = raw or ""
        feedback: list[str] = []

        unmet = [message for threshold, message in LENGTH_THRESHOLDS if len(raw) < threshold]
        points = len(LENGTH_THRESHOLDS) - len(unmet)
        if unmet:
            # Only the next threshold is worth mentioning.
            feedback.append(unmet[0])

        for character_class, message in CLASS_FEEDBACK:
            if contains_class(raw, character_class, special_characters=self.special_characters):
                points += 1
            else:
                feedback.append(message)

        if _REPEATED_RUN.search(raw):
            points -= 1
            feedback.append(REPEAT_FEEDBACK)

        score = max(0, min(MAX_SCORE, points))
        if feedback:
            score = min(score, MAX_SCORE - 1)
        return StrengthAssessment(score=score, feedback=tuple(feedback))

    def __call__(self, raw: str) -> StrengthAssessment:
        return self.score(raw)


def score(raw: str) -> StrengthAssessment:
    """Score ``raw`` with the default special-character set."""

    return StrengthScorer().score(raw)


__all__ = [
    "CLASS_FEEDBACK",
    "LENGTH_THRESHOLDS",
    "MAX_SCORE",
    "REPEAT_FEEDBACK",
    "StrengthAssessment",
    "StrengthScorer",
    "score",
]
