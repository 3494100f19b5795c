"""
Domain models for the mastery ladder.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from enum import Enum


class Grade(Enum):
    """Outcome of a single review."""

    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def parse(cls, value: "str | Grade") -> "Grade":
        """
        Accept an enum member, its value, or the legacy 'know' / 'dont_know' spellings.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        if normalized in _LEGACY_GRADES:
            return _LEGACY_GRADES[normalized]
        return cls(normalized)


_LEGACY_GRADES = {
    "know": Grade.CORRECT,
    "dont_know": Grade.INCORRECT,
}


class MasteryStatus(Enum):
    """Coarse progress label derived from level and review history."""

    NEW = "new"
    LEARNING = "learning"
    RELEARNING = "relearning"
    MASTERED = "mastered"


@dataclass(frozen=True)
class ReviewItem:
    """
    Scheduling state for one tracked word.

    Attributes:
        identifier: Case-sensitive word key. Callers normalize case.
        mastery_level: Rung on the ladder, 0 (new or reset) to 5 (mastered).
        next_review_at: Epoch milliseconds at or after which the word is due.
        review_count: Number of grades ever applied. Audit only, never gates levelling.
    """

    identifier: str
    mastery_level: int
    next_review_at: int
    review_count: int = 0

    def is_due(self, now_ms: int) -> bool:
        return self.next_review_at <= now_ms
