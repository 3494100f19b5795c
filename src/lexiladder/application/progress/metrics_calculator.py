"""
Metrics calculator for summarizing a learner's progress.

This is a pure computation module with no I/O.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from lexiladder.domain.constants import MAX_LEVEL, MIN_LEVEL
from lexiladder.domain.review.models import MasteryStatus, ReviewItem


@dataclass
class ProgressSummary:
    """
    Counts across a collection of words.

    Words without a stored item count as NEW at level 0.
    """

    total: int = 0
    due: int = 0
    new: int = 0
    learning: int = 0
    relearning: int = 0
    mastered: int = 0
    total_reviews: int = 0
    by_level: dict[int, int] = field(
        default_factory=lambda: {level: 0 for level in range(MIN_LEVEL, MAX_LEVEL + 1)}
    )

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "due": self.due,
            "new": self.new,
            "learning": self.learning,
            "relearning": self.relearning,
            "mastered": self.mastered,
            "total_reviews": self.total_reviews,
            "by_level": {str(k): v for k, v in self.by_level.items()},
        }


class MetricsCalculator:
    """
    Derives status labels and summaries from review items.

    Stateless and side-effect free.
    """

    def classify(self, item: ReviewItem | None) -> MasteryStatus:
        """
        Label a word by where it sits on the ladder.

        A level-0 word reviewed more than once has lapsed at least once, so it
        is relearning rather than learning.
        """
        if item is None or item.review_count == 0:
            return MasteryStatus.NEW
        if item.mastery_level >= MAX_LEVEL:
            return MasteryStatus.MASTERED
        if item.mastery_level <= MIN_LEVEL and item.review_count > 1:
            return MasteryStatus.RELEARNING
        return MasteryStatus.LEARNING

    def summarize(
        self,
        identifiers: Iterable[str],
        items_by_identifier: Mapping[str, ReviewItem],
        now_ms: int,
    ) -> ProgressSummary:
        summary = ProgressSummary()

        for identifier in identifiers:
            item = items_by_identifier.get(identifier)
            summary.total += 1

            if item is None or item.is_due(now_ms):
                summary.due += 1

            level = MIN_LEVEL
            if item is not None:
                level = max(MIN_LEVEL, min(item.mastery_level, MAX_LEVEL))
                summary.total_reviews += item.review_count
            summary.by_level[level] += 1

            status = self.classify(item)
            if status is MasteryStatus.NEW:
                summary.new += 1
            elif status is MasteryStatus.LEARNING:
                summary.learning += 1
            elif status is MasteryStatus.RELEARNING:
                summary.relearning += 1
            else:
                summary.mastered += 1

        return summary
