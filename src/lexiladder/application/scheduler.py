"""
Mastery-ladder scheduler.

Each word sits on a six-rung ladder. A correct answer climbs one rung, an
incorrect one drops back to the bottom, except at the top rung where a lapse
only falls to rung 1. The rung decides how many days pass before the word is
due again (see INTERVAL_DAYS).

Time and randomness are passed in so callers can freeze the clock and seed
the shuffle. All functions return new values and never mutate their inputs.
"""

import logging
import random
from collections.abc import Iterable, Mapping

from lexiladder.domain.constants import (
    DAY_MS,
    INTERVAL_DAYS,
    MAX_LEVEL,
    MIN_LEVEL,
    SOFT_DEMOTION_LEVEL,
)
from lexiladder.domain.exceptions import InvalidIdentifierError, InvalidMasteryLevelError
from lexiladder.domain.review.models import Grade, ReviewItem
from lexiladder.domain.review.ports import Clock, RandomSource
from lexiladder.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)

_system_clock = SystemClock()


def interval_ms(level: int) -> int:
    """Milliseconds until the next review for a word at the given level."""
    return INTERVAL_DAYS[level] * DAY_MS


def next_level(level: int, outcome: Grade) -> int:
    """Apply the level transition rule to an in-range level."""
    if outcome is Grade.CORRECT:
        return min(level + 1, MAX_LEVEL)
    if level == MAX_LEVEL:
        return SOFT_DEMOTION_LEVEL
    return MIN_LEVEL


def initialize(identifier: str, clock: Clock | None = None) -> ReviewItem:
    """
    Create the scheduling state for a word that has never been reviewed.

    The item starts at level 0 and is due immediately.
    """
    if not identifier:
        raise InvalidIdentifierError("identifier must be a non-empty string")

    clock = clock or _system_clock
    return ReviewItem(
        identifier=identifier,
        mastery_level=MIN_LEVEL,
        next_review_at=clock.now_ms(),
        review_count=0,
    )


def grade(
    item: ReviewItem,
    outcome: Grade | str,
    clock: Clock | None = None,
    strict: bool = False,
) -> ReviewItem:
    """
    Apply one review outcome and return the item's next state.

    Args:
        item: Current state of the word.
        outcome: Grade.CORRECT / Grade.INCORRECT, or their string forms.
        clock: Time source; defaults to the system clock.
        strict: Raise InvalidMasteryLevelError for an out-of-range stored level
            instead of clamping it.

    Returns:
        A new ReviewItem with the review count bumped, the level moved per the
        transition rule, and next_review_at set from the new level.
    """
    outcome = Grade.parse(outcome)
    clock = clock or _system_clock

    level = _checked_level(item, strict)
    new_level = next_level(level, outcome)
    now = clock.now_ms()

    logger.debug(
        f"Graded '{item.identifier}' {outcome.value}: level {level} -> {new_level}"
    )

    return ReviewItem(
        identifier=item.identifier,
        mastery_level=new_level,
        next_review_at=now + interval_ms(new_level),
        review_count=item.review_count + 1,
    )


def select_due(
    identifiers: Iterable[str],
    items_by_identifier: Mapping[str, ReviewItem],
    clock: Clock | None = None,
    rng: RandomSource | None = None,
) -> list[str]:
    """
    Pick the words that are due now, hardest first.

    A word is due when it has no stored item or its next_review_at has
    passed. Due words are shuffled, then stably sorted by mastery level, so
    lower levels come first while words on the same level appear in random
    order.

    Returns:
        The due identifiers. Empty when nothing is due.
    """
    clock = clock or _system_clock
    now = clock.now_ms()

    due = []
    for identifier in identifiers:
        item = items_by_identifier.get(identifier)
        if item is None or item.next_review_at <= now:
            due.append(identifier)

    if not due:
        return []

    (rng or random).shuffle(due)

    def level_of(identifier: str) -> int:
        item = items_by_identifier.get(identifier)
        return item.mastery_level if item is not None else MIN_LEVEL

    return sorted(due, key=level_of)


def _checked_level(item: ReviewItem, strict: bool) -> int:
    level = item.mastery_level
    if MIN_LEVEL <= level <= MAX_LEVEL:
        return level

    if strict:
        raise InvalidMasteryLevelError(item.identifier, level)

    clamped = max(MIN_LEVEL, min(level, MAX_LEVEL))
    logger.warning(
        f"Mastery level {level} for '{item.identifier}' is outside "
        f"{MIN_LEVEL}..{MAX_LEVEL}; clamped to {clamped}"
    )
    return clamped
