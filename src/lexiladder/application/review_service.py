"""
Review Service — Application layer orchestrator.

Ties the scheduler to a ReviewRepository: loads state, applies grades,
and writes the result back.
"""

import logging
import threading
import weakref
from collections.abc import Iterable
from dataclasses import replace

from lexiladder.application import scheduler
from lexiladder.application.progress import MetricsCalculator, ProgressSummary
from lexiladder.domain.exceptions import DuplicateIdentifierError, InvalidIdentifierError
from lexiladder.domain.review.models import Grade, ReviewItem
from lexiladder.domain.review.ports import Clock, RandomSource, ReviewRepository
from lexiladder.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for scheduling reviews over a word collection.

    Follows Dependency Inversion: depends on the ReviewRepository abstraction,
    not concrete adapter implementations.

    Grading is a read-modify-write on one item; concurrent calls for the same
    identifier are serialized by a per-identifier lock. Calls for different
    identifiers run independently.
    """

    def __init__(
        self,
        repository: ReviewRepository,
        clock: Clock | None = None,
        rng: RandomSource | None = None,
        strict: bool = False,
        calculator: MetricsCalculator | None = None,
    ):
        """
        Args:
            repository: The repository (port) holding review items.
            clock: Time source; the system clock if not provided.
            rng: Shuffle source for due queues; the random module if not provided.
            strict: Reject corrupted mastery levels instead of clamping them.
            calculator: Optional custom calculator; uses default if not provided.
        """
        self._repo = repository
        self._clock = clock or SystemClock()
        self._rng = rng
        self._strict = strict
        self._calc = calculator or MetricsCalculator()
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def due(self, identifiers: Iterable[str] | None = None, limit: int | None = None) -> list[str]:
        """
        Words due for review, lowest mastery first.

        Args:
            identifiers: Candidate words. Defaults to every stored word.
            limit: Truncate the queue to this many words.
        """
        items = self._repo.all()
        candidates = list(items) if identifiers is None else list(identifiers)
        queue = scheduler.select_due(candidates, items, clock=self._clock, rng=self._rng)
        if limit is not None:
            queue = queue[: max(limit, 0)]
        return queue

    def record(self, identifier: str, outcome: Grade | str) -> ReviewItem:
        """
        Grade a word and persist its next state.

        A word without stored history starts from a fresh level-0 item.
        """
        with self._lock_for(identifier):
            item = self._repo.get(identifier) or scheduler.initialize(identifier, self._clock)
            graded = scheduler.grade(item, outcome, clock=self._clock, strict=self._strict)
            self._repo.save(graded)

        logger.info(
            f"Recorded {Grade.parse(outcome).value} for '{identifier}': "
            f"level {graded.mastery_level}, review #{graded.review_count}"
        )
        return graded

    def track(self, identifier: str) -> ReviewItem:
        """Start scheduling a word. Existing history is left untouched."""
        with self._lock_for(identifier):
            existing = self._repo.get(identifier)
            if existing is not None:
                return existing
            item = scheduler.initialize(identifier, self._clock)
            self._repo.save(item)
        logger.info(f"Tracking '{identifier}'")
        return item

    def forget(self, identifier: str) -> bool:
        """Drop a word's history. Returns False if it had none."""
        with self._lock_for(identifier):
            removed = self._repo.delete(identifier)
        if removed:
            logger.info(f"Forgot '{identifier}'")
        return removed

    def rename(self, old: str, new: str) -> ReviewItem:
        """
        Move a word's history to a new identifier.

        If the old word has no history the new one starts fresh.
        """
        if not new:
            raise InvalidIdentifierError("identifier must be a non-empty string")

        if old == new:
            return self.track(new)

        first, second = sorted((old, new))
        with self._lock_for(first), self._lock_for(second):
            if self._repo.get(new) is not None:
                raise DuplicateIdentifierError(new)

            existing = self._repo.get(old)
            if existing is not None:
                moved = replace(existing, identifier=new)
                self._repo.delete(old)
            else:
                moved = scheduler.initialize(new, self._clock)
            self._repo.save(moved)

        logger.info(f"Renamed '{old}' -> '{new}'")
        return moved

    def merge(self, items: Iterable[ReviewItem], identifiers: Iterable[str] = ()) -> int:
        """
        Import review history.

        Incoming items replace stored ones. Listed identifiers with neither a
        stored nor an incoming item are initialized.

        Returns:
            Number of items written.
        """
        incoming = {item.identifier: item for item in items}
        written = 0

        for identifier, item in incoming.items():
            with self._lock_for(identifier):
                self._repo.save(item)
            written += 1

        for identifier in identifiers:
            if not identifier or identifier in incoming:
                continue
            # Re-read under the lock: a word graded since the caller listed it keeps its history
            with self._lock_for(identifier):
                if self._repo.get(identifier) is not None:
                    continue
                self._repo.save(scheduler.initialize(identifier, self._clock))
            written += 1

        logger.info(f"Merged {written} review items")
        return written

    def reset(self) -> int:
        """Drop all history so every word is new and due again."""
        removed = 0
        for identifier in list(self._repo.all()):
            with self._lock_for(identifier):
                if self._repo.delete(identifier):
                    removed += 1
        logger.info(f"Reset progress, removed {removed} review items")
        return removed

    def summary(self, identifiers: Iterable[str] | None = None) -> ProgressSummary:
        items = self._repo.all()
        candidates = list(items) if identifiers is None else list(identifiers)
        return self._calc.summarize(candidates, items, self._clock.now_ms())

    def _lock_for(self, identifier: str) -> threading.Lock:
        # Entries vanish once no caller holds the lock
        with self._locks_guard:
            lock = self._locks.get(identifier)
            if lock is None:
                lock = threading.Lock()
                self._locks[identifier] = lock
            return lock
