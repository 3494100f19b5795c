"""
Ports (interfaces) for time, randomness and review storage.

These define the contract that infrastructure adapters must implement.
Application code depends on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from .models import ReviewItem


class Clock(Protocol):
    """Source of the current instant."""

    def now_ms(self) -> int:
        """Current time as epoch milliseconds."""
        ...


class RandomSource(Protocol):
    """Anything that can shuffle a list in place, e.g. random.Random."""

    def shuffle(self, x: list[Any]) -> None: ...


class ReviewRepository(ABC):
    """
    Port for loading and saving review items keyed by identifier.

    Implementations:
        - InMemoryReviewRepository: Process-local dict.
        - JsonSnapshotRepository: Reads and writes a JSON snapshot file.
    """

    @abstractmethod
    def get(self, identifier: str) -> ReviewItem | None:
        """
        Fetch the stored item for an identifier.

        Returns:
            The item, or None when the word has never been scheduled.
        """
        pass

    @abstractmethod
    def save(self, item: ReviewItem) -> None:
        """Insert or replace the item stored under item.identifier."""
        pass

    @abstractmethod
    def delete(self, identifier: str) -> bool:
        """
        Remove a stored item.

        Returns:
            True if an item was removed.
        """
        pass

    @abstractmethod
    def all(self) -> Mapping[str, ReviewItem]:
        """Snapshot of every stored item keyed by identifier."""
        pass

    def save_many(self, items: Iterable[ReviewItem]) -> int:
        count = 0
        for item in items:
            self.save(item)
            count += 1
        return count

    def clear(self) -> int:
        identifiers = list(self.all())
        for identifier in identifiers:
            self.delete(identifier)
        return len(identifiers)
