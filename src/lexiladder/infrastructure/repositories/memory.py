"""In-memory review repository."""

from collections.abc import Mapping

from lexiladder.domain.review.models import ReviewItem
from lexiladder.domain.review.ports import ReviewRepository


class InMemoryReviewRepository(ReviewRepository):
    """Stores items in a plain dict. Nothing survives the process."""

    def __init__(self, items: Mapping[str, ReviewItem] | None = None):
        self._items: dict[str, ReviewItem] = dict(items or {})

    def get(self, identifier: str) -> ReviewItem | None:
        return self._items.get(identifier)

    def save(self, item: ReviewItem) -> None:
        self._items[item.identifier] = item

    def delete(self, identifier: str) -> bool:
        return self._items.pop(identifier, None) is not None

    def all(self) -> Mapping[str, ReviewItem]:
        return dict(self._items)

    def clear(self) -> int:
        count = len(self._items)
        self._items.clear()
        return count
