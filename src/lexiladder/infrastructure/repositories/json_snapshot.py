"""
JSON Snapshot Repository — Infrastructure adapter for a local snapshot file.

Implements ReviewRepository over a single JSON document. The whole file is
loaded on first access and rewritten after every change.
"""

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import ValidationError

from lexiladder.domain.exceptions import SnapshotError
from lexiladder.domain.review.models import ReviewItem
from lexiladder.domain.review.ports import ReviewRepository
from lexiladder.infrastructure.serialization import ReviewItemRecord, SnapshotDocument

logger = logging.getLogger(__name__)


class JsonSnapshotRepository(ReviewRepository):
    """
    Review items persisted to a JSON file.

    A missing file is an empty collection. The file is created on the first write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._items: dict[str, ReviewItem] | None = None

    # ------------------------------------------------------------------
    # ReviewRepository
    # ------------------------------------------------------------------

    def get(self, identifier: str) -> ReviewItem | None:
        return self._load().get(identifier)

    def save(self, item: ReviewItem) -> None:
        items = dict(self._load())
        items[item.identifier] = item
        self._commit(items)

    def delete(self, identifier: str) -> bool:
        items = dict(self._load())
        if items.pop(identifier, None) is None:
            return False
        self._commit(items)
        return True

    def all(self) -> Mapping[str, ReviewItem]:
        return dict(self._load())

    def save_many(self, items: Iterable[ReviewItem]) -> int:
        updated = dict(self._load())
        count = 0
        for item in items:
            updated[item.identifier] = item
            count += 1
        if count:
            self._commit(updated)
        return count

    def clear(self) -> int:
        count = len(self._load())
        self._commit({})
        return count

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------

    def reload(self) -> None:
        self._items = None

    def _load(self) -> dict[str, ReviewItem]:
        if self._items is not None:
            return self._items

        if not self.path.exists():
            logger.debug(f"No snapshot at {self.path}, starting empty")
            self._items = {}
            return self._items

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            document = SnapshotDocument.from_raw(data)
        except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
            raise SnapshotError(f"Could not read snapshot {self.path}: {e}") from e

        self._items = document.to_items()
        logger.debug(f"Loaded {len(self._items)} review items from {self.path}")
        return self._items

    def _commit(self, items: dict[str, ReviewItem]) -> None:
        """Write items to disk, then adopt them as the cached state."""
        self._flush(items)
        self._items = items

    def _flush(self, items: dict[str, ReviewItem]) -> None:
        document = SnapshotDocument(
            items={key: ReviewItemRecord.from_item(item) for key, item in items.items()}
        )
        payload = json.dumps(document.to_json_dict(), indent=2, ensure_ascii=False)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload + "\n")
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise SnapshotError(f"Could not write snapshot {self.path}: {e}") from e
