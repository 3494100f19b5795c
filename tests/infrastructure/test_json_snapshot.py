import json
from unittest.mock import patch

import pytest

from lexiladder.domain.exceptions import SnapshotError
from lexiladder.domain.review.models import ReviewItem
from lexiladder.infrastructure.repositories.json_snapshot import JsonSnapshotRepository
from lexiladder.infrastructure.serialization import ReviewItemRecord, SnapshotDocument


@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "data" / "reviews.json"


class TestRecord:
    def test_four_fields_survive_serialization(self):
        item = ReviewItem("Café", 4, 1_704_067_200_123, 17)
        record = ReviewItemRecord.from_item(item)

        assert record.to_json_dict() == {
            "identifier": "Café",
            "masteryLevel": 4,
            "nextReviewAt": 1_704_067_200_123,
            "reviewCount": 17,
        }
        assert ReviewItemRecord.model_validate(record.to_json_dict()).to_item() == item

    def test_legacy_keys_accepted(self):
        record = ReviewItemRecord.model_validate(
            {"word": "ephemeral", "masteryLevel": 2, "nextReview": 1000}
        )
        assert record.to_item() == ReviewItem("ephemeral", 2, 1000, 0)

    def test_out_of_range_level_is_kept_for_scheduler(self):
        record = ReviewItemRecord.model_validate(
            {"identifier": "x", "masteryLevel": 9, "nextReviewAt": 0}
        )
        assert record.to_item().mastery_level == 9

    def test_negative_review_count_rejected(self):
        with pytest.raises(ValueError):
            ReviewItemRecord.model_validate(
                {"identifier": "x", "masteryLevel": 1, "nextReviewAt": 0, "reviewCount": -1}
            )


class TestDocument:
    def test_bare_legacy_mapping(self):
        doc = SnapshotDocument.from_raw(
            {"sonder": {"word": "sonder", "masteryLevel": 1, "nextReview": 5}}
        )
        assert doc.to_items() == {"sonder": ReviewItem("sonder", 1, 5, 0)}

    def test_key_wins_over_embedded_identifier(self):
        doc = SnapshotDocument.from_raw(
            {"items": {"a": {"identifier": "b", "masteryLevel": 0, "nextReviewAt": 0}}}
        )
        assert doc.to_items()["a"].identifier == "a"

    @pytest.mark.parametrize("raw", [[], "x", {"items": []}, {"items": {"a": 3}}])
    def test_malformed_documents(self, raw):
        with pytest.raises(ValueError):
            SnapshotDocument.from_raw(raw)


class TestJsonSnapshotRepository:
    def test_missing_file_is_empty(self, snapshot_path):
        repo = JsonSnapshotRepository(snapshot_path)
        assert repo.all() == {}
        assert repo.get("x") is None
        assert not snapshot_path.exists()

    def test_save_writes_file_and_reloads(self, snapshot_path):
        repo = JsonSnapshotRepository(snapshot_path)
        repo.save(ReviewItem("word", 3, 42, 5))

        data = json.loads(snapshot_path.read_text(encoding="utf-8"))
        assert data == {
            "version": 1,
            "items": {
                "word": {
                    "identifier": "word",
                    "masteryLevel": 3,
                    "nextReviewAt": 42,
                    "reviewCount": 5,
                }
            },
        }

        fresh = JsonSnapshotRepository(snapshot_path)
        assert fresh.get("word") == ReviewItem("word", 3, 42, 5)

    def test_delete_and_clear(self, snapshot_path):
        repo = JsonSnapshotRepository(snapshot_path)
        repo.save_many([ReviewItem("a", 0, 0), ReviewItem("b", 1, 0), ReviewItem("c", 2, 0)])

        assert repo.delete("a") is True
        assert repo.delete("a") is False
        assert repo.clear() == 2

        repo.reload()
        assert repo.all() == {}

    def test_no_temp_files_left_behind(self, snapshot_path):
        repo = JsonSnapshotRepository(snapshot_path)
        repo.save(ReviewItem("a", 0, 0))
        repo.save(ReviewItem("b", 0, 0))
        assert [p.name for p in snapshot_path.parent.iterdir()] == ["reviews.json"]

    def test_corrupt_file_raises_snapshot_error(self, snapshot_path):
        snapshot_path.parent.mkdir(parents=True)
        snapshot_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotError, match="Could not read snapshot"):
            JsonSnapshotRepository(snapshot_path).all()

    def test_invalid_record_raises_snapshot_error(self, snapshot_path):
        snapshot_path.parent.mkdir(parents=True)
        snapshot_path.write_text(
            json.dumps({"items": {"a": {"masteryLevel": "high", "nextReviewAt": 0}}}),
            encoding="utf-8",
        )
        with pytest.raises(SnapshotError):
            JsonSnapshotRepository(snapshot_path).get("a")

    def test_failed_write_keeps_cache_and_disk_in_step(self, snapshot_path):
        repo = JsonSnapshotRepository(snapshot_path)
        repo.save(ReviewItem("a", 1, 100, 1))

        with patch("os.replace", side_effect=OSError("disk full")):
            with pytest.raises(SnapshotError, match="Could not write snapshot"):
                repo.save(ReviewItem("a", 4, 900, 9))
            with pytest.raises(SnapshotError):
                repo.delete("a")
            with pytest.raises(SnapshotError):
                repo.clear()

        assert repo.get("a") == ReviewItem("a", 1, 100, 1)
        assert JsonSnapshotRepository(snapshot_path).get("a") == ReviewItem("a", 1, 100, 1)
        assert [p.name for p in snapshot_path.parent.iterdir()] == ["reviews.json"]
