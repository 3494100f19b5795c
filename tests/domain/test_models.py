import dataclasses

import pytest

from lexiladder.domain.review.models import Grade, ReviewItem


class TestGradeParse:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("correct", Grade.CORRECT),
            ("INCORRECT", Grade.INCORRECT),
            (" Correct ", Grade.CORRECT),
            ("know", Grade.CORRECT),
            ("dont_know", Grade.INCORRECT),
            ("dont-know", Grade.INCORRECT),
            (Grade.INCORRECT, Grade.INCORRECT),
        ],
    )
    def test_parse(self, raw, expected):
        assert Grade.parse(raw) is expected

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            Grade.parse("partial")

    def test_exactly_two_outcomes(self):
        assert {g.value for g in Grade} == {"correct", "incorrect"}


class TestReviewItem:
    def test_frozen(self):
        item = ReviewItem("word", 0, 1000)
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.mastery_level = 3  # type: ignore[misc]

    def test_review_count_defaults_to_zero(self):
        assert ReviewItem("word", 2, 1000).review_count == 0

    def test_is_due(self):
        item = ReviewItem("word", 1, 1000)
        assert item.is_due(1000)
        assert item.is_due(1001)
        assert not item.is_due(999)
