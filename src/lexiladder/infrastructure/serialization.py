"""
Serialized form of review items.

Keys are camelCase so snapshots exported by the web client load unchanged.
Older exports used 'word' and 'nextReview' and had no 'reviewCount'; both
shapes are accepted on input, only the current one is written.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from lexiladder.domain.review.models import ReviewItem

SNAPSHOT_VERSION = 1


class ReviewItemRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    identifier: str = Field(
        validation_alias=AliasChoices("identifier", "word"),
        serialization_alias="identifier",
    )
    mastery_level: int = Field(
        validation_alias=AliasChoices("masteryLevel", "mastery_level"),
        serialization_alias="masteryLevel",
    )
    next_review_at: int = Field(
        validation_alias=AliasChoices("nextReviewAt", "nextReview", "next_review_at"),
        serialization_alias="nextReviewAt",
    )
    review_count: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("reviewCount", "review_count"),
        serialization_alias="reviewCount",
    )

    @classmethod
    def from_item(cls, item: ReviewItem) -> "ReviewItemRecord":
        return cls.model_validate(
            {
                "identifier": item.identifier,
                "masteryLevel": item.mastery_level,
                "nextReviewAt": item.next_review_at,
                "reviewCount": item.review_count,
            }
        )

    def to_item(self) -> ReviewItem:
        # Out-of-range levels pass through; grade() applies the clamp/strict policy.
        return ReviewItem(
            identifier=self.identifier,
            mastery_level=self.mastery_level,
            next_review_at=self.next_review_at,
            review_count=self.review_count,
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class SnapshotDocument(BaseModel):
    """Top-level JSON document: {"version": 1, "items": {identifier: record}}."""

    version: int = SNAPSHOT_VERSION
    items: dict[str, ReviewItemRecord] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, data: object) -> "SnapshotDocument":
        """
        Validate a decoded JSON value.

        A bare {identifier: record} mapping (the legacy export shape) is
        accepted as well. Mapping keys win over any identifier inside a record.
        """
        if not isinstance(data, dict):
            raise ValueError("snapshot must be a JSON object")

        if "items" in data:
            raw_items = data["items"]
            version = data.get("version", SNAPSHOT_VERSION)
        else:
            raw_items, version = data, SNAPSHOT_VERSION
        if not isinstance(raw_items, dict):
            raise ValueError("'items' must be a JSON object")

        items = {}
        for key, raw in raw_items.items():
            if not isinstance(raw, dict):
                raise ValueError(f"record for '{key}' must be a JSON object")
            items[key] = ReviewItemRecord.model_validate({**raw, "identifier": key})

        return cls(version=version, items=items)

    def to_items(self) -> dict[str, ReviewItem]:
        return {key: record.to_item() for key, record in self.items.items()}

    def to_json_dict(self) -> dict:
        return {
            "version": self.version,
            "items": {key: record.to_json_dict() for key, record in self.items.items()},
        }
