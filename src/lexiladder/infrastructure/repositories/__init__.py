# Review Repository Adapters
from .json_snapshot import JsonSnapshotRepository
from .memory import InMemoryReviewRepository

__all__ = ["InMemoryReviewRepository", "JsonSnapshotRepository"]
