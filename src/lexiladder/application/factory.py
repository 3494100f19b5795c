"""
Review Service Factory
Centralizes wiring of repositories, clock and random source from config.
"""

import logging
import random

from lexiladder.application.config import AppConfig
from lexiladder.application.review_service import ReviewService
from lexiladder.domain.review.ports import Clock, ReviewRepository
from lexiladder.infrastructure.repositories.json_snapshot import JsonSnapshotRepository

logger = logging.getLogger(__name__)


def get_review_repository(config: AppConfig) -> ReviewRepository:
    """
    Returns the repository backing the CLI, a JSON snapshot at config.snapshot_path.
    """
    logger.debug(f"Using snapshot {config.snapshot_path}")
    return JsonSnapshotRepository(config.snapshot_path)


def get_review_service(
    config: AppConfig,
    repository: ReviewRepository | None = None,
    clock: Clock | None = None,
) -> ReviewService:
    """
    Returns a ReviewService configured from settings.

    A configured seed makes due queues reproducible.
    """
    rng = random.Random(config.seed) if config.seed is not None else None
    return ReviewService(
        repository=repository or get_review_repository(config),
        clock=clock,
        rng=rng,
        strict=config.strict_levels,
    )
