import random

import pytest

from lexiladder.application.review_service import ReviewService
from lexiladder.infrastructure.clock import FixedClock
from lexiladder.infrastructure.repositories.memory import InMemoryReviewRepository

# 2024-01-01T00:00:00Z
T0 = 1_704_067_200_000


@pytest.fixture
def clock():
    """A clock frozen at T0."""
    return FixedClock(T0)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def repo():
    return InMemoryReviewRepository()


@pytest.fixture
def service(repo, clock, rng):
    return ReviewService(repository=repo, clock=clock, rng=rng)


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Points HOME at a temp dir and clears LEXILADDER_* so no real config leaks in."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for var in ("LEXILADDER_SNAPSHOT_PATH", "LEXILADDER_STRICT_LEVELS", "LEXILADDER_SEED",
                "LEXILADDER_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    return home
