"""Centralized constants for the lexiladder scheduler.

The mastery ladder and its intervals live here so every layer
imports from a single source of truth.
"""

# ---------- Mastery ladder ----------
MIN_LEVEL = 0
MAX_LEVEL = 5

# Level a mastered word falls back to after a single lapse.
SOFT_DEMOTION_LEVEL = 1

# Days until the next review, indexed by mastery level.
INTERVAL_DAYS = (0, 1, 3, 7, 14, 30)

# ---------- Time ----------
DAY_MS = 24 * 60 * 60 * 1000

# ---------- Config ----------
ENV_PREFIX = "LEXILADDER_"
CONFIG_DIR_NAME = "lexiladder"
SNAPSHOT_FILE_NAME = "reviews.json"
