"""Exceptions raised by lexiladder.

Unknown identifiers and empty candidate lists are not errors; they
produce empty results.
"""


class LexiladderError(Exception):
    """Base class for all lexiladder errors."""


class InvalidIdentifierError(LexiladderError, ValueError):
    """An identifier was empty."""


class InvalidMasteryLevelError(LexiladderError, ValueError):
    """A stored mastery level fell outside the ladder (strict mode only)."""

    def __init__(self, identifier: str, level: int):
        self.identifier = identifier
        self.level = level
        super().__init__(f"Mastery level {level} for '{identifier}' is outside 0..5")


class DuplicateIdentifierError(LexiladderError):
    """A rename target already has review history."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"'{identifier}' is already tracked")


class SnapshotError(LexiladderError):
    """A review snapshot could not be read or written."""
