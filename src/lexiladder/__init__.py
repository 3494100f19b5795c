"""lexiladder: mastery-ladder spaced repetition for vocabulary."""

from lexiladder.consts import VERSION

__version__ = VERSION
