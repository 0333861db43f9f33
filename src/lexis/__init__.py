"""Lexis: spaced-repetition scheduling for vocabulary flashcards."""

from lexis.consts import VERSION

__version__ = VERSION
