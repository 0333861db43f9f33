"""Centralized constants for the Lexis application.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- SM-2 ----------
MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5
MASTERY_INTERVAL_THRESHOLD = 21  # days
PASSING_QUALITY = 3
MAX_QUALITY = 5

# ---------- Interval ladder ----------
FAILED_INTERVAL = 1
FIRST_INTERVAL = 1
SECOND_INTERVAL = 6

# ---------- Interval descriptions ----------
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365

# ---------- Sessions ----------
DEFAULT_SESSION_SIZE = 10

# ---------- Answer checking ----------
ANSWER_MATCH_RATIO = 0.6
ANSWER_STOPWORDS = frozenset({"the", "a", "an", "to", "be"})

# ---------- Storage ----------
SOURCE_TEXT_ANALYSIS = "text_analysis"
SOURCE_BOOK_LIBRARY = "book_library"
DEFAULT_USER_ID = "local"
