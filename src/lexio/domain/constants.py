"""Centralized constants for lexio.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Quality scale ----------
MIN_QUALITY = 0
MAX_QUALITY = 5
SUCCESS_THRESHOLD = 3  # quality >= 3 is a successful recall

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MIN_INTERVAL = 1  # days
FIRST_INTERVAL = 1  # days, first success after new/lapse
SECOND_INTERVAL = 6  # days, second consecutive success
DEFAULT_INTERVAL = 1
DEFAULT_REPETITIONS = 0

# ---------- Binary grading ----------
REPEAT_QUALITY = 2
LEARNED_QUALITY = 4

# ---------- Card flags ----------
MASTERED_REPETITIONS = 3

# ---------- Session ----------
DEFAULT_SESSION_LIMIT = 20
POINTS_SUCCESS = 10
POINTS_FAILURE = 5
