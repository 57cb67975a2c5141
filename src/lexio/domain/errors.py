"""
Errors raised by the scheduling core.

Both are caller contract violations. They are raised immediately and
never corrected on the caller's behalf.
"""


class LexioError(Exception):
    """Base class for all lexio errors."""


class InvalidInput(LexioError, ValueError):
    """A rating or prior scheduling field is outside the accepted domain."""


class InvalidState(LexioError, RuntimeError):
    """An operation needs a current card but the session is complete."""
