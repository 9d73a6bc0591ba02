from typing import List, Optional


class ShapeValidationError(ValueError):
    """A candidate value does not match its guard.

    The individual field errors are kept on ``errors`` so HTTP callers can
    return them as a list instead of re-splitting the message.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class GuardError(TypeError):
    """The guard or the candidate cannot be read at all (API misuse)."""
