"""
Exceptions raised while building or exporting an engagement summary.
"""
from typing import Iterable, List


class SummaryError(Exception):
    """Base class for engagement summary failures."""


class SummaryValidationError(SummaryError):
    """Raised when required header fields are empty at generation time."""

    def __init__(self, missing: Iterable[str], message: str = ""):
        self.missing: List[str] = list(missing)
        super().__init__(message or f"Missing required fields: {', '.join(self.missing)}")


class PhotoReadError(SummaryError):
    """Raised when a photo's content cannot be resolved for export."""

    def __init__(self, name: str, reason: str = ""):
        self.name = name
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Could not read photo '{name}'{detail}")
