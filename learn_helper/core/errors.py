"""
Error types for the study engine.

Only structurally invalid caller input raises. Wrong answers, incomplete
coverage and out-of-range start numbers are ordinary return values.
"""

from __future__ import annotations


class LearnHelperError(Exception):
    """Base class for all learn-helper errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(LearnHelperError):
    """Raised when caller-supplied arguments violate a business rule."""

    def __str__(self) -> str:
        return f"Validation error: {self.message}"


class SessionStateError(LearnHelperError):
    """Raised when a session transition is invoked from the wrong phase."""
    pass
