"""
Core Module - Card domain model and error types.

Components:
- cards: CardType, Word, Meaning, Card
- errors: LearnHelperError, ValidationError, SessionStateError

All other packages import card and error types from here.
"""

from learn_helper.core.cards import Card, CardType, Meaning, Word
from learn_helper.core.errors import LearnHelperError, SessionStateError, ValidationError

__all__ = [
    # Cards
    "Card",
    "CardType",
    "Meaning",
    "Word",
    # Errors
    "LearnHelperError",
    "SessionStateError",
    "ValidationError",
]
