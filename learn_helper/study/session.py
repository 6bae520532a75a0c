"""
Learning session state.

A LearningSession is one caller's progress through a fixed, ordered list of
cards split into sets of ``cards_per_set``. It is a frozen value: every
transition in ``state_machine`` returns a new session built with
``dataclasses.replace``, so a caller can keep an older snapshot (for Retry)
without it changing underneath.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from learn_helper.core.cards import Card
from learn_helper.core.errors import ValidationError
from learn_helper.study.answers import required_answers
from learn_helper.study.results import TestResult


class LearningPhase(str, Enum):
    """Phase within one set pass."""

    STUDY = "study"  # cards shown with full information
    TEST = "test"  # cards asked back


class TestMethod(str, Enum):
    """How answers are checked in the Test phase."""

    __test__ = False

    MANUAL = "manual"  # typed answers, graded automatically
    SELF_REVIEW = "self_review"  # learner reports correct/incorrect

    @classmethod
    def from_str(cls, value: str | TestMethod) -> TestMethod:
        """Parse a test method, case-insensitively."""
        if isinstance(value, TestMethod):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid test method: {value}. Must be 'manual' or 'self_review'"
            ) from None


@dataclass(frozen=True)
class LearningSession:
    """Progress through sets of cards."""

    all_cards: tuple[Card, ...]
    cards_per_set: int
    test_method: TestMethod = TestMethod.MANUAL
    phase: LearningPhase = LearningPhase.STUDY
    current_set_start_index: int = 0
    current_card_in_set: int = 0
    current_card_provided_answers: tuple[str, ...] = ()
    current_card_failed: bool = False
    test_results: tuple[TestResult, ...] = field(default_factory=tuple)

    # ========================================
    # Set navigation
    # ========================================

    @property
    def actual_set_size(self) -> int:
        """Size of the active set; the last set may be short."""
        remaining = len(self.all_cards) - self.current_set_start_index
        return max(0, min(self.cards_per_set, remaining))

    @property
    def current_set(self) -> tuple[Card, ...]:
        start = self.current_set_start_index
        return self.all_cards[start:start + self.actual_set_size]

    @property
    def current_card_index(self) -> int:
        """Index of the current card within ``all_cards``."""
        return self.current_set_start_index + self.current_card_in_set

    @property
    def current_card(self) -> Card | None:
        if self.current_card_in_set < self.actual_set_size:
            return self.all_cards[self.current_card_index]
        return None

    @property
    def is_set_complete(self) -> bool:
        return self.current_card_in_set >= self.actual_set_size

    @property
    def has_more_cards(self) -> bool:
        return self.current_set_start_index < len(self.all_cards)

    @property
    def total_sets(self) -> int:
        return -(-len(self.all_cards) // self.cards_per_set)

    @property
    def current_set_number(self) -> int:
        """1-indexed set number for display."""
        return self.current_set_start_index // self.cards_per_set + 1

    # ========================================
    # Current card progress (Test phase, manual)
    # ========================================

    @property
    def required_answers(self) -> int:
        card = self.current_card
        return required_answers(card) if card is not None else 0

    @property
    def remaining_answers(self) -> int:
        return max(0, self.required_answers - len(self.current_card_provided_answers))

    @property
    def is_card_complete(self) -> bool:
        """All required answers given, or the card already failed."""
        return (
            len(self.current_card_provided_answers) >= self.required_answers
            or self.current_card_failed
        )
