"""
Test results, set verdicts and streak rules.

A set pass produces one TestResult per card. The set is passed only if there
is at least one result and every result is correct; an empty pass never
counts as passed.

Streaks are stored by the persistence layer. The rules for changing them are
pure functions here so every caller applies them the same way:

- Test mode (unlearned cards): correct -> streak + 1, incorrect -> 0
- Repeat mode (learned cards): correct -> unchanged, incorrect -> 0
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from learn_helper.core.cards import Card

if TYPE_CHECKING:
    from learn_helper.study.session import LearningSession


@dataclass(frozen=True)
class TestResult:
    """Outcome of testing one card."""

    __test__ = False  # not a pytest class

    word_name: str
    is_correct: bool
    user_answer: str | None = None
    expected_answer: str | None = None

    @classmethod
    def written(
        cls, word_name: str, is_correct: bool, user_answer: str, expected_answer: str
    ) -> TestResult:
        """Result of a typed answer."""
        return cls(word_name, is_correct, user_answer, expected_answer)

    @classmethod
    def self_review(cls, word_name: str, is_correct: bool) -> TestResult:
        """Result of a self-reported answer (no text on either side)."""
        return cls(word_name, is_correct)


@dataclass(frozen=True)
class SetSummary:
    """Finalized verdict for one set pass."""

    passed: bool
    results: tuple[TestResult, ...]

    @property
    def correct(self) -> int:
        return sum(1 for r in self.results if r.is_correct)

    @property
    def incorrect(self) -> int:
        return len(self.results) - self.correct

    @property
    def accuracy(self) -> float:
        """Fraction of correct results (0.0 for an empty pass)."""
        return self.correct / len(self.results) if self.results else 0.0


class StudyMode(str, Enum):
    """Which kind of pass produced the results."""

    TEST = "test"  # unlearned cards
    REPEAT = "repeat"  # learned cards


class StreakUpdater(Protocol):
    """Outbound collaborator that stores streak changes."""

    def update_streaks(self, results: Sequence[TestResult]) -> None:
        """Increment or reset each result's card streak."""
        ...


def passed(session: LearningSession) -> bool:
    """True if the pass has results and all of them are correct."""
    results = session.test_results
    return bool(results) and all(r.is_correct for r in results)


def summarize(session: LearningSession) -> SetSummary:
    """Reduce a session's recorded outcomes to a verdict and result list."""
    summary = SetSummary(passed=passed(session), results=tuple(session.test_results))
    logger.debug(
        f"Set {session.current_set_number}: {summary.correct}/{len(summary.results)} correct, "
        f"passed={summary.passed}"
    )
    return summary


def next_streak(current: int, is_correct: bool, mode: StudyMode) -> int:
    """New streak value for one card after one result."""
    if not is_correct:
        return 0
    if mode == StudyMode.TEST:
        return current + 1
    elif mode == StudyMode.REPEAT:
        return current
    else:
        raise ValueError(f"Unknown study mode: {mode}")


def apply_streak_updates(
    cards: Iterable[Card],
    results: Iterable[TestResult],
    mode: StudyMode,
) -> dict[str, int]:
    """
    Compute new streaks for every tested card.

    Results are applied in order, so a word tested twice sees the first
    result's streak. Results for unknown words are skipped.

    Returns:
        Mapping of word name to new streak
    """
    streaks = {card.word_name: card.streak for card in cards}
    updated: dict[str, int] = {}

    for result in results:
        if result.word_name not in streaks:
            logger.warning(f"No card for result '{result.word_name}', skipping streak update")
            continue
        current = updated.get(result.word_name, streaks[result.word_name])
        updated[result.word_name] = next_streak(current, result.is_correct, mode)

    return updated


def is_learned(card: Card, streak_length: int) -> bool:
    """A card is learned once its streak reaches the configured length."""
    return card.streak >= streak_length


def partition_by_learned(
    cards: Iterable[Card], streak_length: int
) -> tuple[list[Card], list[Card]]:
    """
    Split cards into (unlearned, learned).

    Unlearned cards are ordered by creation time, oldest first; learned cards
    keep their input order.
    """
    unlearned: list[Card] = []
    learned: list[Card] = []
    for card in cards:
        (learned if is_learned(card, streak_length) else unlearned).append(card)

    unlearned.sort(key=lambda c: c.created_at)
    return unlearned, learned
