"""
Answer resolution, grading and completion checks.

Card-type rules live here side by side:

- Straight cards: the learner names one translation per meaning. Every
  translation stays acceptable for every input, and a card is covered once
  each meaning has been hit at least once.
- Reverse cards: the learner names every translation. A translation already
  given is no longer accepted, and a card is covered only when each
  translation has been hit by an answer of its own.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from learn_helper.core.cards import Card, CardType
from learn_helper.study.results import TestResult
from learn_helper.study.similarity import DEFAULT_THRESHOLD, is_similar


def all_expected_answers(card: Card) -> list[str]:
    """Every translation of every meaning, in card order (no dedup)."""
    return [
        translation
        for meaning in card.meanings
        for translation in meaning.word_translations
    ]


def next_expected_answers(card: Card, provided_answers: Sequence[str]) -> list[str]:
    """
    Answers still acceptable for the next input on this card.

    Args:
        card: The card under test
        provided_answers: Correct answers already given for this card

    Returns:
        Straight: all translations, regardless of what was given.
        Reverse: all translations minus those already given (case-insensitive).
    """
    expected = all_expected_answers(card)

    if card.card_type == CardType.STRAIGHT:
        return expected
    elif card.card_type == CardType.REVERSE:
        given = {answer.lower() for answer in provided_answers}
        return [answer for answer in expected if answer.lower() not in given]
    else:
        raise ValueError(f"Unknown card type: {card.card_type}")


def required_answers(card: Card) -> int:
    """Number of correct answers needed to complete a card in a test."""
    if card.card_type == CardType.STRAIGHT:
        return len(card.meanings)
    elif card.card_type == CardType.REVERSE:
        return card.translation_count
    else:
        raise ValueError(f"Unknown card type: {card.card_type}")


def check_answer_match(
    user_input: str,
    expected_answers: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[bool, str]:
    """
    Match one input against a list of candidate answers.

    Returns:
        (True, candidate) for the first similar candidate, otherwise
        (False, first candidate) or (False, "") when there are none.
    """
    for expected in expected_answers:
        if is_similar(expected, user_input, threshold):
            return True, expected

    # The fallback is whatever comes first in card order, not the closest
    # candidate. Kept for compatibility with existing feedback screens.
    return False, expected_answers[0] if expected_answers else ""


def validate_all_answers(
    card: Card,
    provided_answers: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> bool:
    """
    Check whether a full set of answers satisfies a card.

    Every provided answer must match some translation. Then coverage is
    checked per meaning (Straight) or per translation (Reverse). On Reverse
    cards each translation, duplicates included, needs its own answer.
    """
    expected = all_expected_answers(card)

    for answer in provided_answers:
        if not any(is_similar(candidate, answer, threshold) for candidate in expected):
            logger.debug(f"Answer '{answer}' matches nothing on '{card.word_name}'")
            return False

    def covered(translation: str) -> bool:
        return any(is_similar(translation, answer, threshold) for answer in provided_answers)

    if card.card_type == CardType.STRAIGHT:
        return all(
            any(covered(t) for t in meaning.word_translations)
            for meaning in card.meanings
        )
    elif card.card_type == CardType.REVERSE:
        return _assign_distinct_answers(expected, provided_answers, threshold)
    else:
        raise ValueError(f"Unknown card type: {card.card_type}")


def _assign_distinct_answers(
    translations: Sequence[str],
    provided_answers: Sequence[str],
    threshold: float,
) -> bool:
    """
    Check that each translation can claim its own similar answer.

    Duplicate translations need one answer apiece. Answers are assigned by
    augmenting paths, so a typo that matches two translations never blocks
    a better assignment.
    """
    owner: dict[int, int] = {}  # answer index -> translation index

    def assign(t: int, seen: set[int]) -> bool:
        for a, answer in enumerate(provided_answers):
            if a in seen or not is_similar(translations[t], answer, threshold):
                continue
            seen.add(a)
            if a not in owner or assign(owner[a], seen):
                owner[a] = t
                return True
        return False

    return all(assign(t, set()) for t in range(len(translations)))


def check_written_answer(
    card: Card,
    user_input: str,
    threshold: float = DEFAULT_THRESHOLD,
) -> TestResult:
    """Grade a single typed answer against all of a card's translations."""
    is_correct, expected = check_answer_match(
        user_input, all_expected_answers(card), threshold
    )
    return TestResult.written(card.word_name, is_correct, user_input, expected)


def process_self_review(card: Card, is_correct: bool) -> TestResult:
    """Record a learner's own verdict on a card."""
    return TestResult.self_review(card.word_name, is_correct)
