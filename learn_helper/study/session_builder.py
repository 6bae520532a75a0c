"""
Session construction.

Learn sessions resume "from card k": the unlearned list is rotated so card k
comes first and the pass continues forward, wrapping past the end. Start
numbers beyond the list wrap around (k=7 over 5 cards starts at card 2).

Test and repeat sessions shuffle the whole pool into a single set and skip
the study phase.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from loguru import logger

from learn_helper.core.cards import Card
from learn_helper.core.errors import ValidationError
from learn_helper.study.session import LearningPhase, LearningSession, TestMethod


def normalize_start_number(start_card_number: int, card_count: int) -> int:
    """
    Wrap a 1-indexed start number into ``1..card_count``.

    Raises:
        ValidationError: No cards, or start number below 1
    """
    if card_count < 1:
        raise ValidationError("Cannot start in an empty card list")
    if start_card_number < 1:
        raise ValidationError("Start card number must be at least 1")
    if start_card_number > card_count:
        return (start_card_number - 1) % card_count + 1
    return start_card_number


def rotate_cards(cards: Sequence[Card], start_card_number: int) -> list[Card]:
    """
    Left-rotate ``cards`` so the (wrapped) start card comes first.

    Raises:
        ValidationError: No cards, or start number below 1
    """
    start_index = normalize_start_number(start_card_number, len(cards)) - 1
    return list(cards[start_index:]) + list(cards[:start_index])


def build_session(
    unlearned_cards: Sequence[Card],
    start_card_number: int,
    cards_per_set: int,
    test_method: TestMethod | str,
) -> LearningSession:
    """
    Create a learn session starting from a given card.

    Args:
        unlearned_cards: Unlearned cards, usually sorted by creation date
        start_card_number: 1-indexed card to start from (wraps if too large)
        cards_per_set: Cards per study/test set
        test_method: "manual" or "self_review"

    Returns:
        A session in the Study phase at the first card of the first set

    Raises:
        ValidationError: No cards, start number below 1, or empty sets
    """
    if not unlearned_cards:
        raise ValidationError("No unlearned cards available")
    if start_card_number < 1:
        raise ValidationError("Start card number must be at least 1")
    if cards_per_set < 1:
        raise ValidationError("Cards per set must be at least 1")

    method = TestMethod.from_str(test_method)
    shifted = rotate_cards(unlearned_cards, start_card_number)

    logger.debug(
        f"Learn session: {len(shifted)} cards from #{start_card_number}, "
        f"{cards_per_set} per set, {method.value}"
    )
    return LearningSession(
        all_cards=tuple(shifted),
        cards_per_set=cards_per_set,
        test_method=method,
        phase=LearningPhase.STUDY,
    )


def _build_shuffled_test(
    cards: Sequence[Card],
    test_method: TestMethod | str,
    rng: random.Random | None,
    empty_message: str,
) -> LearningSession:
    if not cards:
        raise ValidationError(empty_message)

    method = TestMethod.from_str(test_method)
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)

    return LearningSession(
        all_cards=tuple(shuffled),
        cards_per_set=len(shuffled),
        test_method=method,
        phase=LearningPhase.TEST,
    )


def build_test_session(
    unlearned_cards: Sequence[Card],
    test_method: TestMethod | str,
    rng: random.Random | None = None,
) -> LearningSession:
    """Shuffle all unlearned cards into one set, starting in the Test phase."""
    session = _build_shuffled_test(
        unlearned_cards, test_method, rng, "No unlearned cards available"
    )
    logger.debug(f"Test session: {len(session.all_cards)} cards")
    return session


def build_repeat_session(
    learned_cards: Sequence[Card],
    test_method: TestMethod | str,
    rng: random.Random | None = None,
) -> LearningSession:
    """Shuffle all learned cards into one set, starting in the Test phase."""
    session = _build_shuffled_test(
        learned_cards, test_method, rng, "No learned cards available"
    )
    logger.debug(f"Repeat session: {len(session.all_cards)} cards")
    return session
