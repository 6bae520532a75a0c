"""
Integration Tests for the Study Flow.

Tests the core learning path end to end:
1. A deck file is loaded and split into unlearned/learned cards
2. A learn session runs Study -> Test -> Results over several sets
3. A failed set is retried, a passed set moves on
4. Test results become streak updates written back to the deck
"""

import json
import random

import pytest

from learn_helper.delivery.deck_loader import JsonDeckStreakUpdater, load_deck
from learn_helper.study import (
    FlowState,
    SessionFlow,
    StudyMode,
    apply_streak_updates,
    build_repeat_session,
    build_session,
    build_test_session,
    partition_by_learned,
    summarize,
)

pytestmark = pytest.mark.integration


def deck_entry(name, translations, card_type="straight", streak=0, created_at=0):
    return {
        "card_type": card_type,
        "word": {"name": name},
        "meanings": [
            {
                "definition": f"definition of {name}",
                "translated_definition": f"traducción de {name}",
                "word_translations": translations,
            }
        ],
        "streak": streak,
        "created_at": created_at,
    }


@pytest.fixture
def deck_path(tmp_path):
    deck = {
        "cards": [
            deck_entry("犬", ["dog"], created_at=1),
            deck_entry("猫", ["cat"], created_at=2),
            deck_entry("鳥", ["bird"], created_at=3),
            deck_entry("hello", ["hola", "buenos días"], card_type="reverse", created_at=4),
            deck_entry("魚", ["fish"], created_at=5),
            deck_entry("水", ["water"], streak=5, created_at=0),
        ]
    }
    path = tmp_path / "deck.json"
    path.write_text(json.dumps(deck, ensure_ascii=False), encoding="utf-8")
    return path


ANSWERS = {
    "犬": ["dog"],
    "猫": ["cat"],
    "鳥": ["bird"],
    "hello": ["hola", "buenos días"],
    "魚": ["fish"],
    "水": ["water"],
}


def answer_current(flow, wrong=False):
    card = flow.current_card
    for answer in (["nope"] if wrong else ANSWERS[card.word_name]):
        flow.submit(answer)
        if flow.session.is_card_complete:
            break
    return flow.proceed()


class TestLearnFlow:
    """A learn session across several sets."""

    def test_partition(self, deck_path):
        unlearned, learned = partition_by_learned(load_deck(deck_path), 5)

        assert [c.word_name for c in unlearned] == ["犬", "猫", "鳥", "hello", "魚"]
        assert [c.word_name for c in learned] == ["水"]

    def test_full_pass_with_retry(self, deck_path):
        unlearned, _ = partition_by_learned(load_deck(deck_path), 5)
        flow = SessionFlow(build_session(unlearned, 2, 2, "manual"))

        # set 1: 猫, 鳥 studied, then one miss
        assert flow.current_card.word_name == "猫"
        flow.next_card()
        assert flow.next_card() == FlowState.TEST
        answer_current(flow)
        assert answer_current(flow, wrong=True) == FlowState.RESULTS
        assert flow.passed is False

        # retry set 1 and pass it
        flow.retry()
        flow.start_test()
        answer_current(flow)
        answer_current(flow)
        assert flow.passed is True

        # set 2: hello (reverse), 魚
        assert flow.advance() == FlowState.STUDY
        assert flow.session.current_set_number == 2
        flow.start_test()
        assert flow.session.required_answers == 2
        answer_current(flow)
        answer_current(flow)
        assert flow.passed is True

        # set 3 wraps around to 犬
        flow.advance()
        assert flow.current_card.word_name == "犬"
        assert flow.session.actual_set_size == 1
        flow.start_test()
        answer_current(flow)
        assert flow.passed is True
        assert flow.advance() == FlowState.COMPLETED


class TestStreakRoundTrip:
    """Test and repeat sessions feeding streaks back into the deck."""

    def test_test_session_updates_streaks(self, deck_path):
        cards = load_deck(deck_path)
        unlearned, _ = partition_by_learned(cards, 5)
        flow = SessionFlow(build_test_session(unlearned, "manual", random.Random(0)))
        assert flow.state == FlowState.TEST

        while flow.state == FlowState.TEST:
            answer_current(flow, wrong=flow.current_card.word_name == "鳥")

        summary = summarize(flow.session)
        assert summary.passed is False
        assert len(summary.results) == 5

        updates = apply_streak_updates(unlearned, summary.results, StudyMode.TEST)
        JsonDeckStreakUpdater(deck_path, updates).update_streaks(summary.results)

        streaks = {c.word_name: c.streak for c in load_deck(deck_path)}
        assert streaks == {"犬": 1, "猫": 1, "鳥": 0, "hello": 1, "魚": 1, "水": 5}

    def test_repeat_session_miss_unlearns(self, deck_path):
        _, learned = partition_by_learned(load_deck(deck_path), 5)
        flow = SessionFlow(build_repeat_session(learned, "self_review", random.Random(0)))

        flow.show_answer()
        assert flow.mark(False) == FlowState.RESULTS

        results = summarize(flow.session).results
        updates = apply_streak_updates(learned, results, StudyMode.REPEAT)
        JsonDeckStreakUpdater(deck_path, updates).update_streaks(results)

        unlearned, learned = partition_by_learned(load_deck(deck_path), 5)
        assert learned == []
        assert unlearned[0].word_name == "水"
