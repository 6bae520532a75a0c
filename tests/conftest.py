"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared card fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from learn_helper.core.cards import Card, CardType, Meaning, Word  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (full session flows)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_card(
    word: str,
    meanings: list[tuple[str, str, list[str]]],
    card_type: CardType = CardType.STRAIGHT,
    readings: list[str] | None = None,
    streak: int = 0,
    created_at: int = 1000,
) -> Card:
    """Build a card without validation, like a repository row."""
    return Card(
        card_type=card_type,
        word=Word(word, tuple(readings or ())),
        meanings=tuple(
            Meaning(definition, translated, tuple(translations))
            for definition, translated, translations in meanings
        ),
        streak=streak,
        created_at=created_at,
    )


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def eat_card():
    """Straight card with one meaning and two translations."""
    return make_card(
        "食べる",
        [("to eat", "comer", ["eat", "consume"])],
        readings=["たべる"],
    )


@pytest.fixture
def spring_card():
    """Straight card with two meanings."""
    return make_card(
        "泉",
        [
            ("spring (water source)", "manantial", ["spring", "source"]),
            ("key (for lock)", "llave", ["key"]),
        ],
    )


@pytest.fixture
def hello_reverse_card():
    """Reverse card: native headword, target-language translations."""
    return make_card(
        "hello",
        [("greeting", "saludo", ["hola", "buenos días"])],
        card_type=CardType.REVERSE,
    )


@pytest.fixture
def numbered_cards():
    """Five distinct straight cards named card1..card5."""
    return [
        make_card(f"card{i}", [(f"def {i}", f"trad {i}", [f"answer{i}"])], created_at=1000 + i)
        for i in range(1, 6)
    ]
