"""
Deck Loader: JSON card decks for the terminal driver.

A deck file is either a list of cards or an object with a "cards" list:

    {
      "cards": [
        {
          "card_type": "straight",
          "word": {"name": "食べる", "readings": ["たべる"]},
          "meanings": [
            {"definition": "to eat", "translated_definition": "comer",
             "word_translations": ["eat", "consume"]}
          ],
          "streak": 0,
          "created_at": 1700000000
        }
      ]
    }

Files are validated with pydantic and converted to immutable Card values.
This is the only module that touches the filesystem.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from learn_helper.core.cards import Card, CardType, Meaning, Word
from learn_helper.study.results import TestResult


class WordModel(BaseModel):
    """Headword as stored in a deck file."""

    name: str = Field(min_length=1, max_length=200)
    readings: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Word name cannot be empty")
        return v


class MeaningModel(BaseModel):
    """One meaning as stored in a deck file."""

    definition: str = Field(min_length=1, max_length=1000)
    translated_definition: str = Field(min_length=1, max_length=1000)
    word_translations: list[str] = Field(min_length=1)


class CardModel(BaseModel):
    """One card as stored in a deck file."""

    card_type: CardType = CardType.STRAIGHT
    word: WordModel
    meanings: list[MeaningModel] = Field(min_length=1)
    streak: int = Field(default=0, ge=0)
    created_at: int = 0
    id: int | None = None

    @field_validator("card_type", mode="before")
    @classmethod
    def parse_card_type(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    def to_card(self) -> Card:
        return Card(
            card_type=self.card_type,
            word=Word(name=self.word.name, readings=tuple(self.word.readings)),
            meanings=tuple(
                Meaning(
                    definition=m.definition,
                    translated_definition=m.translated_definition,
                    word_translations=tuple(m.word_translations),
                )
                for m in self.meanings
            ),
            streak=self.streak,
            created_at=self.created_at,
            id=self.id,
        )


class DeckModel(BaseModel):
    """A whole deck file."""

    cards: list[CardModel] = Field(default_factory=list)


def parse_deck(data: dict | list) -> list[Card]:
    """Validate raw deck JSON and convert it to cards."""
    if isinstance(data, list):
        data = {"cards": data}
    deck = DeckModel.model_validate(data)
    return [card.to_card() for card in deck.cards]


def load_deck(path: Path) -> list[Card]:
    """
    Load a deck file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not JSON
        pydantic.ValidationError: If the JSON is not a valid deck
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    cards = parse_deck(data)
    logger.info(f"Loaded {len(cards)} cards from {path}")
    return cards


class JsonDeckStreakUpdater:
    """StreakUpdater that writes new streaks back into a deck file."""

    def __init__(self, path: Path, streaks: dict[str, int] | None = None):
        self.path = path
        self.streaks = streaks or {}

    def update_streaks(self, results: Sequence[TestResult]) -> None:
        """Write the streaks computed for ``results`` into the deck file."""
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        cards = data if isinstance(data, list) else data.get("cards", [])
        tested = {r.word_name for r in results}
        changed = 0
        for raw in cards:
            name = raw.get("word", {}).get("name")
            if name in tested and name in self.streaks:
                raw["streak"] = self.streaks[name]
                changed += 1

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info(f"Saved {changed} streak updates to {self.path}")
