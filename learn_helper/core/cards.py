"""
Card domain models.

A card is one vocabulary unit: a headword with its readings, plus one or
more meanings, each carrying the translations a learner may answer with.

Cards are immutable values. They are created and edited by the persistence
layer and only read by the study engine; the streak counter is carried here
but never changed by the engine.

Plain construction (``Card(...)``) does no checking, which is what a
repository loading trusted rows wants. The ``create`` classmethods enforce
the model rules and raise ``ValidationError``.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from learn_helper.core.errors import ValidationError

MAX_WORD_LENGTH = 200
MAX_DEFINITION_LENGTH = 1000


class CardType(str, Enum):
    """Learning direction of a card."""

    STRAIGHT = "straight"  # headword in target language, answers in native
    REVERSE = "reverse"  # headword in native language, answers in target

    @classmethod
    def from_str(cls, value: str | CardType) -> CardType:
        """Parse a card type, case-insensitively."""
        if isinstance(value, CardType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Invalid card type: {value}. Must be 'straight' or 'reverse'"
            ) from None


@dataclass(frozen=True)
class Word:
    """A headword and its pronunciation readings."""

    name: str
    readings: tuple[str, ...] = ()

    @classmethod
    def create(cls, name: str, readings: Iterable[str] = ()) -> Word:
        """Create a word, checking the name."""
        if not name or not name.strip():
            raise ValidationError("Word name cannot be empty")
        if len(name) > MAX_WORD_LENGTH:
            raise ValidationError(
                f"Word name cannot exceed {MAX_WORD_LENGTH} characters"
            )
        return cls(name=name, readings=tuple(readings))


@dataclass(frozen=True)
class Meaning:
    """One sense of a word with its accepted translations."""

    definition: str
    translated_definition: str
    word_translations: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        definition: str,
        translated_definition: str,
        word_translations: Iterable[str],
    ) -> Meaning:
        """
        Create a meaning, checking definitions and translations.

        Args:
            definition: Definition text
            translated_definition: Definition in the learner's language
            word_translations: Accepted translations (at least one)

        Raises:
            ValidationError: If any field breaks the model rules
        """
        if not definition or not definition.strip():
            raise ValidationError("Definition cannot be empty")
        if not translated_definition or not translated_definition.strip():
            raise ValidationError("Translated definition cannot be empty")
        if len(definition) > MAX_DEFINITION_LENGTH:
            raise ValidationError(
                f"Definition cannot exceed {MAX_DEFINITION_LENGTH} characters"
            )
        if len(translated_definition) > MAX_DEFINITION_LENGTH:
            raise ValidationError(
                f"Translated definition cannot exceed {MAX_DEFINITION_LENGTH} characters"
            )

        translations = tuple(word_translations)
        if not translations:
            raise ValidationError("Meaning must have at least one translation")

        return cls(
            definition=definition,
            translated_definition=translated_definition,
            word_translations=translations,
        )


@dataclass(frozen=True)
class Card:
    """A flashcard: a word, its meanings and the external streak counter."""

    card_type: CardType
    word: Word
    meanings: tuple[Meaning, ...]
    streak: int = 0
    created_at: int = 0  # unix timestamp
    id: int | None = None

    @classmethod
    def create(
        cls,
        card_type: CardType | str,
        word: Word,
        meanings: Iterable[Meaning],
        created_at: int | None = None,
    ) -> Card:
        """Create a new card with a zero streak."""
        meanings = tuple(meanings)
        if not meanings:
            raise ValidationError("Card must have at least one meaning")

        return cls(
            card_type=CardType.from_str(card_type),
            word=word,
            meanings=meanings,
            streak=0,
            created_at=int(time.time()) if created_at is None else created_at,
        )

    @property
    def word_name(self) -> str:
        return self.word.name

    @property
    def translation_count(self) -> int:
        """Total number of translations across all meanings."""
        return sum(len(m.word_translations) for m in self.meanings)
