"""
Delivery: terminal front end for the study engine.

Components:
- deck_loader: JSON deck parsing (pydantic) and streak write-back
- views: rich renderables for cards, feedback and results
- cli: typer commands (learn, test, repeat, check)
"""

from .deck_loader import JsonDeckStreakUpdater, load_deck, parse_deck

__all__ = [
    "JsonDeckStreakUpdater",
    "load_deck",
    "parse_deck",
]
