"""
Learn Helper CLI - Terminal driver for the study engine.

Runs study and test sessions over a JSON deck (see deck_loader).

Usage:
    learn-helper learn deck.json --start 5     # Study + test in sets, from card 5
    learn-helper test deck.json                # Test all unlearned cards
    learn-helper repeat deck.json              # Re-test learned cards
    learn-helper check deck.json WORD ANSWER.. # Check a full answer set for one card

Settings (cards per set, test method, streak length, similarity threshold,
log level) come from LEARN_HELPER_* environment variables or .env.
"""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from typing import Annotated, Optional

import pydantic
import typer
from loguru import logger
from rich.console import Console
from rich.prompt import Confirm, Prompt

from config import get_settings
from learn_helper.core.cards import Card
from learn_helper.core.errors import LearnHelperError
from learn_helper.delivery import views
from learn_helper.delivery.deck_loader import JsonDeckStreakUpdater, load_deck
from learn_helper.study.answers import check_written_answer, validate_all_answers
from learn_helper.study.results import (
    StudyMode,
    apply_streak_updates,
    partition_by_learned,
    summarize,
)
from learn_helper.study.session import TestMethod
from learn_helper.study.session_builder import (
    build_repeat_session,
    build_session,
    build_test_session,
)
from learn_helper.study.state_machine import FlowState, SessionFlow

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="learn-helper",
    help="Learn Helper - flashcard study sessions in the terminal",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

DeckArg = Annotated[Path, typer.Argument(help="Path to a JSON deck file")]
MethodOpt = Annotated[
    Optional[str],
    typer.Option("--method", "-m", help="Test method: manual or self_review"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else get_settings().log_level
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def _load_cards(deck: Path) -> list[Card]:
    """Load a deck or exit with a readable error."""
    try:
        return load_deck(deck)
    except FileNotFoundError:
        console.print(f"[red]File not found: {deck}[/]")
    except json.JSONDecodeError as e:
        console.print(f"[red]Not a JSON file: {deck} ({e})[/]")
    except pydantic.ValidationError as e:
        console.print(f"[red]Invalid deck {deck}:[/]\n{e}")
    raise typer.Exit(1)


def _method(value: str | None) -> TestMethod:
    return TestMethod.from_str(value or get_settings().test_answer_method)


# =============================================================================
# Session loop
# =============================================================================


def _study_card(flow: SessionFlow) -> None:
    session = flow.session
    console.print(
        views.card_panel(session.current_card, reveal=True, title=views.progress_title(session, "STUDY"))
    )
    choice = Prompt.ask(
        "[dim]Enter=next card, t=start test[/dim]", default="", show_default=False
    )
    if choice.strip().lower() == "t":
        flow.start_test()
    else:
        flow.next_card()


def _test_card(flow: SessionFlow) -> None:
    session = flow.session
    card = session.current_card
    console.print(
        views.card_panel(card, reveal=False, title=views.progress_title(session, "TEST"))
    )

    if session.test_method == TestMethod.SELF_REVIEW:
        Prompt.ask("[dim]Press Enter to show the answer[/dim]", default="", show_default=False)
        flow.show_answer()
        console.print(views.card_panel(card, reveal=True, title="ANSWER"))
        flow.mark(Confirm.ask("Did you know it?", default=True))
        return

    while not flow.session.is_card_complete:
        answer = Prompt.ask(f"Answer [dim]({flow.session.remaining_answers} left)[/dim]")
        if not answer.strip():
            continue
        outcome = flow.submit(answer)
        remaining = outcome.session.remaining_answers if outcome.is_correct else 0
        console.print(views.feedback_text(outcome.is_correct, outcome.matched_answer, remaining))

    if flow.session.current_card_failed:
        console.print(views.card_panel(card, reveal=True, title="ANSWER"))
    flow.proceed()


def _run_until_results(flow: SessionFlow) -> None:
    while flow.state in (FlowState.STUDY, FlowState.TEST):
        if flow.state == FlowState.STUDY:
            _study_card(flow)
        else:
            _test_card(flow)


def _finish_test(deck: Path, cards: list[Card], flow: SessionFlow, mode: StudyMode, save: bool) -> None:
    summary = summarize(flow.session)
    console.print(views.results_panel(summary))

    updates = apply_streak_updates(cards, summary.results, mode)
    console.print(views.streak_table(cards, updates))

    if save:
        JsonDeckStreakUpdater(deck, updates).update_streaks(summary.results)
        console.print(f"[green]Saved streaks to {deck}[/]")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def learn(
    deck: DeckArg,
    start: Annotated[int, typer.Option("--start", "-s", help="Card number to start from")] = 1,
    per_set: Annotated[
        Optional[int], typer.Option("--per-set", "-n", help="Cards per set")
    ] = None,
    method: MethodOpt = None,
) -> None:
    """
    Study unlearned cards in sets, testing each set after studying it.

    A failed set can be retried; a passed set moves on to the next one.
    """
    settings = get_settings()
    cards = _load_cards(deck)
    unlearned, _ = partition_by_learned(cards, settings.streak_length)

    try:
        session = build_session(
            unlearned, start, per_set or settings.cards_per_set, _method(method)
        )
    except LearnHelperError as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1)

    flow = SessionFlow(session, settings.similarity_threshold)
    while True:
        _run_until_results(flow)
        summary = summarize(flow.session)
        console.print(views.results_panel(summary))

        if summary.passed:
            if not Confirm.ask("Continue to the next set?", default=True):
                break
            if flow.advance() == FlowState.COMPLETED:
                console.print("[green]All cards completed![/]")
                break
        else:
            if not Confirm.ask("Retry this set?", default=True):
                break
            flow.retry()


@app.command()
def test(
    deck: DeckArg,
    method: MethodOpt = None,
    save: Annotated[bool, typer.Option("--save", help="Write new streaks back to the deck")] = False,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Shuffle seed")] = None,
) -> None:
    """Test all unlearned cards in random order and update their streaks."""
    settings = get_settings()
    cards = _load_cards(deck)
    unlearned, _ = partition_by_learned(cards, settings.streak_length)

    try:
        session = build_test_session(unlearned, _method(method), random.Random(seed))
    except LearnHelperError as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1)

    flow = SessionFlow(session, settings.similarity_threshold)
    _run_until_results(flow)
    _finish_test(deck, unlearned, flow, StudyMode.TEST, save)


@app.command()
def repeat(
    deck: DeckArg,
    method: MethodOpt = None,
    save: Annotated[bool, typer.Option("--save", help="Write new streaks back to the deck")] = False,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Shuffle seed")] = None,
) -> None:
    """Re-test learned cards; any miss sends a card back to unlearned."""
    settings = get_settings()
    cards = _load_cards(deck)
    _, learned = partition_by_learned(cards, settings.streak_length)

    try:
        session = build_repeat_session(learned, _method(method), random.Random(seed))
    except LearnHelperError as e:
        console.print(f"[red]{e.message}[/]")
        raise typer.Exit(1)

    flow = SessionFlow(session, settings.similarity_threshold)
    _run_until_results(flow)
    _finish_test(deck, learned, flow, StudyMode.REPEAT, save)


@app.command()
def check(
    deck: DeckArg,
    word: Annotated[str, typer.Argument(help="Word name of the card")],
    answers: Annotated[list[str], typer.Argument(help="Answers to check")],
) -> None:
    """Check whether a set of answers fully covers one card."""
    settings = get_settings()
    cards = _load_cards(deck)
    card = next((c for c in cards if c.word_name == word), None)
    if card is None:
        console.print(f"[red]No card named '{word}'[/]")
        raise typer.Exit(1)

    for answer in answers:
        result = check_written_answer(card, answer, settings.similarity_threshold)
        console.print(views.feedback_text(result.is_correct, result.expected_answer or "", 0))

    if validate_all_answers(card, answers, settings.similarity_threshold):
        console.print("[green]Complete: card fully covered[/]")
    else:
        console.print("[red]Incomplete[/]")
        raise typer.Exit(1)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
