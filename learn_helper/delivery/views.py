"""
Terminal rendering for study sessions.

Pure builders returning rich renderables; the CLI decides when to print.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from learn_helper.core.cards import Card, CardType
from learn_helper.study.results import SetSummary
from learn_helper.study.session import LearningSession

THEME = {
    "primary": "#5FAFFF",  # card borders
    "success": "#00FF88",  # correct answers
    "warning": "#FFD700",  # remaining answers
    "error": "#FF3366",  # incorrect
    "dim": "#7A7A8C",  # secondary text
    "white": "#F0F0F0",  # primary text
}

STYLES = {
    "primary": Style(color=THEME["primary"], bold=True),
    "success": Style(color=THEME["success"], bold=True),
    "warning": Style(color=THEME["warning"], bold=True),
    "error": Style(color=THEME["error"], bold=True),
    "dim": Style(color=THEME["dim"]),
}


def card_panel(card: Card, reveal: bool, title: str = "") -> Panel:
    """
    Render a card.

    Args:
        card: Card to show
        reveal: Show meanings and translations (study phase, self-review answer)
        title: Panel title, e.g. "STUDY 2/5"
    """
    content = Text()
    content.append(card.word.name, style=Style(color=THEME["white"], bold=True))
    if card.word.readings:
        content.append(f"  [{', '.join(card.word.readings)}]", style=STYLES["dim"])

    if reveal:
        for number, meaning in enumerate(card.meanings, start=1):
            content.append(f"\n\n{number}. {meaning.definition}\n")
            content.append(f"   {meaning.translated_definition}\n", style=STYLES["dim"])
            content.append("   → ", style=STYLES["dim"])
            content.append(", ".join(meaning.word_translations), style=STYLES["primary"])
    else:
        label = "meanings" if card.card_type == CardType.STRAIGHT else "translations"
        content.append(f"\n\n({card.card_type.value} card, name the {label})", style=STYLES["dim"])

    return Panel(
        content,
        title=f"[bold]{title}[/bold]" if title else None,
        border_style=Style(color=THEME["primary"]),
        box=box.HEAVY,
        padding=(1, 2),
    )


def progress_title(session: LearningSession, label: str) -> str:
    """Title like 'TEST · set 1/3 · card 2/5'."""
    return (
        f"{label} · set {session.current_set_number}/{session.total_sets}"
        f" · card {session.current_card_in_set + 1}/{session.actual_set_size}"
    )


def feedback_text(is_correct: bool, answer: str, remaining: int) -> Text:
    """Feedback line after a typed answer."""
    text = Text()
    if is_correct:
        text.append("✓ Correct", style=STYLES["success"])
        text.append(f"  ({answer})", style=STYLES["dim"])
        if remaining:
            text.append(f"  {remaining} more to go", style=STYLES["warning"])
    else:
        text.append("✗ Incorrect", style=STYLES["error"])
        if answer:
            text.append("  expected: ", style=STYLES["dim"])
            text.append(answer, style=Style(color=THEME["white"], bold=True))
    return text


def results_panel(summary: SetSummary) -> Panel:
    """Verdict for a finished set."""
    color = THEME["success"] if summary.passed else THEME["error"]
    content = Text()
    content.append(
        "SET PASSED\n\n" if summary.passed else "SET FAILED\n\n",
        style=Style(color=color, bold=True),
    )
    content.append(f"✓ {summary.correct}", style=STYLES["success"])
    content.append(f"  ✗ {summary.incorrect}", style=STYLES["error"])
    content.append(f"\n{summary.accuracy:.0%} accuracy", style=STYLES["dim"])

    return Panel(
        content,
        border_style=Style(color=color),
        box=box.HEAVY,
        padding=(1, 2),
    )


def streak_table(cards: Sequence[Card], updates: dict[str, int]) -> Table:
    """Old and new streak for each tested card."""
    table = Table(title="Streaks", box=box.ROUNDED)
    table.add_column("Word", style="bold")
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")

    for card in cards:
        if card.word_name not in updates:
            continue
        after = updates[card.word_name]
        style = "green" if after > card.streak else ("red" if after < card.streak else "")
        table.add_row(card.word_name, str(card.streak), f"[{style}]{after}[/{style}]" if style else str(after))

    return table
