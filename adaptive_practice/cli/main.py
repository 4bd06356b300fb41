"""
Adaptive Practice CLI.

Commands:
    adaptive-practice practice <pool> --concept <id>  - Interactive practice session
    adaptive-practice ladder                          - Progression policy table
    adaptive-practice coverage <pool>                 - Bloom x difficulty coverage per concept

Pool files are JSON documents (see adaptive_practice.content.pool_file).
Sessions live in memory for the duration of the command.
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from config import Settings, get_settings
from adaptive_practice.adaptive.progression import BLOOM_ORDER, DIFFICULTY_ORDER, ladder
from adaptive_practice.adaptive.question_selector import Selection, SelectionOutcome
from adaptive_practice.content.pool_file import load_pool
from adaptive_practice.core.mastery import ConceptMastery
from adaptive_practice.core.models import Question, StarType
from adaptive_practice.repositories.memory import (
    InMemoryHistoryRepository,
    InMemorySessionRepository,
)
from adaptive_practice.study.practice_service import PracticeService, ScoredAttempt

console = Console()

app = typer.Typer(
    name="adaptive-practice",
    help="Adaptive practice - Bloom x difficulty question ladder with stars and mastery",
    no_args_is_help=True,
)

OPTION_KEYS = "abcdefgh"
STAR_GLYPH = "*"


def _configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = "DEBUG" if verbose else settings.log_level
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=level, rotation="10 MB", retention=5)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Adaptive practice over generated question pools."""
    _configure_logging(get_settings(), verbose)


# ========================================
# Rendering
# ========================================


def _star_text(stars: list[StarType]) -> Text:
    text = Text()
    for star in stars:
        text.append(STAR_GLYPH, style=star.color)
    return text


def _render_question(question: Question, selection: Selection, number: int) -> None:
    body = Text()
    body.append(f"{question.stem}\n\n", style="bold")
    for key, option in zip(OPTION_KEYS, question.options):
        body.append(f"  {key}) ", style="cyan")
        body.append(f"{option.text}\n")
    title = f"Q{number} - {question.bloom_level.value} / {question.difficulty.value}"
    subtitle = f"target {selection.target} ({selection.rule.value})" if selection.rule else None
    console.print(Panel(body, title=title, subtitle=subtitle, border_style="blue"))


def _render_result(scored: ScoredAttempt, streak: list[StarType]) -> None:
    if scored.attempt.is_correct:
        console.print(f"[green]Correct![/green] You earned a [{scored.star.color}]{scored.star.value}[/] star.")
    else:
        correct = scored.question.correct_option
        console.print(f"[red]Not quite.[/red] The answer was: [bold]{correct.text}[/bold]")
        if scored.misconception_tag:
            console.print(f"[yellow]Misconception:[/yellow] {scored.misconception_tag}")

    mastery = scored.updated_mastery
    line = Text("Stars ")
    line.append_text(_star_text(streak))
    line.append(f"  proficiency {mastery.proficiency_score}%", style=mastery.level.color)
    if mastery.mastered:
        line.append("  [MASTERED]", style="bold green")
    console.print(line)
    console.print()


def _render_summary(mastery: ConceptMastery, answered: int) -> None:
    table = Table(title=f"Session summary - {mastery.concept_name}", show_header=False)
    table.add_row("Questions answered", str(answered))
    table.add_row("Correct", f"{mastery.colored_stars}/{mastery.total_stars}")
    table.add_row("Proficiency", f"{mastery.proficiency_score}% ({mastery.level.display_name})")
    table.add_row("Mastered", "[green]yes[/green]" if mastery.mastered else "no")
    console.print(table)


# ========================================
# Commands
# ========================================


async def _practice(pool: Path, concept_id: str, student_id: str, settings: Settings) -> int:
    content = load_pool(pool)
    concept = await content.get_concept(concept_id)
    if concept is None:
        console.print(f"[red]Unknown concept:[/red] {concept_id}")
        return 1

    sessions = InMemorySessionRepository()
    service = PracticeService(
        content, sessions, InMemoryHistoryRepository(sessions, content), settings
    )
    await service.start_session(student_id, concept.chapter_id)
    console.print(f"[bold]Practicing {concept.name}[/bold] as {student_id}\n")

    streak: list[StarType] = []
    answered = 0
    while True:
        selection = await service.select_next(student_id, concept_id)
        if selection.outcome is SelectionOutcome.NO_CONTENT:
            console.print("[yellow]No questions available for this concept yet.[/yellow]")
            break
        if selection.outcome is SelectionOutcome.EXHAUSTED:
            console.print("[green]Concept complete - every question has been attempted.[/green]")
            break

        question = selection.question
        _render_question(question, selection, answered + 1)
        keys = list(OPTION_KEYS[: len(question.options)])
        answer = Prompt.ask("Your answer", choices=[*keys, "q"], console=console)
        if answer == "q":
            break

        option = question.options[keys.index(answer)]
        scored = await service.record_and_score(None, question.id, option.is_correct, option.id)
        answered += 1
        streak = (streak + [scored.star])[-settings.star_streak_length:]
        _render_result(scored, streak)

    await service.end_session()
    _render_summary(await service.concept_mastery(student_id, concept_id), answered)
    return 0


@app.command("practice")
def practice(
    pool: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON question pool file"),
    concept: str = typer.Option(..., "--concept", "-c", help="Concept id to practice"),
    student: str = typer.Option("student-1", "--student", "-s", help="Student id"),
) -> None:
    """
    Practice a concept interactively.

    Questions follow the adaptive ladder; answer with the option letter or q to stop.
    """
    code = asyncio.run(_practice(pool, concept, student, get_settings()))
    if code:
        raise typer.Exit(code=code)


@app.command("ladder")
def show_ladder() -> None:
    """Show where the next question goes after a correct or incorrect answer."""
    table = Table(title="Progression ladder")
    table.add_column("Last question", style="bold")
    table.add_column("After correct", style="green")
    table.add_column("After incorrect", style="red")
    for cell, up, down in ladder():
        table.add_row(str(cell), str(up), str(down))
    console.print(table)


@app.command("coverage")
def coverage(
    pool: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON question pool file"),
) -> None:
    """Count questions per Bloom level and difficulty for every concept."""
    content = load_pool(pool)
    for concept in content.concepts.values():
        questions = [q for q in content.questions.values() if q.concept_id == concept.id]
        table = Table(title=f"{concept.name} ({len(questions)} questions)")
        table.add_column("Bloom level", style="bold")
        for difficulty in DIFFICULTY_ORDER:
            table.add_column(difficulty.value, justify="right")
        for bloom in BLOOM_ORDER:
            counts = [
                sum(1 for q in questions if q.bloom_level == bloom and q.difficulty == difficulty)
                for difficulty in DIFFICULTY_ORDER
            ]
            table.add_row(bloom.value, *(str(n) if n else "[dim]0[/dim]" for n in counts))
        console.print(table)


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
