"""Interactive CLI application."""
import logging
import os
import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from leitner_tutor.algorithm import get_hint
from leitner_tutor.dashboard import (
    calc_progress, get_bucket_breakdown, get_progress_color, get_progress_label,
    get_study_stats,
)
from leitner_tutor.db import DEFAULT_DB_PATH, init_db
from leitner_tutor.errors import LeitnerError
from leitner_tutor.flashcards import add_card, find_card, record_flashcard_result
from leitner_tutor.importer import import_file
from leitner_tutor.models import AnswerDifficulty, Flashcard
from leitner_tutor.seed import is_seeded, seed_all
from leitner_tutor.study import (
    advance_day, get_calendar_days_elapsed, get_completed_cards, get_current_day,
    get_remaining_cards, is_day_complete, reset_all_progress, start_new_day,
)

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("q", "menu")
DIFFICULTY_CHOICES = ["easy", "hard", "wrong"]


class SessionExitRequested(Exception):
    """Raised when the user leaves a practice session early."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_choice_prompt(prompt: str, choices: list[str]) -> str:
    """Ask until one of `choices` (or an exit word) is given."""
    while True:
        answer = session_prompt(f"{prompt} [{'/'.join(choices)}]").strip().lower()
        if answer in choices:
            return answer
        console.print(f"[red]Please enter one of: {', '.join(choices)}[/red]")


def show_welcome():
    console.print(Panel(
        "[bold]Leitner Flashcards[/bold]\n[dim]Spaced repetition in five buckets[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("practice", "Today's due cards"),
        ("add", "Add a flashcard"),
        ("hint", "Show a hint for a card"),
        ("dashboard", "Progress + stats"),
        ("buckets", "Cards per bucket"),
        ("import", "Import cards from a file"),
        ("next", "Move on to the next study day"),
        ("reset", "Send every card back to bucket 0"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_hint(card: Flashcard) -> None:
    console.print(f"[magenta]Hint:[/magenta] {card.hint or get_hint(card)}")


def run_practice_session(db_path: str, cards: list[Flashcard], day: int) -> int:
    """Drill `cards`, skipping any already graded on `day`. Returns cards graded."""
    if not cards:
        console.print("[yellow]No flashcards due today![/yellow]")
        return 0
    done = get_completed_cards(db_path, day)
    pending = [c for c in cards if c not in done]
    console.print(f"\n[bold]Practice Session[/bold] (day {day}): {len(pending)} cards\n")
    graded = 0
    for i, card in enumerate(pending, 1):
        console.print(Panel(card.front, title=f"Card {i}/{len(pending)}", border_style="cyan"))
        while session_prompt("[dim]Enter to reveal, 'h' for a hint[/dim]", default="").strip().lower() == "h":
            show_hint(card)
        console.print(Panel(card.back, border_style="green"))
        answer = session_choice_prompt("How did it go?", DIFFICULTY_CHOICES)
        bucket = record_flashcard_result(db_path, card, AnswerDifficulty.parse(answer), day)
        console.print(f"[dim]Now in bucket {bucket}[/dim]\n")
        graded += 1
    return graded


def cmd_practice(db_path: str):
    day = start_new_day(db_path)
    cards = get_remaining_cards(db_path, day)
    try:
        run_practice_session(db_path, cards, day)
    except SessionExitRequested:
        console.print("[dim]Session paused. Run 'practice' again to resume.[/dim]")
        return
    if cards and is_day_complete(db_path, day):
        console.print("[green]All due cards done for today! Use 'next' to move on.[/green]")


def cmd_add(db_path: str):
    front = Prompt.ask("Front").strip()
    back = Prompt.ask("Back").strip()
    if not front or not back:
        console.print("[red]A card needs both a front and a back.[/red]")
        return
    hint = Prompt.ask("Hint (optional)", default="")
    tags = [t.strip() for t in Prompt.ask("Tags (comma separated)", default="").split(",") if t.strip()]
    if add_card(db_path, Flashcard(front=front, back=back, hint=hint, tags=tuple(tags))):
        console.print("[green]Card added to bucket 0.[/green]")
    else:
        console.print("[yellow]That card is already in the deck.[/yellow]")


def cmd_hint(db_path: str):
    front = Prompt.ask("Card front")
    card = find_card(db_path, front)
    if card is None:
        console.print(f"[red]No card with front: {front}[/red]")
        return
    show_hint(card)


def cmd_dashboard(db_path: str):
    score = calc_progress(db_path)
    label = get_progress_label(score)
    color = get_progress_color(score)
    day = get_current_day(db_path)
    cal_days = get_calendar_days_elapsed(db_path)
    stats = get_study_stats(db_path)

    header = f"Study Day {day}"
    if cal_days:
        header += f" (Calendar Day {cal_days})"
    console.print(Panel(f"[bold]{header}[/bold]", title="Leitner Progress Dashboard", border_style="blue"))

    bar_filled = int(score / 5)
    bar_empty = 20 - bar_filled
    bar = f"[{color}]{'█' * bar_filled}{'░' * bar_empty}[/{color}]"
    console.print(f"\n  Progress: [bold]{score}%[/bold] {bar} [{color}]{label}[/{color}]\n")

    bucket_range = stats["bucket_range"]
    range_text = (
        f"{bucket_range.min_bucket}-{bucket_range.max_bucket}" if bucket_range else "none"
    )
    console.print(f"  Cards: [bold]{stats['total_cards']}[/bold]  |  "
                  f"Retired: [bold]{stats['retired_cards']}[/bold]  |  "
                  f"Reviews: [bold]{stats['reviews']}[/bold]  |  "
                  f"Accuracy: [bold]{stats['accuracy']}%[/bold]  |  "
                  f"Buckets in use: [bold]{range_text}[/bold]")


def cmd_buckets(db_path: str):
    table = Table(title="Buckets")
    table.add_column("Bucket", justify="right")
    table.add_column("Cards", justify="right")
    table.add_column("Review every")
    for row in get_bucket_breakdown(db_path):
        every = "retired" if row["retired"] else f"{row['interval_days']} day(s)"
        table.add_row(str(row["bucket"]), str(row["count"]), every)
    console.print(table)


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    result = import_file(db_path, file_path)
    console.print(
        f"[green]Imported {result['imported']} cards from {result['filename']}[/green]"
        + (f" [dim]({result['skipped']} already in deck)[/dim]" if result["skipped"] else "")
    )


def cmd_next(db_path: str):
    day = start_new_day(db_path)
    if not is_day_complete(db_path, day) and not Confirm.ask("Cards are still due today. Move on anyway?"):
        return
    console.print(f"[green]Now on study day {advance_day(db_path)}.[/green]")


def cmd_reset(db_path: str):
    if Confirm.ask("Reset all progress? Every card goes back to bucket 0", default=False):
        reset_all_progress(db_path)
        console.print("[green]Progress reset.[/green]")


def configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LEITNER_TUTOR_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


def main():
    configure_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up a starter deck...[/dim]")
    seed_all(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")

    show_welcome()

    commands = {
        "practice": cmd_practice,
        "add": cmd_add,
        "hint": cmd_hint,
        "dashboard": cmd_dashboard,
        "buckets": cmd_buckets,
        "import": cmd_import,
        "next": cmd_next,
        "reset": cmd_reset,
    }
    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="practice").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]See you tomorrow![/dim]")
            break
        command = commands.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(db_path)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except (LeitnerError, ValueError, OSError) as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
