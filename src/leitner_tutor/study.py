"""Study day counter, settings and per-day resume tracking."""
import logging
from datetime import date

from leitner_tutor.db import get_connection
from leitner_tutor.flashcards import get_due_cards, load_history
from leitner_tutor.models import Flashcard

logger = logging.getLogger(__name__)


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_start_date(db_path: str) -> str | None:
    return get_setting(db_path, "start_date")


def get_current_day(db_path: str) -> int:
    return int(get_setting(db_path, "current_day", "0"))


def start_new_day(db_path: str) -> int:
    """Record the start date on first use and return the current day."""
    if not get_start_date(db_path):
        set_setting(db_path, "start_date", date.today().isoformat())
    return get_current_day(db_path)


def advance_day(db_path: str) -> int:
    day = get_current_day(db_path) + 1
    set_setting(db_path, "current_day", str(day))
    logger.info("Advanced to study day %d", day)
    return day


def get_completed_cards(db_path: str, day: int) -> set[Flashcard]:
    """Cards already graded on `day`."""
    return {record.card for record in load_history(db_path, day=day)}


def get_remaining_cards(db_path: str, day: int) -> list[Flashcard]:
    done = get_completed_cards(db_path, day)
    return [card for card in get_due_cards(db_path, day) if card not in done]


def is_day_complete(db_path: str, day: int) -> bool:
    return not get_remaining_cards(db_path, day)


def get_calendar_days_elapsed(db_path: str) -> int:
    start = get_start_date(db_path)
    if not start:
        return 0
    start_date = date.fromisoformat(start)
    return (date.today() - start_date).days + 1


def reset_all_progress(db_path: str) -> None:
    """Send every card back to bucket 0 and forget all history."""
    conn = get_connection(db_path)
    conn.execute("DELETE FROM practice_history")
    conn.execute("UPDATE flashcards SET bucket = 0")
    conn.execute("DELETE FROM user_settings WHERE key IN ('current_day', 'start_date')")
    conn.commit()
    conn.close()
    logger.info("Reset all progress in %s", db_path)
