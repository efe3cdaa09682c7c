"""Seed the database with a starter deck."""
import json
import logging
from pathlib import Path

from leitner_tutor.db import get_connection
from leitner_tutor.flashcards import add_card
from leitner_tutor.models import Flashcard

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent / "content"


def is_seeded(db_path: str) -> bool:
    """Check whether the deck already holds any cards."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM flashcards").fetchone()[0]
    conn.close()
    return count > 0


def seed_starter_deck(db_path: str) -> int:
    """Insert the cards from starter_deck.json into bucket 0."""
    data = json.loads((CONTENT_DIR / "starter_deck.json").read_text(encoding="utf-8"))
    added = 0
    for card in data["flashcards"]:
        added += add_card(
            db_path,
            Flashcard(
                front=card["front"],
                back=card["back"],
                hint=card.get("hint", ""),
                tags=tuple(card.get("tags", [])),
            ),
            source="seeded",
        )
    logger.info("Seeded %d starter cards", added)
    return added


def seed_all(db_path: str) -> None:
    """Seed an empty deck; a deck with cards is left alone."""
    if is_seeded(db_path):
        return
    seed_starter_deck(db_path)
