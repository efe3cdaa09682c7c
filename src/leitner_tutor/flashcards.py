"""Deck storage and Leitner practice bookkeeping."""
import json
import logging
import sqlite3
from datetime import datetime

from leitner_tutor.algorithm import find_bucket, practice, to_bucket_sets, update
from leitner_tutor.db import get_connection
from leitner_tutor.errors import CardNotFoundError
from leitner_tutor.models import AnswerDifficulty, BucketMap, Flashcard, HistoryRecord

logger = logging.getLogger(__name__)


def row_to_card(row: sqlite3.Row) -> Flashcard:
    return Flashcard(
        front=row["front"],
        back=row["back"],
        hint=row["hint"] or "",
        tags=tuple(json.loads(row["tags"] or "[]")),
    )


def _card_id(conn: sqlite3.Connection, card: Flashcard) -> int | None:
    row = conn.execute(
        "SELECT id FROM flashcards WHERE front = ? AND back = ?", (card.front, card.back)
    ).fetchone()
    return row["id"] if row else None


def add_card(db_path: str, card: Flashcard, bucket: int = 0, source: str = "manual") -> bool:
    """Insert a card. Returns False if one with the same front and back exists."""
    if bucket < 0:
        raise ValueError(f"Bucket must be non-negative, got {bucket}")
    if not card.front.strip() or not card.back.strip():
        raise ValueError("A card needs both a front and a back")
    conn = get_connection(db_path)
    cursor = conn.execute(
        """INSERT OR IGNORE INTO flashcards (front, back, hint, tags, bucket, source)
        VALUES (?, ?, ?, ?, ?, ?)""",
        (card.front, card.back, card.hint, json.dumps(list(card.tags)), bucket, source),
    )
    conn.commit()
    conn.close()
    added = cursor.rowcount == 1
    if not added:
        logger.info("Skipped duplicate card %r", card.front)
    return added


def get_all_cards(db_path: str) -> list[Flashcard]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM flashcards ORDER BY front").fetchall()
    conn.close()
    return [row_to_card(r) for r in rows]


def find_card(db_path: str, front: str) -> Flashcard | None:
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT * FROM flashcards WHERE front = ? ORDER BY id LIMIT 1", (front,)
    ).fetchone()
    conn.close()
    return row_to_card(row) if row else None


def load_buckets(db_path: str) -> BucketMap:
    """Read the sparse bucket map; empty buckets are omitted."""
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM flashcards").fetchall()
    conn.close()
    buckets = {}
    for row in rows:
        buckets.setdefault(row["bucket"], set()).add(row_to_card(row))
    return buckets


def save_buckets(db_path: str, buckets: BucketMap) -> None:
    """Write each card's bucket number. Cards not in the deck are ignored."""
    conn = get_connection(db_path)
    for bucket, cards in buckets.items():
        for card in cards:
            cursor = conn.execute(
                "UPDATE flashcards SET bucket = ? WHERE front = ? AND back = ?",
                (bucket, card.front, card.back),
            )
            if cursor.rowcount == 0:
                logger.warning("Card %r is not in the deck; bucket not saved", card.front)
    conn.commit()
    conn.close()


def get_due_cards(db_path: str, day: int) -> list[Flashcard]:
    """Cards due on `day`, ordered by front for a stable session."""
    due = practice(to_bucket_sets(load_buckets(db_path)), day)
    return sorted(due, key=lambda c: (c.front, c.back))


def record_flashcard_result(
    db_path: str, card: Flashcard, difficulty: AnswerDifficulty, day: int
) -> int:
    """Apply a graded trial, log it, and return the card's new bucket."""
    buckets = load_buckets(db_path)
    previous = find_bucket(buckets, card)
    if previous is None:
        raise CardNotFoundError(card.front)
    updated = update(buckets, card, difficulty)
    new_bucket = find_bucket(updated, card)
    save_buckets(db_path, {new_bucket: {card}})
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO practice_history (flashcard_id, difficulty, day, reviewed_at) VALUES (?, ?, ?, ?)",
        (_card_id(conn, card), difficulty.value, day, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    logger.debug(
        "Card %r graded %s on day %d: bucket %d -> %d",
        card.front, difficulty.name, day, previous, new_bucket,
    )
    return new_bucket


def load_history(db_path: str, day: int | None = None) -> list[HistoryRecord]:
    """Practice history in the order it was recorded, optionally for one day."""
    conn = get_connection(db_path)
    query = """SELECT f.*, h.difficulty, h.day
        FROM practice_history h JOIN flashcards f ON h.flashcard_id = f.id"""
    params = ()
    if day is not None:
        query += " WHERE h.day = ?"
        params = (day,)
    rows = conn.execute(query + " ORDER BY h.id", params).fetchall()
    conn.close()
    return [
        HistoryRecord(card=row_to_card(r), difficulty=AnswerDifficulty(r["difficulty"]), day=r["day"])
        for r in rows
    ]
