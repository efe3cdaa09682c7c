# tests/test_flashcards.py
import pytest

from leitner_tutor.db import get_connection, init_db
from leitner_tutor.errors import CardNotFoundError
from leitner_tutor.flashcards import (
    add_card, find_card, get_all_cards, get_due_cards, load_buckets, load_history,
    record_flashcard_result, save_buckets,
)
from leitner_tutor.models import AnswerDifficulty, Flashcard

PARIS = Flashcard(front="Capital of France?", back="Paris", tags=("geo",))
TOKYO = Flashcard(front="Capital of Japan?", back="Tokyo", hint="Starts with T")
GOLD = Flashcard(front="Symbol for gold?", back="Au")


def setup_deck(db_path, placements=((PARIS, 0), (TOKYO, 1), (GOLD, 2))):
    init_db(db_path)
    for card, bucket in placements:
        add_card(db_path, card, bucket=bucket)


def test_add_card_round_trips_fields(tmp_db):
    init_db(tmp_db)
    assert add_card(tmp_db, Flashcard(front="F", back="B", hint="H", tags=("a", "b")))
    assert get_all_cards(tmp_db) == [Flashcard(front="F", back="B", hint="H", tags=("a", "b"))]


def test_add_card_duplicate_skipped(tmp_db):
    init_db(tmp_db)
    assert add_card(tmp_db, PARIS)
    assert not add_card(tmp_db, PARIS)
    assert len(get_all_cards(tmp_db)) == 1


def test_add_card_negative_bucket(tmp_db):
    init_db(tmp_db)
    with pytest.raises(ValueError):
        add_card(tmp_db, PARIS, bucket=-1)


def test_load_buckets_empty_deck(tmp_db):
    init_db(tmp_db)
    assert load_buckets(tmp_db) == {}


def test_load_buckets_sparse(tmp_db):
    setup_deck(tmp_db, placements=((PARIS, 0), (TOKYO, 3), (GOLD, 3)))
    assert load_buckets(tmp_db) == {0: {PARIS}, 3: {TOKYO, GOLD}}


def test_save_buckets(tmp_db):
    setup_deck(tmp_db)
    save_buckets(tmp_db, {5: {PARIS}, 0: {TOKYO}})
    assert load_buckets(tmp_db) == {0: {TOKYO}, 2: {GOLD}, 5: {PARIS}}


def test_save_buckets_ignores_unknown_card(tmp_db):
    setup_deck(tmp_db)
    save_buckets(tmp_db, {4: {Flashcard(front="??", back="!!")}})
    assert 4 not in load_buckets(tmp_db)


def test_find_card(tmp_db):
    setup_deck(tmp_db)
    assert find_card(tmp_db, "Capital of Japan?") == TOKYO
    assert find_card(tmp_db, "missing") is None


def test_get_due_cards_by_day(tmp_db):
    setup_deck(tmp_db)
    assert get_due_cards(tmp_db, 0) == [PARIS, TOKYO, GOLD]
    assert get_due_cards(tmp_db, 1) == [PARIS]
    assert get_due_cards(tmp_db, 2) == [PARIS, TOKYO]
    assert get_due_cards(tmp_db, 4) == [PARIS, TOKYO, GOLD]


def test_get_due_cards_excludes_retired(tmp_db):
    setup_deck(tmp_db, placements=((PARIS, 5),))
    assert get_due_cards(tmp_db, 0) == []


def test_record_flashcard_result_moves_card(tmp_db):
    setup_deck(tmp_db)
    assert record_flashcard_result(tmp_db, PARIS, AnswerDifficulty.EASY, day=0) == 1
    assert record_flashcard_result(tmp_db, GOLD, AnswerDifficulty.WRONG, day=0) == 0
    assert record_flashcard_result(tmp_db, TOKYO, AnswerDifficulty.HARD, day=0) == 0
    assert load_buckets(tmp_db) == {0: {GOLD, TOKYO}, 1: {PARIS}}


def test_record_flashcard_result_logs_history(tmp_db):
    setup_deck(tmp_db)
    record_flashcard_result(tmp_db, PARIS, AnswerDifficulty.EASY, day=0)
    record_flashcard_result(tmp_db, PARIS, AnswerDifficulty.HARD, day=1)
    history = load_history(tmp_db)
    assert [(h.card, h.difficulty, h.day) for h in history] == [
        (PARIS, AnswerDifficulty.EASY, 0),
        (PARIS, AnswerDifficulty.HARD, 1),
    ]
    assert [h.day for h in load_history(tmp_db, day=1)] == [1]
    conn = get_connection(tmp_db)
    row = conn.execute("SELECT * FROM practice_history ORDER BY id LIMIT 1").fetchone()
    assert row["reviewed_at"] is not None
    conn.close()


def test_record_flashcard_result_unknown_card(tmp_db):
    setup_deck(tmp_db)
    with pytest.raises(CardNotFoundError):
        record_flashcard_result(tmp_db, Flashcard(front="nope", back="x"), AnswerDifficulty.EASY, day=0)
    assert load_history(tmp_db) == []


def test_record_flashcard_result_easy_caps_at_retired(tmp_db):
    setup_deck(tmp_db, placements=((PARIS, 5),))
    assert record_flashcard_result(tmp_db, PARIS, AnswerDifficulty.EASY, day=3) == 5


@pytest.mark.parametrize("front, back", [("", "A"), ("   ", "A"), ("Q", " \t")])
def test_add_card_requires_front_and_back(tmp_db, front, back):
    init_db(tmp_db)
    with pytest.raises(ValueError):
        add_card(tmp_db, Flashcard(front=front, back=back))
    assert get_all_cards(tmp_db) == []
