# tests/test_dashboard.py
from leitner_tutor.dashboard import (
    calc_progress, get_bucket_breakdown, get_progress_color, get_progress_label,
    get_study_stats,
)
from leitner_tutor.db import init_db
from leitner_tutor.flashcards import add_card, record_flashcard_result
from leitner_tutor.models import AnswerDifficulty, BucketRange, Flashcard

P = Flashcard(front="p", back="1")
Q = Flashcard(front="q", back="2")
R = Flashcard(front="r", back="3")


def test_progress_zero_with_no_cards(tmp_db):
    init_db(tmp_db)
    assert calc_progress(tmp_db) == 0


def test_progress_with_cards(tmp_db):
    init_db(tmp_db)
    add_card(tmp_db, P, bucket=0)
    add_card(tmp_db, Q, bucket=2)
    add_card(tmp_db, R, bucket=5)
    assert calc_progress(tmp_db) == 47


def test_progress_label_and_color():
    assert get_progress_label(100) == "STRONG"
    assert get_progress_label(60) == "STEADY"
    assert get_progress_label(20) == "LEARNING"
    assert get_progress_label(0) == "NEW"
    assert get_progress_color(85) == "green"
    assert get_progress_color(5) == "red"


def test_bucket_breakdown_always_lists_six_buckets(tmp_db):
    init_db(tmp_db)
    add_card(tmp_db, P, bucket=1)
    rows = get_bucket_breakdown(tmp_db)
    assert [r["bucket"] for r in rows] == [0, 1, 2, 3, 4, 5]
    assert [r["count"] for r in rows] == [0, 1, 0, 0, 0, 0]
    assert [r["interval_days"] for r in rows] == [1, 2, 4, 8, 16, None]
    assert rows[5]["retired"] and not rows[4]["retired"]


def test_study_stats_empty(tmp_db):
    init_db(tmp_db)
    stats = get_study_stats(tmp_db)
    assert stats == {
        "total_cards": 0, "retired_cards": 0, "reviews": 0,
        "accuracy": 0.0, "bucket_range": None,
    }


def test_study_stats_with_reviews(tmp_db):
    init_db(tmp_db)
    add_card(tmp_db, P, bucket=0)
    add_card(tmp_db, Q, bucket=4)
    add_card(tmp_db, R, bucket=1)
    record_flashcard_result(tmp_db, Q, AnswerDifficulty.EASY, day=0)
    record_flashcard_result(tmp_db, P, AnswerDifficulty.WRONG, day=0)
    record_flashcard_result(tmp_db, R, AnswerDifficulty.HARD, day=0)
    record_flashcard_result(tmp_db, R, AnswerDifficulty.EASY, day=1)
    stats = get_study_stats(tmp_db)
    assert stats["total_cards"] == 3
    assert stats["retired_cards"] == 1
    assert stats["reviews"] == 4
    assert stats["accuracy"] == 75.0
    assert stats["bucket_range"] == BucketRange(min_bucket=0, max_bucket=5)
