"""Progress dashboard scoring and statistics."""
from leitner_tutor.algorithm import compute_progress, get_bucket_range, to_bucket_sets
from leitner_tutor.flashcards import load_buckets, load_history
from leitner_tutor.models import RETIRED_BUCKET, AnswerDifficulty


def get_progress_label(score: float) -> str:
    if score >= 80:
        return "STRONG"
    elif score >= 50:
        return "STEADY"
    elif score >= 20:
        return "LEARNING"
    return "NEW"


def get_progress_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 50:
        return "yellow"
    elif score >= 20:
        return "dark_orange"
    return "red"


def calc_progress(db_path: str) -> int:
    return compute_progress(load_buckets(db_path), load_history(db_path))


def get_bucket_breakdown(db_path: str) -> list[dict]:
    """One row per bucket 0..RETIRED_BUCKET, plus any stray higher buckets."""
    bucket_sets = to_bucket_sets(load_buckets(db_path))
    rows = []
    for bucket in range(max(len(bucket_sets), RETIRED_BUCKET + 1)):
        cards = bucket_sets[bucket] if bucket < len(bucket_sets) else set()
        retired = bucket >= RETIRED_BUCKET
        rows.append({
            "bucket": bucket,
            "count": len(cards),
            "interval_days": None if retired else 2 ** bucket,
            "retired": retired,
        })
    return rows


def get_study_stats(db_path: str) -> dict:
    buckets = load_buckets(db_path)
    history = load_history(db_path)
    total = sum(len(cards) for cards in buckets.values())
    retired = sum(len(cards) for b, cards in buckets.items() if b >= RETIRED_BUCKET)
    correct = sum(1 for h in history if h.difficulty is not AnswerDifficulty.WRONG)
    accuracy = round(correct / len(history) * 100, 1) if history else 0.0
    return {
        "total_cards": total,
        "retired_cards": retired,
        "reviews": len(history),
        "accuracy": accuracy,
        "bucket_range": get_bucket_range(to_bucket_sets(buckets)),
    }
