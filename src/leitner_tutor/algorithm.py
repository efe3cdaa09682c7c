"""Modified-Leitner bucket scheduling.

Buckets 0-4 are reviewed every 2**bucket days; bucket 5 holds retired cards.
Every function here is pure: inputs are never mutated and returned
collections share no sets with the arguments.
"""
from collections.abc import Mapping, Sequence

from leitner_tutor.models import (
    RETIRED_BUCKET, AnswerDifficulty, BucketMap, BucketRange, BucketSets,
    Flashcard, HistoryRecord,
)

MIN_HINT_LENGTH = 3
NO_HINT = "No hint available"


def to_bucket_sets(buckets: BucketMap) -> BucketSets:
    """Convert a sparse bucket map into a dense list of sets.

    Index i holds a copy of the cards in bucket i; gaps become empty sets.
    An empty map gives an empty list.
    """
    if not buckets:
        return []
    if min(buckets) < 0:
        raise ValueError(f"Bucket numbers must be non-negative, got {min(buckets)}")
    result = [set() for _ in range(max(buckets) + 1)]
    for bucket, cards in buckets.items():
        result[bucket] = set(cards)
    return result


def get_bucket_range(bucket_sets: BucketSets) -> BucketRange | None:
    """Smallest and largest non-empty bucket, or None if there are no cards."""
    occupied = [i for i, cards in enumerate(bucket_sets) if cards]
    if not occupied:
        return None
    return BucketRange(min_bucket=occupied[0], max_bucket=occupied[-1])


def practice(bucket_sets: BucketSets, day: int) -> set[Flashcard]:
    """Cards due on `day` (day 0 is the first day of study).

    Bucket b is due when day is a multiple of 2**b. Retired cards are
    never selected.
    """
    if day < 0:
        raise ValueError(f"Day must be non-negative, got {day}")
    due = set()
    for bucket, cards in enumerate(bucket_sets[:RETIRED_BUCKET]):
        if day % (2 ** bucket) == 0:
            due |= cards
    return due


def _next_bucket(current: int, difficulty: AnswerDifficulty) -> int:
    if difficulty is AnswerDifficulty.EASY:
        return min(current + 1, RETIRED_BUCKET)
    if difficulty is AnswerDifficulty.HARD:
        return max(current - 1, 0)
    return 0


def find_bucket(buckets: BucketMap, card: Flashcard) -> int | None:
    """Bucket currently holding `card`, by linear scan."""
    for bucket, cards in buckets.items():
        if card in cards:
            return bucket
    return None


def update(buckets: BucketMap, card: Flashcard, difficulty: AnswerDifficulty) -> BucketMap:
    """Move `card` to the bucket its trial outcome earns.

    Easy moves up one (capped at the retired bucket), Hard moves down one
    (floored at 0), Wrong goes back to 0. Returns a new map; an unknown card
    leaves the copy unchanged.
    """
    result = {bucket: set(cards) for bucket, cards in buckets.items()}
    current = find_bucket(result, card)
    if current is None:
        return result
    target = _next_bucket(current, difficulty)
    result[current].discard(card)
    result.setdefault(target, set()).add(card)
    return result


def compute_progress(
    buckets: Mapping[int, set] | Sequence[set],
    history: Sequence[HistoryRecord] = (),
) -> int:
    """Learning progress as a percentage from 0 to 100.

    The size-weighted mean bucket number scaled so bucket 0 is 0% and the
    retired bucket is 100%. Accepts sparse or dense buckets. `history` does
    not affect the result yet.
    """
    if isinstance(buckets, Mapping):
        items = buckets.items()
    else:
        items = enumerate(buckets)
    step = 100 // RETIRED_BUCKET
    total = 0
    weighted = 0
    for bucket, cards in items:
        count = len(cards)
        total += count
        # Out-of-range buckets count as retired.
        weighted += count * min(bucket, RETIRED_BUCKET) * step
    if total == 0:
        return 0
    # Round half up.
    return (2 * weighted + total) // (2 * total)


def get_hint(card: Flashcard) -> str:
    """Leading words of the card's front, kept short enough not to give it away.

    Whole words are added while the hint stays within twice MIN_HINT_LENGTH.
    If that leaves fewer than MIN_HINT_LENGTH characters, the first
    MIN_HINT_LENGTH characters of the front are used instead.
    """
    if not card.front.strip():
        return NO_HINT
    ceiling = MIN_HINT_LENGTH * 2
    hint = ""
    for word in card.front.split():
        candidate = f"{hint} {word}" if hint else word
        if len(candidate) > ceiling:
            break
        hint = candidate
    if len(hint) >= MIN_HINT_LENGTH:
        return hint
    return card.front[:MIN_HINT_LENGTH]
