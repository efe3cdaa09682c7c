"""Data classes for the flashcard domain model."""
from dataclasses import dataclass, field
from enum import Enum

RETIRED_BUCKET = 5


@dataclass(frozen=True)
class Flashcard:
    front: str
    back: str
    hint: str = ""
    tags: tuple = field(default_factory=tuple)

    def __post_init__(self):
        # Lists aren't hashable; keep tags usable as part of a set key.
        object.__setattr__(self, "tags", tuple(self.tags))


class AnswerDifficulty(Enum):
    WRONG = 0
    HARD = 1
    EASY = 2

    @classmethod
    def parse(cls, text: str) -> "AnswerDifficulty":
        """Accept a name ("easy", "Hard") or a numeric value ("0"-"2")."""
        value = str(text).strip()
        if value.isdigit():
            return cls(int(value))
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {text!r}") from None


@dataclass(frozen=True)
class BucketRange:
    min_bucket: int
    max_bucket: int


@dataclass(frozen=True)
class HistoryRecord:
    card: Flashcard
    difficulty: AnswerDifficulty
    day: int


BucketMap = dict[int, set[Flashcard]]
BucketSets = list[set[Flashcard]]
