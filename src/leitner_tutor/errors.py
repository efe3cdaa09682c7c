"""Exceptions raised by the deck, study and import layers."""


class LeitnerError(Exception):
    """Base class for application errors."""


class CardNotFoundError(LeitnerError):
    def __init__(self, front: str):
        super().__init__(f"No flashcard with front {front!r}")
        self.front = front


class ImportFormatError(LeitnerError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
