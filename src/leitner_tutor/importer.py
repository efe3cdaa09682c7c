"""Import flashcards from various file formats."""
import csv
import io
import json
import logging
from pathlib import Path

import yaml

from leitner_tutor.errors import ImportFormatError
from leitner_tutor.flashcards import add_card
from leitner_tutor.models import Flashcard

logger = logging.getLogger(__name__)


def _card_from_dict(path: str, index: int, data) -> Flashcard:
    if not isinstance(data, dict):
        raise ImportFormatError(path, f"entry {index} is not a mapping")
    front = str(data.get("front") or "").strip()
    back = str(data.get("back") or "").strip()
    if not front or not back:
        raise ImportFormatError(path, f"entry {index} needs both front and back")
    tags = data.get("tags") or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(";") if t.strip()]
    return Flashcard(front=front, back=back, hint=str(data.get("hint") or ""), tags=tuple(tags))


def _cards_from_data(path: str, data) -> list[Flashcard]:
    if isinstance(data, dict):
        data = data.get("flashcards")
    if not isinstance(data, list):
        raise ImportFormatError(path, "expected a list of cards or a 'flashcards' key")
    return [_card_from_dict(path, i, entry) for i, entry in enumerate(data, 1)]


def _read_tab_separated(path: str, text: str) -> list[Flashcard]:
    cards = []
    for lineno, line in enumerate(text.splitlines(), 1):
        if not line.strip() or line.startswith("#"):
            continue
        parts = line.split("\t")
        if len(parts) < 2:
            raise ImportFormatError(path, f"line {lineno} is not 'front<TAB>back'")
        cards.append(_card_from_dict(path, lineno, {
            "front": parts[0], "back": parts[1],
            "hint": parts[2] if len(parts) > 2 else "",
        }))
    return cards


def read_cards_file(file_path: str) -> list[Flashcard]:
    path = Path(file_path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportFormatError(file_path, f"invalid JSON: {e}") from e
        return _cards_from_data(file_path, data)
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ImportFormatError(file_path, f"invalid YAML: {e}") from e
        return _cards_from_data(file_path, data)
    elif suffix == ".csv":
        reader = csv.DictReader(io.StringIO(text, newline=""))
        return [_card_from_dict(file_path, i, row) for i, row in enumerate(reader, 1)]
    else:
        return _read_tab_separated(file_path, text)


def import_file(db_path: str, file_path: str, source: str = "imported") -> dict:
    """Add every card in the file to bucket 0, skipping ones already in the deck."""
    cards = read_cards_file(file_path)
    imported = sum(1 for card in cards if add_card(db_path, card, source=source))
    logger.info("Imported %d of %d cards from %s", imported, len(cards), file_path)
    return {
        "filename": Path(file_path).name,
        "imported": imported,
        "skipped": len(cards) - imported,
    }
