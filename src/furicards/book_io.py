from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Mapping

from .furigana import FuriString

__all__ = [
    "BOOK_ENV",
    "BOOK_DATA_FILENAME",
    "BookSchemaError",
    "Usage",
    "Character",
    "Chapter",
    "Book",
    "load_book",
    "parse_book",
    "default_book",
]

BOOK_ENV = "FURICARDS_BOOK"
BOOK_DATA_FILENAME = "book.json"

_LOG = logging.getLogger(__name__)
_DEFAULT_BOOK: "Book | None" = None


class BookSchemaError(ValueError):
    """Raised when the kanji book does not match the expected schema."""


def _require(payload: object, where: str) -> Mapping[str, object]:
    if not isinstance(payload, Mapping):
        raise BookSchemaError(f"{where}: expected an object, got {type(payload).__name__}")
    return payload


def _field(payload: Mapping[str, object], key: str, kind: type, where: str):
    if key not in payload:
        raise BookSchemaError(f"{where}.{key}: missing")
    value = payload[key]
    # bool is an int subclass but never a valid ordinal.
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise BookSchemaError(
            f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}"
        )
    if kind is int and value < 0:
        raise BookSchemaError(f"{where}.{key}: expected a non-negative int, got {value}")
    return value


@dataclass(frozen=True)
class Usage:
    furigana: FuriString
    meaning: str

    def to_payload(self) -> dict[str, object]:
        return {"furigana": self.furigana.encode(), "meaning": self.meaning}

    @classmethod
    def from_payload(cls, payload: object, where: str = "usage") -> "Usage":
        data = _require(payload, where)
        return cls(
            furigana=FuriString.decode(_field(data, "furigana", str, where)),
            meaning=_field(data, "meaning", str, where),
        )


@dataclass(frozen=True)
class Character:
    """One dictionary entry; ``number`` is its position inside the chapter."""

    number: int
    character: str
    meaning: str
    usages: tuple[Usage, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, object]:
        return {
            "number": self.number,
            "character": self.character,
            "meaning": self.meaning,
            "usages": [usage.to_payload() for usage in self.usages],
        }

    @classmethod
    def from_payload(cls, payload: object, where: str = "character") -> "Character":
        data = _require(payload, where)
        usages = _field(data, "usages", list, where)
        return cls(
            number=_field(data, "number", int, where),
            character=_field(data, "character", str, where),
            meaning=_field(data, "meaning", str, where),
            usages=tuple(
                Usage.from_payload(entry, f"{where}.usages[{idx}]")
                for idx, entry in enumerate(usages)
            ),
        )


@dataclass(frozen=True)
class Chapter:
    chapter: int
    characters: tuple[Character, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, object]:
        return {
            "chapter": self.chapter,
            "characters": [character.to_payload() for character in self.characters],
        }

    @classmethod
    def from_payload(cls, payload: object, where: str = "chapter") -> "Chapter":
        data = _require(payload, where)
        characters = _field(data, "characters", list, where)
        return cls(
            chapter=_field(data, "chapter", int, where),
            characters=tuple(
                Character.from_payload(entry, f"{where}.characters[{idx}]")
                for idx, entry in enumerate(characters)
            ),
        )


@dataclass(frozen=True)
class Book:
    chapters: tuple[Chapter, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, object]:
        return {"chapters": [chapter.to_payload() for chapter in self.chapters]}

    @classmethod
    def from_payload(cls, payload: object) -> "Book":
        data = _require(payload, "book")
        chapters = _field(data, "chapters", list, "book")
        return cls(
            chapters=tuple(
                Chapter.from_payload(entry, f"chapters[{idx}]")
                for idx, entry in enumerate(chapters)
            )
        )

    def usage_count(self) -> int:
        return sum(
            len(character.usages)
            for chapter in self.chapters
            for character in chapter.characters
        )


def parse_book(text: str) -> Book:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BookSchemaError(f"book is not valid JSON: {exc}") from exc
    return Book.from_payload(payload)


def _read_packaged_book() -> str:
    data_path = resources.files("furicards.data").joinpath(BOOK_DATA_FILENAME)
    return data_path.read_text("utf-8")


def load_book(path: Path | str | None = None) -> Book:
    """
    Load a kanji book.

    ``path`` wins, then the ``FURICARDS_BOOK`` environment variable, then the
    dataset shipped inside the package.
    """
    if path is None:
        env_path = os.environ.get(BOOK_ENV)
        if env_path:
            path = env_path
    if path is None:
        source = "package data"
        try:
            text = _read_packaged_book()
        except (ModuleNotFoundError, OSError, UnicodeDecodeError) as exc:
            raise BookSchemaError(f"packaged {BOOK_DATA_FILENAME} unavailable: {exc}") from exc
    else:
        book_path = Path(path).expanduser()
        source = str(book_path)
        try:
            text = book_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise BookSchemaError(f"cannot read book {book_path}: {exc}") from exc
    book = parse_book(text)
    _LOG.debug(
        "Loaded book from %s: %d chapters, %d usages",
        source,
        len(book.chapters),
        book.usage_count(),
    )
    return book


def default_book() -> Book:
    """Process-wide book, loaded on first use and never mutated."""
    global _DEFAULT_BOOK
    if _DEFAULT_BOOK is None:
        _DEFAULT_BOOK = load_book()
    return _DEFAULT_BOOK
