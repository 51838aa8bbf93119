from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .book_io import Book

__all__ = [
    "Card",
    "Font",
    "derive_cards",
    "derive_font",
    "serialize_cards",
]


@dataclass(frozen=True)
class Card:
    """
    One quiz item per usage.

    ``prompt`` is the surface text (kanji where the word has them), ``answer``
    the full kana reading; the remaining fields identify the dictionary entry
    the usage belongs to.
    """

    prompt: str
    answer: str
    meaning: str
    chapter_num: int
    character_num: int
    character_meaning: str
    character: str

    def to_payload(self) -> dict[str, object]:
        return {
            "prompt": self.prompt,
            "answer": self.answer,
            "meaning": self.meaning,
            "chapter-num": self.chapter_num,
            "character-num": self.character_num,
            "character-meaning": self.character_meaning,
            "character": self.character,
        }


@dataclass(frozen=True)
class Font:
    glyphs: str

    def to_payload(self) -> dict[str, object]:
        return {"glyphs": self.glyphs}


def derive_cards(book: Book) -> list[Card]:
    cards: list[Card] = []
    for chapter in book.chapters:
        for character in chapter.characters:
            for usage in character.usages:
                cards.append(
                    Card(
                        prompt=usage.furigana.kanji_or_kana(),
                        answer=usage.furigana.kana(),
                        meaning=usage.meaning,
                        chapter_num=chapter.chapter,
                        character_num=character.number,
                        character_meaning=character.meaning,
                        character=character.character,
                    )
                )
    return cards


def derive_font(cards: Iterable[Card]) -> Font:
    """Collect every glyph a card face can show, in order of first appearance."""
    seen: dict[str, None] = {}
    for card in cards:
        for text in (card.prompt, card.answer):
            for ch in text:
                seen.setdefault(ch, None)
    return Font(glyphs="".join(seen))


def serialize_cards(cards: Iterable[Card]) -> list[dict[str, object]]:
    return [card.to_payload() for card in cards]
