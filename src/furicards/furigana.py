from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

__all__ = [
    "PARTS_SEPARATOR",
    "VARIANTS_SEPARATOR",
    "Kanji",
    "Kana",
    "FuriChar",
    "FuriString",
    "decode",
    "encode",
]

# Joins consecutive units: 食｜た　べる
PARTS_SEPARATOR = "　"
# Splits a kanji base from its reading inside one unit.
VARIANTS_SEPARATOR = "｜"


@dataclass(frozen=True, slots=True)
class Kanji:
    """Surface glyph(s) whose pronunciation has to be spelled out."""

    base: str
    reading: str

    def kana(self) -> str:
        return self.reading

    def kanji_or_kana(self) -> str:
        return self.base


@dataclass(frozen=True, slots=True)
class Kana:
    """Phonetic text that is read as written."""

    reading: str

    def kana(self) -> str:
        return self.reading

    def kanji_or_kana(self) -> str:
        return self.reading


FuriChar = Union[Kanji, Kana]


@dataclass(frozen=True, slots=True)
class FuriString:
    """
    A word or phrase as an ordered run of kanji-with-reading and bare kana units.

    The text form joins units with ``PARTS_SEPARATOR`` and writes a kanji unit
    as ``base｜reading``, so ``食｜た　べる`` reads たべる and renders 食べる.
    """

    chars: tuple[FuriChar, ...]

    def __init__(self, chars: Iterable[FuriChar] = ()) -> None:
        object.__setattr__(self, "chars", tuple(chars))

    @classmethod
    def decode(cls, text: str) -> "FuriString":
        return decode(text)

    def encode(self) -> str:
        return encode(self)

    def kana(self) -> str:
        """Full pronunciation: every unit's reading, in order."""
        return "".join(char.kana() for char in self.chars)

    def kanji_or_kana(self) -> str:
        """Natural surface form: kanji bases where present, kana elsewhere."""
        return "".join(char.kanji_or_kana() for char in self.chars)

    def __str__(self) -> str:
        return encode(self)

    def __len__(self) -> int:
        return len(self.chars)

    def __iter__(self):
        return iter(self.chars)


def _decode_part(part: str) -> FuriChar:
    variants = part.split(VARIANTS_SEPARATOR)
    if len(variants) > 1:
        # Pieces after the reading are dropped, matching the dataset's writer.
        return Kanji(base=variants[0], reading=variants[1])
    return Kana(reading=variants[0])


def decode(text: str) -> FuriString:
    return FuriString(_decode_part(part) for part in text.split(PARTS_SEPARATOR))


def _encode_char(char: FuriChar) -> str:
    match char:
        case Kanji(base=base, reading=reading):
            return f"{base}{VARIANTS_SEPARATOR}{reading}"
        case Kana(reading=reading):
            return reading
    raise TypeError(f"Not a furigana unit: {char!r}")


def encode(furi: FuriString) -> str:
    return PARTS_SEPARATOR.join(_encode_char(char) for char in furi.chars)
