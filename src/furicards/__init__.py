from .book_io import Book, BookSchemaError, Chapter, Character, Usage, default_book, load_book
from .cards import Card, Font, derive_cards, derive_font
from .furigana import FuriChar, FuriString, Kana, Kanji, decode, encode

__all__ = [
    "Book",
    "Chapter",
    "Character",
    "Usage",
    "BookSchemaError",
    "load_book",
    "default_book",
    "Card",
    "Font",
    "derive_cards",
    "derive_font",
    "FuriChar",
    "FuriString",
    "Kanji",
    "Kana",
    "decode",
    "encode",
]
