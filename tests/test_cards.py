from __future__ import annotations

from furicards.book_io import Book, load_book
from furicards.cards import Card, derive_cards, derive_font, serialize_cards


def _book() -> Book:
    return Book.from_payload(
        {
            "chapters": [
                {
                    "chapter": 1,
                    "characters": [
                        {
                            "number": 1,
                            "character": "猫",
                            "meaning": "cat",
                            "usages": [
                                {"furigana": "猫｜ねこ", "meaning": "cat"},
                                {"furigana": "子｜こ　猫｜ねこ", "meaning": "kitten"},
                            ],
                        },
                        {
                            "number": 2,
                            "character": "空",
                            "meaning": "sky",
                            "usages": [],
                        },
                    ],
                },
                {
                    "chapter": 2,
                    "characters": [
                        {
                            "number": 1,
                            "character": "食",
                            "meaning": "eat",
                            "usages": [
                                {"furigana": "食｜た　べる", "meaning": "to eat"},
                            ],
                        }
                    ],
                },
            ]
        }
    )


def test_cards_follow_document_order() -> None:
    cards = derive_cards(_book())
    assert [card.prompt for card in cards] == ["猫", "子猫", "食べる"]
    assert [card.answer for card in cards] == ["ねこ", "こねこ", "たべる"]
    assert cards[2] == Card(
        prompt="食べる",
        answer="たべる",
        meaning="to eat",
        chapter_num=2,
        character_num=1,
        character_meaning="eat",
        character="食",
    )


def test_card_count_matches_usage_count() -> None:
    book = load_book()
    assert len(derive_cards(book)) == sum(
        len(character.usages)
        for chapter in book.chapters
        for character in chapter.characters
    )


def test_cards_are_deterministic() -> None:
    book = load_book()
    assert derive_cards(book) == derive_cards(book)


def test_card_payload_uses_hyphenated_names() -> None:
    payload = serialize_cards(derive_cards(_book()))[1]
    assert payload == {
        "prompt": "子猫",
        "answer": "こねこ",
        "meaning": "kitten",
        "chapter-num": 1,
        "character-num": 1,
        "character-meaning": "cat",
        "character": "猫",
    }


def test_font_lists_each_glyph_once() -> None:
    cards = derive_cards(_book())
    font = derive_font(cards)
    expected = set("".join(card.prompt + card.answer for card in cards))
    assert set(font.glyphs) == expected
    assert len(font.glyphs) == len(expected)
    assert font.glyphs == "猫ねこ子食べるた"
    assert font.to_payload() == {"glyphs": font.glyphs}


def test_font_covers_packaged_book() -> None:
    cards = derive_cards(load_book())
    glyphs = derive_font(cards).glyphs
    assert len(set(glyphs)) == len(glyphs)
    for card in cards:
        assert set(card.prompt) <= set(glyphs)
        assert set(card.answer) <= set(glyphs)


def test_font_of_no_cards_is_empty() -> None:
    assert derive_font([]).glyphs == ""
