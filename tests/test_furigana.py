from __future__ import annotations

import pytest

from furicards.furigana import (
    PARTS_SEPARATOR,
    VARIANTS_SEPARATOR,
    FuriString,
    Kana,
    Kanji,
    decode,
    encode,
)


def test_kana_only_string_reads_as_written() -> None:
    furi = decode("あ　り　が　と　う")
    assert len(furi) == 5
    assert all(isinstance(char, Kana) for char in furi)
    assert furi.kana() == "ありがとう"
    assert furi.kanji_or_kana() == "ありがとう"


def test_single_kanji_unit() -> None:
    furi = decode("猫｜ねこ")
    assert furi.chars == (Kanji(base="猫", reading="ねこ"),)
    assert furi.kana() == "ねこ"
    assert furi.kanji_or_kana() == "猫"


def test_mixed_kanji_and_okurigana() -> None:
    furi = decode("食｜た　べる")
    assert furi.chars == (Kanji(base="食", reading="た"), Kana(reading="べる"))
    assert furi.kana() == "たべる"
    assert furi.kanji_or_kana() == "食べる"


def test_multi_glyph_base_keeps_run_together() -> None:
    furi = decode("今日｜きょう　は")
    assert furi.chars[0] == Kanji(base="今日", reading="きょう")
    assert furi.kanji_or_kana() == "今日は"
    assert furi.kana() == "きょうは"


def test_extra_variant_pieces_are_dropped() -> None:
    furi = decode("生｜せい｜しょう")
    assert furi.chars == (Kanji(base="生", reading="せい"),)
    assert encode(furi) == "生｜せい"


def test_empty_text_decodes_to_single_empty_kana() -> None:
    furi = decode("")
    assert furi.chars == (Kana(reading=""),)
    assert encode(furi) == ""


def test_ascii_space_and_bar_are_not_separators() -> None:
    furi = decode("a b|c")
    assert furi.chars == (Kana(reading="a b|c"),)


@pytest.mark.parametrize(
    "text",
    [
        "猫｜ねこ",
        "食｜た　べる",
        "日｜に　本｜ほん　人｜じん",
        "あ　り　が　と　う",
        "水｜すい　曜｜よう　日｜び",
    ],
)
def test_encoded_text_survives_decode(text: str) -> None:
    assert encode(decode(text)) == text
    assert str(FuriString.decode(text)) == text


def test_structure_survives_encode() -> None:
    furi = FuriString(
        [
            Kanji(base="飲", reading="の"),
            Kana(reading="み"),
            Kanji(base="物", reading="もの"),
        ]
    )
    text = furi.encode()
    assert text == f"飲{VARIANTS_SEPARATOR}の{PARTS_SEPARATOR}み{PARTS_SEPARATOR}物{VARIANTS_SEPARATOR}もの"
    assert decode(text) == furi


def test_furistring_is_immutable_and_hashable() -> None:
    furi = FuriString([Kana(reading="ね")])
    assert isinstance(furi.chars, tuple)
    assert hash(furi) == hash(decode("ね"))
    with pytest.raises(AttributeError):
        furi.chars = ()  # type: ignore[misc]
