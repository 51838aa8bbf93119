from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .book_io import Book, BookSchemaError, load_book
from .cards import derive_cards, derive_font, serialize_cards
from .furigana import Kanji, decode
from .logging_utils import APP_LOGGER, build_uvicorn_log_config
from .version import __version__
from .web import WebConfig, create_app

SUBCOMMANDS = ("serve", "cards", "font", "parse", "check")


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"furicards {__version__}",
    )


def _add_book_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--book",
        help="Path to a book JSON file (default: $FURICARDS_BOOK, then the bundled book).",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furicards",
        description="Kanji flashcards and glyph inventories from a furigana dictionary.",
        epilog="Subcommands: " + ", ".join(SUBCOMMANDS),
    )
    _add_version_flag(ap)
    return ap


def build_serve_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furicards serve",
        description="Serve /cards and /font over HTTP.",
    )
    _add_version_flag(ap)
    _add_book_flag(ap)
    ap.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host interface for the web server (default: 0.0.0.0).",
    )
    ap.add_argument(
        "--port",
        type=int,
        default=8787,
        help="Port for the web server (default: 8787).",
    )
    ap.add_argument(
        "--allow-origin",
        default="*",
        help="Access-Control-Allow-Origin sent with /cards (default: *).",
    )
    ap.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return ap


def build_cards_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furicards cards",
        description="Print every card derived from the book.",
    )
    _add_version_flag(ap)
    _add_book_flag(ap)
    ap.add_argument(
        "--table",
        action="store_true",
        help="Render a table instead of JSON.",
    )
    return ap


def build_font_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furicards font",
        description="Print each distinct glyph used by the cards.",
    )
    _add_version_flag(ap)
    _add_book_flag(ap)
    return ap


def build_parse_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furicards parse",
        description="Decode a furigana string such as '食｜た　べる'.",
    )
    _add_version_flag(ap)
    ap.add_argument("text", help="Furigana text to decode.")
    return ap


def build_check_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furicards check",
        description="Load the book and summarize what it produces.",
    )
    _add_version_flag(ap)
    _add_book_flag(ap)
    return ap


def _load(args: argparse.Namespace) -> Book:
    try:
        return load_book(args.book)
    except BookSchemaError as exc:
        raise SystemExit(f"Invalid book: {exc}") from exc


def _run_serve(args: argparse.Namespace) -> int:
    if args.debug:
        # Loading happens before uvicorn installs its config.
        logging.basicConfig(level=logging.INFO)
        logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG)
    book_path = Path(args.book).expanduser().resolve() if args.book else None
    config = WebConfig(book_path=book_path, allow_origin=args.allow_origin)
    try:
        app = create_app(config)
    except BookSchemaError as exc:
        raise SystemExit(f"Invalid book: {exc}") from exc
    print(f"Serving furicards {__version__} on http://{args.host}:{args.port}/")
    print("Press Ctrl+C to stop.\n")
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_config=build_uvicorn_log_config(debug=args.debug),
    )
    return 0


def _run_cards(args: argparse.Namespace, console: Console) -> int:
    cards = derive_cards(_load(args))
    if not args.table:
        print(json.dumps(serialize_cards(cards), ensure_ascii=False, indent=2))
        return 0
    table = Table(title=f"{len(cards)} cards")
    for column in ("Ch", "#", "Character", "Prompt", "Answer", "Meaning"):
        table.add_column(column)
    for card in cards:
        table.add_row(
            str(card.chapter_num),
            str(card.character_num),
            escape(f"{card.character} ({card.character_meaning})"),
            escape(card.prompt),
            escape(card.answer),
            escape(card.meaning),
        )
    console.print(table)
    return 0


def _run_font(args: argparse.Namespace) -> int:
    font = derive_font(derive_cards(_load(args)))
    print(font.glyphs)
    return 0


def _run_parse(args: argparse.Namespace, console: Console) -> int:
    furi = decode(args.text)
    table = Table(title=escape(args.text))
    table.add_column("Unit")
    table.add_column("Kind")
    table.add_column("Surface")
    table.add_column("Reading")
    for idx, char in enumerate(furi.chars, start=1):
        kind = "kanji" if isinstance(char, Kanji) else "kana"
        table.add_row(str(idx), kind, escape(char.kanji_or_kana()), escape(char.kana()))
    console.print(table)
    console.print(f"Surface: {escape(furi.kanji_or_kana())}")
    console.print(f"Reading: {escape(furi.kana())}")
    return 0


def _run_check(args: argparse.Namespace, console: Console) -> int:
    try:
        book = load_book(args.book)
    except BookSchemaError as exc:
        console.print(f"[red]Invalid book:[/red] {escape(str(exc))}")
        return 1
    cards = derive_cards(book)
    font = derive_font(cards)
    characters = sum(len(chapter.characters) for chapter in book.chapters)
    console.print(f"Chapters: {len(book.chapters)}")
    console.print(f"Characters: {characters}")
    console.print(f"Usages: {book.usage_count()}")
    console.print(f"Cards: {len(cards)}")
    console.print(f"Glyphs: {len(font.glyphs)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    console = Console()

    if argv and argv[0] == "serve":
        return _run_serve(build_serve_parser().parse_args(argv[1:]))
    if argv and argv[0] == "cards":
        return _run_cards(build_cards_parser().parse_args(argv[1:]), console)
    if argv and argv[0] == "font":
        return _run_font(build_font_parser().parse_args(argv[1:]))
    if argv and argv[0] == "parse":
        return _run_parse(build_parse_parser().parse_args(argv[1:]), console)
    if argv and argv[0] == "check":
        return _run_check(build_check_parser().parse_args(argv[1:]), console)

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0
    parser.parse_args(argv)
    parser.error(f"unknown command: {argv[0]}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
