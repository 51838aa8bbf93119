from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.datastructures import UploadFile

from .book_io import Book, load_book
from .cards import derive_cards, derive_font, serialize_cards
from .logging_utils import decode_path
from .version import __version__
from .web_assets import FAVICON_SVG

_LOG = logging.getLogger(__name__)

GREETING = "Hello from furicards!"


@dataclass(slots=True)
class WebConfig:
    book_path: Path | None = None
    allow_origin: str = "*"
    title: str = "furicards"


def create_app(config: WebConfig | None = None, *, book: Book | None = None) -> FastAPI:
    """
    Build the card service.

    The book is loaded here so a broken dataset stops the server before it
    accepts requests.
    """
    config = config or WebConfig()
    if book is None:
        book = load_book(config.book_path)

    app = FastAPI(title=config.title, version=__version__)
    app.state.config = config
    app.state.book = book

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        client = request.client.host if request.client else "unknown client"
        _LOG.info("%s %s from %s", request.method, decode_path(request.url.path), client)
        return await call_next(request)

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return GREETING

    @app.get("/favicon.svg")
    def favicon() -> Response:
        return Response(content=FAVICON_SVG, media_type="image/svg+xml")

    @app.get("/cards")
    def api_cards() -> JSONResponse:
        cards = derive_cards(app.state.book)
        return JSONResponse(
            serialize_cards(cards),
            headers={"Access-Control-Allow-Origin": config.allow_origin},
        )

    @app.get("/font")
    def api_font() -> JSONResponse:
        font = derive_font(derive_cards(app.state.book))
        return JSONResponse(font.to_payload())

    @app.get("/version", response_class=PlainTextResponse)
    def api_version() -> str:
        return __version__

    @app.post("/form/{field}")
    async def api_form_field(field: str, request: Request) -> JSONResponse:
        form = await request.form()
        value = form.get(field)
        if value is None:
            raise HTTPException(status_code=400, detail="Bad Request")
        if isinstance(value, UploadFile):
            raise HTTPException(
                status_code=422, detail="`field` param in form shouldn't be a File"
            )
        return JSONResponse({field: value})

    return app
