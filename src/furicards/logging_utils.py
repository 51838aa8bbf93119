from __future__ import annotations

from copy import copy, deepcopy
from typing import Any
from urllib.parse import unquote

from uvicorn.config import LOGGING_CONFIG
from uvicorn.logging import AccessFormatter as UvicornAccessFormatter

APP_LOGGER = "furicards"


def decode_path(value: str) -> str:
    try:
        return unquote(value, encoding="utf-8", errors="replace")
    except Exception:
        return value


class Utf8AccessFormatter(UvicornAccessFormatter):
    """Access log formatter that prints /form/名前 instead of its %-escapes."""

    def formatMessage(self, record):  # type: ignore[override]
        try:
            client_addr, method, full_path, http_version, status_code = record.args
        except (TypeError, ValueError):
            return super().formatMessage(record)
        decoded_path = decode_path(full_path) if isinstance(full_path, str) else full_path
        new_record = copy(record)
        new_record.args = (client_addr, method, decoded_path, http_version, status_code)
        return super().formatMessage(new_record)


def build_uvicorn_log_config(*, debug: bool = False) -> dict[str, Any]:
    """
    Return uvicorn's logging config with UTF-8 access paths and a
    ``furicards`` logger sharing uvicorn's default handler.
    """
    config = deepcopy(LOGGING_CONFIG)
    formatter = config.get("formatters", {}).get("access")
    if isinstance(formatter, dict):
        formatter["()"] = "furicards.logging_utils.Utf8AccessFormatter"
    loggers = config.setdefault("loggers", {})
    loggers[APP_LOGGER] = {
        "handlers": ["default"],
        "level": "DEBUG" if debug else "INFO",
        "propagate": False,
    }
    return config
