from __future__ import annotations

import logging
import sys
from typing import IO

from pixcharge.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(stream: IO[str] | None = None) -> None:
    """Send every log record to ``stream`` (stderr by default).

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output. The stdio transport must never log to stdout.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(JSON_FORMAT, rename_fields={"asctime": "timestamp", "levelname": "level"})
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in ("uvicorn.access", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
