"""Logging for boewatch.

Auction tasks run concurrently during an ingestion pass, so the fields that
identify the work in progress (auction id, listing page, property id) live in
a :class:`~contextvars.ContextVar` and are appended to every record emitted
while they are set.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Mapping

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty at INFO during a full ingestion run.
THIRD_PARTY_LOGGERS = ("urllib3", "aiohttp", "asyncio", "charset_normalizer")

_fields: ContextVar[Mapping[str, Any]] = ContextVar("boewatch_log_fields", default={})


class ContextualFormatter(logging.Formatter):
    """Append ``[key=value ...]`` for the fields active when formatting."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = _fields.get()
        if not fields:
            return message
        suffix = " ".join(
            f"{key}={value}" for key, value in fields.items() if value is not None
        )
        return f"{message} [{suffix}]" if suffix else message


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Tag every record logged inside the block with ``fields``.

    Nested blocks add to the outer fields. asyncio copies the context into
    each task, so two auctions scraped at once never mix their tags::

        with log_context(auction_id="SUB-JA-2020-149474"):
            logger.info("Fetching management page")
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)


def configure_logging(level: int = logging.INFO) -> None:
    """Send boewatch logs to stderr at ``level``; third-party loggers at WARNING.

    Calling it again only changes the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if not any(isinstance(h.formatter, ContextualFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ContextualFormatter(LOG_FORMAT))
        root.addHandler(handler)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **fields: Any,
) -> None:
    """Log ``exc`` at WARNING with its traceback, tagged with ``fields``.

    Used where a failure is counted and the pass carries on; the record keeps
    the traceback so the cause can still be found afterwards.
    """
    with log_context(**fields):
        logger.warning("%s: %s", message, exc, exc_info=exc)
