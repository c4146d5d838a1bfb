"""Reusable parsing helpers for the BOE page parsers.

This module centralizes HTML text extraction, auction/lot id extraction from
portal links, and lightweight structure checksums to detect markup drift at
runtime.
"""

from __future__ import annotations

import hashlib
import logging
import re

from bs4 import BeautifulSoup, Tag

from boewatch.infrastructure.observability.logging import get_logger

LOGGER = get_logger(__name__)

AUCTION_ID_MARKER = "?idSub="
LOT_ID_MARKER = "idLote="


class ParseError(ValueError):
    """Raised when an expected container, row, cell or link is missing."""


def make_soup(html: str | BeautifulSoup) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html, "html.parser")


# HTML helpers


def extract_text(element, default: str = "", separator: str = " ") -> str:
    """Return flattened text from a BeautifulSoup element.

    Args:
        element: A BeautifulSoup Tag or NavigableString.
        default: Value returned when the element is falsy.
        separator: Separator passed to ``get_text``.
    """

    if not element:
        return default
    return element.get_text(separator, strip=True)


def cell_text(element: Tag) -> str:
    """Concatenate every text node below ``element`` and trim the result.

    Inline markup is flattened without inserting separators, so
    ``MURCIA<strong> (Ministerio)</strong>`` reads ``MURCIA (Ministerio)``.
    """

    return element.get_text().strip()


def select_required(soup: BeautifulSoup | Tag, selector: str) -> Tag:
    """Return the first match for ``selector`` or raise :class:`ParseError`."""

    element = soup.select_one(selector)
    if element is None:
        raise ParseError(f"No element found for selector {selector!r}")
    return element


# Link helpers


def _value_after(link: str, marker: str) -> str:
    start = link.find(marker)
    if start < 0:
        raise ParseError(f"{marker!r} not found in link {link!r}")
    value = link[start + len(marker):].split("&", 1)[0]
    if not value:
        raise ParseError(f"Empty value after {marker!r} in link {link!r}")
    return value


def extract_auction_id(link: str) -> str:
    """Return ``SUB-JA-2020-146153`` from ``...?idSub=SUB-JA-2020-146153&idBus=...``."""

    return _value_after(link, AUCTION_ID_MARKER)


def extract_lot_id(link: str) -> str:
    """Return the lot number following ``idLote=`` in a lot tab link."""

    return _value_after(link, LOT_ID_MARKER)


# Diagnostics helpers


def structure_checksum(html_fragment: str) -> str:
    """Return a stable checksum for a markup fragment."""

    normalized = re.sub(r"\s+", " ", html_fragment or "").strip()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def record_parsing_error(
    logger: logging.Logger, section: str, html_fragment: str, error: Exception
) -> None:
    """Log a parsing failure with a checksum and a clipped HTML snippet."""

    checksum = structure_checksum(html_fragment)
    snippet = (html_fragment or "").strip()
    if len(snippet) > 500:
        snippet = snippet[:500] + "…"
    logger.error(
        "parsing-error in %s: %s",
        section,
        error,
        extra={
            "section": section,
            "checksum": checksum,
            "snippet": snippet,
            "error": str(error),
        },
    )


__all__ = [
    "ParseError",
    "cell_text",
    "extract_auction_id",
    "extract_lot_id",
    "extract_text",
    "make_soup",
    "record_parsing_error",
    "select_required",
    "structure_checksum",
]
