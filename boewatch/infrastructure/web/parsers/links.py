"""Link discovery on listing, navigation and lot pages."""

from __future__ import annotations

import math

from bs4 import BeautifulSoup

from boewatch.domain.models import AuctionState
from boewatch.infrastructure.observability.logging import get_logger
from boewatch.infrastructure.web.endpoints import RESULTS_PER_PAGE, absolute_url

from .utils import ParseError, extract_text, make_soup, select_required

logger = get_logger(__name__)

AUCTION_STATE_MARKER = "Estado: "


def parse_result_page(page: str | BeautifulSoup) -> list[tuple[str, AuctionState]]:
    """Return ``(detail link, state)`` for every result of a listing page.

    A result without an ``Estado:`` line gets :attr:`AuctionState.UNKNOWN`.

    Raises:
        ParseError: a result has no detail link.
    """
    soup = make_soup(page)
    results: list[tuple[str, AuctionState]] = []
    for item in soup.select("li.resultado-busqueda"):
        anchor = item.select_one("a.resultado-busqueda-link-otro")
        href = anchor.get("href") if anchor is not None else None
        if not href:
            raise ParseError("Listing result without auction link")
        text = item.get_text()
        state = AuctionState.UNKNOWN
        start = text.find(AUCTION_STATE_MARKER)
        if start >= 0:
            words = text[start + len(AUCTION_STATE_MARKER):].split(None, 1)
            state = AuctionState.from_string(words[0] if words else "")
        results.append((absolute_url(href), state))
    return results


def total_results(page: str | BeautifulSoup) -> int:
    """Read ``1572`` from a ``Resultados 1 a 500 de 1.572`` pagination line."""
    soup = make_soup(page)
    words = extract_text(select_required(soup, "div.paginar")).split()
    if not words:
        raise ParseError("Empty pagination block")
    count = words[-1].replace(".", "")
    if not count.isdigit():
        raise ParseError(f"Unable to read results count from {words[-1]!r}")
    return int(count)


def parse_extra_pages(
    page: str | BeautifulSoup, page_size: int = RESULTS_PER_PAGE
) -> list[str]:
    """Return the URLs of the listing pages following the first one.

    The pagination links embed their offset as ``<template>-<offset>-<size>``;
    one URL is produced per remaining page, ``ceil(total / page_size) - 1``
    in all.
    """
    soup = make_soup(page)
    total = total_results(soup)
    pages = math.ceil(total / page_size)
    if pages <= 1:
        return []
    pager = soup.select_one("div.paginar2")
    anchor = pager.find("a", href=True) if pager is not None else None
    if anchor is None:
        logger.warning("%d results but no pagination links found", total)
        return []
    template = anchor["href"].split("-", 1)[0]
    return [
        absolute_url(f"{template}-{number * page_size}-{page_size}")
        for number in range(1, pages)
    ]


def parse_main_auction_links(page: str | BeautifulSoup) -> tuple[str, str]:
    """Return the management and asset page links of an auction detail page.

    The first navigation tab is the general information already at hand; the
    second and third are management and assets.
    """
    soup = make_soup(page)
    nav = select_required(soup, "ul.navlist")
    links = [a.get("href") for a in nav.find_all("a")]
    if len(links) < 3 or not links[1] or not links[2]:
        raise ParseError("Auction navigation without management/asset links")
    return absolute_url(links[1]), absolute_url(links[2])


def parse_lot_links(page: str | BeautifulSoup) -> list[str]:
    """Return the per-lot links of a lot auction's vertical tab list."""
    soup = make_soup(page)
    nav = select_required(soup, "ul.navlistver")
    return [absolute_url(a["href"]) for a in nav.find_all("a", href=True)]


__all__ = [
    "parse_extra_pages",
    "parse_lot_links",
    "parse_main_auction_links",
    "parse_result_page",
    "total_results",
]
