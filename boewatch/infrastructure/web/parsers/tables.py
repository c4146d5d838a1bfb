"""Parsers turning the label/value tables of auction pages into concept maps.

Every BOE detail page renders its data as ``<tr><th>label</th><td>value</td>``
rows inside a block with a fixed id. The parsers here locate that block,
convert each label to a :class:`~boewatch.domain.models.BoeConcept` and keep
the trimmed cell text as value.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from boewatch.domain.models import BoeConcept, ConceptMap, InvalidLabelError
from boewatch.infrastructure.observability.logging import get_logger

from .utils import ParseError, cell_text, make_soup, record_parsing_error, select_required

logger = get_logger(__name__)

AUCTION_BLOCK = "div#idBloqueDatos1"
MANAGEMENT_BLOCK = "div#idBloqueDatos2"
ASSET_BLOCK = "div[id^=idBloqueLote]"


def lot_block_selector(lot_id: str) -> str:
    return f"div#idBloqueLote{lot_id}"


def _rows_to_concepts(container: Tag) -> ConceptMap:
    result: ConceptMap = {}
    for row in container.select("tr"):
        label = row.find("th")
        value = row.find("td")
        if label is None or value is None:
            raise ParseError("Table row without th/td cell")
        try:
            concept = BoeConcept.from_label(cell_text(label))
        except InvalidLabelError as exc:
            raise ParseError(str(exc)) from exc
        result[concept] = cell_text(value)
    return result


def extract_concept_map(page: str | BeautifulSoup, selector: str) -> ConceptMap:
    """Parse the first block matching ``selector`` into a concept map.

    Raises:
        ParseError: the block is missing, a row lacks a cell or a label is
            not a known concept.
    """
    soup = make_soup(page)
    container = select_required(soup, selector)
    try:
        return _rows_to_concepts(container)
    except ParseError as exc:
        record_parsing_error(logger, selector, str(container), exc)
        raise


def _with_header(page: str | BeautifulSoup, selector: str) -> ConceptMap:
    soup = make_soup(page)
    result = extract_concept_map(soup, selector)
    container = select_required(soup, selector)
    header = container.find("h4")
    if header is None:
        raise ParseError(f"No h4 header found in {selector!r}")
    result[BoeConcept.HEADER] = cell_text(header).upper()
    return result


def parse_main_auction_page(page: str | BeautifulSoup) -> ConceptMap:
    """Concepts of the general auction data block."""
    return extract_concept_map(page, AUCTION_BLOCK)


def parse_management_page(page: str | BeautifulSoup) -> ConceptMap:
    """Concepts of the managing authority block."""
    return extract_concept_map(page, MANAGEMENT_BLOCK)


def parse_asset_page(page: str | BeautifulSoup) -> ConceptMap:
    """Concepts of the single asset block, including its uppercased header."""
    return _with_header(page, ASSET_BLOCK)


def parse_lot_page(page: str | BeautifulSoup, lot_id: str) -> ConceptMap:
    """Concepts of the ``lot_id`` block of a lot page, lot bid terms included."""
    logger.debug("Parsing lot %s", lot_id)
    return _with_header(page, lot_block_selector(lot_id))


__all__ = [
    "ASSET_BLOCK",
    "AUCTION_BLOCK",
    "MANAGEMENT_BLOCK",
    "extract_concept_map",
    "lot_block_selector",
    "parse_asset_page",
    "parse_lot_page",
    "parse_main_auction_page",
    "parse_management_page",
]
