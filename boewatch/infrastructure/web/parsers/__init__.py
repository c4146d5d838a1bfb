"""Parsers for BOE auction portal HTML content.

This package contains functions for parsing listing pages, auction
navigation menus and the label/value tables of auction, management,
asset and lot pages.
"""

from .links import (
    parse_extra_pages,
    parse_lot_links,
    parse_main_auction_links,
    parse_result_page,
    total_results,
)
from .tables import (
    extract_concept_map,
    parse_asset_page,
    parse_lot_page,
    parse_main_auction_page,
    parse_management_page,
)
from .utils import (
    ParseError,
    extract_auction_id,
    extract_lot_id,
    extract_text,
    record_parsing_error,
    structure_checksum,
)

__all__ = [
    "ParseError",
    "extract_auction_id",
    "extract_concept_map",
    "extract_lot_id",
    "extract_text",
    "parse_asset_page",
    "parse_extra_pages",
    "parse_lot_links",
    "parse_lot_page",
    "parse_main_auction_links",
    "parse_main_auction_page",
    "parse_management_page",
    "parse_result_page",
    "record_parsing_error",
    "structure_checksum",
    "total_results",
]
