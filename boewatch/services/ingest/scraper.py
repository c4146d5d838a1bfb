"""Scraping of one auction: detail, management, asset and lot pages.

The pages of an auction depend on each other. The detail page yields the
management and asset links, and for lot auctions the asset page yields the
per-lot links. They are therefore fetched in sequence within one auction;
different auctions are scraped concurrently by the pipeline.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from boewatch.domain.models import (
    Asset,
    Auction,
    AuctionState,
    ConceptMap,
    InvalidLabelError,
    Management,
    Property,
    Province,
    build_asset,
)
from boewatch.infrastructure.geocoding import DEFAULT_COUNTRY
from boewatch.infrastructure.observability import get_logger, log_exception
from boewatch.infrastructure.web.parsers import (
    extract_lot_id,
    parse_asset_page,
    parse_lot_links,
    parse_lot_page,
    parse_main_auction_links,
    parse_main_auction_page,
    parse_management_page,
)

logger = get_logger(__name__)


class PageSource(Protocol):
    async def fetch_text_async(self, url: str) -> str: ...


class CoordinateResolver(Protocol):
    def resolve(
        self,
        address: str,
        city: str,
        province: str,
        country: str = ...,
        postal_code: str = ...,
    ): ...


@dataclass
class ScrapedAuction:
    auction: Auction
    assets: List[Asset] = field(default_factory=list)


async def scrape_auction(
    fetcher: PageSource, link: str, state: AuctionState = AuctionState.UNKNOWN
) -> ScrapedAuction:
    """Fetch and parse every page of the auction behind ``link``.

    Auctions whose lot kind is not applicable have a single asset block;
    lot auctions get one asset per lot, each lot's bid terms layered over
    the auction's.

    An asset whose category or province label is not recognised is logged
    and left out; the auction keeps its other assets.

    Raises:
        FetchError: a page could not be downloaded.
        ParseError: a page lacks an expected block, row or link.
    """
    page = await fetcher.fetch_text_async(link)
    management_url, assets_url = parse_main_auction_links(page)

    management_page = await fetcher.fetch_text_async(management_url)
    management = Management.from_concepts(parse_management_page(management_page))
    auction = Auction.from_concepts(parse_main_auction_page(page), management, state)

    assets_page = await fetcher.fetch_text_async(assets_url)
    if not auction.lot_kind.has_lots:
        asset = _build_or_skip(auction, parse_asset_page(assets_page))
        assets = [asset] if asset is not None else []
        return ScrapedAuction(auction=auction, assets=assets)

    assets = []
    for lot_link in parse_lot_links(assets_page):
        lot_id = extract_lot_id(lot_link)
        lot_page = await fetcher.fetch_text_async(lot_link)
        asset = _build_or_skip(auction, parse_lot_page(lot_page, lot_id), lot_id)
        if asset is not None:
            assets.append(asset)
    logger.debug("Auction %s has %d lots", auction.id, len(assets))
    return ScrapedAuction(auction=auction, assets=assets)


def _build_or_skip(
    auction: Auction, concepts: ConceptMap, lot_id: Optional[str] = None
) -> Optional[Asset]:
    try:
        return build_asset(auction.id, concepts, auction.bidinfo)
    except InvalidLabelError as exc:
        log_exception(logger, "Skipping asset", exc, auction_id=auction.id, lot=lot_id)
        return None


async def geocode_assets(
    assets: List[Asset],
    resolver: Optional[CoordinateResolver],
    country: str = DEFAULT_COUNTRY,
) -> List[Asset]:
    """Return ``assets`` with coordinates set on every property that resolves.

    The resolver is blocking and rate limited, so it runs in a worker thread;
    a property it cannot place keeps ``coordinates=None``.
    """
    if resolver is None:
        return assets
    enriched: List[Asset] = []
    for asset in assets:
        if isinstance(asset, Property) and asset.coordinates is None:
            coordinates = await asyncio.to_thread(
                resolver.resolve,
                asset.address,
                asset.city,
                "" if asset.province is Province.UNKNOWN else asset.province.display,
                country,
                asset.postal_code,
            )
            asset = asset.with_coordinates(coordinates)
        enriched.append(asset)
    return enriched


__all__ = [
    "CoordinateResolver",
    "PageSource",
    "ScrapedAuction",
    "geocode_assets",
    "scrape_auction",
]
