"""Ingestion passes over the BOE auction portal.

:class:`IngestPipeline` drives the passes that keep the database in step with
the portal:

* ``ingest_all`` discovers every auction on the listing pages and stores the
  ones not seen before, together with their management and assets;
* ``ingest_auction`` does the same for one auction id;
* ``refresh_states`` re-reads the listing and updates the state of stored
  auctions that have not finished yet;
* ``enrich_properties`` geocodes stored properties still lacking coordinates.

A failure while scraping or storing one auction is logged and counted; the
pass always completes and reports its ``ok``/``errors``/``total`` counts.
Every pass is recorded in the ``ingest_runs`` ledger.
"""

from __future__ import annotations

import asyncio
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from boewatch.domain.models import ACTIVE_STATES, AuctionState
from boewatch.infrastructure.db.repositories import (
    AssetRepository,
    AuctionRepository,
    IngestRunRepository,
    ManagementRepository,
)
from boewatch.infrastructure.geocoding import DEFAULT_COUNTRY
from boewatch.infrastructure.http import FetchError
from boewatch.infrastructure.observability import get_logger, log_context, log_exception
from boewatch.infrastructure.web.endpoints import (
    ALL_AUCTIONS_URL,
    ONGOING_AUCTIONS_URL,
    one_auction_url,
)
from boewatch.infrastructure.web.parsers import (
    ParseError,
    extract_auction_id,
    parse_extra_pages,
    parse_result_page,
)

from .scraper import CoordinateResolver, PageSource, ScrapedAuction, geocode_assets, scrape_auction

logger = get_logger(__name__)

DEFAULT_MAX_CONCURRENT = 6

# Every state a stored auction can still leave.
REFRESHABLE_STATES = tuple(state for state in AuctionState if not state.is_terminal)

ListingEntry = Tuple[str, AuctionState]


@dataclass
class IngestResult:
    """Outcome of one pass."""

    kind: str
    ok: int = 0
    errors: int = 0
    total: int = 0
    already_processed: int = 0
    status: str = "success"
    run_id: Optional[int] = None
    error_messages: List[str] = field(default_factory=list)

    def record_error(self, message: str) -> None:
        self.errors += 1
        self.error_messages.append(message)

    def notes(self) -> Optional[str]:
        if not self.error_messages:
            return None
        return "; ".join(self.error_messages[:20])


class IngestPipeline:
    """Run ingestion passes against one database connection.

    ``fetcher`` is anything with an async ``fetch_text_async(url)`` (normally
    an :class:`~boewatch.infrastructure.http.HttpFetcher` opened as an async
    context manager). ``geocoder`` is optional; without it properties are
    stored without coordinates.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        fetcher: PageSource,
        *,
        geocoder: Optional[CoordinateResolver] = None,
        country: str = DEFAULT_COUNTRY,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    ) -> None:
        self.conn = conn
        self.fetcher = fetcher
        self.geocoder = geocoder
        self.country = country
        self.max_concurrent = max(1, max_concurrent)
        self.managements = ManagementRepository(conn)
        self.auctions = AuctionRepository(conn)
        self.assets = AssetRepository(conn)
        self.runs = IngestRunRepository(conn)

    # -- discovery -------------------------------------------------------

    async def discover(self, listing_url: str) -> List[List[ListingEntry]]:
        """Return the ``(link, state)`` entries of every listing page.

        The first page is fetched alone since it tells how many pages follow;
        the remaining pages are fetched concurrently. A follow-up page that
        fails is logged and skipped.

        Raises:
            FetchError: the first listing page could not be downloaded.
            ParseError: the first listing page has a result without link.
        """
        first_page = await self.fetcher.fetch_text_async(listing_url)
        pages = [parse_result_page(first_page)]
        try:
            extra_urls = parse_extra_pages(first_page)
        except ParseError as exc:
            logger.debug("No pagination on %s: %s", listing_url, exc)
            extra_urls = []
        if not extra_urls:
            return pages

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def _fetch_page(url: str) -> List[ListingEntry]:
            async with semaphore:
                with log_context(page=url):
                    try:
                        text = await self.fetcher.fetch_text_async(url)
                        return parse_result_page(text)
                    except (FetchError, ParseError) as exc:
                        log_exception(logger, "Skipping listing page", exc)
                        return []

        pages.extend(await asyncio.gather(*(_fetch_page(url) for url in extra_urls)))
        return pages

    # -- ingestion -------------------------------------------------------

    def _persist(self, scraped: ScrapedAuction) -> None:
        """Store one auction with its management and assets atomically."""
        try:
            self.managements.upsert(scraped.auction.management)
            self.auctions.insert(scraped.auction)
            self.assets.insert_assets(scraped.assets)
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

    async def _ingest_entry(
        self,
        link: str,
        state: AuctionState,
        result: IngestResult,
        semaphore: asyncio.Semaphore,
        seen: Set[str],
    ) -> None:
        try:
            auction_id = extract_auction_id(link)
        except ParseError as exc:
            log_exception(logger, "Listing link without auction id", exc, link=link)
            result.record_error(f"{link}: {exc}")
            return
        if auction_id in seen or self.auctions.exists(auction_id):
            result.already_processed += 1
            return
        seen.add(auction_id)

        async with semaphore:
            with log_context(auction_id=auction_id):
                try:
                    scraped = await scrape_auction(self.fetcher, link, state)
                    scraped.assets = await geocode_assets(
                        scraped.assets, self.geocoder, self.country
                    )
                    self._persist(scraped)
                except (FetchError, ParseError) as exc:
                    log_exception(logger, "Failed to scrape auction", exc)
                    result.record_error(f"{auction_id}: {exc}")
                    return
                except sqlite3.Error as exc:
                    log_exception(logger, "Failed to store auction", exc)
                    result.record_error(f"{auction_id}: {exc}")
                    return
        result.ok += 1
        logger.debug("Stored auction %s", auction_id)

    @contextmanager
    def _tracked_run(self, kind: str, notes: Optional[str] = None) -> Iterator[IngestResult]:
        """Record a pass in ``ingest_runs`` and close its row however it ends.

        An unexpected exception marks the run ``failed`` and is re-raised.
        """
        result = IngestResult(kind=kind)
        result.run_id = self.runs.start(kind, notes=notes)
        try:
            yield result
        except Exception as exc:
            log_exception(logger, "Ingestion pass aborted", exc, kind=kind)
            result.record_error(f"{type(exc).__name__}: {exc}")
            result.status = "failed"
            raise
        finally:
            self.runs.finish(
                result.run_id,
                status=result.status,
                ok=result.ok,
                errors=result.errors,
                total=result.total,
                notes=result.notes(),
            )

    async def ingest_entries(
        self, pages: Iterable[List[ListingEntry]], result: IngestResult
    ) -> IngestResult:
        """Scrape and store every listing entry, page after page."""
        semaphore = asyncio.Semaphore(self.max_concurrent)
        seen: Set[str] = set()
        for entries in pages:
            result.total += len(entries)
            await asyncio.gather(
                *(
                    self._ingest_entry(link, state, result, semaphore, seen)
                    for link, state in entries
                )
            )
            logger.info(
                "Auctions processed: %d/%d, Auctions errors: %d, previously processed: %d",
                result.ok,
                result.total,
                result.errors,
                result.already_processed,
            )
        return result

    async def ingest_all(self, listing_url: str = ONGOING_AUCTIONS_URL) -> IngestResult:
        """Store every auction on the listing that is not stored yet."""
        with self._tracked_run("init", notes=listing_url) as result:
            try:
                pages = await self.discover(listing_url)
            except (FetchError, ParseError) as exc:
                log_exception(logger, "Unable to read auction listing", exc, url=listing_url)
                result.record_error(str(exc))
                result.status = "failed"
                return result

            await self.ingest_entries(pages, result)
            if result.errors:
                result.status = "completed_with_errors"
            return result

    async def ingest_auction(
        self, auction_id: str, state: AuctionState = AuctionState.UNKNOWN
    ) -> IngestResult:
        """Store a single auction by id, skipping listing discovery."""
        with self._tracked_run("init", notes=auction_id) as result:
            await self.ingest_entries([[(one_auction_url(auction_id), state)]], result)
            if result.errors:
                result.status = "failed"
            return result

    # -- refresh ---------------------------------------------------------

    async def refresh_states(
        self,
        listing_url: str = ALL_AUCTIONS_URL,
        states: Iterable[AuctionState] = REFRESHABLE_STATES,
    ) -> IngestResult:
        """Update the state column of stored auctions still in ``states``.

        Only auctions found on the listing are touched; ``total`` counts
        those, ``ok`` the ones whose row was updated.
        """
        with self._tracked_run("update", notes=listing_url) as result:
            tracked = set(self.auctions.ids_with_states(states))
            if not tracked:
                logger.info("No auctions to refresh")
                return result

            try:
                pages = await self.discover(listing_url)
            except (FetchError, ParseError) as exc:
                log_exception(logger, "Unable to read auction listing", exc, url=listing_url)
                result.record_error(str(exc))
                result.status = "failed"
                return result

            for entries in pages:
                self._refresh_entries(entries, tracked, result)
            self.conn.commit()
            logger.info(
                "States refreshed: %d/%d, errors: %d, not listed: %d",
                result.ok,
                result.total,
                result.errors,
                len(tracked),
            )
            if result.errors:
                result.status = "completed_with_errors"
            return result

    def _refresh_entries(
        self, entries: List[ListingEntry], tracked: Set[str], result: IngestResult
    ) -> None:
        for link, state in entries:
            try:
                auction_id = extract_auction_id(link)
            except ParseError as exc:
                result.record_error(f"{link}: {exc}")
                continue
            if auction_id not in tracked:
                continue
            tracked.discard(auction_id)
            result.total += 1
            try:
                if self.auctions.update_state(auction_id, state):
                    result.ok += 1
            except sqlite3.Error as exc:
                log_exception(logger, "Failed to update state", exc, auction_id=auction_id)
                result.record_error(f"{auction_id}: {exc}")

    # -- enrichment ------------------------------------------------------

    async def enrich_properties(
        self, states: Iterable[AuctionState] = ACTIVE_STATES
    ) -> IngestResult:
        """Geocode stored properties without coordinates, one at a time.

        A property the geocoder cannot place counts as an error and keeps
        its empty coordinates.
        """
        if self.geocoder is None:
            raise ValueError("enrich_properties requires a geocoder")
        with self._tracked_run("geocode") as result:
            pending = self.assets.properties_missing_coordinates(states)
            result.total = len(pending)
            for property_id, prop in pending:
                with log_context(auction_id=prop.auction_id, property_id=property_id):
                    (enriched,) = await geocode_assets([prop], self.geocoder, self.country)
                    if enriched.coordinates is None:
                        result.record_error(
                            f"{prop.auction_id}: no coordinates for {prop.city}"
                        )
                        continue
                    self.assets.update_coordinates(property_id, enriched.coordinates)
                    self.conn.commit()
                    result.ok += 1
            logger.info("Properties geocoded: %d/%d", result.ok, result.total)
            if result.errors:
                result.status = "completed_with_errors"
            return result


__all__ = [
    "DEFAULT_MAX_CONCURRENT",
    "IngestPipeline",
    "IngestResult",
    "REFRESHABLE_STATES",
]
