"""Ingestion of BOE auctions: per-auction scraping and the passes driving it."""

from .pipeline import DEFAULT_MAX_CONCURRENT, REFRESHABLE_STATES, IngestPipeline, IngestResult
from .scraper import ScrapedAuction, geocode_assets, scrape_auction

__all__ = [
    "DEFAULT_MAX_CONCURRENT",
    "IngestPipeline",
    "IngestResult",
    "REFRESHABLE_STATES",
    "ScrapedAuction",
    "geocode_assets",
    "scrape_auction",
]
