"""HTTP adapters for boewatch.

This package provides the resilient page fetcher used to download the BOE
auction portal.
"""

from .fetcher import (
    FatalFetchError,
    FetchError,
    HttpFetcher,
    RateLimiter,
    TransientFetchError,
)

__all__ = [
    "FatalFetchError",
    "FetchError",
    "HttpFetcher",
    "RateLimiter",
    "TransientFetchError",
]
