"""Analytics tools for boewatch.

This package contains functions to compute aggregate counts over the
auctions and assets loaded from the local database.
"""

from .summary import CategoryCount, DatasetStatistics, ValueSummary

__all__ = ["CategoryCount", "DatasetStatistics", "ValueSummary"]
