"""Domain layer for Boewatch.

Pure records and business rules with no knowledge of HTTP, HTML or SQLite.
"""

from . import analytics, models

__all__ = ["analytics", "models"]
