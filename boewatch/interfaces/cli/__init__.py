"""CLI interface for boewatch.

This package is the home of all Click commands; ``cli`` is the group
exposed as the ``boewatch`` console script.
"""

from .__main__ import cli
from .create import create
from .export import export, statistics
from .ingest import geocode, init, update

__all__ = [
    "cli",
    "create",
    "export",
    "geocode",
    "init",
    "statistics",
    "update",
]
