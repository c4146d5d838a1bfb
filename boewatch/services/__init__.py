"""Service layer modules for boewatch."""

from .export import ExportResult, export_auctions, load_dataset
from .ingest import IngestPipeline, IngestResult
from .statistics import collect_statistics, write_statistics

__all__ = [
    "ExportResult",
    "IngestPipeline",
    "IngestResult",
    "collect_statistics",
    "export_auctions",
    "load_dataset",
    "write_statistics",
]
