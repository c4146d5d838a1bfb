from .assets import AssetRepository
from .auctions import AuctionRepository
from .managements import ManagementRepository
from .runs import IngestRunRepository

__all__ = [
    "AssetRepository",
    "AuctionRepository",
    "IngestRunRepository",
    "ManagementRepository",
]
