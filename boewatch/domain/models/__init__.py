"""Domain models package.

Typed records for BOE auctions and their assets, plus the taxonomies and
lenient value parsers used to build them from scraped tables.
"""

from .asset import (
    Asset,
    Coordinates,
    Other,
    Property,
    Vehicle,
    build_asset,
    parse_header,
)
from .auction import (
    ACTIVE_STATES,
    Auction,
    AuctionKind,
    AuctionState,
    BidInfo,
    LotAuctionKind,
    Management,
)
from .concepts import BoeConcept, ConceptMap
from .normalize import InvalidLabelError, normalize
from .taxonomies import OtherCategory, PropertyCategory, Province, VehicleCategory

__all__ = [
    "ACTIVE_STATES",
    "Asset",
    "Auction",
    "AuctionKind",
    "AuctionState",
    "BidInfo",
    "BoeConcept",
    "ConceptMap",
    "Coordinates",
    "InvalidLabelError",
    "LotAuctionKind",
    "Management",
    "Other",
    "OtherCategory",
    "Property",
    "PropertyCategory",
    "Province",
    "Vehicle",
    "VehicleCategory",
    "build_asset",
    "normalize",
    "parse_header",
]
