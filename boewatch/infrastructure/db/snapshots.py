"""Compressed JSON snapshots of the auction dataset.

A snapshot is the read-only artefact consumed by the front-ends::

    {
        "version": 1,
        "generated_at": "2020-07-20T10:00:00Z",
        "auctions": {"<id>": {...}},
        "assets": [{"kind": "property", ...}, ...]
    }

Amounts are strings with two decimals and dates ISO strings, so loading a
snapshot rebuilds exactly the records that were written.
"""

from __future__ import annotations

import gzip
import json
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping

from boewatch.domain.models import (
    Asset,
    Auction,
    AuctionKind,
    AuctionState,
    BidInfo,
    Coordinates,
    LotAuctionKind,
    Management,
    Other,
    OtherCategory,
    Property,
    PropertyCategory,
    Province,
    Vehicle,
    VehicleCategory,
)
from boewatch.domain.models.values import format_money
from boewatch.infrastructure.observability import get_logger

from .connection import iso_utcnow

logger = get_logger(__name__)

SNAPSHOT_VERSION = 1

_ASSET_TYPES = {cls.kind: cls for cls in (Property, Vehicle, Other)}
_ENUM_FIELDS: Dict[str, type] = {
    "state": AuctionState,
    "kind": AuctionKind,
    "lot_kind": LotAuctionKind,
    "province": Province,
}
_CATEGORY_TYPES = {
    "property": PropertyCategory,
    "vehicle": VehicleCategory,
    "other": OtherCategory,
}


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be interpreted."""


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return format_money(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Coordinates):
        return {"longitude": value.longitude, "latitude": value.latitude}
    if hasattr(value, "__dataclass_fields__"):
        return {f.name: _encode(getattr(value, f.name)) for f in fields(value)}
    return value


def auction_to_dict(auction: Auction) -> Dict[str, Any]:
    return _encode(auction)


def asset_to_dict(asset: Asset) -> Dict[str, Any]:
    return {"kind": asset.kind, **_encode(asset)}


def _bidinfo_from_dict(data: Mapping[str, str] | None) -> BidInfo | None:
    if data is None:
        return None
    return BidInfo(**{name: Decimal(value) for name, value in data.items()})


def auction_from_dict(data: Mapping[str, Any]) -> Auction:
    return Auction(
        id=data["id"],
        state=AuctionState(data["state"]),
        kind=AuctionKind(data["kind"]),
        claim_quantity=Decimal(data["claim_quantity"]),
        lots=int(data["lots"]),
        lot_kind=LotAuctionKind(data["lot_kind"]),
        management=Management(**data["management"]),
        bidinfo=_bidinfo_from_dict(data["bidinfo"]) or BidInfo(),
        start_date=date.fromisoformat(data["start_date"]),
        end_date=date.fromisoformat(data["end_date"]),
        notice=data["notice"],
    )


def asset_from_dict(data: Mapping[str, Any]) -> Asset:
    kind = data.get("kind")
    cls = _ASSET_TYPES.get(kind)
    if cls is None:
        raise SnapshotError(f"Unknown asset kind {kind!r}")
    values: Dict[str, Any] = {}
    for f in fields(cls):
        raw = data.get(f.name)
        if f.name == "category":
            values[f.name] = _CATEGORY_TYPES[kind](raw)
        elif f.name == "bidinfo":
            values[f.name] = _bidinfo_from_dict(raw)
        elif f.name == "coordinates":
            values[f.name] = Coordinates(**raw) if raw else None
        elif f.name == "charges":
            values[f.name] = Decimal(raw)
        elif f.name == "licensed_date":
            values[f.name] = date.fromisoformat(raw)
        elif f.name in _ENUM_FIELDS:
            values[f.name] = _ENUM_FIELDS[f.name](raw)
        else:
            values[f.name] = raw
    return cls(**values)


@dataclass
class Snapshot:
    generated_at: str
    auctions: Dict[str, Auction]
    assets: List[Asset]


def export_snapshot(
    path: Path | str,
    auctions: Mapping[str, Auction],
    assets: List[Asset],
) -> Path:
    """Write ``auctions`` and ``assets`` as a gzip-compressed JSON snapshot."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    document = {
        "version": SNAPSHOT_VERSION,
        "generated_at": iso_utcnow(),
        "auctions": {auction_id: auction_to_dict(a) for auction_id, a in auctions.items()},
        "assets": [asset_to_dict(asset) for asset in assets],
    }
    with gzip.open(target, "wt", encoding="utf-8") as fp:
        json.dump(document, fp, ensure_ascii=False, separators=(",", ":"))
    logger.info(
        "Exported %d auctions and %d assets to %s", len(auctions), len(assets), target
    )
    return target


def load_snapshot(path: Path | str) -> Snapshot:
    """Read a snapshot written by :func:`export_snapshot`."""
    try:
        with gzip.open(Path(path), "rt", encoding="utf-8") as fp:
            document = json.load(fp)
    except (OSError, ValueError) as exc:
        raise SnapshotError(f"Unreadable snapshot {path}: {exc}") from exc
    version = document.get("version")
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version {version!r}")
    return Snapshot(
        generated_at=document.get("generated_at", ""),
        auctions={
            auction_id: auction_from_dict(data)
            for auction_id, data in document.get("auctions", {}).items()
        },
        assets=[asset_from_dict(data) for data in document.get("assets", [])],
    )


__all__ = [
    "SNAPSHOT_VERSION",
    "Snapshot",
    "SnapshotError",
    "asset_from_dict",
    "asset_to_dict",
    "auction_from_dict",
    "auction_to_dict",
    "export_snapshot",
    "load_snapshot",
]
