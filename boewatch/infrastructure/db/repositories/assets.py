"""Storage of property, vehicle and other-goods assets.

Each asset variant lives in its own table keyed by an autoincrement row id
and referencing its auction by id. Optional per-lot bid terms are stored as
a packed ``BidInfo`` string and property coordinates as ``"lon lat"`` text.
"""

from __future__ import annotations

import sqlite3
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from boewatch.domain.models import (
    ACTIVE_STATES,
    Asset,
    AuctionState,
    BidInfo,
    Coordinates,
    Other,
    OtherCategory,
    Property,
    PropertyCategory,
    Province,
    Vehicle,
    VehicleCategory,
)
from boewatch.domain.models.values import format_money

from ..schema import ensure_schema
from .base import BaseRepository, state_filter


def _packed(bidinfo: Optional[BidInfo]) -> Optional[str]:
    return bidinfo.to_packed() if bidinfo is not None else None


def _unpacked(packed: Optional[str]) -> Optional[BidInfo]:
    return BidInfo.from_packed(packed) if packed else None


def row_to_property(row: dict) -> Property:
    return Property(
        auction_id=row["auction_id"],
        category=PropertyCategory(row["category"]),
        address=row["address"],
        city=row["city"],
        province=Province(row["province"]),
        postal_code=row["postal_code"],
        description=row["description"],
        catastro_reference=row["catastro_reference"],
        owner_status=row["owner_status"],
        primary_residence=row["primary_residence"],
        register_inscription=row["register_inscription"],
        visitable=row["visitable"],
        charges=Decimal(row["charges"]),
        bidinfo=_unpacked(row["bidinfo"]),
        coordinates=Coordinates.from_text(row["coordinates"]) if row["coordinates"] else None,
    )


def row_to_vehicle(row: dict) -> Vehicle:
    return Vehicle(
        auction_id=row["auction_id"],
        category=VehicleCategory(row["category"]),
        brand=row["brand"],
        model=row["model"],
        license_plate=row["license_plate"],
        frame_number=row["frame_number"],
        licensed_date=date.fromisoformat(row["licensed_date"]),
        localization=row["localization"],
        description=row["description"],
        visitable=row["visitable"],
        charges=Decimal(row["charges"]),
        bidinfo=_unpacked(row["bidinfo"]),
    )


def row_to_other(row: dict) -> Other:
    return Other(
        auction_id=row["auction_id"],
        category=OtherCategory(row["category"]),
        description=row["description"],
        judicial_title=row["judicial_title"],
        additional_information=row["additional_information"],
        visitable=row["visitable"],
        charges=Decimal(row["charges"]),
        bidinfo=_unpacked(row["bidinfo"]),
    )


class AssetRepository(BaseRepository):
    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)
        ensure_schema(self.conn)

    # -- writes ----------------------------------------------------------

    def insert_property(self, prop: Property) -> int:
        return self._execute_insert(
            """
            INSERT INTO properties (
                auction_id, bidinfo, category, address, city, province,
                postal_code, description, catastro_reference, owner_status,
                primary_residence, register_inscription, visitable, charges,
                coordinates
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                prop.auction_id,
                _packed(prop.bidinfo),
                prop.category.value,
                prop.address,
                prop.city,
                prop.province.value,
                prop.postal_code,
                prop.description,
                prop.catastro_reference,
                prop.owner_status,
                prop.primary_residence,
                prop.register_inscription,
                prop.visitable,
                format_money(prop.charges),
                prop.coordinates.to_text() if prop.coordinates else None,
            ),
        )

    def insert_vehicle(self, vehicle: Vehicle) -> int:
        return self._execute_insert(
            """
            INSERT INTO vehicles (
                auction_id, bidinfo, category, brand, model, license_plate,
                frame_number, licensed_date, localization, description,
                visitable, charges
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                vehicle.auction_id,
                _packed(vehicle.bidinfo),
                vehicle.category.value,
                vehicle.brand,
                vehicle.model,
                vehicle.license_plate,
                vehicle.frame_number,
                vehicle.licensed_date.isoformat(),
                vehicle.localization,
                vehicle.description,
                vehicle.visitable,
                format_money(vehicle.charges),
            ),
        )

    def insert_other(self, other: Other) -> int:
        return self._execute_insert(
            """
            INSERT INTO others (
                auction_id, bidinfo, category, description, judicial_title,
                additional_information, visitable, charges
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                other.auction_id,
                _packed(other.bidinfo),
                other.category.value,
                other.description,
                other.judicial_title,
                other.additional_information,
                other.visitable,
                format_money(other.charges),
            ),
        )

    def insert_assets(self, assets: Iterable[Asset]) -> int:
        """Insert every asset into its variant table; returns how many."""
        count = 0
        for asset in assets:
            if isinstance(asset, Property):
                self.insert_property(asset)
            elif isinstance(asset, Vehicle):
                self.insert_vehicle(asset)
            elif isinstance(asset, Other):
                self.insert_other(asset)
            else:
                raise TypeError(f"Unsupported asset type: {type(asset).__name__}")
            count += 1
        return count

    def update_coordinates(self, property_id: int, coordinates: Coordinates) -> bool:
        """Set the coordinates of one stored property. Only that column changes."""
        cur = self._execute(
            "UPDATE properties SET coordinates = ? WHERE id = ?",
            (coordinates.to_text(), property_id),
        )
        return cur.rowcount > 0

    # -- reads -----------------------------------------------------------

    def _select(self, table: str, states: Iterable[AuctionState], extra: str = "") -> List[dict]:
        clause, params = state_filter("a.auction_state", states)
        return self._fetch_all_as_dicts(
            f"""
            SELECT t.* FROM {table} t
            JOIN auctions a ON t.auction_id = a.id
            WHERE {clause} {extra}
            ORDER BY t.auction_id, t.id
            """,
            params,
        )

    def properties_with_states(self, states: Iterable[AuctionState]) -> List[Property]:
        return [row_to_property(row) for row in self._select("properties", states)]

    def vehicles_with_states(self, states: Iterable[AuctionState]) -> List[Vehicle]:
        return [row_to_vehicle(row) for row in self._select("vehicles", states)]

    def others_with_states(self, states: Iterable[AuctionState]) -> List[Other]:
        return [row_to_other(row) for row in self._select("others", states)]

    def assets_with_states(self, states: Iterable[AuctionState]) -> List[Asset]:
        states = tuple(states)
        assets: List[Asset] = []
        assets.extend(self.properties_with_states(states))
        assets.extend(self.vehicles_with_states(states))
        assets.extend(self.others_with_states(states))
        return assets

    def properties_missing_coordinates(
        self, states: Iterable[AuctionState] = ACTIVE_STATES
    ) -> List[Tuple[int, Property]]:
        """Stored properties without coordinates, paired with their row id."""
        rows = self._select("properties", states, "AND t.coordinates IS NULL")
        return [(int(row["id"]), row_to_property(row)) for row in rows]

    def for_auction(self, auction_id: str) -> List[Asset]:
        assets: List[Asset] = []
        for table, convert in (
            ("properties", row_to_property),
            ("vehicles", row_to_vehicle),
            ("others", row_to_other),
        ):
            rows = self._fetch_all_as_dicts(
                f"SELECT * FROM {table} WHERE auction_id = ? ORDER BY id", (auction_id,)
            )
            assets.extend(convert(row) for row in rows)
        return assets
