"""Read-only dataset context shared by export and statistics.

Built once from the loaded auctions and assets, then passed explicitly to
whatever needs the derived indices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping

from boewatch.domain.models import Asset, Auction, Property, Province
from boewatch.domain.models.values import ZERO


def asset_value(asset: Asset, auctions: Mapping[str, Auction]) -> Decimal:
    """Auction value of an asset: its own lot terms, else its auction's."""
    if asset.bidinfo is not None:
        return asset.bidinfo.value
    auction = auctions.get(asset.auction_id)
    return auction.bidinfo.value if auction is not None else ZERO


@dataclass(frozen=True)
class DatasetContext:
    auctions: Mapping[str, Auction]
    assets: tuple[Asset, ...]
    provinces: frozenset[Province] = frozenset()
    cities_by_province: Mapping[Province, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    max_values: Mapping[str, Decimal] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls, auctions: Mapping[str, Auction], assets: Iterable[Asset]
    ) -> "DatasetContext":
        asset_list = tuple(assets)
        cities: dict[Province, set[str]] = {}
        max_values: dict[str, Decimal] = {}
        for asset in asset_list:
            value = asset_value(asset, auctions)
            if value > max_values.get(asset.kind, ZERO):
                max_values[asset.kind] = value
            else:
                max_values.setdefault(asset.kind, ZERO)
            if isinstance(asset, Property):
                cities.setdefault(asset.province, set()).add(asset.city)
        return cls(
            auctions=MappingProxyType(dict(auctions)),
            assets=asset_list,
            provinces=frozenset(cities),
            cities_by_province=MappingProxyType(
                {province: tuple(sorted(names)) for province, names in cities.items()}
            ),
            max_values=MappingProxyType(max_values),
        )

    def assets_of_kind(self, kind: str) -> list[Asset]:
        return [asset for asset in self.assets if asset.kind == kind]


__all__ = ["DatasetContext", "asset_value"]
