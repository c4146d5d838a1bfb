"""Aggregate counts over a dataset, used by ``boewatch statistics``."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List

from boewatch.domain.context import DatasetContext, asset_value
from boewatch.domain.models import Property
from boewatch.domain.models.values import CENTS, ZERO, format_money


@dataclass
class CategoryCount:
    """Number of assets of one kind and category."""

    kind: str
    category: str
    count: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "category": self.category, "count": self.count}


@dataclass
class ValueSummary:
    """Total and average auction value for one asset kind."""

    kind: str
    count: int = 0
    total: Decimal = ZERO
    maximum: Decimal = ZERO

    @property
    def average(self) -> Decimal:
        if not self.count:
            return ZERO
        return (self.total / self.count).quantize(CENTS)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "count": self.count,
            "total": format_money(self.total),
            "average": format_money(self.average),
            "maximum": format_money(self.maximum),
        }


@dataclass
class DatasetStatistics:
    """Counts of auctions and assets broken down for charting."""

    auction_count: int = 0
    asset_count: int = 0
    auctions_by_state: Dict[str, int] = field(default_factory=dict)
    auctions_by_kind: Dict[str, int] = field(default_factory=dict)
    assets_by_kind: Dict[str, int] = field(default_factory=dict)
    assets_by_category: List[CategoryCount] = field(default_factory=list)
    properties_by_province: Dict[str, int] = field(default_factory=dict)
    values: List[ValueSummary] = field(default_factory=list)

    @classmethod
    def from_context(cls, context: DatasetContext) -> "DatasetStatistics":
        stats = cls()
        stats.auction_count = len(context.auctions)
        stats.asset_count = len(context.assets)

        stats.auctions_by_state = dict(
            Counter(a.state.value for a in context.auctions.values()).most_common()
        )
        stats.auctions_by_kind = dict(
            Counter(a.kind.value for a in context.auctions.values()).most_common()
        )

        kinds: Counter = Counter()
        categories: Counter = Counter()
        provinces: Counter = Counter()
        values: Dict[str, ValueSummary] = {}
        for asset in context.assets:
            kinds[asset.kind] += 1
            categories[(asset.kind, asset.category.value)] += 1
            if isinstance(asset, Property):
                provinces[asset.province.display] += 1
            summary = values.setdefault(asset.kind, ValueSummary(kind=asset.kind))
            summary.count += 1
            summary.total += asset_value(asset, context.auctions)

        for kind, summary in values.items():
            summary.maximum = context.max_values.get(kind, ZERO)

        stats.assets_by_kind = dict(kinds.most_common())
        stats.assets_by_category = [
            CategoryCount(kind=kind, category=category, count=count)
            for (kind, category), count in sorted(
                categories.items(), key=lambda item: (item[0][0], -item[1], item[0][1])
            )
        ]
        stats.properties_by_province = dict(provinces.most_common())
        stats.values = [values[kind] for kind in sorted(values)]
        return stats

    def to_dict(self) -> dict:
        return {
            "auction_count": self.auction_count,
            "asset_count": self.asset_count,
            "auctions_by_state": self.auctions_by_state,
            "auctions_by_kind": self.auctions_by_kind,
            "assets_by_kind": self.assets_by_kind,
            "assets_by_category": [c.to_dict() for c in self.assets_by_category],
            "properties_by_province": self.properties_by_province,
            "values": [v.to_dict() for v in self.values],
        }
