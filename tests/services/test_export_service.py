import json
from decimal import Decimal

from boewatch.domain.models import AuctionState, BidInfo, Province
from boewatch.infrastructure.db import load_snapshot
from boewatch.infrastructure.db.repositories import (
    AssetRepository,
    AuctionRepository,
    ManagementRepository,
)
from boewatch.services import collect_statistics, export_auctions, write_statistics
from boewatch.services.export import load_dataset


def _store(conn, auction, assets=()):
    ManagementRepository(conn).upsert(auction.management)
    AuctionRepository(conn).insert(auction)
    AssetRepository(conn).insert_assets(assets)
    conn.commit()


def _populate(conn, make_auction, make_property, make_vehicle):
    _store(
        conn,
        make_auction("SUB-1"),
        [
            make_property("SUB-1"),
            make_vehicle("SUB-1", bidinfo=BidInfo(value=Decimal("4000.00"))),
        ],
    )
    _store(
        conn,
        make_auction("SUB-2", AuctionState.FINISHED),
        [make_property("SUB-2", city="CARTAGENA")],
    )


def test_export_defaults_to_ongoing(conn, tmp_path, make_auction, make_property, make_vehicle):
    _populate(conn, make_auction, make_property, make_vehicle)

    result = export_auctions(conn, tmp_path / "auctions.json.gz")

    assert (result.auction_count, result.asset_count) == (1, 2)
    snapshot = load_snapshot(result.path)
    assert list(snapshot.auctions) == ["SUB-1"]
    assert {asset.kind for asset in snapshot.assets} == {"property", "vehicle"}


def test_export_selected_states(conn, tmp_path, make_auction, make_property, make_vehicle):
    _populate(conn, make_auction, make_property, make_vehicle)

    result = export_auctions(
        conn, tmp_path / "all.json.gz", [AuctionState.ONGOING, AuctionState.FINISHED]
    )

    assert (result.auction_count, result.asset_count) == (2, 3)


def test_dataset_context_indices(conn, make_auction, make_property, make_vehicle):
    _populate(conn, make_auction, make_property, make_vehicle)

    context = load_dataset(conn, tuple(AuctionState))

    assert context.cities_by_province[Province.MURCIA] == ("CARTAGENA", "MURCIA")
    assert context.max_values["vehicle"] == Decimal("4000.00")
    assert context.max_values["property"] == Decimal("75127.00")


def test_statistics_over_all_states(conn, tmp_path, make_auction, make_property, make_vehicle):
    _populate(conn, make_auction, make_property, make_vehicle)

    stats = collect_statistics(conn)

    assert stats.auction_count == 2
    assert stats.asset_count == 3
    assert stats.auctions_by_state == {"ongoing": 1, "finished": 1}
    assert stats.assets_by_kind == {"property": 2, "vehicle": 1}
    assert stats.properties_by_province == {"Murcia": 2}

    path = write_statistics(stats, tmp_path / "stats" / "statistics.json")
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["asset_count"] == 3
    (properties,) = [v for v in document["values"] if v["kind"] == "property"]
    assert properties == {
        "kind": "property",
        "count": 2,
        "total": "150254.00",
        "average": "75127.00",
        "maximum": "75127.00",
    }


def test_statistics_restricted_to_states(conn, make_auction, make_property, make_vehicle):
    _populate(conn, make_auction, make_property, make_vehicle)

    stats = collect_statistics(conn, [AuctionState.FINISHED])

    assert stats.auction_count == 1
    assert stats.assets_by_kind == {"property": 1}
