"""Tests for the SQLite repositories and schema management."""

import json
import sqlite3
from decimal import Decimal

import pytest

from boewatch.domain.models import (
    ACTIVE_STATES,
    AuctionState,
    BidInfo,
    Coordinates,
    Management,
    Property,
    Vehicle,
)
from boewatch.infrastructure.db import (
    CURRENT_SCHEMA_VERSION,
    DatabaseError,
    SchemaMigrator,
    ensure_schema,
    get_connection,
)
from boewatch.infrastructure.db.repositories import (
    AssetRepository,
    AuctionRepository,
    IngestRunRepository,
    ManagementRepository,
)


def _store(conn, auction, assets=()):
    ManagementRepository(conn).upsert(auction.management)
    AuctionRepository(conn).insert(auction)
    AssetRepository(conn).insert_assets(assets)
    conn.commit()


class TestConnection:
    def test_enforces_foreign_keys_and_wal(self, conn):
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"

    def test_wal_can_be_disabled_in_config(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"db": {"enable_wal": False}}), encoding="utf-8")

        with get_connection(tmp_path / "plain.db", config_path=config) as conn:
            assert conn.execute("PRAGMA journal_mode").fetchone()[0] != "wal"

    def test_unopenable_path_raises(self, tmp_path):
        with pytest.raises(DatabaseError):
            with get_connection(tmp_path):
                pass


class TestSchema:
    def test_ensure_schema_is_idempotent(self, conn):
        assert ensure_schema(conn) == CURRENT_SCHEMA_VERSION
        assert ensure_schema(conn) == CURRENT_SCHEMA_VERSION
        applied = SchemaMigrator(conn).applied()
        assert applied == ["0001_core_tables", "0002_ingest_runs"]

    def test_tables_exist(self, conn):
        names = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert {"managements", "auctions", "properties", "vehicles", "others", "ingest_runs"} <= names

    def test_core_tables_carry_property_coordinates(self, conn):
        columns = [row[1] for row in conn.execute("PRAGMA table_info(properties)")]
        assert columns.count("coordinates") == 1


class TestManagementRepository:
    def test_upsert_overwrites_existing_code(self, conn, make_auction):
        repo = ManagementRepository(conn)
        original = make_auction("SUB-1").management
        repo.upsert(original)
        updated = Management(
            code=original.code,
            description="NUEVA DESCRIPCION",
            address=original.address,
            telephone="900000000",
            fax=original.fax,
            email=original.email,
        )
        repo.upsert(updated)

        assert repo.count() == 1
        assert repo.get(original.code) == updated

    def test_missing_code(self, conn):
        assert ManagementRepository(conn).get("nope") is None


class TestAuctionRepository:
    def test_insert_and_get(self, conn, make_auction):
        auction = make_auction("SUB-JA-2020-149474")
        _store(conn, auction)

        repo = AuctionRepository(conn)
        assert repo.exists(auction.id)
        assert not repo.exists("SUB-OTHER")
        assert repo.get(auction.id) == auction

    def test_duplicate_id_is_rejected(self, conn, make_auction):
        auction = make_auction("SUB-1")
        _store(conn, auction)
        with pytest.raises(sqlite3.IntegrityError):
            AuctionRepository(conn).insert(auction)

    def test_update_state(self, conn, make_auction):
        _store(conn, make_auction("SUB-1"))
        repo = AuctionRepository(conn)

        assert repo.update_state("SUB-1", AuctionState.FINISHED)
        assert not repo.update_state("SUB-404", AuctionState.FINISHED)
        assert repo.get("SUB-1").state is AuctionState.FINISHED

    def test_state_filters(self, conn, make_auction):
        _store(conn, make_auction("SUB-1", AuctionState.ONGOING))
        _store(conn, make_auction("SUB-2", AuctionState.SUSPENDED))
        _store(conn, make_auction("SUB-3", AuctionState.CANCELLED))
        repo = AuctionRepository(conn)

        assert repo.ids_with_states(ACTIVE_STATES) == ["SUB-1", "SUB-2"]
        assert list(repo.with_states([AuctionState.CANCELLED])) == ["SUB-3"]
        assert repo.with_states([]) == {}
        assert repo.count_by_state() == {"ongoing": 1, "suspended": 1, "cancelled": 1}


class TestAssetRepository:
    def test_assets_are_read_back_per_variant(
        self, conn, make_auction, make_property, make_vehicle, make_other
    ):
        lot_terms = BidInfo(value=Decimal("15100.00"), deposit=Decimal("755.00"))
        prop = make_property("SUB-1", bidinfo=lot_terms)
        vehicle = make_vehicle("SUB-1")
        other = make_other("SUB-1")
        _store(conn, make_auction("SUB-1"), [prop, vehicle, other])

        repo = AssetRepository(conn)
        assert repo.for_auction("SUB-1") == [prop, vehicle, other]
        assert repo.properties_with_states([AuctionState.ONGOING]) == [prop]
        assert repo.vehicles_with_states([AuctionState.FINISHED]) == []
        assert repo.assets_with_states(ACTIVE_STATES) == [prop, vehicle, other]

    def test_insert_rejects_unknown_asset(self, conn):
        with pytest.raises(TypeError):
            AssetRepository(conn).insert_assets([object()])

    def test_coordinates_enrichment(self, conn, make_auction, make_property):
        placed = make_property("SUB-1", coordinates=Coordinates(-1.13, 37.99))
        _store(conn, make_auction("SUB-1"), [make_property("SUB-1"), placed])
        _store(conn, make_auction("SUB-2", AuctionState.FINISHED), [make_property("SUB-2")])
        repo = AssetRepository(conn)

        pending = repo.properties_missing_coordinates()
        assert len(pending) == 1
        property_id, prop = pending[0]
        assert isinstance(prop, Property)
        assert prop.auction_id == "SUB-1"

        assert repo.update_coordinates(property_id, Coordinates(-1.5, 38.0))
        conn.commit()
        assert repo.properties_missing_coordinates() == []
        stored = repo.for_auction("SUB-1")
        assert stored[0].coordinates == Coordinates(-1.5, 38.0)
        assert stored[1].coordinates == Coordinates(-1.13, 37.99)

    def test_vehicle_date_survives_storage(self, conn, make_auction, make_vehicle):
        vehicle = make_vehicle("SUB-1")
        _store(conn, make_auction("SUB-1"), [vehicle])
        (stored,) = AssetRepository(conn).for_auction("SUB-1")
        assert isinstance(stored, Vehicle)
        assert stored.licensed_date == vehicle.licensed_date


class TestIngestRunRepository:
    def test_run_lifecycle(self, conn):
        repo = IngestRunRepository(conn)
        run_id = repo.start("init", notes="listing")
        (running,) = repo.recent()
        assert running["status"] == "running"
        assert running["finished_at"] is None

        repo.finish(run_id, status="completed_with_errors", ok=3, errors=1, total=4)
        (finished,) = repo.recent()
        assert finished["status"] == "completed_with_errors"
        assert (finished["ok_count"], finished["error_count"], finished["total_count"]) == (3, 1, 4)
        assert finished["notes"] == "listing"
        assert finished["finished_at"].endswith("Z")

    def test_recent_is_newest_first(self, conn):
        repo = IngestRunRepository(conn)
        first = repo.start("init")
        second = repo.start("update")
        assert [run["id"] for run in repo.recent(limit=5)] == [second, first]
