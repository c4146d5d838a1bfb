from __future__ import annotations

import sqlite3
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from boewatch.domain.models import (
    Auction,
    AuctionKind,
    AuctionState,
    BidInfo,
    LotAuctionKind,
    Management,
)
from boewatch.domain.models.values import format_money

from ..schema import ensure_schema
from .base import BaseRepository, state_filter

_SELECT_AUCTIONS = """
    SELECT a.id, a.auction_state, a.kind, a.claim_quantity, a.lots, a.lot_kind,
           a.bidinfo, a.start_date, a.end_date, a.notice,
           m.code, m.description, m.address, m.telephone, m.fax, m.email
    FROM auctions a
    JOIN managements m ON a.management = m.code
"""


def row_to_auction(row: dict) -> Auction:
    return Auction(
        id=row["id"],
        state=AuctionState(row["auction_state"]),
        kind=AuctionKind(row["kind"]),
        claim_quantity=Decimal(row["claim_quantity"]),
        lots=int(row["lots"]),
        lot_kind=LotAuctionKind(row["lot_kind"]),
        management=Management(
            code=row["code"],
            description=row["description"],
            address=row["address"],
            telephone=row["telephone"],
            fax=row["fax"],
            email=row["email"],
        ),
        bidinfo=BidInfo.from_packed(row["bidinfo"]),
        start_date=date.fromisoformat(row["start_date"]),
        end_date=date.fromisoformat(row["end_date"]),
        notice=row["notice"],
    )


class AuctionRepository(BaseRepository):
    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)
        ensure_schema(self.conn)

    def insert(self, auction: Auction) -> None:
        """Insert a new auction; its management must already be stored.

        Raises:
            sqlite3.IntegrityError: an auction with the same id exists.
        """
        self._execute(
            """
            INSERT INTO auctions (
                id, auction_state, kind, claim_quantity, lots, lot_kind,
                management, bidinfo, start_date, end_date, notice
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                auction.id,
                auction.state.value,
                auction.kind.value,
                format_money(auction.claim_quantity),
                auction.lots,
                auction.lot_kind.value,
                auction.management.code,
                auction.bidinfo.to_packed(),
                auction.start_date.isoformat(),
                auction.end_date.isoformat(),
                auction.notice,
            ),
        )

    def exists(self, auction_id: str) -> bool:
        return (
            self._fetch_scalar("SELECT 1 FROM auctions WHERE id = ?", (auction_id,))
            is not None
        )

    def update_state(self, auction_id: str, state: AuctionState) -> bool:
        """Set the state column of one auction. Returns True if a row changed."""
        cur = self._execute(
            "UPDATE auctions SET auction_state = ? WHERE id = ?",
            (state.value, auction_id),
        )
        return cur.rowcount > 0

    def get(self, auction_id: str) -> Optional[Auction]:
        row = self._fetch_one_as_dict(_SELECT_AUCTIONS + " WHERE a.id = ?", (auction_id,))
        return row_to_auction(row) if row else None

    def ids_with_states(self, states: Iterable[AuctionState]) -> List[str]:
        clause, params = state_filter("auction_state", states)
        cur = self._execute(f"SELECT id FROM auctions WHERE {clause} ORDER BY id", params)
        return [row[0] for row in cur.fetchall()]

    def with_states(self, states: Iterable[AuctionState]) -> Dict[str, Auction]:
        """Auctions in any of ``states``, keyed by id."""
        clause, params = state_filter("a.auction_state", states)
        rows = self._fetch_all_as_dicts(
            _SELECT_AUCTIONS + f" WHERE {clause} ORDER BY a.id", params
        )
        return {row["id"]: row_to_auction(row) for row in rows}

    def count_by_state(self) -> Dict[str, int]:
        cur = self._execute(
            "SELECT auction_state, COUNT(*) FROM auctions GROUP BY auction_state"
        )
        return {row[0]: row[1] for row in cur.fetchall()}
