from __future__ import annotations

import sqlite3
from typing import Optional

from boewatch.domain.models import Management

from ..schema import ensure_schema
from .base import BaseRepository


def row_to_management(row: dict) -> Management:
    return Management(
        code=row["code"],
        description=row["description"],
        address=row["address"],
        telephone=row["telephone"],
        fax=row["fax"],
        email=row["email"],
    )


class ManagementRepository(BaseRepository):
    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)
        ensure_schema(self.conn)

    def upsert(self, management: Management) -> None:
        """Insert ``management`` or overwrite every field of the stored code."""
        self._execute(
            """
            INSERT INTO managements (code, description, address, telephone, fax, email)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(code) DO UPDATE SET
                description = excluded.description,
                address = excluded.address,
                telephone = excluded.telephone,
                fax = excluded.fax,
                email = excluded.email
            """,
            (
                management.code,
                management.description,
                management.address,
                management.telephone,
                management.fax,
                management.email,
            ),
        )

    def get(self, code: str) -> Optional[Management]:
        row = self._fetch_one_as_dict("SELECT * FROM managements WHERE code = ?", (code,))
        return row_to_management(row) if row else None

    def count(self) -> int:
        return int(self._fetch_scalar("SELECT COUNT(*) FROM managements") or 0)
