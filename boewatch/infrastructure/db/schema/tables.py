from __future__ import annotations

SCHEMA_VERSION_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);
"""

SCHEMA_MIGRATIONS_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    applied_at TEXT NOT NULL,
    notes TEXT
);
"""

SCHEMA_MANAGEMENTS_SQL = """
CREATE TABLE IF NOT EXISTS managements (
    code TEXT PRIMARY KEY,
    description TEXT NOT NULL,
    address TEXT NOT NULL,
    telephone TEXT NOT NULL,
    fax TEXT NOT NULL,
    email TEXT NOT NULL
);
"""

SCHEMA_AUCTIONS_SQL = """
CREATE TABLE IF NOT EXISTS auctions (
    id TEXT PRIMARY KEY,
    auction_state TEXT NOT NULL,
    kind TEXT NOT NULL,
    claim_quantity TEXT NOT NULL,
    lots INTEGER NOT NULL DEFAULT 0,
    lot_kind TEXT NOT NULL,
    management TEXT NOT NULL,
    bidinfo TEXT NOT NULL,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    notice TEXT NOT NULL,
    FOREIGN KEY (management) REFERENCES managements (code)
);
CREATE INDEX IF NOT EXISTS idx_auctions_state ON auctions (auction_state);
"""

SCHEMA_PROPERTIES_SQL = """
CREATE TABLE IF NOT EXISTS properties (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    auction_id TEXT NOT NULL,
    bidinfo TEXT,
    category TEXT NOT NULL,
    address TEXT NOT NULL,
    city TEXT NOT NULL,
    province TEXT NOT NULL,
    postal_code TEXT NOT NULL,
    description TEXT NOT NULL,
    catastro_reference TEXT NOT NULL,
    owner_status TEXT NOT NULL,
    primary_residence TEXT NOT NULL,
    register_inscription TEXT NOT NULL,
    visitable TEXT NOT NULL,
    charges TEXT NOT NULL,
    coordinates TEXT,
    FOREIGN KEY (auction_id) REFERENCES auctions (id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_properties_auction_id ON properties (auction_id);
"""

SCHEMA_VEHICLES_SQL = """
CREATE TABLE IF NOT EXISTS vehicles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    auction_id TEXT NOT NULL,
    bidinfo TEXT,
    category TEXT NOT NULL,
    brand TEXT NOT NULL,
    model TEXT NOT NULL,
    license_plate TEXT NOT NULL,
    frame_number TEXT NOT NULL,
    licensed_date TEXT NOT NULL,
    localization TEXT NOT NULL,
    description TEXT NOT NULL,
    visitable TEXT NOT NULL,
    charges TEXT NOT NULL,
    FOREIGN KEY (auction_id) REFERENCES auctions (id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_vehicles_auction_id ON vehicles (auction_id);
"""

SCHEMA_OTHERS_SQL = """
CREATE TABLE IF NOT EXISTS others (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    auction_id TEXT NOT NULL,
    bidinfo TEXT,
    category TEXT NOT NULL,
    description TEXT NOT NULL,
    judicial_title TEXT NOT NULL,
    additional_information TEXT NOT NULL,
    visitable TEXT NOT NULL,
    charges TEXT NOT NULL,
    FOREIGN KEY (auction_id) REFERENCES auctions (id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_others_auction_id ON others (auction_id);
"""

SCHEMA_INGEST_RUNS_SQL = """
CREATE TABLE IF NOT EXISTS ingest_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    kind TEXT NOT NULL,
    started_at TEXT NOT NULL,
    finished_at TEXT,
    status TEXT,
    ok_count INTEGER DEFAULT 0,
    error_count INTEGER DEFAULT 0,
    total_count INTEGER DEFAULT 0,
    notes TEXT
);
CREATE INDEX IF NOT EXISTS idx_ingest_runs_kind ON ingest_runs (kind);
"""

CORE_SCHEMA_SQL = (
    SCHEMA_MANAGEMENTS_SQL,
    SCHEMA_AUCTIONS_SQL,
    SCHEMA_PROPERTIES_SQL,
    SCHEMA_VEHICLES_SQL,
    SCHEMA_OTHERS_SQL,
)
