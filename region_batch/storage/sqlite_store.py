"""
SQLite-backed region store and identity directory.

Zero external dependencies (stdlib sqlite3). Uses WAL mode for concurrent read
safety. Every ``set_flag`` commits on its own: a batch is not a transaction.

Schema: 4 tables covering worlds, regions, region flags and known players.
Flag values and domains are stored as JSON.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping

from region_batch.errors import UnknownIdentity, WorldUnavailable
from region_batch.identity import IdentityResolver
from region_batch.regions.models import Domain, Identity, Region
from region_batch.storage.region_store import RegionStore

LOG = logging.getLogger("storage.sqlite_store")

_SCHEMA_SQL = """
-- Region containers
CREATE TABLE IF NOT EXISTS worlds (
    name TEXT PRIMARY KEY
);

-- Regions (rowid gives the natural iteration order)
CREATE TABLE IF NOT EXISTS regions (
    world TEXT NOT NULL,
    id TEXT NOT NULL,
    parent_id TEXT,
    owners_json TEXT,
    members_json TEXT,
    UNIQUE (world, id)
);

-- Flag values
CREATE TABLE IF NOT EXISTS region_flags (
    world TEXT NOT NULL,
    region_id TEXT NOT NULL,
    flag_key TEXT NOT NULL,
    value_json TEXT NOT NULL,
    PRIMARY KEY (world, region_id, flag_key)
);

-- Known players (online and previously seen)
CREATE TABLE IF NOT EXISTS players (
    unique_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    groups_json TEXT,
    online INTEGER DEFAULT 0,
    last_seen TEXT
);

-- Indexes
CREATE INDEX IF NOT EXISTS idx_regions_world ON regions(world);
CREATE INDEX IF NOT EXISTS idx_flags_region ON region_flags(world, region_id);
CREATE INDEX IF NOT EXISTS idx_players_name ON players(name COLLATE NOCASE);
"""


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Flag value of type {type(value).__name__} is not JSON serializable")


def _connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    conn.executescript(_SCHEMA_SQL)
    conn.commit()
    return conn


class SQLiteRegionStore(RegionStore):
    """SQLite-backed region storage."""

    def __init__(self, db_path: Path) -> None:
        self._conn = _connect(db_path)

    # ── Worlds ────────────────────────────────────────────────────────

    def worlds(self) -> list[str]:
        rows = self._conn.execute("SELECT name FROM worlds ORDER BY rowid").fetchall()
        return [r[0] for r in rows]

    def add_world(self, world: str) -> None:
        self._conn.execute("INSERT OR IGNORE INTO worlds(name) VALUES (?)", (world,))
        self._conn.commit()

    def _has_world(self, world: str) -> bool:
        row = self._conn.execute("SELECT 1 FROM worlds WHERE name = ?", (world,)).fetchone()
        return row is not None

    # ── Regions ───────────────────────────────────────────────────────

    def regions_of(self, world: str) -> Mapping[str, Region]:
        if not self._has_world(world):
            raise WorldUnavailable(world)

        flags: dict[str, dict[str, Any]] = {}
        for region_id, key, value_json in self._conn.execute(
            "SELECT region_id, flag_key, value_json FROM region_flags WHERE world = ? ORDER BY rowid",
            (world,),
        ):
            flags.setdefault(region_id, {})[key] = json.loads(value_json)

        regions: dict[str, Region] = {}
        for rid, parent_id, owners_json, members_json in self._conn.execute(
            "SELECT id, parent_id, owners_json, members_json "
            "FROM regions WHERE world = ? ORDER BY rowid",
            (world,),
        ):
            regions[rid] = Region(
                id=rid,
                parent_id=parent_id,
                owners=Domain.from_dict(json.loads(owners_json) if owners_json else None),
                members=Domain.from_dict(json.loads(members_json) if members_json else None),
                flags=flags.get(rid, {}),
            )
        LOG.debug("Loaded %d regions for world %s", len(regions), world)
        return regions

    def add_region(self, world: str, region: Region) -> None:
        cur = self._conn.cursor()
        cur.execute("INSERT OR IGNORE INTO worlds(name) VALUES (?)", (world,))
        if region.parent_id is not None:
            parent = cur.execute(
                "SELECT 1 FROM regions WHERE world = ? AND id = ?",
                (world, region.parent_id),
            ).fetchone()
            if parent is None:
                self._conn.rollback()
                raise ValueError(f"Parent {region.parent_id!r} of {region.id!r} not found in world {world!r}")

        # Upsert keeps the original rowid, and with it the iteration order.
        cur.execute(
            "INSERT INTO regions (world, id, parent_id, owners_json, members_json) "
            "VALUES (?, ?, ?, ?, ?) "
            "ON CONFLICT(world, id) DO UPDATE SET parent_id = excluded.parent_id, "
            "owners_json = excluded.owners_json, "
            "members_json = excluded.members_json",
            (
                world,
                region.id,
                region.parent_id,
                json.dumps(region.owners.to_dict()),
                json.dumps(region.members.to_dict()),
            ),
        )
        cur.execute("DELETE FROM region_flags WHERE world = ? AND region_id = ?", (world, region.id))
        cur.executemany(
            "INSERT INTO region_flags (world, region_id, flag_key, value_json) VALUES (?, ?, ?, ?)",
            [
                (world, region.id, key, json.dumps(value, default=_json_default))
                for key, value in region.flags.items()
            ],
        )
        self._conn.commit()

    def set_flag(self, world: str, region_id: str, flag_key: str, value: Any) -> bool:
        cur = self._conn.cursor()
        exists = cur.execute(
            "SELECT 1 FROM regions WHERE world = ? AND id = ?",
            (world, region_id),
        ).fetchone()
        if exists is None:
            LOG.warning("Cannot set flag %s: region %s missing in %s", flag_key, region_id, world)
            return False

        if value is None:
            cur.execute(
                "DELETE FROM region_flags WHERE world = ? AND region_id = ? AND flag_key = ?",
                (world, region_id, flag_key),
            )
        else:
            cur.execute(
                "INSERT INTO region_flags (world, region_id, flag_key, value_json) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(world, region_id, flag_key) DO UPDATE SET value_json = excluded.value_json",
                (world, region_id, flag_key, json.dumps(value, default=_json_default)),
            )
        self._conn.commit()
        return True

    def close(self) -> None:
        self._conn.close()


class SQLiteIdentityDirectory(IdentityResolver):
    """Player directory persisted next to the regions."""

    def __init__(self, db_path: Path) -> None:
        self._conn = _connect(db_path)

    def remember(self, identity: Identity) -> None:
        """Record (or refresh) a player sighting."""
        now = datetime.now(timezone.utc).isoformat()
        self._conn.execute(
            "INSERT INTO players (unique_id, name, groups_json, online, last_seen) VALUES (?, ?, ?, ?, ?) "
            "ON CONFLICT(unique_id) DO UPDATE SET name = excluded.name, groups_json = excluded.groups_json, "
            "online = excluded.online, last_seen = excluded.last_seen",
            (identity.unique_id, identity.name, json.dumps(sorted(identity.groups)), int(identity.online), now),
        )
        self._conn.commit()

    def set_online(self, unique_ids: Iterable[str]) -> None:
        """Mark exactly the given players as connected."""
        ids = list(unique_ids)
        cur = self._conn.cursor()
        cur.execute("UPDATE players SET online = 0")
        cur.executemany("UPDATE players SET online = 1 WHERE unique_id = ?", [(i,) for i in ids])
        self._conn.commit()

    def resolve(self, name: str | None) -> Identity:
        if not name:
            raise UnknownIdentity(name)
        row = self._conn.execute(
            "SELECT unique_id, name, groups_json, online FROM players "
            "WHERE name = ? COLLATE NOCASE ORDER BY online DESC, last_seen DESC LIMIT 1",
            (name,),
        ).fetchone()
        if row is None:
            raise UnknownIdentity(name)
        unique_id, stored_name, groups_json, online = row
        return Identity(
            unique_id=unique_id,
            name=stored_name,
            groups=frozenset(json.loads(groups_json) if groups_json else ()),
            online=bool(online),
        )

    def close(self) -> None:
        self._conn.close()
