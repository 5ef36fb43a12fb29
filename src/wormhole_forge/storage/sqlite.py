"""SQLite-backed universe storage."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from wormhole_forge.models import Place, Wormhole
from wormhole_forge.storage.base import duplicate_place, duplicate_wormhole, require_saved_endpoints

SCHEMA = """
CREATE TABLE IF NOT EXISTS places (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    x INTEGER NOT NULL,
    y INTEGER NOT NULL,
    energy_production INTEGER NOT NULL DEFAULT 0,
    UNIQUE (x, y)
);
CREATE TABLE IF NOT EXISTS wormholes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source_id INTEGER NOT NULL REFERENCES places (id),
    destination_id INTEGER NOT NULL REFERENCES places (id),
    distance INTEGER NOT NULL,
    UNIQUE (source_id, destination_id)
);
"""


class SqliteUniverseStore:
    """Stores places and wormholes in SQLite.

    Writes are not committed until the surrounding ``transaction()`` block
    exits cleanly; any exception inside it rolls every write back.
    """

    def __init__(self, path: str | Path, *, logger: logging.Logger | None = None) -> None:
        self._path = str(path)
        if self._path != ":memory:":
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        self._logger = logger or logging.getLogger("wormhole_forge.storage.sqlite")
        self._conn = sqlite3.connect(self._path)
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._conn.executescript(SCHEMA)
        self._logger.debug("store_opened", extra={"path": self._path})

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> SqliteUniverseStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[SqliteUniverseStore]:
        try:
            yield self
        except BaseException:
            self._conn.rollback()
            self._logger.warning("transaction_rolled_back", extra={"path": self._path})
            raise
        self._conn.commit()

    def save_place(self, place: Place) -> None:
        try:
            if place.id is None or place.id <= 0:
                cursor = self._conn.execute(
                    "INSERT INTO places (name, x, y, energy_production) VALUES (?, ?, ?, ?)",
                    (place.name, place.x, place.y, place.energy_production),
                )
                place.id = cursor.lastrowid
            else:
                self._conn.execute(
                    "UPDATE places SET name = ?, x = ?, y = ?, energy_production = ? WHERE id = ?",
                    (place.name, place.x, place.y, place.energy_production, place.id),
                )
        except sqlite3.IntegrityError as exc:
            raise duplicate_place(place) from exc

    def save_wormhole(self, wormhole: Wormhole) -> None:
        require_saved_endpoints(wormhole)
        try:
            if wormhole.id is None or wormhole.id <= 0:
                cursor = self._conn.execute(
                    "INSERT INTO wormholes (source_id, destination_id, distance) VALUES (?, ?, ?)",
                    (wormhole.source.id, wormhole.destination.id, wormhole.distance),
                )
                wormhole.id = cursor.lastrowid
            else:
                self._conn.execute(
                    "UPDATE wormholes SET source_id = ?, destination_id = ?, distance = ? WHERE id = ?",
                    (wormhole.source.id, wormhole.destination.id, wormhole.distance, wormhole.id),
                )
        except sqlite3.IntegrityError as exc:
            # Foreign key failures name no UNIQUE constraint and pass through.
            if "UNIQUE" not in str(exc):
                raise
            raise duplicate_wormhole(wormhole) from exc

    def list_places(self) -> list[Place]:
        rows = self._conn.execute("SELECT id, name, x, y, energy_production FROM places ORDER BY id")
        return [
            Place(id=row_id, name=name, x=x, y=y, energy_production=energy)
            for row_id, name, x, y, energy in rows
        ]

    def list_wormholes(self) -> list[Wormhole]:
        places = {place.id: place for place in self.list_places()}
        rows = self._conn.execute(
            "SELECT id, source_id, destination_id, distance FROM wormholes ORDER BY id"
        )
        return [
            Wormhole(id=row_id, source=places[source_id], destination=places[destination_id], distance=distance)
            for row_id, source_id, destination_id, distance in rows
        ]
