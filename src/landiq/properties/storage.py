from __future__ import annotations

import logging
import sqlite3
import time
import uuid
from pathlib import Path
from typing import List, Optional

from landiq.geo import validate_coordinate

from .models import PermitPrediction, SavedProperty


logger = logging.getLogger("landiq.store")

_COLUMNS = (
    "id, address, estimated_days, permit_type, confidence, risk_level, "
    "search_date, lat, lng, created_at"
)


class PropertyStore:
    """SQLite persistence for saved property predictions."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path)
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "PropertyStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _init_schema(self) -> None:
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS properties (
                id TEXT PRIMARY KEY,
                address TEXT NOT NULL,
                estimated_days INTEGER NOT NULL,
                permit_type TEXT NOT NULL,
                confidence INTEGER NOT NULL,
                risk_level TEXT NOT NULL,
                search_date TEXT NOT NULL,
                lat REAL NOT NULL,
                lng REAL NOT NULL,
                created_at REAL NOT NULL
            )
            """
        )
        self.conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_properties_created_at ON properties(created_at)"
        )
        self.conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_properties_address ON properties(address)"
        )
        self.conn.commit()

    @staticmethod
    def _row_to_property(row: sqlite3.Row) -> SavedProperty:
        return SavedProperty(
            id=str(row["id"]),
            address=str(row["address"]),
            estimated_days=int(row["estimated_days"]),
            permit_type=row["permit_type"],
            confidence=int(row["confidence"]),
            risk_level=row["risk_level"],
            search_date=str(row["search_date"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
            created_at=float(row["created_at"]),
        )

    def save(self, prediction: PermitPrediction) -> SavedProperty:
        if not (prediction.address or "").strip() or prediction.lat is None or prediction.lng is None:
            raise ValueError("Missing required property data")
        validate_coordinate(prediction.lat, prediction.lng)

        saved = SavedProperty(
            **prediction.model_dump(),
            id=uuid.uuid4().hex,
            created_at=time.time(),
        )
        self.conn.execute(
            f"INSERT INTO properties ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                saved.id,
                saved.address,
                saved.estimated_days,
                saved.permit_type,
                saved.confidence,
                saved.risk_level,
                saved.search_date,
                float(saved.lat),
                float(saved.lng),
                saved.created_at,
            ),
        )
        self.conn.commit()
        logger.info("saved property %s (%s)", saved.id, saved.address)
        return saved

    def get(self, property_id: str) -> Optional[SavedProperty]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM properties WHERE id=?", (property_id,)
        ).fetchone()
        if not row:
            return None
        return self._row_to_property(row)

    def delete(self, property_id: str) -> bool:
        cur = self.conn.execute("DELETE FROM properties WHERE id=?", (property_id,))
        self.conn.commit()
        deleted = cur.rowcount > 0
        if deleted:
            logger.info("deleted property %s", property_id)
        return deleted

    def list_recent(self, limit: Optional[int] = None) -> List[SavedProperty]:
        # rowid breaks ties between saves within the same clock tick.
        sql = f"SELECT {_COLUMNS} FROM properties ORDER BY created_at DESC, rowid DESC"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (max(0, int(limit)),)
        return [self._row_to_property(r) for r in self.conn.execute(sql, params).fetchall()]

    def list_addresses(self) -> List[str]:
        rows = self.conn.execute(
            "SELECT DISTINCT address FROM properties ORDER BY address"
        ).fetchall()
        return [str(r["address"]) for r in rows]

    def count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) AS n FROM properties").fetchone()
        return int(row["n"])
