# src/stats_store.py

from __future__ import annotations

import json
import logging
import os
import sqlite3
import threading
from abc import ABC, abstractmethod
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from core.models import PriceStat, SearchStat
from core.scoring import round_fare

logger = logging.getLogger(__name__)


DEFAULT_DB_PATH = os.path.join("data", "flight_stats.sqlite")
STATS_KEY = "flightStats"
MAX_PRICE_RECORDS = 1000
TREND_WINDOW = 10
STABLE_TREND_PCT = 2


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _to_record(stat: Any) -> Dict[str, Any]:
    return {_camel(k): v for k, v in asdict(stat).items()}


def _empty_blob() -> Dict[str, List[Dict[str, Any]]]:
    return {"searches": [], "prices": []}


class StatsRepository(ABC):
    """Load/save contract for the statistics blob."""

    @abstractmethod
    def load(self) -> Dict[str, List[Dict[str, Any]]]:
        ...

    @abstractmethod
    def save(self, blob: Dict[str, List[Dict[str, Any]]]) -> None:
        ...


class SqliteStatsRepository(StatsRepository):
    """
    Keeps the whole statistics blob as one JSON document under a fixed key.
    A missing row, a missing array or an unreadable document all read as empty.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH, key: str = STATS_KEY):
        self.db_path = str(db_path)
        self.key = key
        _ensure_parent_dir(self.db_path)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )

    def load(self) -> Dict[str, List[Dict[str, Any]]]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?;", (self.key,)).fetchone()

        if not row:
            return _empty_blob()

        try:
            parsed = json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("Unreadable statistics blob under %r, treating as empty", self.key)
            return _empty_blob()

        if not isinstance(parsed, dict):
            return _empty_blob()
        return {
            "searches": list(parsed.get("searches") or []),
            "prices": list(parsed.get("prices") or []),
        }

    def save(self, blob: Dict[str, List[Dict[str, Any]]]) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                               updated_at = excluded.updated_at;
                """,
                (self.key, json.dumps(blob, ensure_ascii=False), _now_iso()),
            )


def _coalesce(df: pd.DataFrame, *columns: str) -> pd.Series:
    """First non-empty value across `columns`, row by row."""
    out = pd.Series([""] * len(df), index=df.index, dtype=object)
    for col in reversed(columns):
        if col in df.columns:
            values = df[col].fillna("").astype(str)
            out = values.where(values != "", out)
    return out


def _most_common(keys: pd.Series) -> Optional[tuple]:
    keys = keys[keys != ""]
    if keys.empty:
        return None
    # sort=False keeps first-seen order, so ties go to the earliest key
    counts = keys.groupby(keys, sort=False).size()
    top = counts.idxmax()
    return top, int(counts[top])


class FlightStatsStore:
    """
    Append-only log of searches and recommended prices, plus the small
    aggregation queries the statistics panel shows. Writes are serialized
    with a lock; price records are capped, oldest evicted first.
    """

    def __init__(self, repository: StatsRepository, max_price_records: int = MAX_PRICE_RECORDS):
        self.repository = repository
        self.max_price_records = max(1, int(max_price_records))
        self._lock = threading.Lock()

    # -- writes ---------------------------------------------------------------

    def record_search(
        self,
        origin: str,
        destination: str,
        duration_range_label: str,
        timestamp: Optional[str] = None,
    ) -> None:
        stat = SearchStat(origin, destination, duration_range_label, timestamp or _now_iso())
        with self._lock:
            blob = self.repository.load()
            blob["searches"].append(_to_record(stat))
            self.repository.save(blob)

    def record_price(
        self,
        origin: str,
        destination: str,
        origin_name: str,
        destination_name: str,
        recommended_price: float,
        season: str,
        airline: str,
        timestamp: Optional[str] = None,
    ) -> None:
        stat = PriceStat(
            origin=origin,
            destination=destination,
            origin_name=origin_name,
            destination_name=destination_name,
            recommended_price=recommended_price,
            season=season,
            airline=airline,
            timestamp=timestamp or _now_iso(),
        )
        with self._lock:
            blob = self.repository.load()
            blob["prices"].append(_to_record(stat))
            if len(blob["prices"]) > self.max_price_records:
                blob["prices"] = blob["prices"][-self.max_price_records:]
            self.repository.save(blob)

    # -- reads ----------------------------------------------------------------

    def read(self) -> Dict[str, List[Dict[str, Any]]]:
        return self.repository.load()

    def _searches_df(self) -> pd.DataFrame:
        return pd.DataFrame(self.read()["searches"])

    def _prices(self, origin: Optional[str], destination: Optional[str]) -> pd.Series:
        """Numeric recommended prices in record order; unusable records are skipped."""
        df = pd.DataFrame(self.read()["prices"])
        if df.empty or "recommendedPrice" not in df.columns:
            return pd.Series(dtype=float)

        if origin and destination:
            if "origin" not in df.columns or "destination" not in df.columns:
                return pd.Series(dtype=float)
            df = df[(df["origin"] == origin) & (df["destination"] == destination)]

        return pd.to_numeric(df["recommendedPrice"], errors="coerce").dropna()

    def most_searched_destination(self) -> Optional[Dict[str, Any]]:
        df = self._searches_df()
        if df.empty:
            return None
        # Older clients logged the destination as "country"
        top = _most_common(_coalesce(df, "destination", "country"))
        if top is None:
            return None
        return {"destination": top[0], "count": top[1]}

    def most_searched_duration(self) -> Optional[Dict[str, Any]]:
        df = self._searches_df()
        if df.empty:
            return None

        if "duration" in df.columns:
            df = df.assign(legacyDuration=df["duration"].map(
                lambda d: f"{float(d):g} วัน" if pd.notna(d) and d else ""))
        top = _most_common(_coalesce(df, "durationRange", "legacyDuration"))
        if top is None:
            return None
        return {"durationLabel": top[0], "count": top[1]}

    def total_search_count(self) -> int:
        return len(self.read()["searches"])

    def total_price_record_count(self) -> int:
        return len(self.read()["prices"])

    def average_price(self, origin: Optional[str] = None, destination: Optional[str] = None) -> Optional[int]:
        """Mean recommended price, for one route when both ends are given."""
        prices = self._prices(origin, destination)
        if prices.empty:
            return None
        return round_fare(float(prices.mean()))

    def price_trend(self, origin: Optional[str] = None, destination: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Compare the mean of the last 10 price records with the 10 before them.
        Moves under 2% report as stable.
        """
        prices = self._prices(origin, destination).astype(float)
        if len(prices) < 2:
            return None

        recent = prices.iloc[-TREND_WINDOW:]
        older = prices.iloc[-2 * TREND_WINDOW:-TREND_WINDOW]
        older_avg = older.mean() if not older.empty else 0.0
        if not older_avg:
            return None

        percentage = round_fare((recent.mean() - older_avg) / older_avg * 100)
        if abs(percentage) < STABLE_TREND_PCT:
            return {"direction": "stable", "percentage": 0}

        return {
            "direction": "up" if percentage > 0 else "down",
            "percentage": abs(percentage),
        }
