"""Load market trade-value CSVs and overlay them on snapshot players."""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from pydynasty.models import PlayerInfo


logger = logging.getLogger(__name__)

DEFAULT_VALUE_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "position": "position",
    "age": "age",
    "value_1qb": "value_1qb",
    "value_sf": "value_sf",
    "value_tep": "value_tep",
    "rank": "rank",
}

_PLACEHOLDER_VALUES = {"", "n/a", "na", "-", "new", "- / -"}
_NAME_SUFFIX_TOKENS = {"jr", "sr", "ii", "iii", "iv", "v"}


class MarketValueRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_position: Optional[str] = None
    raw_age: Optional[str] = None
    raw_value_1qb: Optional[str] = None
    raw_value_sf: Optional[str] = None
    raw_value_tep: Optional[str] = None
    raw_rank: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "MarketValueRow":
        def extract(key: str) -> Optional[str]:
            spec = mapping.get(key)
            if not spec:
                return None
            if "|" in spec:
                parts = [row.get(col.strip(), "").strip() for col in spec.split("|") if row.get(col.strip())]
                return " ".join(parts) if parts else None
            value = row.get(spec)
            return value.strip() if value is not None else None

        return cls(
            raw_id=extract("player_id") or None,
            raw_name=extract("name") or "",
            raw_position=extract("position"),
            raw_age=extract("age"),
            raw_value_1qb=extract("value_1qb"),
            raw_value_sf=extract("value_sf"),
            raw_value_tep=extract("value_tep"),
            raw_rank=extract("rank"),
        )


@dataclass(frozen=True)
class MergeReport:
    total_players: int
    matched_players: int
    players_missing_value: List[str]
    unmatched_value_rows: List[str]


def load_market_value_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[MarketValueRow]:
    mapping = mapping or DEFAULT_VALUE_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [MarketValueRow.from_mapping(row, mapping) for row in reader]
    return rows


def _parse_number(raw: Optional[str], *, field: str) -> Optional[float]:
    if raw is None:
        return None
    text = raw.strip()
    if text.lower() in _PLACEHOLDER_VALUES:
        return None
    cleaned = re.sub(r"[^0-9.\-]", "", text.replace("−", "-").replace("–", "-"))
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"{field} '{raw}' is not numeric") from None


def normalize_name(name: str) -> str:
    lowered = name.lower().replace("'", "").replace("’", "")
    cleaned = re.sub(r"[^a-z0-9]+", " ", lowered)
    tokens = [tok for tok in cleaned.split() if tok and tok not in _NAME_SUFFIX_TOKENS]
    return " ".join(tokens)


def _name_key(name: str, position: Optional[str]) -> str:
    return f"{normalize_name(name)}::{(position or '').upper()}"


def _row_update(row: MarketValueRow, *, as_of_year: Optional[int]) -> Dict[str, object]:
    update: Dict[str, object] = {}
    std = _parse_number(row.raw_value_1qb, field="value_1qb")
    sf = _parse_number(row.raw_value_sf, field="value_sf")
    tep = _parse_number(row.raw_value_tep, field="value_tep")
    age = _parse_number(row.raw_age, field="age")
    rank = _parse_number(row.raw_rank, field="rank")
    if std is not None:
        update["trade_value_std"] = max(0.0, std)
    if sf is not None:
        update["trade_value_sf"] = max(0.0, sf)
    if tep is not None:
        update["trade_value_tep"] = max(0.0, tep)
    if age is not None and age >= 0:
        update["age"] = age
    if rank is not None:
        update["rank"] = int(rank)
    if as_of_year is not None:
        update["as_of_year"] = as_of_year
    return update


def merge_market_values(
    players: Mapping[str, PlayerInfo],
    rows: Sequence[MarketValueRow],
    *,
    as_of_year: Optional[int] = None,
) -> Tuple[Dict[str, PlayerInfo], MergeReport]:
    """Overlay market values onto known players.

    Rows match by player id first, then by normalized name and position.
    Rows that match no known player are reported, not added.
    """

    merged: Dict[str, PlayerInfo] = dict(players)
    by_name: Dict[str, str] = {}
    for player_id, info in players.items():
        if info.full_name:
            by_name.setdefault(_name_key(info.full_name, info.position), player_id)

    matched: set[str] = set()
    unmatched_rows: List[str] = []
    for row in rows:
        player_id = row.raw_id if row.raw_id in merged else None
        if player_id is None and row.raw_name:
            player_id = by_name.get(_name_key(row.raw_name, row.raw_position))
        if player_id is None:
            unmatched_rows.append(row.raw_name or (row.raw_id or ""))
            continue
        merged[player_id] = merged[player_id].model_copy(update=_row_update(row, as_of_year=as_of_year))
        matched.add(player_id)

    missing = [info.full_name or player_id for player_id, info in merged.items() if player_id not in matched]
    if unmatched_rows:
        logger.info("%s market value rows matched no known player", len(unmatched_rows))
    report = MergeReport(
        total_players=len(merged),
        matched_players=len(matched),
        players_missing_value=missing,
        unmatched_value_rows=unmatched_rows,
    )
    return merged, report
