"""Parse draft-pick value CSVs into tiered table entries."""

from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from pydynasty.models import PickValueEntry


logger = logging.getLogger(__name__)

# (tokens that must all appear, round, tier), checked in order
_DESCRIPTION_RULES: Tuple[Tuple[Tuple[str, ...], int, str], ...] = (
    (("1.01", "1.03"), 1, "1.01-1.03"),
    (("1.04", "1.06"), 1, "1.04-1.06"),
    (("1.07", "1.12"), 1, "1.07-1.12"),
    (("early second",), 2, "early"),
    (("late second",), 2, "late"),
    (("early third",), 3, "early"),
    (("late third",), 3, "late"),
    (("all others",), 4, "all"),
    (("4th",), 4, "all"),
    (("later",), 4, "all"),
)


@dataclass
class PickValueImport:
    entries: List[PickValueEntry] = field(default_factory=list)
    rows_skipped: int = 0

    @property
    def years(self) -> List[int]:
        return sorted({entry.year for entry in self.entries})


def parse_pick_description(description: str) -> Optional[Tuple[int, str]]:
    """Map a free-text pick label such as "Early Second" to (round, tier)."""

    normalized = description.strip().lower()
    for tokens, rnd, tier in _DESCRIPTION_RULES:
        if all(token in normalized for token in tokens):
            return rnd, tier
    return None


def _parse_number(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    cleaned = re.sub(r"[^0-9.\-]", "", raw.strip())
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def _find_column(fieldnames: List[str], predicate) -> Optional[str]:
    for name in fieldnames:
        if predicate(name):
            return name
    return None


def _resolve_columns(fieldnames: List[str]) -> Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
    return (
        _find_column(fieldnames, lambda k: "year" in k.lower()),
        _find_column(fieldnames, lambda k: "description" in k.lower()),
        _find_column(fieldnames, lambda k: "1qb" in k.lower()),
        _find_column(fieldnames, lambda k: "superflex" in k.lower() or k.lower() == "sf_value"),
    )


def parse_pick_value_rows(rows: List[Mapping[str, str]], fieldnames: List[str]) -> PickValueImport:
    year_col, desc_col, one_qb_col, sf_col = _resolve_columns(fieldnames)
    result = PickValueImport()
    if not (year_col and desc_col and one_qb_col and sf_col):
        logger.warning("Pick value CSV is missing required columns: %s", ", ".join(fieldnames))
        result.rows_skipped = len(rows)
        return result

    for row in rows:
        year = _parse_number(row.get(year_col))
        description = (row.get(desc_col) or "").strip()
        value_1qb = _parse_number(row.get(one_qb_col))
        value_sf = _parse_number(row.get(sf_col))
        if not year or not description or value_1qb is None or value_sf is None:
            result.rows_skipped += 1
            continue
        parsed = parse_pick_description(description)
        if parsed is None:
            logger.info("Skipping unrecognized pick description: %r", description)
            result.rows_skipped += 1
            continue
        rnd, tier = parsed
        result.entries.append(
            PickValueEntry(
                year=int(year),
                round=rnd,
                tier=tier,
                value_1qb=max(0.0, value_1qb),
                value_sf=max(0.0, value_sf),
            )
        )
    return result


def load_pick_value_csv(path: Path) -> PickValueImport:
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f, skipinitialspace=True)
        fieldnames = [name.strip() for name in (reader.fieldnames or [])]
        reader.fieldnames = fieldnames
        rows = list(reader)
    result = parse_pick_value_rows(rows, fieldnames)
    logger.info(
        "Loaded %s pick values for years %s (%s skipped)",
        len(result.entries),
        ", ".join(str(year) for year in result.years) or "-",
        result.rows_skipped,
    )
    return result
