"""Input adapters that normalize league snapshots and value sheets."""

from .market_values import (
    DEFAULT_VALUE_MAPPING,
    MarketValueRow,
    MergeReport,
    load_market_value_csv,
    merge_market_values,
)
from .pick_values import PickValueImport, load_pick_value_csv, parse_pick_description
from .snapshot import apply_value_overlays, load_league_snapshot

__all__ = [
    "DEFAULT_VALUE_MAPPING",
    "MarketValueRow",
    "MergeReport",
    "PickValueImport",
    "apply_value_overlays",
    "load_league_snapshot",
    "load_market_value_csv",
    "load_pick_value_csv",
    "merge_market_values",
    "parse_pick_description",
]
