"""Persist and load composite weight profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from pydynasty.config.weights import CompositeWeights


@dataclass
class WeightProfile:
    weights: Dict[str, float]
    value_mapping: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "WeightProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            weights=data.get("weights", {}),
            value_mapping=data.get("value_mapping", {}),
        )

    def save(self, path: Path) -> None:
        payload = {
            "weights": self.weights,
            "value_mapping": self.value_mapping,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_weights(self) -> CompositeWeights:
        return CompositeWeights.from_mapping(self.weights)
