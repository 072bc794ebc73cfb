"""Composite score weight configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Dict, Mapping, Tuple


COMPONENTS: Tuple[str, ...] = ("starters", "bench", "picks", "window", "age")


@dataclass(frozen=True)
class CompositeWeights:
    """Immutable weights for the five ranked components.

    Weights need not sum to 100; the composite divides by their total.
    """

    starters: float = 45.0
    bench: float = 15.0
    picks: float = 25.0
    window: float = 10.0
    age: float = 5.0

    def __post_init__(self) -> None:
        for name in COMPONENTS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"weight {name!r} must be non-negative, got {value}")
        if self.total <= 0:
            raise ValueError("weights must sum to a positive total")

    @property
    def total(self) -> float:
        return sum(getattr(self, name) for name in COMPONENTS)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def with_overrides(self, overrides: Mapping[str, float]) -> "CompositeWeights":
        unknown = set(overrides) - set(COMPONENTS)
        if unknown:
            raise KeyError(f"Unknown weight component(s): {', '.join(sorted(unknown))}")
        return replace(self, **{key: float(value) for key, value in overrides.items()})

    @classmethod
    def from_mapping(cls, data: Mapping[str, float] | None) -> "CompositeWeights":
        if not data:
            return cls()
        return cls().with_overrides(data)


DEFAULT_WEIGHTS = CompositeWeights()
