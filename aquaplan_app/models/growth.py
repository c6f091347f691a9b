from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple


@dataclass(slots=True, frozen=True)
class GrowthSample:
    """One point of a growth curve: cycle week and expected individual weight (g)."""
    week: float
    weight_g: float


@dataclass(slots=True, frozen=True)
class GrowthCurve:
    """
    Expected individual weight per cycle week for one genetic line.
    Samples are stored sorted by week; weight must not decrease with week.
    """
    genetics_id: int
    samples: Tuple[GrowthSample, ...] = field(default_factory=tuple)
    name: str = ""

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.samples, key=lambda s: s.week))
        for prev, cur in zip(ordered, ordered[1:]):
            if cur.week == prev.week:
                raise ValueError(
                    f"Growth curve {self.genetics_id} has two samples for week {cur.week}"
                )
            if cur.weight_g < prev.weight_g:
                raise ValueError(
                    f"Growth curve {self.genetics_id} decreases between weeks "
                    f"{prev.week} and {cur.week}"
                )
        object.__setattr__(self, "samples", ordered)

    @classmethod
    def from_points(
        cls, genetics_id: int, points: Iterable[Tuple[float, float]], name: str = ""
    ) -> "GrowthCurve":
        return cls(
            genetics_id=genetics_id,
            samples=tuple(GrowthSample(float(w), float(g)) for w, g in points),
            name=name,
        )

    @property
    def weeks(self) -> list[float]:
        return [s.week for s in self.samples]

    @property
    def weights(self) -> list[float]:
        return [s.weight_g for s in self.samples]

    def __bool__(self) -> bool:
        return bool(self.samples)
