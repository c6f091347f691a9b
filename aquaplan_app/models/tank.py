from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class TankKind(Enum):
    NURSERY = "Nursery"
    GROWOUT = "Growout"
    RESERVOIR = "Reservoir"
    MAINTENANCE = "Maintenance"
    OUT_OF_ORDER = "Out of order"
    READY = "Ready"

    @classmethod
    def parse(cls, value: str) -> "TankKind":
        """Map a free-text kind ("growout", "Out of order", "OUT_OF_ORDER") to a member."""
        key = str(value).strip().replace("_", " ").lower()
        for kind in cls:
            if kind.value.lower() == key:
                return kind
        raise ValueError(f"Unknown tank kind: {value!r}")


@dataclass(slots=True, frozen=True)
class Tank:
    """
    Physical tank used by the planner. Reference data owned outside the
    scheduler; plans only read it.
    """
    id: int
    name: str = ""
    kind: TankKind = TankKind.GROWOUT
    # Usable water surface in m²
    area_m2: float = 0.0

    @property
    def is_nursery(self) -> bool:
        return self.kind is TankKind.NURSERY

    @property
    def is_growout(self) -> bool:
        return self.kind is TankKind.GROWOUT

    def capacity_at(self, density_per_m2: float) -> int:
        """Whole individuals the tank holds at the given stocking density."""
        return int(math.floor(self.area_m2 * density_per_m2))
