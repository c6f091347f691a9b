"""
Week x tank occupancy grid.

Cells are addressed by ``(tank_id, week)`` with zero-based weeks relative to
the start of the planning horizon. A missing key is a READY cell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Mapping, Tuple

if TYPE_CHECKING:
    from aquaplan_app.models.plan import AssignmentCell

CellKey = Tuple[int, int]


class CellState(Enum):
    READY = "Ready"
    NURSERY = "Nursery"
    GROWOUT = "Growout"
    RESERVOIR = "Reservoir"
    MAINTENANCE = "Maintenance"
    OUT_OF_ORDER = "Out of order"
    # Any other non-empty label stored by the farm; the text lives in OccupancyCell.label
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: str | None) -> "CellState":
        if label is None:
            return cls.READY
        text = str(label).strip()
        if not text:
            return cls.READY
        for state in cls:
            if state is not cls.OTHER and state.value.lower() == text.lower():
                return state
        return cls.OTHER


@dataclass(slots=True, frozen=True)
class OccupancyCell:
    state: CellState = CellState.READY
    generation: str = ""
    genetics_id: int | None = None
    duration: int | None = None
    # Original text for OTHER cells
    label: str = ""

    @property
    def is_available(self) -> bool:
        return self.state is CellState.READY

    @property
    def display_label(self) -> str:
        return self.label if self.state is CellState.OTHER else self.state.value


READY_CELL = OccupancyCell()


@dataclass(slots=True, frozen=True)
class OccupancyGrid:
    """
    Immutable sparse occupancy grid. Use ``merged`` to obtain a new grid with
    extra assignments; the original is never modified.
    """
    cells: Mapping[CellKey, OccupancyCell] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    @classmethod
    def from_labels(
        cls,
        labels: Mapping[CellKey, str],
        generations: Mapping[CellKey, str] | None = None,
    ) -> "OccupancyGrid":
        """Build a grid from plain ``{(tank_id, week): "Nursery"}`` style data."""
        generations = generations or {}
        cells: Dict[CellKey, OccupancyCell] = {}
        for key, label in labels.items():
            state = CellState.from_label(label)
            if state is CellState.READY:
                continue
            cells[key] = OccupancyCell(
                state=state,
                generation=generations.get(key, ""),
                label=str(label).strip() if state is CellState.OTHER else "",
            )
        return cls(cells)

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, tank_id: int, week: int) -> OccupancyCell:
        return self.cells.get((tank_id, week), READY_CELL)

    def is_available(self, tank_id: int, week: int) -> bool:
        return self.cell(tank_id, week).is_available

    def occupied(self) -> Iterator[Tuple[CellKey, OccupancyCell]]:
        """Yield ``((tank_id, week), cell)`` for every non-READY cell, sorted by key."""
        for key in sorted(self.cells):
            cell = self.cells[key]
            if not cell.is_available:
                yield key, cell

    def merged(self, assignments: Iterable["AssignmentCell"]) -> "OccupancyGrid":
        """Return a fresh grid with the given assignment cells written over this one."""
        cells = dict(self.cells)
        for a in assignments:
            cells[(a.tank_id, a.week)] = a.as_occupancy()
        return OccupancyGrid(cells)
