"""
Planning inputs and results for single and multi-cycle seeding.

These are plain dataclasses so a persistence collaborator can store them
directly; nothing here talks to storage.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from aquaplan_app.config.limits import (
    DEFAULT_MAX_INTERVAL_WEEKS,
    DEFAULT_MIN_GAP_WEEKS,
    DEFAULT_PREFERRED_INTERVAL_WEEKS,
)
from aquaplan_app.models.occupancy import CellState, OccupancyCell


@dataclass(slots=True, frozen=True)
class CycleParameters:
    number_of_nurseries: int = 1
    # larvae/m²
    nursery_density: float = 0.0
    # juveniles/m²
    growout_density: float = 0.0
    # Mortality across the whole cycle, 0-100
    mortality_percentage: float = 0.0
    nursery_duration: int = 1
    # Used only when no target weight is given
    growout_duration: int = 1
    genetics_id: int = 0
    generation: str = ""
    start_week: int = 0
    target_weight_g: Optional[float] = None

    def with_start_week(self, start_week: int) -> "CycleParameters":
        return replace(self, start_week=start_week)


@dataclass(slots=True, frozen=True)
class MultiCycleParameters:
    """Cycle template plus cadence settings. ``cycle.start_week`` is ignored."""
    cycle: CycleParameters
    number_of_cycles: int = 1
    preferred_interval_weeks: int = DEFAULT_PREFERRED_INTERVAL_WEEKS
    max_interval_weeks: int = DEFAULT_MAX_INTERVAL_WEEKS
    min_gap_weeks: int = DEFAULT_MIN_GAP_WEEKS
    start_from_week: int = 0

    def for_start_week(self, start_week: int) -> CycleParameters:
        return self.cycle.with_start_week(start_week)


@dataclass(slots=True)
class NurseryAssignment:
    tank_id: int
    name: str
    area_m2: float
    larvae_capacity: float
    start_week: int
    # Inclusive
    end_week: int

    @property
    def weeks(self) -> int:
        return self.end_week - self.start_week + 1


@dataclass(slots=True)
class GrowoutAssignment:
    tank_id: int
    name: str
    area_m2: float
    assigned_count: int
    start_week: int
    end_week: int
    # assigned / (area * density), 0-1
    utilization: float
    adjusted_by_sampling: bool = False

    @property
    def weeks(self) -> int:
        return self.end_week - self.start_week + 1


@dataclass(slots=True)
class AlternativeTank:
    """Eligible tank the plan did not use, with its earliest free window."""
    tank_id: int
    name: str
    area_m2: float
    earliest_week: int


@dataclass(slots=True)
class TankConflict:
    tank_id: int
    week: int
    existing_state: str
    conflict_generation: str = ""


@dataclass(slots=True)
class PlanSummary:
    total_larvae: float = 0.0
    expected_survivors: int = 0
    nursery_area_used: float = 0.0
    growout_area_required: float = 0.0
    growout_area_assigned: float = 0.0
    # Percent, 0-100
    survival_rate: float = 0.0
    # Fraction per week, reported only
    weekly_mortality_rate: float = 0.0
    nursery_duration: int = 0
    growout_duration: int = 0


@dataclass(slots=True, frozen=True)
class AssignmentCell:
    """One (tank, week) row of a plan, as handed to persistence."""
    tank_id: int
    week: int
    state: CellState
    generation: str
    genetics_id: int
    duration: int

    def as_occupancy(self) -> OccupancyCell:
        return OccupancyCell(
            state=self.state,
            generation=self.generation,
            genetics_id=self.genetics_id,
            duration=self.duration,
        )


@dataclass(slots=True)
class SeedingPlan:
    nursery_tanks: List[NurseryAssignment] = field(default_factory=list)
    growout_tanks: List[GrowoutAssignment] = field(default_factory=list)
    nursery_alternatives: List[AlternativeTank] = field(default_factory=list)
    growout_alternatives: List[AlternativeTank] = field(default_factory=list)
    summary: PlanSummary = field(default_factory=PlanSummary)
    assignment_table: List[AssignmentCell] = field(default_factory=list)

    @property
    def start_week(self) -> int:
        return min(n.start_week for n in self.nursery_tanks)

    @property
    def end_week(self) -> int:
        ends = [n.end_week for n in self.nursery_tanks] + [g.end_week for g in self.growout_tanks]
        return max(ends)

    @property
    def growout_start_week(self) -> int:
        return max(n.end_week for n in self.nursery_tanks) + 1

    @property
    def assigned_survivors(self) -> int:
        return sum(g.assigned_count for g in self.growout_tanks)

    @property
    def tank_weeks(self) -> int:
        return len(self.assignment_table)


class ScheduleOutcome(Enum):
    DONE = "done"
    PARTIAL_FAILURE = "partial_failure"


@dataclass(slots=True)
class PlacedCycle:
    cycle_id: str
    start_week: int
    end_week: int
    parameters: CycleParameters
    plan: SeedingPlan
    interval_from_previous: Optional[int] = None


@dataclass(slots=True)
class MultiCycleSummary:
    total_cycles: int = 0
    requested_cycles: int = 0
    total_larvae: float = 0.0
    total_expected_survivors: int = 0
    average_interval: float = 0.0
    # Percent of tank-weeks used over the span of the run
    utilization_efficiency: float = 0.0
    weeks_covered: int = 0


@dataclass(slots=True)
class MultiCyclePlan:
    cycles: List[PlacedCycle] = field(default_factory=list)
    summary: MultiCycleSummary = field(default_factory=MultiCycleSummary)
    # Cells added by this run only
    assignment_table: List[AssignmentCell] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    outcome: ScheduleOutcome = ScheduleOutcome.DONE
