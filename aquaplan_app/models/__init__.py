"""
Domain models for the aquaplan seeding scheduler.

These are pure Python/domain classes; persistence lives outside the engine.
"""

from aquaplan_app.models.tank import Tank, TankKind
from aquaplan_app.models.occupancy import CellState, OccupancyCell, OccupancyGrid, READY_CELL
from aquaplan_app.models.growth import GrowthCurve, GrowthSample
from aquaplan_app.models.plan import (
    AlternativeTank,
    AssignmentCell,
    CycleParameters,
    GrowoutAssignment,
    MultiCycleParameters,
    MultiCyclePlan,
    MultiCycleSummary,
    NurseryAssignment,
    PlacedCycle,
    PlanSummary,
    ScheduleOutcome,
    SeedingPlan,
    TankConflict,
)

__all__ = [
    "Tank",
    "TankKind",
    "CellState",
    "OccupancyCell",
    "OccupancyGrid",
    "READY_CELL",
    "GrowthCurve",
    "GrowthSample",
    "AlternativeTank",
    "AssignmentCell",
    "CycleParameters",
    "GrowoutAssignment",
    "MultiCycleParameters",
    "MultiCyclePlan",
    "MultiCycleSummary",
    "NurseryAssignment",
    "PlacedCycle",
    "PlanSummary",
    "ScheduleOutcome",
    "SeedingPlan",
    "TankConflict",
]
