"""
Scheduling services: occupancy queries, growth projection, tank allocation
and single/multi-cycle planning.
"""

from aquaplan_app.services.errors import (
    DataImportError,
    InsufficientGrowoutCapacity,
    InsufficientNurseryCapacity,
    NoAvailableWindow,
    OverlapDetected,
    PlanningParameterError,
    SchedulingError,
)
from aquaplan_app.services.growth_curve import GrowthCurveProjector
from aquaplan_app.services.seeding_optimizer import generate_plan, generate_single_cycle_plan
from aquaplan_app.services.multi_cycle_planner import generate_multi_cycle_plan, schedule_multiple

__all__ = [
    "DataImportError",
    "InsufficientGrowoutCapacity",
    "InsufficientNurseryCapacity",
    "NoAvailableWindow",
    "OverlapDetected",
    "PlanningParameterError",
    "SchedulingError",
    "GrowthCurveProjector",
    "generate_plan",
    "generate_single_cycle_plan",
    "generate_multi_cycle_plan",
    "schedule_multiple",
]
