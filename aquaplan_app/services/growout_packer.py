"""
Greedy bin packing of nursery survivors into growout tanks.

Tanks are taken by earliest free window, then largest area, and each is
filled up to its stocking capacity. Not globally optimal, but deterministic
and stable when the multi-cycle search calls it repeatedly with the same
occupancy.
"""

from __future__ import annotations

from typing import List, Sequence

from aquaplan_app.models import GrowoutAssignment, OccupancyGrid, Tank
from aquaplan_app.services.occupancy_index import find_first_free_window


def optimize_growout_assignment(
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    survivor_count: int,
    density: float,
    start_week: int,
    duration: int,
    max_weeks: int,
) -> List[GrowoutAssignment]:
    """
    Distribute ``survivor_count`` across growout tanks.

    The result may place fewer than ``survivor_count``; the caller decides
    whether that is a failure.
    """
    candidates = []
    for tank in tanks:
        if not tank.is_growout:
            continue
        week = find_first_free_window(grid, tank.id, start_week, duration, max_weeks)
        if week is not None:
            candidates.append((tank, week))
    candidates.sort(key=lambda c: (c[1], -c[0].area_m2))

    assignments: List[GrowoutAssignment] = []
    remaining = survivor_count
    for tank, week in candidates:
        if remaining <= 0:
            break
        capacity = tank.capacity_at(density)
        assigned = min(remaining, capacity)
        if assigned <= 0:
            continue
        assignments.append(
            GrowoutAssignment(
                tank_id=tank.id,
                name=tank.name,
                area_m2=tank.area_m2,
                assigned_count=assigned,
                start_week=week,
                end_week=week + duration - 1,
                utilization=assigned / (tank.area_m2 * density),
            )
        )
        remaining -= assigned
    return assignments
