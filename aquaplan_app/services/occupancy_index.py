"""
Availability queries over an occupancy grid.

Scanning is linear from the requested week and the first fully free window
wins; there is no look-ahead.
"""

from __future__ import annotations

from typing import List, Optional

from aquaplan_app.models import OccupancyGrid, TankConflict


def is_window_free(
    grid: OccupancyGrid,
    tank_id: int,
    start_week: int,
    weeks: int,
    max_weeks: int,
) -> bool:
    """True if every cell in [start_week, start_week + weeks) is READY and inside the horizon."""
    if start_week < 0 or weeks <= 0 or start_week + weeks > max_weeks:
        return False
    return all(grid.is_available(tank_id, w) for w in range(start_week, start_week + weeks))


def find_first_free_window(
    grid: OccupancyGrid,
    tank_id: int,
    from_week: int,
    weeks: int,
    max_weeks: int,
) -> Optional[int]:
    """First week >= from_week starting a free window of ``weeks``, or None."""
    for week in range(max(0, from_week), max_weeks - weeks + 1):
        if is_window_free(grid, tank_id, week, weeks, max_weeks):
            return week
    return None


def free_run_end(grid: OccupancyGrid, tank_id: int, start_week: int, max_weeks: int) -> int:
    """Last week of the uninterrupted READY run beginning at start_week (start_week - 1 if none)."""
    week = start_week
    while week < max_weeks and grid.is_available(tank_id, week):
        week += 1
    return week - 1


def detect_conflicts(
    grid: OccupancyGrid,
    tank_id: int,
    start_week: int,
    duration: int,
) -> List[TankConflict]:
    """Occupied cells a [start_week, start_week + duration) claim on tank_id would collide with."""
    conflicts: List[TankConflict] = []
    for week in range(start_week, start_week + duration):
        cell = grid.cell(tank_id, week)
        if not cell.is_available:
            conflicts.append(
                TankConflict(
                    tank_id=tank_id,
                    week=week,
                    existing_state=cell.display_label,
                    conflict_generation=cell.generation,
                )
            )
    return conflicts
