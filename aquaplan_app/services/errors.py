"""
Typed scheduling errors.

Every failure carries the numbers behind it (requested vs. available) so a
calling layer can relax parameters and try again; the engine itself never
retries.
"""

from __future__ import annotations

from typing import List, Sequence

from aquaplan_app.models import TankConflict


class SchedulingError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PlanningParameterError(SchedulingError, ValueError):
    """Planning inputs that cannot describe a valid cycle."""


class InsufficientNurseryCapacity(SchedulingError):
    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Only {available} nursery tanks available, but {requested} are required"
        )

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class InsufficientGrowoutCapacity(SchedulingError):
    def __init__(self, required: int, assigned: int) -> None:
        self.required = required
        self.assigned = assigned
        super().__init__(
            f"Insufficient growout capacity: {required} survivors need placing "
            f"but only {assigned} can be assigned (short by {self.shortfall})"
        )

    @property
    def shortfall(self) -> int:
        return self.required - self.assigned


class NoAvailableWindow(SchedulingError):
    def __init__(self, cycle_index: int, from_week: int, max_weeks: int, reason: str = "") -> None:
        self.cycle_index = cycle_index
        self.from_week = from_week
        self.max_weeks = max_weeks
        self.reason = reason
        message = (
            f"No capacity available for cycle {cycle_index + 1} "
            f"after week {from_week} (horizon {max_weeks} weeks)"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OverlapDetected(SchedulingError):
    """Internal consistency failure: one (tank, week) cell claimed twice."""

    def __init__(self, conflicts: Sequence[TankConflict]) -> None:
        self.conflicts: List[TankConflict] = list(conflicts)
        first = self.conflicts[0] if self.conflicts else None
        detail = f" (first at tank {first.tank_id}, week {first.week})" if first else ""
        super().__init__(
            f"Overlapping assignments detected in {len(self.conflicts)} cells{detail}"
        )


class DataImportError(SchedulingError):
    """Reference data file that cannot be read or parsed."""
