"""
Multi-cycle seeding: places N cycles one after another at a target cadence.

Each cycle is planned against the input occupancy merged with every cycle
already placed in the run. A failure on the first cycle aborts the request;
later failures stop the run and keep what was placed, with a warning.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from aquaplan_app.config.limits import LONG_GAP_FACTOR
from aquaplan_app.models import (
    AssignmentCell,
    CycleParameters,
    MultiCycleParameters,
    MultiCyclePlan,
    MultiCycleSummary,
    OccupancyGrid,
    PlacedCycle,
    ScheduleOutcome,
    SeedingPlan,
    Tank,
    TankConflict,
)
from aquaplan_app.services.errors import (
    NoAvailableWindow,
    OverlapDetected,
    PlanningParameterError,
    SchedulingError,
)
from aquaplan_app.services.growth_curve import WeightLookup
from aquaplan_app.services.seeding_optimizer import (
    SamplingProbe,
    cycle_duration,
    generate_plan,
)

_LOG = logging.getLogger(__name__)


def _validate_cadence(params: MultiCycleParameters) -> None:
    if params.number_of_cycles < 1:
        raise PlanningParameterError("At least one cycle must be requested.")
    if params.preferred_interval_weeks < 1:
        raise PlanningParameterError("Preferred interval must be at least one week.")
    if params.max_interval_weeks < params.preferred_interval_weeks:
        raise PlanningParameterError("Maximum interval cannot be below the preferred interval.")
    if params.min_gap_weeks < 1:
        raise PlanningParameterError("Minimum gap must be at least one week.")
    if params.start_from_week < 0:
        raise PlanningParameterError("Search cannot start before week 0.")


def _try_plan(
    params: CycleParameters,
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    max_weeks: int,
    projector: WeightLookup | None,
    sampling_probe: SamplingProbe | None,
) -> Tuple[Optional[SeedingPlan], str]:
    """Plan or (None, reason) on a capacity shortfall. Overlaps and bad parameters propagate."""
    try:
        return generate_plan(params, tanks, grid, max_weeks, projector, sampling_probe), ""
    except (OverlapDetected, PlanningParameterError):
        raise
    except SchedulingError as exc:
        return None, exc.message


def find_next_available_week(
    params: MultiCycleParameters,
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    from_week: int,
    max_weeks: int,
    projector: WeightLookup | None = None,
    sampling_probe: SamplingProbe | None = None,
) -> Tuple[Optional[int], Optional[SeedingPlan], str]:
    """
    First start week >= from_week at which a full plan succeeds.

    Returns (week, plan, "") or (None, None, last failure reason).
    """
    duration = cycle_duration(params.cycle, projector)
    reason = f"cycle of {duration} weeks does not fit before week {max_weeks}"
    for week in range(max(0, from_week), max_weeks - duration + 1):
        plan, failure = _try_plan(
            params.for_start_week(week), tanks, grid, max_weeks, projector, sampling_probe
        )
        if plan is not None:
            return week, plan, ""
        reason = failure
    return None, None, reason


def schedule_multiple(
    params: MultiCycleParameters,
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    max_weeks: int,
    projector: WeightLookup | None = None,
    sampling_probe: SamplingProbe | None = None,
) -> MultiCyclePlan:
    """
    Place ``params.number_of_cycles`` cycles.

    Raises NoAvailableWindow when not even the first cycle fits, and
    OverlapDetected if the final cross-cycle check finds a double-booked
    cell.
    """
    _validate_cadence(params)
    cycles: List[PlacedCycle] = []
    warnings: List[str] = []
    outcome = ScheduleOutcome.DONE
    running = grid
    current_week = params.start_from_week

    for i in range(params.number_of_cycles):
        _LOG.debug("Searching cycle %d from week %d", i + 1, current_week)
        week, plan, reason = find_next_available_week(
            params, tanks, running, current_week, max_weeks, projector, sampling_probe
        )
        if week is None:
            if i == 0:
                raise NoAvailableWindow(0, current_week, max_weeks, reason)
            warnings.append(
                f"Only {i} of {params.number_of_cycles} requested cycles could be placed: "
                f"no capacity after week {current_week} ({reason})"
            )
            outcome = ScheduleOutcome.PARTIAL_FAILURE
            _LOG.info("Stopped after %d of %d cycles: %s", i, params.number_of_cycles, reason)
            break

        # Nursery windows may slip past the searched week
        start = plan.start_week
        interval = start - cycles[-1].start_week if cycles else None
        if interval is not None and interval > params.preferred_interval_weeks * LONG_GAP_FACTOR:
            warnings.append(f"Long gap between cycle {i} and {i + 1}: {interval} weeks")

        cycles.append(
            PlacedCycle(
                cycle_id=f"cycle-{i + 1}",
                start_week=start,
                end_week=plan.end_week,
                parameters=params.for_start_week(start),
                plan=plan,
                interval_from_previous=interval,
            )
        )
        _LOG.debug("Placed cycle %d at weeks %d-%d", i + 1, start, plan.end_week)
        running = running.merged(plan.assignment_table)
        current_week = start + params.min_gap_weeks

    validate_no_overlap(cycles)

    table = [cell for c in cycles for cell in c.plan.assignment_table]
    summary = _summarize(cycles, params.number_of_cycles, len(tanks), len(table))
    _LOG.info(
        "Scheduled %d of %d cycles, efficiency %.1f%%",
        summary.total_cycles,
        params.number_of_cycles,
        summary.utilization_efficiency,
    )
    return MultiCyclePlan(
        cycles=cycles,
        summary=summary,
        assignment_table=table,
        warnings=warnings,
        outcome=outcome,
    )


generate_multi_cycle_plan = schedule_multiple


def validate_no_overlap(cycles: Sequence[PlacedCycle]) -> None:
    """Raise OverlapDetected if two placed cycles claim the same (tank, week)."""
    owners: Dict[Tuple[int, int], AssignmentCell] = {}
    conflicts: List[TankConflict] = []
    for cycle in cycles:
        for cell in cycle.plan.assignment_table:
            key = (cell.tank_id, cell.week)
            previous = owners.get(key)
            if previous is not None:
                conflicts.append(
                    TankConflict(cell.tank_id, cell.week, previous.state.value, previous.generation)
                )
                continue
            owners[key] = cell
    if conflicts:
        _LOG.error("Overlap detected in %d cells across placed cycles", len(conflicts))
        raise OverlapDetected(conflicts)


def _summarize(
    cycles: Sequence[PlacedCycle],
    requested: int,
    tank_count: int,
    tank_weeks_used: int,
) -> MultiCycleSummary:
    intervals = [c.interval_from_previous for c in cycles if c.interval_from_previous is not None]
    average_interval = sum(intervals) / len(intervals) if intervals else 0.0
    weeks_covered = (
        max(c.end_week for c in cycles) - min(c.start_week for c in cycles) + 1 if cycles else 0
    )
    capacity = tank_count * weeks_covered
    efficiency = tank_weeks_used / capacity * 100.0 if capacity else 0.0
    return MultiCycleSummary(
        total_cycles=len(cycles),
        requested_cycles=requested,
        total_larvae=sum(c.plan.summary.total_larvae for c in cycles),
        total_expected_survivors=sum(c.plan.summary.expected_survivors for c in cycles),
        average_interval=average_interval,
        utilization_efficiency=efficiency,
        weeks_covered=weeks_covered,
    )


def find_preferred_interval(
    params: MultiCycleParameters,
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    current_week: int,
    max_weeks: int,
    projector: WeightLookup | None = None,
) -> Optional[int]:
    """Smallest interval in preferred..max after current_week that yields a plan, or None."""
    for interval in range(params.preferred_interval_weeks, params.max_interval_weeks + 1):
        week = current_week + interval
        if week >= max_weeks:
            break
        plan, _ = _try_plan(params.for_start_week(week), tanks, grid, max_weeks, projector, None)
        if plan is not None:
            return interval
    return None


def propose_uniform_slots(
    params: MultiCycleParameters,
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    max_weeks: int,
    projector: WeightLookup | None = None,
) -> List[int]:
    """
    Candidate start weeks spaced by cycle duration + preferred interval.

    When that spacing does not fit the horizon, fall back to a compact
    distribution built from successive feasible weeks at the minimum gap.
    Slots are proposals only; nothing is reserved.
    """
    duration = cycle_duration(params.cycle, projector)
    n = params.number_of_cycles
    needed = duration * n + params.preferred_interval_weeks * (n - 1)
    if params.start_from_week + needed <= max_weeks:
        step = duration + params.preferred_interval_weeks
        return [params.start_from_week + i * step for i in range(n)]

    slots: List[int] = []
    current = params.start_from_week
    for _ in range(n):
        week, _plan, _reason = find_next_available_week(
            params, tanks, grid, current, max_weeks, projector
        )
        if week is None:
            break
        slots.append(week)
        current = week + params.min_gap_weeks
    return slots
