"""
Single-cycle seeding plan: nursery selection, survivor estimate, growout
bin packing, per-tank sampling refinement and the flattened assignment
table.

A plan is all-or-nothing. Any shortfall raises a typed error and no partial
plan is returned.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence

from aquaplan_app.config.limits import EPS
from aquaplan_app.models import (
    AlternativeTank,
    AssignmentCell,
    CellState,
    CycleParameters,
    GrowoutAssignment,
    NurseryAssignment,
    OccupancyGrid,
    PlanSummary,
    SeedingPlan,
    Tank,
    TankConflict,
)
from aquaplan_app.services.errors import (
    InsufficientGrowoutCapacity,
    InsufficientNurseryCapacity,
    OverlapDetected,
    PlanningParameterError,
)
from aquaplan_app.services.growout_packer import optimize_growout_assignment
from aquaplan_app.services.growth_curve import WeightLookup, week_of_weight, weeks_to_reach
from aquaplan_app.services.nursery_allocator import select_nursery_tanks
from aquaplan_app.services.occupancy_index import find_first_free_window, free_run_end

_LOG = logging.getLogger(__name__)

# tank_id -> measured individual weight (g) from real sampling, or None
SamplingProbe = Callable[[int], Optional[float]]


def validate_parameters(params: CycleParameters, max_weeks: int) -> None:
    if max_weeks <= 0:
        raise PlanningParameterError("Planning horizon must be at least one week.")
    if params.number_of_nurseries < 1:
        raise PlanningParameterError("At least one nursery tank must be requested.")
    if params.nursery_density <= 0 or params.growout_density <= 0:
        raise PlanningParameterError("Nursery and growout densities must be positive.")
    if not 0.0 <= params.mortality_percentage <= 100.0:
        raise PlanningParameterError(
            f"Mortality {params.mortality_percentage}% is outside 0-100%."
        )
    if params.nursery_duration < 1:
        raise PlanningParameterError("Nursery duration must be at least one week.")
    if params.target_weight_g is None and params.growout_duration < 1:
        raise PlanningParameterError("Growout duration must be at least one week.")
    if params.target_weight_g is not None and params.target_weight_g <= 0:
        raise PlanningParameterError("Target weight must be positive.")
    if params.start_week < 0:
        raise PlanningParameterError("Start week cannot be negative.")


def resolve_growout_duration(params: CycleParameters, lookup: WeightLookup | None) -> int:
    """Growout weeks: nominal, or derived from the target weight (at least 1)."""
    if params.target_weight_g is None:
        return params.growout_duration
    if lookup is None:
        raise PlanningParameterError("A target weight needs growth curve data.")
    total = weeks_to_reach(lookup, params.target_weight_g, params.genetics_id)
    return max(1, total - params.nursery_duration)


def cycle_duration(params: CycleParameters, lookup: WeightLookup | None = None) -> int:
    return params.nursery_duration + resolve_growout_duration(params, lookup)


def generate_plan(
    params: CycleParameters,
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    max_weeks: int,
    projector: WeightLookup | None = None,
    sampling_probe: SamplingProbe | None = None,
) -> SeedingPlan:
    """
    Build one validated seeding plan starting at ``params.start_week``.

    Raises InsufficientNurseryCapacity, InsufficientGrowoutCapacity,
    OverlapDetected or PlanningParameterError.
    """
    validate_parameters(params, max_weeks)
    if sampling_probe is not None and projector is None:
        raise PlanningParameterError("Sampling refinement needs growth curve data.")
    growout_duration = resolve_growout_duration(params, projector)

    # 1. Nursery tanks
    selected = select_nursery_tanks(
        tanks,
        grid,
        params.number_of_nurseries,
        params.start_week,
        params.nursery_duration,
        max_weeks,
    )
    if len(selected) < params.number_of_nurseries:
        raise InsufficientNurseryCapacity(params.number_of_nurseries, len(selected))

    nursery_plan: List[NurseryAssignment] = []
    total_larvae = 0.0
    nursery_area = 0.0
    for tank in selected:
        week = find_first_free_window(
            grid, tank.id, params.start_week, params.nursery_duration, max_weeks
        )
        larvae = tank.area_m2 * params.nursery_density
        total_larvae += larvae
        nursery_area += tank.area_m2
        nursery_plan.append(
            NurseryAssignment(
                tank_id=tank.id,
                name=tank.name,
                area_m2=tank.area_m2,
                larvae_capacity=larvae,
                start_week=week,
                end_week=week + params.nursery_duration - 1,
            )
        )

    # 2. Survivors; one aggregate mortality figure, not compounded per week
    survival_percent = 100.0 - params.mortality_percentage
    # Whole individuals; EPS absorbs float error such as 1000 * 93 / 100
    expected_survivors = int(math.floor(total_larvae * survival_percent / 100.0 + EPS))
    weekly_mortality_rate = (params.mortality_percentage / 100.0) / (
        params.nursery_duration + growout_duration
    )

    # 3. Growout tanks
    growout_start = max(n.end_week for n in nursery_plan) + 1
    growout_plan = optimize_growout_assignment(
        tanks,
        grid,
        expected_survivors,
        params.growout_density,
        growout_start,
        growout_duration,
        max_weeks,
    )
    assigned = sum(g.assigned_count for g in growout_plan)
    if assigned < expected_survivors:
        raise InsufficientGrowoutCapacity(expected_survivors, assigned)

    # 4. Per-tank refinement from real sampling
    if sampling_probe is not None:
        _apply_sampling(growout_plan, params, projector, sampling_probe, grid, max_weeks)

    used_ids = {n.tank_id for n in nursery_plan} | {g.tank_id for g in growout_plan}
    nursery_alternatives = _alternatives(
        tanks, grid, used_ids, lambda t: t.is_nursery, params.start_week, params.nursery_duration, max_weeks
    )
    growout_alternatives = _alternatives(
        tanks, grid, used_ids, lambda t: t.is_growout, growout_start, growout_duration, max_weeks
    )

    table = _build_assignment_table(params, nursery_plan, growout_plan)
    _check_no_conflicts(grid, table)

    summary = PlanSummary(
        total_larvae=total_larvae,
        expected_survivors=expected_survivors,
        nursery_area_used=nursery_area,
        growout_area_required=expected_survivors / params.growout_density,
        growout_area_assigned=sum(g.area_m2 for g in growout_plan),
        survival_rate=survival_percent,
        weekly_mortality_rate=weekly_mortality_rate,
        nursery_duration=params.nursery_duration,
        growout_duration=growout_duration,
    )
    _LOG.debug(
        "Plan for generation %r at week %d: %d nursery, %d growout tanks, %d survivors",
        params.generation,
        params.start_week,
        len(nursery_plan),
        len(growout_plan),
        expected_survivors,
    )
    return SeedingPlan(
        nursery_tanks=nursery_plan,
        growout_tanks=growout_plan,
        nursery_alternatives=nursery_alternatives,
        growout_alternatives=growout_alternatives,
        summary=summary,
        assignment_table=table,
    )


generate_single_cycle_plan = generate_plan


def _apply_sampling(
    growout_plan: List[GrowoutAssignment],
    params: CycleParameters,
    lookup: WeightLookup,
    probe: SamplingProbe,
    grid: OccupancyGrid,
    max_weeks: int,
) -> None:
    """
    Move a growout tank's end week when its sampled weight puts the stock at
    a different curve week than the plan assumes (stock enters growout at
    curve week ``nursery_duration``). Each tank is adjusted on its own.
    """
    for g in growout_plan:
        measured = probe(g.tank_id)
        if measured is None:
            continue
        curve_week = week_of_weight(lookup, params.genetics_id, measured)
        if curve_week is None:
            _LOG.info(
                "Tank %s sampled at %.2f g, beyond the searchable curve; end week kept",
                g.tank_id,
                measured,
            )
            continue
        shift = params.nursery_duration - curve_week
        if shift == 0:
            continue
        # Cannot run into the next occupied cell or past the horizon
        latest = min(free_run_end(grid, g.tank_id, g.start_week, max_weeks), max_weeks - 1)
        earliest = min(g.start_week + 1, latest)
        new_end = max(earliest, min(g.end_week + shift, latest))
        if new_end != g.end_week:
            _LOG.info(
                "Tank %s end week %d -> %d from sampling (%.2f g, curve week %d)",
                g.tank_id,
                g.end_week,
                new_end,
                measured,
                curve_week,
            )
            g.end_week = new_end
            g.adjusted_by_sampling = True


def _alternatives(
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    used_ids: set,
    eligible: Callable[[Tank], bool],
    from_week: int,
    duration: int,
    max_weeks: int,
) -> List[AlternativeTank]:
    result: List[AlternativeTank] = []
    for tank in tanks:
        if tank.id in used_ids or not eligible(tank):
            continue
        week = find_first_free_window(grid, tank.id, from_week, duration, max_weeks)
        if week is not None:
            result.append(AlternativeTank(tank.id, tank.name, tank.area_m2, week))
    return result


def _build_assignment_table(
    params: CycleParameters,
    nursery_plan: Sequence[NurseryAssignment],
    growout_plan: Sequence[GrowoutAssignment],
) -> List[AssignmentCell]:
    table: List[AssignmentCell] = []
    for n in nursery_plan:
        for week in range(n.start_week, n.end_week + 1):
            table.append(
                AssignmentCell(
                    tank_id=n.tank_id,
                    week=week,
                    state=CellState.NURSERY,
                    generation=params.generation,
                    genetics_id=params.genetics_id,
                    duration=params.nursery_duration,
                )
            )
    for g in growout_plan:
        for week in range(g.start_week, g.end_week + 1):
            table.append(
                AssignmentCell(
                    tank_id=g.tank_id,
                    week=week,
                    state=CellState.GROWOUT,
                    generation=params.generation,
                    genetics_id=params.genetics_id,
                    duration=g.weeks,
                )
            )
    return table


def _check_no_conflicts(grid: OccupancyGrid, table: Sequence[AssignmentCell]) -> None:
    conflicts: List[TankConflict] = []
    seen = set()
    for a in table:
        key = (a.tank_id, a.week)
        cell = grid.cell(a.tank_id, a.week)
        if key in seen:
            conflicts.append(TankConflict(a.tank_id, a.week, a.state.value, a.generation))
        elif not cell.is_available:
            conflicts.append(TankConflict(a.tank_id, a.week, cell.display_label, cell.generation))
        seen.add(key)
    if conflicts:
        raise OverlapDetected(conflicts)
