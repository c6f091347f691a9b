"""Tests for single-cycle seeding plans."""

from __future__ import annotations

from dataclasses import replace

import pytest

from aquaplan_app.models import CellState, CycleParameters, OccupancyGrid, Tank, TankKind
from aquaplan_app.services.errors import (
    InsufficientGrowoutCapacity,
    InsufficientNurseryCapacity,
    PlanningParameterError,
)
from aquaplan_app.services.seeding_optimizer import cycle_duration, generate_plan


class TestGeneratePlan:
    def test_basic_plan(self, base_params, farm_tanks, empty_grid):
        plan = generate_plan(base_params, farm_tanks, empty_grid, 52)

        assert [(n.tank_id, n.start_week, n.end_week) for n in plan.nursery_tanks] == [(1, 0, 2)]
        assert plan.nursery_tanks[0].larvae_capacity == pytest.approx(5000.0)
        assert [(g.tank_id, g.assigned_count) for g in plan.growout_tanks] == [(10, 4000)]
        assert (plan.growout_tanks[0].start_week, plan.growout_tanks[0].end_week) == (3, 12)
        assert plan.growout_tanks[0].utilization == pytest.approx(0.8)

        assert plan.summary.expected_survivors == 4000
        assert plan.summary.survival_rate == pytest.approx(80.0)
        assert plan.summary.weekly_mortality_rate == pytest.approx(0.2 / 13)
        assert plan.summary.growout_area_required == pytest.approx(80.0)
        assert plan.growout_start_week == 3
        assert plan.end_week == 12

    def test_alternatives_exclude_selected(self, base_params, farm_tanks, empty_grid):
        plan = generate_plan(base_params, farm_tanks, empty_grid, 52)
        assert [(a.tank_id, a.earliest_week) for a in plan.nursery_alternatives] == [(2, 0)]
        assert [(a.tank_id, a.earliest_week) for a in plan.growout_alternatives] == [(11, 3), (12, 3)]

    def test_assignment_table(self, base_params, farm_tanks, empty_grid):
        plan = generate_plan(base_params, farm_tanks, empty_grid, 52)
        table = plan.assignment_table
        assert len(table) == 13
        nursery = [c for c in table if c.state is CellState.NURSERY]
        assert [c.week for c in nursery] == [0, 1, 2]
        assert all(c.generation == "G24-01" and c.genetics_id == 7 for c in table)
        assert {c.duration for c in table if c.state is CellState.GROWOUT} == {10}

    def test_growout_shortfall(self, empty_grid):
        tanks = [
            Tank(id=1, kind=TankKind.NURSERY, area_m2=40.0),
            Tank(id=2, kind=TankKind.GROWOUT, area_m2=10.0),
        ]
        params = replace(
            _params(), nursery_density=100.0, growout_density=350.0, mortality_percentage=0.0
        )
        with pytest.raises(InsufficientGrowoutCapacity) as exc_info:
            generate_plan(params, tanks, empty_grid, 52)
        assert exc_info.value.required == 4000
        assert exc_info.value.assigned == 3500
        assert exc_info.value.shortfall == 500

    def test_nursery_shortfall(self, base_params, farm_tanks, empty_grid):
        with pytest.raises(InsufficientNurseryCapacity) as exc_info:
            generate_plan(replace(base_params, number_of_nurseries=3), farm_tanks, empty_grid, 52)
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2

    def test_occupied_cells_are_never_used(self, base_params, farm_tanks):
        grid = OccupancyGrid.from_labels({(10, 5): "Growout", (10, 6): "Growout"})
        plan = generate_plan(base_params, farm_tanks, grid, 52)
        assert [(g.tank_id, g.assigned_count) for g in plan.growout_tanks] == [(11, 3000), (12, 1000)]
        for cell in plan.assignment_table:
            assert grid.is_available(cell.tank_id, cell.week)

    @pytest.mark.parametrize(
        "area, mortality, expected",
        [(10.0, 7.0, 930), (1.0, 34.0, 66), (2.5, 32.0, 170)],
    )
    def test_survivors_not_floored_low(self, empty_grid, area, mortality, expected):
        tanks = [
            Tank(id=1, kind=TankKind.NURSERY, area_m2=area),
            Tank(id=2, kind=TankKind.GROWOUT, area_m2=500.0),
        ]
        params = replace(
            _params(), nursery_density=100.0, growout_density=100.0, mortality_percentage=mortality
        )
        plan = generate_plan(params, tanks, empty_grid, 52)
        assert plan.summary.expected_survivors == expected
        assert plan.assigned_survivors == expected
        assert plan.summary.survival_rate == pytest.approx(100.0 - mortality)

    def test_nursery_tanks_keep_their_own_windows(self, base_params, farm_tanks):
        grid = OccupancyGrid.from_labels({(2, 0): "Nursery", (2, 1): "Nursery"})
        plan = generate_plan(replace(base_params, number_of_nurseries=2), farm_tanks, grid, 52)
        assert [(n.tank_id, n.start_week, n.end_week) for n in plan.nursery_tanks] == [
            (1, 0, 2),
            (2, 2, 4),
        ]
        # Growout waits for the last nursery tank to finish
        assert plan.growout_start_week == 5
        assert all(g.start_week >= 5 for g in plan.growout_tanks)
        assert plan.summary.expected_survivors == 6400

    def test_plan_is_deterministic(self, base_params, farm_tanks, empty_grid):
        first = generate_plan(base_params, farm_tanks, empty_grid, 52)
        second = generate_plan(base_params, farm_tanks, empty_grid, 52)
        assert first == second

    def test_horizon_too_short(self, base_params, farm_tanks, empty_grid):
        with pytest.raises(InsufficientGrowoutCapacity):
            generate_plan(base_params, farm_tanks, empty_grid, 10)


class TestTargetWeight:
    def test_growout_from_target_weight(self, base_params, farm_tanks, empty_grid, projector):
        params = replace(base_params, target_weight_g=25.0)
        plan = generate_plan(params, farm_tanks, empty_grid, 52, projector=projector)
        # 9 weeks to 25 g, 3 of them in the nursery
        assert plan.summary.growout_duration == 6
        assert plan.growout_tanks[0].end_week == 8
        assert cycle_duration(params, projector) == 9

    def test_target_weight_needs_curves(self, base_params, farm_tanks, empty_grid):
        with pytest.raises(PlanningParameterError):
            generate_plan(replace(base_params, target_weight_g=25.0), farm_tanks, empty_grid, 52)


class TestSampling:
    def test_heavier_sample_shortens_one_tank(self, base_params, farm_tanks, empty_grid, projector):
        params = replace(base_params, growout_density=30.0)
        samples = {10: 15.0}
        plan = generate_plan(
            params, farm_tanks, empty_grid, 52, projector=projector, sampling_probe=samples.get
        )
        by_id = {g.tank_id: g for g in plan.growout_tanks}
        assert by_id[10].end_week == 11
        assert by_id[10].adjusted_by_sampling
        assert by_id[11].end_week == 12
        assert not by_id[11].adjusted_by_sampling
        assert len([c for c in plan.assignment_table if c.tank_id == 10]) == 9

    def test_lighter_sample_stops_at_occupied_cell(self, base_params, farm_tanks, projector):
        grid = OccupancyGrid.from_labels({(10, 14): "Maintenance"})
        plan = generate_plan(
            base_params, farm_tanks, grid, 52, projector=projector, sampling_probe=lambda tank_id: 5.0
        )
        assert plan.growout_tanks[0].tank_id == 10
        assert plan.growout_tanks[0].end_week == 13

    def test_probe_needs_curves(self, base_params, farm_tanks, empty_grid):
        with pytest.raises(PlanningParameterError):
            generate_plan(base_params, farm_tanks, empty_grid, 52, sampling_probe=lambda tank_id: 5.0)


class TestValidation:
    @pytest.mark.parametrize(
        "changes",
        [
            {"number_of_nurseries": 0},
            {"nursery_density": 0.0},
            {"growout_density": -1.0},
            {"mortality_percentage": 120.0},
            {"nursery_duration": 0},
            {"growout_duration": 0},
            {"start_week": -2},
        ],
    )
    def test_invalid_parameters(self, base_params, farm_tanks, empty_grid, changes):
        with pytest.raises(PlanningParameterError):
            generate_plan(replace(base_params, **changes), farm_tanks, empty_grid, 52)

    def test_parameter_error_is_value_error(self, base_params, farm_tanks, empty_grid):
        with pytest.raises(ValueError):
            generate_plan(base_params, farm_tanks, empty_grid, 0)


def _params():
    return CycleParameters(
        number_of_nurseries=1,
        nursery_duration=3,
        growout_duration=10,
        genetics_id=1,
        generation="S1",
    )
