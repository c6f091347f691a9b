"""Tests for nursery selection and growout bin packing."""

from __future__ import annotations

from aquaplan_app.models import OccupancyGrid, Tank, TankKind
from aquaplan_app.services.growout_packer import optimize_growout_assignment
from aquaplan_app.services.nursery_allocator import select_nursery_tanks


def _nursery(tank_id, area):
    return Tank(id=tank_id, name=f"N{tank_id}", kind=TankKind.NURSERY, area_m2=area)


def _growout(tank_id, area):
    return Tank(id=tank_id, name=f"G{tank_id}", kind=TankKind.GROWOUT, area_m2=area)


class TestNurseryAllocator:
    def test_prefers_larger_tank(self, empty_grid):
        tanks = [_nursery(1, 50.0), _nursery(2, 30.0)]
        chosen = select_nursery_tanks(tanks, empty_grid, 1, 0, 3, 20)
        assert [t.id for t in chosen] == [1]

    def test_exact_week_beats_larger_later_tank(self):
        tanks = [_nursery(1, 50.0), _nursery(2, 30.0), _nursery(3, 20.0)]
        grid = OccupancyGrid.from_labels({(1, 0): "Nursery"})
        chosen = select_nursery_tanks(tanks, grid, 2, 0, 3, 20)
        assert [t.id for t in chosen] == [2, 3]

    def test_fallback_orders_by_earliest_then_area(self):
        tanks = [_nursery(1, 50.0), _nursery(2, 30.0), _nursery(3, 20.0), _nursery(4, 40.0)]
        grid = OccupancyGrid.from_labels(
            {
                (1, 0): "Growout", (1, 1): "Growout",
                (2, 0): "Growout",
                (4, 0): "Growout",
            }
        )
        chosen = select_nursery_tanks(tanks, grid, 3, 0, 2, 20)
        # 3 is free at 0; 4 (40 m²) and 2 (30 m²) both free at 1; 1 only at 2
        assert [t.id for t in chosen] == [3, 4, 2]

    def test_may_return_fewer(self, empty_grid):
        tanks = [_nursery(1, 50.0), _nursery(2, 30.0)]
        assert len(select_nursery_tanks(tanks, empty_grid, 3, 0, 3, 20)) == 2

    def test_ignores_non_nursery_tanks(self, empty_grid):
        tanks = [_growout(10, 500.0), _nursery(1, 10.0), Tank(id=5, kind=TankKind.READY, area_m2=90.0)]
        chosen = select_nursery_tanks(tanks, empty_grid, 1, 0, 3, 20)
        assert [t.id for t in chosen] == [1]

    def test_tank_without_window_is_skipped(self):
        tanks = [_nursery(1, 50.0)]
        grid = OccupancyGrid.from_labels({(1, w): "Maintenance" for w in range(0, 10)})
        assert select_nursery_tanks(tanks, grid, 1, 0, 3, 10) == []


class TestGrowoutPacker:
    def test_single_tank_capacity_limit(self, empty_grid):
        result = optimize_growout_assignment([_growout(1, 10.0)], empty_grid, 4000, 350.0, 3, 10, 52)
        assert len(result) == 1
        assert result[0].assigned_count == 3500
        assert result[0].utilization == 1.0
        assert (result[0].start_week, result[0].end_week) == (3, 12)

    def test_earliest_then_largest(self):
        tanks = [_growout(1, 10.0), _growout(2, 20.0), _growout(3, 40.0)]
        grid = OccupancyGrid.from_labels({(3, 3): "Growout"})
        result = optimize_growout_assignment(tanks, grid, 9000, 350.0, 3, 5, 52)
        assert [(a.tank_id, a.assigned_count) for a in result] == [(2, 7000), (1, 2000)]
        assert all(a.start_week == 3 for a in result)

    def test_later_window_used_when_needed(self):
        tanks = [_growout(1, 10.0), _growout(3, 40.0)]
        grid = OccupancyGrid.from_labels({(3, 3): "Growout"})
        result = optimize_growout_assignment(tanks, grid, 9000, 350.0, 3, 5, 52)
        assert [(a.tank_id, a.start_week) for a in result] == [(1, 3), (3, 4)]
        assert result[1].assigned_count == 5500

    def test_capacity_respected(self, empty_grid):
        tanks = [_growout(i, 5.0 + i) for i in range(1, 6)]
        result = optimize_growout_assignment(tanks, empty_grid, 100_000, 120.0, 0, 4, 52)
        for a in result:
            tank = next(t for t in tanks if t.id == a.tank_id)
            assert a.assigned_count <= tank.area_m2 * 120.0
            assert a.utilization <= 1.0

    def test_stops_when_placed(self, empty_grid):
        tanks = [_growout(1, 100.0), _growout(2, 50.0)]
        result = optimize_growout_assignment(tanks, empty_grid, 1000, 50.0, 0, 4, 52)
        assert [a.tank_id for a in result] == [1]
        assert result[0].utilization == 0.2

    def test_deterministic(self):
        tanks = [_growout(1, 20.0), _growout(2, 20.0), _growout(3, 15.0)]
        grid = OccupancyGrid.from_labels({(1, 1): "Nursery"})
        first = optimize_growout_assignment(tanks, grid, 5000, 100.0, 0, 3, 30)
        second = optimize_growout_assignment(tanks, grid, 5000, 100.0, 0, 3, 30)
        assert first == second
