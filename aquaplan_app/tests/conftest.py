"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running tests
_project_root = Path(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from aquaplan_app.models import CycleParameters, GrowthCurve, OccupancyGrid, Tank, TankKind
from aquaplan_app.services.growth_curve import GrowthCurveProjector


@pytest.fixture
def empty_grid():
    return OccupancyGrid()


@pytest.fixture
def farm_tanks():
    """Two nursery tanks, three growout tanks and a reservoir."""
    return [
        Tank(id=1, name="N1", kind=TankKind.NURSERY, area_m2=50.0),
        Tank(id=2, name="N2", kind=TankKind.NURSERY, area_m2=30.0),
        Tank(id=10, name="G1", kind=TankKind.GROWOUT, area_m2=100.0),
        Tank(id=11, name="G2", kind=TankKind.GROWOUT, area_m2=60.0),
        Tank(id=12, name="G3", kind=TankKind.GROWOUT, area_m2=40.0),
        Tank(id=20, name="R1", kind=TankKind.RESERVOIR, area_m2=80.0),
    ]


@pytest.fixture
def base_params():
    """One 50 m² nursery at 100/m² with 20% mortality -> 4000 survivors."""
    return CycleParameters(
        number_of_nurseries=1,
        nursery_density=100.0,
        growout_density=50.0,
        mortality_percentage=20.0,
        nursery_duration=3,
        growout_duration=10,
        genetics_id=7,
        generation="G24-01",
        start_week=0,
    )


@pytest.fixture
def sample_curve():
    return GrowthCurve.from_points(7, [(0, 5.0), (4, 15.0), (8, 25.0), (12, 30.0)], name="Red")


@pytest.fixture
def projector(sample_curve):
    return GrowthCurveProjector([sample_curve])


@pytest.fixture
def compact_tanks():
    """Room for exactly two 6-week cycles inside an 8-week horizon."""
    return [
        Tank(id=1, name="N1", kind=TankKind.NURSERY, area_m2=10.0),
        Tank(id=2, name="N2", kind=TankKind.NURSERY, area_m2=10.0),
        Tank(id=10, name="G1", kind=TankKind.GROWOUT, area_m2=10.0),
        Tank(id=11, name="G2", kind=TankKind.GROWOUT, area_m2=10.0),
    ]


@pytest.fixture
def compact_cycle():
    return CycleParameters(
        number_of_nurseries=1,
        nursery_density=100.0,
        growout_density=100.0,
        mortality_percentage=0.0,
        nursery_duration=2,
        growout_duration=4,
        genetics_id=1,
        generation="C",
    )
