"""
Flatten plans into pandas tables for persistence collaborators and exports.
"""

from __future__ import annotations

from typing import Dict, Iterable

import pandas as pd

from aquaplan_app.models import AssignmentCell, MultiCyclePlan, SeedingPlan

ASSIGNMENT_COLUMNS = ["tank_id", "week", "state", "generation", "genetics_id", "duration"]


def assignment_table_to_dataframe(cells: Iterable[AssignmentCell]) -> pd.DataFrame:
    """One row per (tank, week) cell, sorted by tank then week."""
    rows = [
        {
            "tank_id": c.tank_id,
            "week": c.week,
            "state": c.state.value,
            "generation": c.generation,
            "genetics_id": c.genetics_id,
            "duration": c.duration,
        }
        for c in cells
    ]
    df = pd.DataFrame(rows, columns=ASSIGNMENT_COLUMNS)
    return df.sort_values(["tank_id", "week"], kind="stable").reset_index(drop=True)


def weekly_grid(cells: Iterable[AssignmentCell]) -> pd.DataFrame:
    """Tank x week pivot of state labels; empty cells are left blank."""
    df = assignment_table_to_dataframe(cells)
    if df.empty:
        return pd.DataFrame()
    grid = df.pivot(index="tank_id", columns="week", values="state")
    grid.columns.name = None
    return grid.fillna("")


def plan_to_dataframes(plan: SeedingPlan) -> Dict[str, pd.DataFrame]:
    nursery = pd.DataFrame(
        [
            {
                "Tank": n.name or n.tank_id,
                "Area (m²)": n.area_m2,
                "Larvae": n.larvae_capacity,
                "Start week": n.start_week,
                "End week": n.end_week,
            }
            for n in plan.nursery_tanks
        ]
    )
    growout = pd.DataFrame(
        [
            {
                "Tank": g.name or g.tank_id,
                "Area (m²)": g.area_m2,
                "Assigned": g.assigned_count,
                "Utilization (%)": round(g.utilization * 100.0, 1),
                "Start week": g.start_week,
                "End week": g.end_week,
                "Sampling adjusted": "Yes" if g.adjusted_by_sampling else "",
            }
            for g in plan.growout_tanks
        ]
    )
    s = plan.summary
    summary = pd.DataFrame(
        [
            ("Total larvae", s.total_larvae),
            ("Expected survivors", s.expected_survivors),
            ("Nursery area used (m²)", s.nursery_area_used),
            ("Growout area required (m²)", round(s.growout_area_required, 2)),
            ("Growout area assigned (m²)", s.growout_area_assigned),
            ("Survival rate (%)", round(s.survival_rate, 2)),
            ("Weekly mortality rate", round(s.weekly_mortality_rate, 4)),
            ("Nursery weeks", s.nursery_duration),
            ("Growout weeks", s.growout_duration),
        ],
        columns=["Item", "Value"],
    )
    return {
        "summary": summary,
        "nursery": nursery,
        "growout": growout,
        "assignments": assignment_table_to_dataframe(plan.assignment_table),
    }


def multi_cycle_to_dataframe(plan: MultiCyclePlan) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Cycle": c.cycle_id,
                "Start week": c.start_week,
                "End week": c.end_week,
                "Interval": c.interval_from_previous if c.interval_from_previous is not None else "",
                "Larvae": c.plan.summary.total_larvae,
                "Survivors": c.plan.summary.expected_survivors,
                "Nursery tanks": len(c.plan.nursery_tanks),
                "Growout tanks": len(c.plan.growout_tanks),
            }
            for c in plan.cycles
        ]
    )
