"""
Command-line entry point for the aquaplan seeding scheduler.

Loads tanks, growth curves and the current occupancy from CSV/Excel, runs a
single or multi-cycle plan and prints a text report.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from aquaplan_app.config.settings import Settings, init_logging
from aquaplan_app.models import CycleParameters, MultiCycleParameters, OccupancyGrid
from aquaplan_app.reports import (
    build_multi_cycle_summary_text,
    build_plan_summary_text,
    export_multi_cycle_to_excel,
    export_plan_to_excel,
)
from aquaplan_app.services import GrowthCurveProjector, SchedulingError
from aquaplan_app.services.data_import import load_growth_curves, load_occupancy, load_tanks
from aquaplan_app.services.multi_cycle_planner import schedule_multiple
from aquaplan_app.services.seeding_optimizer import generate_plan
from aquaplan_app.services.traceability import create_plan_snapshot

_LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="aquaplan", description="Plan tank seeding cycles.")
    parser.add_argument("--tanks", required=True, help="CSV/Excel with tank_id, name, kind, area")
    parser.add_argument("--curves", help="CSV/Excel with genetics_id, week, weight_grams")
    parser.add_argument("--occupancy", help="CSV/Excel with tank_id, week, state[, generation]")
    parser.add_argument("--max-weeks", type=int, default=None)
    parser.add_argument("--nurseries", type=int, default=1)
    parser.add_argument("--nursery-density", type=float, required=True)
    parser.add_argument("--growout-density", type=float, required=True)
    parser.add_argument("--mortality", type=float, default=0.0)
    parser.add_argument("--nursery-weeks", type=int, default=3)
    parser.add_argument("--growout-weeks", type=int, default=12)
    parser.add_argument("--genetics", type=int, default=0)
    parser.add_argument("--generation", default="")
    parser.add_argument("--start-week", type=int, default=0)
    parser.add_argument("--target-weight", type=float, default=None)
    parser.add_argument("--cycles", type=int, default=1, help="More than 1 runs the multi-cycle scheduler")
    parser.add_argument("--preferred-interval", type=int, default=2)
    parser.add_argument("--max-interval", type=int, default=6)
    parser.add_argument("--min-gap", type=int, default=1)
    parser.add_argument("--excel", help="Write the plan to this .xlsx file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one planning request; returns the process exit code."""
    args = build_parser().parse_args(argv)
    settings = Settings.default()
    init_logging(settings)
    max_weeks = args.max_weeks or settings.max_weeks

    try:
        tanks = load_tanks(args.tanks)
        projector = GrowthCurveProjector(load_growth_curves(args.curves)) if args.curves else None
        grid = load_occupancy(args.occupancy) if args.occupancy else OccupancyGrid()

        cycle = CycleParameters(
            number_of_nurseries=args.nurseries,
            nursery_density=args.nursery_density,
            growout_density=args.growout_density,
            mortality_percentage=args.mortality,
            nursery_duration=args.nursery_weeks,
            growout_duration=args.growout_weeks,
            genetics_id=args.genetics,
            generation=args.generation,
            start_week=args.start_week,
            target_weight_g=args.target_weight,
        )
        if args.cycles > 1:
            params = MultiCycleParameters(
                cycle=cycle,
                number_of_cycles=args.cycles,
                preferred_interval_weeks=args.preferred_interval,
                max_interval_weeks=args.max_interval,
                min_gap_weeks=args.min_gap,
                start_from_week=args.start_week,
            )
            result = schedule_multiple(params, tanks, grid, max_weeks, projector)
            snapshot = create_plan_snapshot(params, max_weeks, len(tanks), result)
            print(build_multi_cycle_summary_text(result, snapshot.timestamp.isoformat()))
            if args.excel:
                export_multi_cycle_to_excel(result, args.excel)
        else:
            plan = generate_plan(cycle, tanks, grid, max_weeks, projector)
            snapshot = create_plan_snapshot(cycle, max_weeks, len(tanks), plan)
            print(build_plan_summary_text(cycle, plan, snapshot.timestamp.isoformat()))
            if args.excel:
                export_plan_to_excel(plan, args.excel)
        _LOG.info("Planning snapshot: %s", snapshot.to_dict())
    except SchedulingError as exc:
        _LOG.error("Planning failed: %s", exc.message)
        print(f"Planning failed: {exc.message}", file=sys.stderr)
        return 1

    if args.excel:
        print(f"Workbook written to {Path(args.excel).resolve()}")
    return 0


if __name__ == "__main__":
    # Allow running as a script from the project root
    project_root = Path(__file__).resolve().parents[1]
    if project_root.exists():
        sys.path.insert(0, str(project_root))
    sys.exit(main())
