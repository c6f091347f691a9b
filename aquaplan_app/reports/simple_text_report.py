"""
Simple text-based report builder for seeding plans.
"""

from __future__ import annotations

from aquaplan_app.models import CycleParameters, MultiCyclePlan, SeedingPlan


def build_plan_summary_text(
    params: CycleParameters,
    plan: SeedingPlan,
    trace_timestamp: str = "",
) -> str:
    s = plan.summary
    lines: list[str] = []
    lines.append(f"Generation: {params.generation or '-'} (genetics {params.genetics_id})")
    lines.append(f"Weeks: {plan.start_week} -> {plan.end_week}")
    lines.append("")
    lines.append("Nursery:")
    for n in plan.nursery_tanks:
        lines.append(
            f"  {n.name or n.tank_id}: {n.area_m2:.1f} m², {n.larvae_capacity:.0f} larvae, "
            f"weeks {n.start_week}-{n.end_week}"
        )
    lines.append("Growout:")
    for g in plan.growout_tanks:
        note = " (sampling)" if g.adjusted_by_sampling else ""
        lines.append(
            f"  {g.name or g.tank_id}: {g.assigned_count} juveniles, {g.utilization * 100:.0f}% used, "
            f"weeks {g.start_week}-{g.end_week}{note}"
        )
    lines.append("")
    lines.append(f"Total larvae: {s.total_larvae:.0f}")
    lines.append(f"Expected survivors: {s.expected_survivors}")
    lines.append(f"Survival: {s.survival_rate:.1f}%  (weekly mortality {s.weekly_mortality_rate:.4f})")
    lines.append(
        f"Growout area: {s.growout_area_assigned:.1f} m² assigned / {s.growout_area_required:.1f} m² required"
    )
    if plan.nursery_alternatives or plan.growout_alternatives:
        alts = [f"{a.name or a.tank_id}@{a.earliest_week}" for a in plan.nursery_alternatives]
        alts += [f"{a.name or a.tank_id}@{a.earliest_week}" for a in plan.growout_alternatives]
        lines.append(f"Alternatives: {', '.join(alts)}")
    if trace_timestamp:
        lines.append(f"Calculated: {trace_timestamp}")
    return "\n".join(lines)


def build_multi_cycle_summary_text(plan: MultiCyclePlan, trace_timestamp: str = "") -> str:
    s = plan.summary
    lines: list[str] = []
    lines.append(f"Cycles placed: {s.total_cycles} of {s.requested_cycles}")
    for c in plan.cycles:
        interval = f", +{c.interval_from_previous} wk" if c.interval_from_previous is not None else ""
        lines.append(
            f"  {c.cycle_id}: weeks {c.start_week}-{c.end_week}{interval}, "
            f"{c.plan.summary.expected_survivors} survivors"
        )
    lines.append("")
    lines.append(f"Total larvae: {s.total_larvae:.0f}")
    lines.append(f"Total expected survivors: {s.total_expected_survivors}")
    lines.append(f"Average interval: {s.average_interval:.1f} weeks")
    lines.append(f"Utilization: {s.utilization_efficiency:.1f}% over {s.weeks_covered} weeks")
    if plan.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  - {w}" for w in plan.warnings)
    if trace_timestamp:
        lines.append(f"Calculated: {trace_timestamp}")
    return "\n".join(lines)
