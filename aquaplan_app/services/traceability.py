"""
Planning traceability: inputs snapshot, outputs, timestamp.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from aquaplan_app.models import CycleParameters, MultiCycleParameters, MultiCyclePlan, SeedingPlan


@dataclass(slots=True)
class PlanSnapshot:
    """Traceability snapshot for one planning request."""
    timestamp: datetime
    kind: str
    inputs: Dict[str, Any] = field(default_factory=dict)
    outputs: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind,
            "inputs": self.inputs,
            "outputs": self.outputs,
            "warnings": list(self.warnings),
        }


def _plan_outputs(plan: SeedingPlan) -> Dict[str, Any]:
    s = plan.summary
    return {
        "start_week": plan.start_week,
        "end_week": plan.end_week,
        "nursery_tank_ids": [n.tank_id for n in plan.nursery_tanks],
        "growout_tank_ids": [g.tank_id for g in plan.growout_tanks],
        "total_larvae": s.total_larvae,
        "expected_survivors": s.expected_survivors,
        "growout_duration": s.growout_duration,
    }


def create_plan_snapshot(
    params: CycleParameters | MultiCycleParameters,
    max_weeks: int,
    tank_count: int,
    result: SeedingPlan | MultiCyclePlan,
) -> PlanSnapshot:
    """Build a traceability snapshot from planning inputs and results."""
    inputs: Dict[str, Any] = {
        "parameters": asdict(params),
        "max_weeks": max_weeks,
        "tank_count": tank_count,
    }
    if isinstance(result, MultiCyclePlan):
        outputs: Dict[str, Any] = {
            "cycles": [
                {"cycle_id": c.cycle_id, **_plan_outputs(c.plan)} for c in result.cycles
            ],
            "summary": asdict(result.summary),
            "outcome": result.outcome.value,
        }
        kind = "multi_cycle"
        warnings = list(result.warnings)
    else:
        outputs = _plan_outputs(result)
        kind = "single_cycle"
        warnings = []

    return PlanSnapshot(
        timestamp=datetime.now(timezone.utc),
        kind=kind,
        inputs=inputs,
        outputs=outputs,
        warnings=warnings,
    )
