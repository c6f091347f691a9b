"""
Growth curve projection: cycle week -> individual weight, and the inverse
(target weight -> weeks of cycle needed).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Protocol

import numpy as np

from aquaplan_app.config.limits import (
    DEFAULT_WEIGHT_G,
    GROWTH_CAPPED_WEEKS,
    GROWTH_SEARCH_CEILING_WEEKS,
)
from aquaplan_app.models import GrowthCurve

_LOG = logging.getLogger(__name__)


class WeightLookup(Protocol):
    def weight_at_week(self, genetics_id: int, week: float) -> float: ...


@dataclass(slots=True)
class BiomassProjection:
    individual_weight_g: float
    biomass_g: float
    biomass_kg: float


class GrowthCurveProjector:
    """
    Projects weights from per-genetics growth curves.

    Between samples the weight is linearly interpolated; outside the sampled
    range it is clamped to the first/last sample.
    """

    def __init__(self, curves: Mapping[int, GrowthCurve] | Iterable[GrowthCurve] = ()) -> None:
        if isinstance(curves, Mapping):
            items = dict(curves)
        else:
            items = {c.genetics_id: c for c in curves}
        self._curves: Dict[int, GrowthCurve] = items

    def curve(self, genetics_id: int) -> Optional[GrowthCurve]:
        return self._curves.get(genetics_id)

    def weight_at_week(self, genetics_id: int, week: float) -> float:
        curve = self._curves.get(genetics_id)
        if not curve:
            return DEFAULT_WEIGHT_G
        return float(np.interp(float(week), curve.weeks, curve.weights))

    def week_of_weight(self, genetics_id: int, weight_g: float) -> Optional[int]:
        return week_of_weight(self, genetics_id, weight_g)

    def weeks_to_reach(self, target_weight_g: float, genetics_id: int) -> int:
        return weeks_to_reach(self, target_weight_g, genetics_id)

    def projected_biomass(self, genetics_id: int, population: int, week: float) -> BiomassProjection:
        """Biomass of ``population`` individuals at ``week`` on the curve (no mortality applied)."""
        weight = self.weight_at_week(genetics_id, week)
        biomass_g = population * weight
        return BiomassProjection(
            individual_weight_g=weight,
            biomass_g=biomass_g,
            biomass_kg=biomass_g / 1000.0,
        )


def week_of_weight(lookup: WeightLookup, genetics_id: int, weight_g: float) -> Optional[int]:
    """First whole week in 0..ceiling whose projected weight reaches weight_g, or None."""
    for week in range(GROWTH_SEARCH_CEILING_WEEKS + 1):
        if lookup.weight_at_week(genetics_id, week) >= weight_g:
            return week
    return None


def weeks_to_reach(lookup: WeightLookup, target_weight_g: float, genetics_id: int) -> int:
    """
    Weeks of cycle needed to reach target_weight_g.

    Returns ``week + 1`` for the first week meeting the target; the extra
    week lets the stock exceed the measured point. When the search ceiling
    is hit the capped value is returned, which is a best effort and not
    proof the target is reachable.
    """
    week = week_of_weight(lookup, genetics_id, target_weight_g)
    if week is None:
        _LOG.warning(
            "Target weight %.2f g not reached by genetics %s within %d weeks; using %d weeks",
            target_weight_g,
            genetics_id,
            GROWTH_SEARCH_CEILING_WEEKS,
            GROWTH_CAPPED_WEEKS,
        )
        return GROWTH_CAPPED_WEEKS
    return week + 1
