"""
Nursery tank selection.

Prefer exactly the requested week; otherwise prefer the earliest slip, then
the largest tank.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from aquaplan_app.models import OccupancyGrid, Tank
from aquaplan_app.services.occupancy_index import find_first_free_window

_LOG = logging.getLogger(__name__)


def select_nursery_tanks(
    tanks: Sequence[Tank],
    grid: OccupancyGrid,
    count: int,
    start_week: int,
    duration: int,
    max_weeks: int,
) -> List[Tank]:
    """
    Pick up to ``count`` nursery tanks for a ``duration``-week window.

    May return fewer than ``count``; callers check the length.
    """
    candidates = []
    for tank in tanks:
        if not tank.is_nursery:
            continue
        week = find_first_free_window(grid, tank.id, start_week, duration, max_weeks)
        if week is not None:
            candidates.append((tank, week))

    # 1. Tanks free with zero delay, largest first
    exact = [tank for tank, week in candidates if week == start_week]
    if len(exact) >= count:
        exact.sort(key=lambda t: -t.area_m2)
        return exact[:count]

    # 2. Earliest window, then largest
    _LOG.debug(
        "Only %d nursery tanks free at week %d (need %d); falling back to earliest windows",
        len(exact),
        start_week,
        count,
    )
    candidates.sort(key=lambda c: (c[1], -c[0].area_m2))
    return [tank for tank, _ in candidates[:count]]
