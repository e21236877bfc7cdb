from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Optional

from .rates import DEFAULT_RATE_TABLES, RateTables

DaySplitKind = Literal["local", "regional", "unknown"]


@dataclass(frozen=True)
class DaySplitPlan:
    kind: DaySplitKind
    threshold_hours: Optional[Decimal]
    single_day_possible: bool


def get_day_split_plan(distance_miles, total_hours, tables: RateTables = DEFAULT_RATE_TABLES) -> DaySplitPlan:
    """Classify whether a job fits in one working day for its distance band.

    The local band is checked first, so a distance of exactly the local
    maximum (30 miles) is local even though it also opens the regional band.
    Distances beyond the regional band are ``unknown`` and never single-day.
    """
    limits = tables.day_split
    distance = max(Decimal("0"), Decimal(str(distance_miles or 0)))
    hours = Decimal(str(total_hours or 0))

    if distance <= limits.local_miles_max:
        return DaySplitPlan(
            kind="local",
            threshold_hours=limits.local_hours_threshold,
            single_day_possible=hours <= limits.local_hours_threshold,
        )
    if limits.regional_miles_min <= distance <= limits.regional_miles_max:
        return DaySplitPlan(
            kind="regional",
            threshold_hours=limits.regional_hours_threshold,
            single_day_possible=hours <= limits.regional_hours_threshold,
        )
    return DaySplitPlan(kind="unknown", threshold_hours=None, single_day_possible=False)
