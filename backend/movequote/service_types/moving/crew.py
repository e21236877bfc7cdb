from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from movequote.utils.bands import first_band

from .rates import DEFAULT_RATE_TABLES, RateTables, ServiceType


@dataclass(frozen=True)
class HandicapParams:
    """Physical access difficulty at a location."""

    stairs_flights: int = 0
    walk_distance_ft: int = 0
    has_elevator: bool = False


@dataclass(frozen=True)
class CrewPlan:
    crew: int
    trucks: int
    base_hours: Decimal
    handicap_percent: Decimal
    effective_hours: Decimal


def _non_negative_decimal(val) -> Decimal:
    d = Decimal(str(val or 0))
    return d if d > 0 else Decimal("0")


def crew_by_cubic_feet(cubic_feet, tables: RateTables = DEFAULT_RATE_TABLES) -> int:
    """Return the base crew size for a job volume."""
    return first_band(_non_negative_decimal(cubic_feet), tables.crew_bands)


def compute_handicap_percent(
    handicaps: Optional[HandicapParams],
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> Decimal:
    """Return the additive time penalty for access handicaps (0.18 == 18%)."""
    if handicaps is None:
        return Decimal("0")
    flights = max(0, math.floor(handicaps.stairs_flights or 0))
    walk_hundreds = max(0, math.floor((handicaps.walk_distance_ft or 0) / 100))
    elevator = 1 if handicaps.has_elevator else 0
    return (
        tables.stairs_flight_percent * flights
        + tables.walk_per_100ft_percent * walk_hundreds
        + tables.elevator_percent * elevator
    )


def apply_crew_adjustments(
    base_crew: int,
    cubic_feet,
    handicap_percent,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> int:
    """Add handicap-driven movers to ``base_crew``.

    Small jobs (under ``handicap_min_cubic_feet``) never get extra movers.
    Larger jobs add one mover per band threshold of handicap percent, capped
    at ``max_handicap_extra_movers``.
    """
    crew = max(1, int(base_crew))
    cuft = _non_negative_decimal(cubic_feet)
    if cuft < tables.handicap_min_cubic_feet:
        return crew
    threshold = first_band(cuft, tables.handicap_thresholds, inclusive=False)
    percent = Decimal(str(handicap_percent or 0))
    extras = int(percent // threshold) if percent > 0 else 0
    return crew + min(max(extras, 0), tables.max_handicap_extra_movers)


def trucks_for_cubic_feet(cubic_feet, tables: RateTables = DEFAULT_RATE_TABLES) -> int:
    cuft = _non_negative_decimal(cubic_feet)
    return max(1, math.ceil(cuft / tables.cubic_feet_per_truck))


def resolve_crew_plan(
    *,
    cubic_feet,
    service_type: ServiceType,
    movers: Optional[int] = None,
    trucks: Optional[int] = None,
    handicaps: Optional[HandicapParams] = None,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> CrewPlan:
    """Resolve crew, trucks and hours for a job.

    A caller-supplied ``movers`` is used as-is; the volume bands and the
    handicap adjustment only apply when it is omitted. Hours are left
    unrounded.
    """
    cuft = _non_negative_decimal(cubic_feet)
    handicap_percent = compute_handicap_percent(handicaps, tables)

    if movers is not None:
        crew = max(1, int(movers))
    else:
        crew = apply_crew_adjustments(crew_by_cubic_feet(cuft, tables), cuft, handicap_percent, tables)

    truck_count = max(1, int(trucks)) if trucks is not None else trucks_for_cubic_feet(cuft, tables)

    speed = tables.service_speed[ServiceType(service_type)]
    base_hours = cuft / (crew * speed)
    effective_hours = base_hours * (1 + handicap_percent)

    return CrewPlan(
        crew=crew,
        trucks=truck_count,
        base_hours=base_hours,
        handicap_percent=handicap_percent,
        effective_hours=effective_hours,
    )
