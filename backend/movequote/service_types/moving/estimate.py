from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional, Tuple

from .crew import HandicapParams, resolve_crew_plan
from .day_split import DaySplitPlan, get_day_split_plan
from .rates import DEFAULT_RATE_TABLES, BillingService, RatesConfig, RateTables, ServiceType

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def _round2(val: Decimal) -> Decimal:
    return val.quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class JobInputs:
    service_type: ServiceType
    billing_service: BillingService
    distance_miles: Decimal
    cubic_feet: Decimal
    movers: Optional[int] = None
    trucks: Optional[int] = None
    handicaps: Optional[HandicapParams] = None
    emergency_within_24h: bool = False
    specialty_tiers: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PricingBreakdown:
    """Complete quote for one job. Money and hours are rounded to cents."""

    service_type: ServiceType
    billing_service: BillingService
    recommended_crew: int
    recommended_trucks: int
    base_hours_before_handicap: Decimal
    handicap_percent: Decimal
    effective_hours: Decimal
    day_split: DaySplitPlan
    base_rate_per_hour: Decimal
    additional_truck_hourly: Decimal
    # Per hour for the whole crew.
    emergency_surcharge_hourly: Decimal
    hourly_cost: Decimal
    mileage_cost: Decimal
    fuel_cost: Decimal
    specialty_item_charges: Decimal
    total: Decimal


def resolve_base_rate(
    rate_table: Mapping[BillingService, Mapping[int, Decimal]],
    additional_mover_rates: Mapping[BillingService, Decimal],
    billing_service: BillingService,
    crew: int,
) -> Decimal:
    """Return the hourly rate for ``crew`` movers on ``billing_service``.

    A crew size missing from the table bills at the largest defined size
    plus the service's additional-mover rate for each mover beyond it.
    A service without a table resolves to zero so the quote can still be
    produced.
    """
    service_rates = rate_table.get(billing_service) or {}
    if crew in service_rates:
        return service_rates[crew]
    if not service_rates:
        logger.warning(
            "No hourly rate table for billing service; pricing at zero",
            extra={"billing_service": getattr(billing_service, "value", billing_service), "crew": crew},
        )
        return _ZERO
    max_defined = max(service_rates)
    per_mover = additional_mover_rates.get(billing_service) or _ZERO
    return service_rates[max_defined] + per_mover * max(0, crew - max_defined)


def compute_distance_costs(distance_miles, tables: RateTables = DEFAULT_RATE_TABLES) -> Tuple[Decimal, Decimal]:
    """Return ``(mileage_cost, fuel_cost)``; free inside the travel radius."""
    distance = max(_ZERO, Decimal(str(distance_miles or 0)))
    if distance <= tables.free_travel_miles:
        return _ZERO, _ZERO
    return distance * tables.mileage_rate_per_mile, distance * tables.fuel_rate_per_mile


def compute_specialty_charges(tiers: Iterable[int], tables: RateTables = DEFAULT_RATE_TABLES) -> Decimal:
    """Sum one flat charge per declared specialty item."""
    total = _ZERO
    for tier in tiers or ():
        total += tables.specialty_tiers.get(int(tier), _ZERO)
    return total


def calculate_pricing(
    inputs: JobInputs,
    rates: Optional[RatesConfig] = None,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> PricingBreakdown:
    """Price a moving job.

    Intermediate values stay unrounded; every output field is rounded to
    cents, and ``total`` is rounded from the unrounded sum.
    """
    tables = tables.with_overrides(rates)

    plan = resolve_crew_plan(
        cubic_feet=inputs.cubic_feet,
        service_type=inputs.service_type,
        movers=inputs.movers,
        trucks=inputs.trucks,
        handicaps=inputs.handicaps,
        tables=tables,
    )
    day_split = get_day_split_plan(inputs.distance_miles, plan.effective_hours, tables)

    base_rate = resolve_base_rate(
        tables.base_hourly_rates,
        tables.additional_mover_rates,
        BillingService(inputs.billing_service),
        plan.crew,
    )
    truck_hourly = max(0, plan.trucks - 1) * tables.additional_truck_hourly
    emergency_hourly = tables.emergency_hourly_per_mover * plan.crew if inputs.emergency_within_24h else _ZERO

    hourly_cost = (base_rate + truck_hourly + emergency_hourly) * plan.effective_hours
    mileage_cost, fuel_cost = compute_distance_costs(inputs.distance_miles, tables)
    specialty = compute_specialty_charges(inputs.specialty_tiers, tables)

    total = hourly_cost + mileage_cost + fuel_cost + specialty

    logger.debug(
        "Moving job priced",
        extra={
            "billing_service": BillingService(inputs.billing_service).value,
            "crew": plan.crew,
            "trucks": plan.trucks,
            "effective_hours": str(plan.effective_hours),
            "base_rate": str(base_rate),
            "total": str(total),
        },
    )

    return PricingBreakdown(
        service_type=ServiceType(inputs.service_type),
        billing_service=BillingService(inputs.billing_service),
        recommended_crew=plan.crew,
        recommended_trucks=plan.trucks,
        base_hours_before_handicap=_round2(plan.base_hours),
        handicap_percent=_round2(plan.handicap_percent),
        effective_hours=_round2(plan.effective_hours),
        day_split=day_split,
        base_rate_per_hour=_round2(base_rate),
        additional_truck_hourly=_round2(truck_hourly),
        emergency_surcharge_hourly=_round2(emergency_hourly),
        hourly_cost=_round2(hourly_cost),
        mileage_cost=_round2(mileage_cost),
        fuel_cost=_round2(fuel_cost),
        specialty_item_charges=_round2(specialty),
        total=_round2(total),
    )
