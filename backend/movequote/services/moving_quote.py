"""Request/response contract for the moving pricing engine.

Callers hand in plain data (a form post, a JSON body, a stored lead) and
get plain data back. Validation happens here, before the engine runs; the
engine under :mod:`movequote.service_types.moving` only ever sees
well-formed :class:`JobInputs`.
"""

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..schemas.pricing import PricingRequest, PricingRequestError, PricingResponse, RatesIn
from ..service_types.moving import (
    DaySplitPlan,
    HandicapParams,
    JobInputs,
    PricingBreakdown,
    RatesConfig,
    calculate_pricing,
)
from ..utils.errors import field_errors_from_pydantic

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def _money(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


def validate_pricing_request(payload: Any) -> PricingRequest:
    """Coerce and validate an external payload.

    Raises :class:`PricingRequestError` listing every failing field.
    """
    if isinstance(payload, PricingRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise PricingRequestError([{"path": "", "message": "Request body must be an object"}])
    try:
        return PricingRequest.model_validate(dict(payload))
    except ValidationError as exc:
        errors = field_errors_from_pydantic(exc.errors())
        logger.warning("Pricing request rejected", extra={"field_errors": errors})
        raise PricingRequestError(errors) from exc


def rates_config_from_schema(rates: Optional[RatesIn]) -> Optional[RatesConfig]:
    if rates is None:
        return None
    return RatesConfig.from_mapping(
        {
            "base_hourly_rates": rates.base_hourly_rate,
            "additional_mover_rates": rates.additional_mover_per_hour,
            "additional_truck_hourly": rates.additional_truck_per_hour,
            "emergency_hourly_per_mover": rates.emergency_per_hour,
        }
    )


def to_job_inputs(req: PricingRequest) -> JobInputs:
    handicaps = None
    if req.handicaps is not None:
        handicaps = HandicapParams(
            stairs_flights=req.handicaps.stairs_flights or 0,
            walk_distance_ft=req.handicaps.walk_distance_ft or 0,
            has_elevator=bool(req.handicaps.has_elevator),
        )
    return JobInputs(
        service_type=req.service_type,
        billing_service=req.billing_service,
        distance_miles=req.distance_miles,
        cubic_feet=req.cubic_feet,
        movers=req.movers,
        trucks=req.trucks,
        handicaps=handicaps,
        emergency_within_24h=bool(req.emergency_within_24h),
        specialty_tiers=tuple(req.specialty_tiers or ()),
    )


def calculate_pricing_from_request(payload: Any, base_rates: Optional[RatesConfig] = None) -> PricingBreakdown:
    """Validate ``payload`` and price it.

    ``base_rates`` is the service-wide override (see
    :mod:`movequote.services.rates_loader`); rates carried on the request
    win over it field by field.
    """
    req = validate_pricing_request(payload)
    request_rates = rates_config_from_schema(req.rates)
    if base_rates is not None:
        rates = base_rates.merged_with(request_rates)
    else:
        rates = request_rates
    return calculate_pricing(to_job_inputs(req), rates)


def breakdown_to_response(breakdown: PricingBreakdown, currency: Optional[str] = None) -> PricingResponse:
    """Shape a breakdown for the wire: camelCase keys, plain numbers."""
    plan = breakdown.day_split
    return PricingResponse.model_validate(
        {
            "serviceType": breakdown.service_type,
            "billingService": breakdown.billing_service,
            "recommendedCrew": breakdown.recommended_crew,
            "recommendedTrucks": breakdown.recommended_trucks,
            "baseHoursBeforeHandicap": float(breakdown.base_hours_before_handicap),
            "handicapPercent": float(breakdown.handicap_percent),
            "effectiveHours": float(breakdown.effective_hours),
            "daySplit": {
                "kind": plan.kind,
                "thresholdHours": float(plan.threshold_hours) if plan.threshold_hours is not None else None,
                "singleDayPossible": plan.single_day_possible,
            },
            "baseRatePerHour": float(breakdown.base_rate_per_hour),
            "additionalTruckHourly": float(breakdown.additional_truck_hourly),
            "emergencySurchargeHourly": float(breakdown.emergency_surcharge_hourly),
            "hourlyCost": float(breakdown.hourly_cost),
            "mileageCost": float(breakdown.mileage_cost),
            "fuelCost": float(breakdown.fuel_cost),
            "specialtyItemCharges": float(breakdown.specialty_item_charges),
            "total": float(breakdown.total),
            "currency": currency,
        }
    )


def breakdown_from_response(payload: Mapping[str, Any] | PricingResponse) -> PricingBreakdown:
    """Rebuild a :class:`PricingBreakdown` from its wire shape."""
    resp = payload if isinstance(payload, PricingResponse) else PricingResponse.model_validate(payload)
    plan = resp.day_split
    return PricingBreakdown(
        service_type=resp.service_type,
        billing_service=resp.billing_service,
        recommended_crew=resp.recommended_crew,
        recommended_trucks=resp.recommended_trucks,
        base_hours_before_handicap=_money(resp.base_hours_before_handicap),
        handicap_percent=_money(resp.handicap_percent),
        effective_hours=_money(resp.effective_hours),
        day_split=DaySplitPlan(
            kind=plan.kind,
            threshold_hours=Decimal(str(plan.threshold_hours)) if plan.threshold_hours is not None else None,
            single_day_possible=plan.single_day_possible,
        ),
        base_rate_per_hour=_money(resp.base_rate_per_hour),
        additional_truck_hourly=_money(resp.additional_truck_hourly),
        emergency_surcharge_hourly=_money(resp.emergency_surcharge_hourly),
        hourly_cost=_money(resp.hourly_cost),
        mileage_cost=_money(resp.mileage_cost),
        fuel_cost=_money(resp.fuel_cost),
        specialty_item_charges=_money(resp.specialty_item_charges),
        total=_money(resp.total),
    )
