from fastapi import APIRouter, Depends, status
import logging
from typing import Optional

from ..core.config import settings
from ..schemas.pricing import (
    DaySplitOut,
    DaySplitRequest,
    MoveSizePreset,
    PricingCatalog,
    PricingRequest,
    PricingResponse,
)
from ..service_types.moving import (
    DEFAULT_RATE_TABLES,
    MOVE_SIZE_CUFT,
    BillingService,
    RatesConfig,
    ServiceType,
    get_day_split_plan,
)
from ..services.moving_quote import breakdown_to_response, calculate_pricing_from_request
from ..services.rates_loader import RatesConfigError, get_service_rates
from ..utils import error_response

router = APIRouter(tags=["pricing"])
logger = logging.getLogger(__name__)


def get_rates() -> Optional[RatesConfig]:
    """Service-wide rate overrides; surfaced as a 500 when misconfigured."""
    try:
        return get_service_rates()
    except RatesConfigError as exc:
        raise error_response(
            "Pricing configuration error",
            exc.field_errors or [{"path": "", "message": str(exc)}],
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@router.post("/pricing/calculate", response_model=PricingResponse)
def calculate_moving_price(body: PricingRequest, rates: Optional[RatesConfig] = Depends(get_rates)):
    """Stateless moving quote: crew, hours, day split and itemized costs."""
    breakdown = calculate_pricing_from_request(body, base_rates=rates)
    logger.info(
        "Moving quote calculated",
        extra={
            "billing_service": breakdown.billing_service.value,
            "crew": breakdown.recommended_crew,
            "total": float(breakdown.total),
        },
    )
    return breakdown_to_response(breakdown, currency=settings.DEFAULT_CURRENCY)


@router.post("/pricing/day-split", response_model=DaySplitOut)
def classify_day_split(body: DaySplitRequest):
    plan = get_day_split_plan(body.distance_miles, body.effective_hours)
    return DaySplitOut(
        kind=plan.kind,
        threshold_hours=float(plan.threshold_hours) if plan.threshold_hours is not None else None,
        single_day_possible=plan.single_day_possible,
    )


@router.get("/pricing/catalog", response_model=PricingCatalog)
def pricing_catalog():
    """Enumerations and presets used to build a pricing request."""
    return PricingCatalog(
        service_types=list(ServiceType),
        billing_services=list(BillingService),
        specialty_tiers={tier: float(price) for tier, price in DEFAULT_RATE_TABLES.specialty_tiers.items()},
        move_sizes=[MoveSizePreset(label=label, cubic_feet=cuft) for label, cuft in MOVE_SIZE_CUFT.items()],
    )
