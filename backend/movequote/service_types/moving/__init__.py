from .crew import (
    CrewPlan,
    HandicapParams,
    apply_crew_adjustments,
    compute_handicap_percent,
    crew_by_cubic_feet,
    resolve_crew_plan,
    trucks_for_cubic_feet,
)
from .day_split import DaySplitPlan, get_day_split_plan
from .estimate import (
    JobInputs,
    PricingBreakdown,
    calculate_pricing,
    compute_distance_costs,
    compute_specialty_charges,
    resolve_base_rate,
)
from .rates import (
    DEFAULT_RATE_TABLES,
    MOVE_SIZE_CUFT,
    BillingService,
    RatesConfig,
    RateTables,
    ServiceType,
    cubic_feet_for_move_size,
)

__all__ = [
    "BillingService",
    "CrewPlan",
    "DEFAULT_RATE_TABLES",
    "DaySplitPlan",
    "HandicapParams",
    "JobInputs",
    "MOVE_SIZE_CUFT",
    "PricingBreakdown",
    "RateTables",
    "RatesConfig",
    "ServiceType",
    "apply_crew_adjustments",
    "calculate_pricing",
    "compute_distance_costs",
    "compute_handicap_percent",
    "compute_specialty_charges",
    "crew_by_cubic_feet",
    "cubic_feet_for_move_size",
    "get_day_split_plan",
    "resolve_base_rate",
    "resolve_crew_plan",
    "trucks_for_cubic_feet",
]
