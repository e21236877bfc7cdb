from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..service_types.moving import BillingService, ServiceType

# Upper bounds keep every cost well inside decimal precision.
MAX_DISTANCE_MILES = 10_000
MAX_CUBIC_FEET = 100_000
MAX_HOURS = 1_000
MAX_HOURLY_RATE = 100_000
MAX_CREW = 100
MAX_STAIRS_FLIGHTS = 100
MAX_WALK_DISTANCE_FT = 100_000

NonNegativeDecimal = Annotated[Decimal, Field(ge=0)]
HourlyRate = Annotated[Decimal, Field(ge=0, le=MAX_HOURLY_RATE)]
CrewSize = Annotated[int, Field(ge=1, le=MAX_CREW)]
SpecialtyTier = Annotated[int, Field(ge=1, le=3)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FieldError(BaseModel):
    path: str
    message: str


class PricingRequestError(ValueError):
    """Raised when a pricing request fails validation.

    ``errors`` holds one ``{"path", "message"}`` entry per failing field.
    """

    def __init__(self, errors: List[dict], message: str = "Invalid pricing request"):
        super().__init__(message)
        self.message = message
        self.errors = errors


class HandicapsIn(_CamelModel):
    stairs_flights: Optional[int] = Field(None, ge=0, le=MAX_STAIRS_FLIGHTS, alias="stairsFlights")
    walk_distance_ft: Optional[int] = Field(None, ge=0, le=MAX_WALK_DISTANCE_FT, alias="walkDistanceFt")
    has_elevator: Optional[bool] = Field(None, alias="hasElevator")


class RatesIn(_CamelModel):
    # Crew-size keys arrive as JSON strings and are coerced to ints.
    base_hourly_rate: Optional[Dict[BillingService, Dict[CrewSize, HourlyRate]]] = Field(
        None, alias="baseHourlyRate"
    )
    additional_mover_per_hour: Optional[Dict[BillingService, HourlyRate]] = Field(
        None, alias="additionalMoverPerHour"
    )
    additional_truck_per_hour: Optional[HourlyRate] = Field(None, alias="additionalTruckPerHour")
    # Per mover per hour
    emergency_per_hour: Optional[HourlyRate] = Field(None, alias="emergencyPerHour")


class PricingRequest(_CamelModel):
    service_type: ServiceType = Field(..., alias="serviceType")
    billing_service: BillingService = Field(..., alias="billingService")
    distance_miles: NonNegativeDecimal = Field(..., le=MAX_DISTANCE_MILES, alias="distanceMiles")
    cubic_feet: NonNegativeDecimal = Field(..., le=MAX_CUBIC_FEET, alias="cubicFeet")
    movers: Optional[CrewSize] = None
    trucks: Optional[CrewSize] = None
    handicaps: Optional[HandicapsIn] = None
    emergency_within_24h: Optional[bool] = Field(None, alias="emergencyWithin24h")
    specialty_tiers: Optional[List[SpecialtyTier]] = Field(None, alias="specialtyTiers")
    rates: Optional[RatesIn] = None


class DaySplitRequest(_CamelModel):
    distance_miles: NonNegativeDecimal = Field(..., le=MAX_DISTANCE_MILES, alias="distanceMiles")
    effective_hours: NonNegativeDecimal = Field(..., le=MAX_HOURS, alias="effectiveHours")


class DaySplitOut(_CamelModel):
    kind: Literal["local", "regional", "unknown"]
    threshold_hours: Optional[float] = Field(None, alias="thresholdHours")
    single_day_possible: bool = Field(..., alias="singleDayPossible")


class PricingResponse(_CamelModel):
    service_type: ServiceType = Field(..., alias="serviceType")
    billing_service: BillingService = Field(..., alias="billingService")
    recommended_crew: int = Field(..., ge=1, alias="recommendedCrew")
    recommended_trucks: int = Field(..., ge=1, alias="recommendedTrucks")
    base_hours_before_handicap: float = Field(..., alias="baseHoursBeforeHandicap")
    handicap_percent: float = Field(..., alias="handicapPercent")
    effective_hours: float = Field(..., alias="effectiveHours")
    day_split: DaySplitOut = Field(..., alias="daySplit")
    base_rate_per_hour: float = Field(..., alias="baseRatePerHour")
    additional_truck_hourly: float = Field(..., alias="additionalTruckHourly")
    emergency_surcharge_hourly: float = Field(..., alias="emergencySurchargeHourly")
    hourly_cost: float = Field(..., alias="hourlyCost")
    mileage_cost: float = Field(..., alias="mileageCost")
    fuel_cost: float = Field(..., alias="fuelCost")
    specialty_item_charges: float = Field(..., alias="specialtyItemCharges")
    total: float
    currency: Optional[str] = None


class MoveSizePreset(_CamelModel):
    label: str
    cubic_feet: int = Field(..., alias="cubicFeet")


class PricingCatalog(_CamelModel):
    service_types: List[ServiceType] = Field(..., alias="serviceTypes")
    billing_services: List[BillingService] = Field(..., alias="billingServices")
    specialty_tiers: Dict[int, float] = Field(..., alias="specialtyTiers")
    move_sizes: List[MoveSizePreset] = Field(..., alias="moveSizes")
