"""Static rate and threshold tables for the moving pricing engine.

The tables are read-only configuration. ``DEFAULT_RATE_TABLES`` is shared
by every pricing call; alternate pricing (tenant rates, what-if scenarios)
goes through :class:`RatesConfig` and :meth:`RateTables.with_overrides`,
which build a new :class:`RateTables` instead of touching the default.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

_INF = Decimal("Infinity")


class ServiceType(str, enum.Enum):
    """Move complexity class; drives crew throughput."""

    GRAB_N_GO = "Grab-n-Go"
    FULL_SERVICE = "Full Service"
    WHITE_GLOVE = "White Glove"
    LABOR_ONLY = "Labor Only"


class BillingService(str, enum.Enum):
    """Category used to select the hourly rate table."""

    MOVING = "Moving"
    PACKING = "Packing"
    UNPACKING = "Unpacking"
    MOVING_AND_PACKING = "Moving and Packing"
    FULL_SERVICE = "Full Service"
    WHITE_GLOVE = "White Glove"
    LOAD_ONLY = "Load Only"
    UNLOAD_ONLY = "Unload Only"
    LABOR_ONLY = "Labor Only"
    STAGING = "Staging"
    COMMERCIAL = "Commercial"


def _to_decimal(val: Any, default: Decimal = Decimal("0")) -> Decimal:
    if val is None:
        return default
    if isinstance(val, Decimal):
        return val
    try:
        return Decimal(str(val))
    except Exception:
        return default


def _crew_rates(*amounts: int) -> Mapping[int, Decimal]:
    # Tables start at a crew of two.
    return MappingProxyType({crew: Decimal(amount) for crew, amount in enumerate(amounts, start=2)})


def _freeze_rate_table(table: Mapping[Any, Mapping[Any, Any]]) -> Mapping[BillingService, Mapping[int, Decimal]]:
    frozen = {}
    for service, rates in table.items():
        frozen[BillingService(service)] = MappingProxyType(
            {int(crew): _to_decimal(rate) for crew, rate in (rates or {}).items()}
        )
    return MappingProxyType(frozen)


def _freeze_mover_rates(table: Mapping[Any, Any]) -> Mapping[BillingService, Decimal]:
    return MappingProxyType({BillingService(service): _to_decimal(rate) for service, rate in table.items()})


_STANDARD = _crew_rates(169, 229, 289, 349, 409, 469)
_PREMIUM = _crew_rates(199, 274, 349, 424, 499, 574)
_LABOR = _crew_rates(129, 189, 249, 309, 369, 429)

BASE_HOURLY_RATES: Mapping[BillingService, Mapping[int, Decimal]] = MappingProxyType(
    {
        BillingService.MOVING: _STANDARD,
        BillingService.PACKING: _STANDARD,
        BillingService.UNPACKING: _STANDARD,
        BillingService.MOVING_AND_PACKING: _STANDARD,
        BillingService.FULL_SERVICE: _STANDARD,
        BillingService.WHITE_GLOVE: _PREMIUM,
        BillingService.LOAD_ONLY: _LABOR,
        BillingService.UNLOAD_ONLY: _LABOR,
        BillingService.LABOR_ONLY: _LABOR,
        BillingService.STAGING: _LABOR,
        BillingService.COMMERCIAL: _STANDARD,
    }
)

ADDITIONAL_MOVER_RATES: Mapping[BillingService, Decimal] = MappingProxyType(
    {
        service: Decimal("75") if service is BillingService.WHITE_GLOVE else Decimal("60")
        for service in BillingService
    }
)

# Cubic feet moved per hour by one crew member.
SERVICE_SPEED_CUFT_PER_HOUR_PER_MOVER: Mapping[ServiceType, Decimal] = MappingProxyType(
    {
        ServiceType.GRAB_N_GO: Decimal("95"),
        ServiceType.FULL_SERVICE: Decimal("80"),
        ServiceType.WHITE_GLOVE: Decimal("70"),
        ServiceType.LABOR_ONLY: Decimal("90"),
    }
)

# (max cubic feet, crew size); inclusive upper bounds.
CREW_SIZE_BY_CUBIC_FEET: Tuple[Tuple[Decimal, int], ...] = (
    (Decimal("1009"), 2),
    (Decimal("1500"), 3),
    (Decimal("2000"), 4),
    (Decimal("3200"), 5),
    (_INF, 6),
)

# (cubic feet upper bound, handicap percent per extra mover); exclusive bounds.
HANDICAP_CREW_THRESHOLDS: Tuple[Tuple[Decimal, Decimal], ...] = (
    (Decimal("300"), Decimal("0.36")),
    (Decimal("600"), Decimal("0.27")),
    (_INF, Decimal("0.18")),
)

SPECIALTY_ITEM_TIERS: Mapping[int, Decimal] = MappingProxyType(
    {1: Decimal("150"), 2: Decimal("250"), 3: Decimal("350")}
)

MOVE_SIZE_CUFT: Mapping[str, int] = MappingProxyType(
    {
        "Room or Less": 75,
        "Studio Apartment": 288,
        "1 Bedroom Apartment": 432,
        "2 Bedroom Apartment": 743,
        "3 Bedroom Apartment": 1296,
        "1 Bedroom House": 576,
        "1 Bedroom House (Large)": 720,
        "2 Bedroom House": 1008,
        "2 Bedroom House (Large)": 1152,
        "3 Bedroom House": 1440,
        "3 Bedroom House (Large)": 1584,
        "4 Bedroom House": 1872,
        "4 Bedroom House (Large)": 2016,
        "5 Bedroom House": 3168,
        "5 Bedroom House (Large)": 3816,
        "5 x 10 Storage Unit": 400,
        "5 x 15 Storage Unit": 600,
        "10 x 10 Storage Unit": 800,
        "10 x 15 Storage Unit": 1200,
        "10 x 20 Storage Unit": 1600,
        "Office (Small)": 1000,
        "Office (Medium)": 2000,
        "Office (Large)": 3000,
    }
)


def cubic_feet_for_move_size(label: str) -> Optional[int]:
    """Return the preset volume for a move-size label, or ``None``."""
    return MOVE_SIZE_CUFT.get((label or "").strip())


@dataclass(frozen=True)
class DaySplitThresholds:
    local_miles_max: Decimal = Decimal("30")
    local_hours_threshold: Decimal = Decimal("9")
    regional_miles_min: Decimal = Decimal("30")
    regional_miles_max: Decimal = Decimal("120")
    # DOT driving-hours ceiling.
    regional_hours_threshold: Decimal = Decimal("14")


@dataclass(frozen=True)
class RatesConfig:
    """Optional overrides for the rate tables.

    A table override replaces the whole default table rather than merging
    into it. ``None`` keeps the default.
    """

    base_hourly_rates: Optional[Mapping[BillingService, Mapping[int, Decimal]]] = None
    additional_mover_rates: Optional[Mapping[BillingService, Decimal]] = None
    additional_truck_hourly: Optional[Decimal] = None
    emergency_hourly_per_mover: Optional[Decimal] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RatesConfig":
        """Build a config from plain data, normalising keys and amounts."""
        base = data.get("base_hourly_rates")
        movers = data.get("additional_mover_rates")
        truck = data.get("additional_truck_hourly")
        emergency = data.get("emergency_hourly_per_mover")
        return cls(
            base_hourly_rates=_freeze_rate_table(base) if base is not None else None,
            additional_mover_rates=_freeze_mover_rates(movers) if movers is not None else None,
            additional_truck_hourly=_to_decimal(truck) if truck is not None else None,
            emergency_hourly_per_mover=_to_decimal(emergency) if emergency is not None else None,
        )

    def merged_with(self, other: Optional["RatesConfig"]) -> "RatesConfig":
        """Return a config where fields set on ``other`` win over ``self``."""
        if other is None:
            return self
        return RatesConfig(
            base_hourly_rates=other.base_hourly_rates if other.base_hourly_rates is not None else self.base_hourly_rates,
            additional_mover_rates=(
                other.additional_mover_rates if other.additional_mover_rates is not None else self.additional_mover_rates
            ),
            additional_truck_hourly=(
                other.additional_truck_hourly
                if other.additional_truck_hourly is not None
                else self.additional_truck_hourly
            ),
            emergency_hourly_per_mover=(
                other.emergency_hourly_per_mover
                if other.emergency_hourly_per_mover is not None
                else self.emergency_hourly_per_mover
            ),
        )


@dataclass(frozen=True)
class RateTables:
    """Every table the engine reads, bundled so it can be injected."""

    base_hourly_rates: Mapping[BillingService, Mapping[int, Decimal]] = field(default_factory=lambda: BASE_HOURLY_RATES)
    additional_mover_rates: Mapping[BillingService, Decimal] = field(default_factory=lambda: ADDITIONAL_MOVER_RATES)
    additional_truck_hourly: Decimal = Decimal("30")
    emergency_hourly_per_mover: Decimal = Decimal("30")
    fuel_rate_per_mile: Decimal = Decimal("2.0")
    mileage_rate_per_mile: Decimal = Decimal("4.29")
    free_travel_miles: Decimal = Decimal("30")
    cubic_feet_per_truck: Decimal = Decimal("1500")
    service_speed: Mapping[ServiceType, Decimal] = field(default_factory=lambda: SERVICE_SPEED_CUFT_PER_HOUR_PER_MOVER)
    crew_bands: Tuple[Tuple[Decimal, int], ...] = CREW_SIZE_BY_CUBIC_FEET
    handicap_thresholds: Tuple[Tuple[Decimal, Decimal], ...] = HANDICAP_CREW_THRESHOLDS
    handicap_min_cubic_feet: Decimal = Decimal("400")
    max_handicap_extra_movers: int = 2
    stairs_flight_percent: Decimal = Decimal("0.09")
    walk_per_100ft_percent: Decimal = Decimal("0.09")
    elevator_percent: Decimal = Decimal("0.18")
    specialty_tiers: Mapping[int, Decimal] = field(default_factory=lambda: SPECIALTY_ITEM_TIERS)
    day_split: DaySplitThresholds = field(default_factory=DaySplitThresholds)

    def with_overrides(self, rates: Optional[RatesConfig]) -> "RateTables":
        if rates is None:
            return self
        changes: dict[str, Any] = {}
        if rates.base_hourly_rates is not None:
            changes["base_hourly_rates"] = rates.base_hourly_rates
        if rates.additional_mover_rates is not None:
            changes["additional_mover_rates"] = rates.additional_mover_rates
        if rates.additional_truck_hourly is not None:
            changes["additional_truck_hourly"] = rates.additional_truck_hourly
        if rates.emergency_hourly_per_mover is not None:
            changes["emergency_hourly_per_mover"] = rates.emergency_hourly_per_mover
        return replace(self, **changes) if changes else self


DEFAULT_RATE_TABLES = RateTables()
