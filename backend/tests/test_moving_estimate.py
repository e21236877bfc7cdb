from decimal import Decimal

from movequote.service_types.moving import (
    BillingService,
    HandicapParams,
    JobInputs,
    RatesConfig,
    ServiceType,
    calculate_pricing,
    compute_distance_costs,
    compute_specialty_charges,
)


def _job(**overrides) -> JobInputs:
    params = {
        "service_type": ServiceType.FULL_SERVICE,
        "billing_service": BillingService.MOVING,
        "distance_miles": Decimal("10"),
        "cubic_feet": Decimal("900"),
    }
    params.update(overrides)
    return JobInputs(**params)


def _component_sum(out):
    return out.hourly_cost + out.mileage_cost + out.fuel_cost + out.specialty_item_charges


def test_baseline_job():
    out = calculate_pricing(
        _job(
            distance_miles=Decimal("40"),
            handicaps=HandicapParams(stairs_flights=1, has_elevator=False, walk_distance_ft=0),
            emergency_within_24h=True,
            specialty_tiers=(1, 3),
        )
    )
    assert out.recommended_crew == 2
    assert out.recommended_trucks == 1
    assert out.base_hours_before_handicap == Decimal("5.63")
    assert out.handicap_percent == Decimal("0.09")
    assert out.effective_hours == Decimal("6.13")
    assert out.base_rate_per_hour == Decimal("169")
    assert out.emergency_surcharge_hourly == Decimal("60")
    assert out.additional_truck_hourly == Decimal("0")
    assert out.hourly_cost == Decimal("1404.06")
    assert out.mileage_cost == Decimal("171.60")
    assert out.fuel_cost == Decimal("80.00")
    assert out.specialty_item_charges == Decimal("500")
    # computed from unrounded parts: 1404.05625 + 171.6 + 80 + 500
    assert out.total == Decimal("2155.66")
    assert out.day_split.kind == "regional"
    assert out.day_split.single_day_possible is True


def test_handicaps_add_movers_for_larger_jobs():
    out = calculate_pricing(
        _job(cubic_feet=Decimal("800"), handicaps=HandicapParams(stairs_flights=2, has_elevator=True))
    )
    assert out.handicap_percent == Decimal("0.36")
    assert out.recommended_crew == 4


def test_manual_movers_extrapolate_rate():
    out = calculate_pricing(
        _job(billing_service=BillingService.WHITE_GLOVE, cubic_feet=Decimal("5000"), movers=9)
    )
    assert out.recommended_crew == 9
    assert out.base_rate_per_hour == Decimal("724")


def test_additional_trucks_billed_hourly():
    out = calculate_pricing(_job(cubic_feet=Decimal("3200")))
    assert out.recommended_trucks == 3
    assert out.additional_truck_hourly == Decimal("60")


def test_rates_config_overrides_apply():
    rates = RatesConfig(additional_truck_hourly=Decimal("50"), emergency_hourly_per_mover=Decimal("10"))
    out = calculate_pricing(_job(trucks=2, movers=3, emergency_within_24h=True), rates)
    assert out.additional_truck_hourly == Decimal("50")
    assert out.emergency_surcharge_hourly == Decimal("30")


def test_unconfigured_service_still_produces_quote():
    rates = RatesConfig.from_mapping({"base_hourly_rates": {"Moving": {2: 100}}})
    out = calculate_pricing(
        _job(billing_service=BillingService.STAGING, distance_miles=Decimal("50"), specialty_tiers=(2,)),
        rates,
    )
    assert out.base_rate_per_hour == Decimal("0")
    assert out.hourly_cost == Decimal("0")
    assert out.total == out.mileage_cost + out.fuel_cost + Decimal("250")


def test_zero_volume_job():
    out = calculate_pricing(_job(cubic_feet=Decimal("0")))
    assert out.base_hours_before_handicap == 0
    assert out.hourly_cost == 0
    assert out.total == 0
    assert out.recommended_crew >= 1


def test_distance_costs_free_radius():
    for miles in (0, 0.5, 10, 29.99, 30):
        assert compute_distance_costs(miles) == (0, 0)
        out = calculate_pricing(_job(distance_miles=Decimal(str(miles))))
        assert out.mileage_cost == 0
        assert out.fuel_cost == 0


def test_distance_costs_above_radius():
    mileage, fuel = compute_distance_costs(31)
    assert mileage == Decimal("31") * Decimal("4.29")
    assert fuel == Decimal("62.0")


def test_specialty_charges_per_item():
    assert compute_specialty_charges(()) == 0
    assert compute_specialty_charges((1, 3)) == Decimal("500")
    assert compute_specialty_charges((2, 2, 2)) == Decimal("750")


def test_total_matches_components_across_jobs():
    for cuft in (0, 150, 433, 777, 1009, 1999, 3333):
        for miles in (0, 31, 87.5, 200):
            out = calculate_pricing(
                _job(
                    cubic_feet=Decimal(cuft),
                    distance_miles=Decimal(str(miles)),
                    handicaps=HandicapParams(stairs_flights=cuft % 4, walk_distance_ft=cuft % 350),
                    emergency_within_24h=bool(cuft % 2),
                    specialty_tiers=(1,),
                )
            )
            assert out.total >= 0
            assert out.effective_hours >= out.base_hours_before_handicap
            assert abs(out.total - _component_sum(out)) <= Decimal("0.02")


def test_breakdown_echoes_service_fields():
    out = calculate_pricing(_job(service_type="White Glove", billing_service="Commercial"))
    assert out.service_type is ServiceType.WHITE_GLOVE
    assert out.billing_service is BillingService.COMMERCIAL
