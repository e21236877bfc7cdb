from decimal import Decimal

from movequote.service_types.moving import (
    HandicapParams,
    ServiceType,
    apply_crew_adjustments,
    compute_handicap_percent,
    crew_by_cubic_feet,
    resolve_crew_plan,
    trucks_for_cubic_feet,
)


def test_crew_by_cubic_feet_bands():
    assert crew_by_cubic_feet(0) == 2
    assert crew_by_cubic_feet(1009) == 2
    assert crew_by_cubic_feet(1010) == 3
    assert crew_by_cubic_feet(1500) == 3
    assert crew_by_cubic_feet(2000) == 4
    assert crew_by_cubic_feet(3200) == 5
    assert crew_by_cubic_feet(3201) == 6
    assert crew_by_cubic_feet(50_000) == 6


def test_handicap_percent_is_additive():
    assert compute_handicap_percent(None) == Decimal("0")
    assert compute_handicap_percent(HandicapParams(stairs_flights=1)) == Decimal("0.09")
    assert compute_handicap_percent(HandicapParams(walk_distance_ft=250)) == Decimal("0.18")
    assert compute_handicap_percent(HandicapParams(has_elevator=True)) == Decimal("0.18")
    combined = HandicapParams(stairs_flights=2, walk_distance_ft=100, has_elevator=True)
    assert compute_handicap_percent(combined) == Decimal("0.45")


def test_handicap_percent_ignores_negative_inputs():
    assert compute_handicap_percent(HandicapParams(stairs_flights=-3, walk_distance_ft=-500)) == Decimal("0")


def test_crew_adjustment_threshold_logic_and_caps():
    # under 400 cu ft: no extras even with a heavy handicap
    assert apply_crew_adjustments(2, 350, Decimal("0.36")) == 2
    # 400 <= cu ft < 600 uses the 0.27 threshold
    assert apply_crew_adjustments(2, 550, Decimal("0.27")) == 3
    assert apply_crew_adjustments(2, 550, Decimal("0.26")) == 2
    # 600 and up uses 0.18, capped at two extras
    assert apply_crew_adjustments(4, 1800, Decimal("0.5")) == 6
    assert apply_crew_adjustments(4, 1800, Decimal("1.0")) == 6


def test_crew_adjustment_never_drops_below_one():
    assert apply_crew_adjustments(0, 100, Decimal("0")) == 1


def test_trucks_for_cubic_feet():
    assert trucks_for_cubic_feet(0) == 1
    assert trucks_for_cubic_feet(1500) == 1
    assert trucks_for_cubic_feet(1501) == 2
    assert trucks_for_cubic_feet(3816) == 3


def test_resolve_crew_plan_hours():
    plan = resolve_crew_plan(
        cubic_feet=Decimal("900"),
        service_type=ServiceType.FULL_SERVICE,
        handicaps=HandicapParams(stairs_flights=1),
    )
    assert plan.crew == 2
    assert plan.trucks == 1
    assert plan.base_hours == Decimal("5.625")
    assert plan.handicap_percent == Decimal("0.09")
    assert plan.effective_hours == Decimal("6.13125")


def test_zero_volume_has_zero_hours():
    plan = resolve_crew_plan(cubic_feet=0, service_type=ServiceType.GRAB_N_GO)
    assert plan.base_hours == 0
    assert plan.effective_hours == 0
    assert plan.crew >= 1


def test_manual_movers_bypass_bands_and_handicaps():
    heavy = HandicapParams(stairs_flights=8, has_elevator=True)
    plan = resolve_crew_plan(
        cubic_feet=1800,
        service_type=ServiceType.FULL_SERVICE,
        movers=3,
        handicaps=heavy,
    )
    assert plan.crew == 3
    # the handicap still adds time
    assert plan.effective_hours > plan.base_hours


def test_handicap_extra_movers_capped_in_plan():
    heavy = HandicapParams(stairs_flights=8, has_elevator=True)  # 0.90
    plan = resolve_crew_plan(cubic_feet=1800, service_type=ServiceType.FULL_SERVICE, handicaps=heavy)
    assert plan.crew == crew_by_cubic_feet(1800) + 2


def test_manual_trucks_override():
    plan = resolve_crew_plan(cubic_feet=4000, service_type=ServiceType.WHITE_GLOVE, trucks=1)
    assert plan.trucks == 1


def test_crew_floor_across_volumes():
    for cuft in range(0, 6000, 37):
        plan = resolve_crew_plan(cubic_feet=cuft, service_type=ServiceType.LABOR_ONLY)
        assert plan.crew >= 1
        assert plan.trucks >= 1


def test_more_handicap_never_reduces_hours():
    previous = None
    for flights in range(0, 12):
        plan = resolve_crew_plan(
            cubic_feet=1200,
            service_type=ServiceType.FULL_SERVICE,
            movers=3,
            handicaps=HandicapParams(stairs_flights=flights),
        )
        assert plan.effective_hours >= plan.base_hours
        if previous is not None:
            assert plan.effective_hours >= previous
        previous = plan.effective_hours
