"""
Tests for multi-year healthcare cost projections.

Tests cover:
- Horizon and record count
- Cumulative cost and confidence interval invariants
- Age curve, inflation, tobacco and health adjustments
- Medicare, age-26 and early-retirement transitions
- Injected rating and variance collaborators
- Insights and quick projection helpers
"""

from datetime import date

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from coverage_model.affordability import MetalTier
from coverage_model.data.medical_costs import HealthStatus
from coverage_model.projections import (
    InflationFactors,
    ProjectionInput,
    TransitionType,
    calculate_medicare_premium,
    calculate_yearly_breakdown,
    detect_transition,
    generate_insights,
    generate_multi_year_projection,
    project_to_medicare,
    quick_five_year_projection,
)
from coverage_model.uncertainty import CostVariance


def project(**kwargs):
    kwargs.setdefault("state", "NC")
    kwargs.setdefault("start_year", 2025)
    return generate_multi_year_projection(ProjectionInput(**kwargs))


class FlatRating:
    """Rating provider with no age curve and a $100 base rate."""

    def age_rating_factor(self, age):
        return 1.0

    def state_base_rate(self, state):
        return 100.0


class TestProjectionHorizon:
    """Test the set of projected years."""

    def test_pre_medicare_scenario(self, pre_medicare_projection):
        """A 62-year-old projected five years crosses into Medicare once."""
        p = pre_medicare_projection

        assert p.start_age == 62
        assert p.end_age == 67
        assert len(p.projections) == 6
        assert [yp.age for yp in p.projections] == [62, 63, 64, 65, 66, 67]
        assert [t.type for t in p.major_transitions] == [TransitionType.MEDICARE_ELIGIBLE]
        assert p.projections[3].transition.type is TransitionType.MEDICARE_ELIGIBLE

    def test_calendar_years(self, pre_medicare_projection):
        """Calendar years run consecutively from the start year."""
        years = [yp.calendar_year for yp in pre_medicare_projection.projections]
        assert years == list(range(2025, 2031))

    def test_start_year_defaults_to_current_year(self):
        """Without a start year the current calendar year is used."""
        assert ProjectionInput(current_age=40, state="NC").start_year == date.today().year

    def test_end_age_overrides_years(self):
        """An explicit end age sets the horizon."""
        p = project(current_age=50, years_to_project=3, end_age=60)
        assert len(p.projections) == 11

    def test_single_year(self):
        """End age equal to current age gives one record and no insights."""
        p = project(current_age=40, end_age=40)

        assert len(p.projections) == 1
        assert p.insights == []

    def test_end_age_before_current_age_rejected(self):
        """A reversed horizon is an error, not silently swapped."""
        with pytest.raises(ValueError):
            ProjectionInput(current_age=50, state="NC", end_age=45)

    def test_unknown_metal_tier_rejected(self):
        """Unknown tiers are rejected at construction."""
        with pytest.raises(ValueError):
            ProjectionInput(current_age=50, state="NC", metal_tier="Titanium")

    def test_unknown_health_status_defaults_to_good(self):
        """Unknown health status is treated as good."""
        projection_input = ProjectionInput(current_age=50, state="NC", health_status="superb")
        assert projection_input.health_status is HealthStatus.GOOD


class TestProjectionInvariants:
    """Test cumulative and percentile invariants."""

    @pytest.mark.parametrize("age,years", [(25, 5), (40, 10), (62, 5), (70, 3)])
    def test_cumulative_identity(self, age, years):
        """Cumulative cost is exactly the running sum of annual totals."""
        p = project(current_age=age, years_to_project=years)
        running = 0.0
        for yp in p.projections:
            running += yp.total_annual_cost
            assert yp.cumulative_cost == running
        assert p.total_lifetime_cost == running
        assert p.average_annual_cost == round(running / len(p.projections))

    @pytest.mark.parametrize("age,years", [(25, 5), (40, 10), (62, 5), (70, 3)])
    def test_confidence_interval_ordering(self, age, years):
        """p10 < p50 < p90 and p50 is the point estimate."""
        p = project(current_age=age, years_to_project=years)
        for yp in p.projections:
            ci = yp.confidence_interval
            assert ci.p10 < ci.p50 < ci.p90
            assert ci.p50 == yp.total_annual_cost

    def test_first_year_components(self, midlife_projection):
        """Year 0 for a 40-year-old Silver enrollee in North Carolina."""
        yp = midlife_projection.projections[0]

        assert yp.projected_monthly_premium == pytest.approx(410 * 1.452, abs=0.01)
        assert yp.projected_medical_costs == 5_000
        assert yp.projected_oop == 3_300
        assert yp.total_annual_cost == 15_444
        assert yp.confidence_interval.p10 == 10_811
        assert yp.confidence_interval.p90 == 22_394


class TestCostDrivers:
    """Test age curve, inflation, tobacco and health effects."""

    def test_inflation_factor_compounds(self, midlife_projection):
        """Premium inflation compounds from year 0."""
        for yp in midlife_projection.projections:
            assert yp.inflation_factor == pytest.approx(1.045 ** yp.year)

    def test_zero_inflation(self):
        """With no inflation only the age curve moves premiums."""
        p = project(current_age=30, years_to_project=3, inflation=InflationFactors(0, 0, 0))
        first, last = p.projections[0], p.projections[-1]

        assert all(yp.inflation_factor == 1.0 for yp in p.projections)
        assert last.projected_monthly_premium == pytest.approx(
            first.projected_monthly_premium * 1.286 / 1.214, abs=0.01
        )

    def test_age_curve_moves_premium(self):
        """Premium follows the ratio of age factors to the start age."""
        p = project(current_age=62, years_to_project=2)
        expected = 410 * 3.0 * 1.045 ** 2
        assert p.projections[2].projected_monthly_premium == pytest.approx(expected, abs=0.01)

    def test_supplied_premium(self):
        """A known premium replaces the rating estimate."""
        p = project(current_age=30, years_to_project=1, current_monthly_premium=500)

        assert p.projections[0].projected_monthly_premium == 500
        assert p.projections[1].projected_monthly_premium == pytest.approx(
            500 * 1.238 / 1.214 * 1.045, abs=0.01
        )

    def test_tobacco_surcharge(self):
        """Tobacco use adds 50% to the estimated premium."""
        smoker = project(current_age=30, end_age=30, uses_tobacco=True)
        non_smoker = project(current_age=30, end_age=30)

        assert smoker.projections[0].projected_monthly_premium == pytest.approx(
            non_smoker.projections[0].projected_monthly_premium * 1.5, abs=0.01
        )

    def test_tobacco_surcharge_starts_at_18(self):
        """The surcharge begins in the year the person turns 18."""
        p = project(current_age=16, years_to_project=3, uses_tobacco=True)
        at_17 = p.projections[1].projected_monthly_premium
        at_18 = p.projections[2].projected_monthly_premium

        assert at_18 / at_17 == pytest.approx(1.045 * 1.5, rel=1e-3)

    def test_health_status(self):
        """Poor health multiplies medical and out-of-pocket costs."""
        poor = project(current_age=40, end_age=40, health_status="poor").projections[0]

        assert poor.projected_medical_costs == 12_500
        assert poor.projected_oop == 8_250

    def test_chronic_conditions(self):
        """Condition costs are added to the age-band medical cost."""
        yp = project(
            current_age=40, end_age=40, chronic_conditions=["Diabetes", "heart disease"],
        ).projections[0]
        assert yp.projected_medical_costs == 25_000

    def test_state_base_rate(self):
        """State enters through the base rate."""
        alaska = project(current_age=40, end_age=40, state="AK").projections[0]
        texas = project(current_age=40, end_age=40, state="TX").projections[0]
        assert alaska.projected_monthly_premium > texas.projected_monthly_premium

    def test_metal_tier(self):
        """Richer tiers cost more in premium and less out of pocket."""
        bronze = project(current_age=40, end_age=40, metal_tier=MetalTier.BRONZE).projections[0]
        gold = project(current_age=40, end_age=40, metal_tier="Gold").projections[0]

        assert gold.projected_monthly_premium > bronze.projected_monthly_premium
        assert gold.projected_oop < bronze.projected_oop


class TestMedicare:
    """Test the Medicare cost model."""

    def test_medicare_premium(self):
        """Part B + Part D + Medigap, rising $5 per year past 65."""
        assert calculate_medicare_premium(65) == pytest.approx(359.70)
        assert calculate_medicare_premium(70) == pytest.approx(384.70)
        assert calculate_medicare_premium(60) == pytest.approx(359.70)

    def test_transition_year_pricing(self, pre_medicare_projection):
        """At 65 the premium switches to Medicare and medical costs fall 20%."""
        yp = pre_medicare_projection.projections[3]

        assert yp.projected_monthly_premium == pytest.approx(359.70 * 1.045 ** 3, abs=0.01)
        assert yp.projected_medical_costs == pytest.approx(12_000 * 0.8 * 1.055 ** 3, abs=1)

    def test_medicare_pricing_persists(self, pre_medicare_projection):
        """Years after the transition stay on Medicare pricing."""
        yp = pre_medicare_projection.projections[4]
        assert yp.projected_monthly_premium == pytest.approx(364.70 * 1.045 ** 4, abs=0.01)
        assert yp.transition is None

    def test_already_on_medicare_with_known_premium(self):
        """A 65+ person with a known premium keeps projecting it."""
        p = project(current_age=70, years_to_project=1, current_monthly_premium=400)

        assert p.projections[1].projected_monthly_premium == pytest.approx(418.0)
        assert p.projections[0].projected_medical_costs == 9_600
        assert p.major_transitions == []


class TestTransitions:
    """Test life-stage transition detection."""

    def test_age_26(self):
        """Aging off a parent's plan is detected at 26."""
        p = project(current_age=24, end_age=27)

        assert [t.type for t in p.major_transitions] == [TransitionType.AGE_26_OFF_PARENTS]
        assert p.projections[2].transition.type is TransitionType.AGE_26_OFF_PARENTS

    def test_no_retroactive_transition(self):
        """Thresholds already passed at the start are not reported."""
        assert project(current_age=26, years_to_project=3).major_transitions == []
        assert project(current_age=66, years_to_project=5).major_transitions == []

    def test_early_retirement(self):
        """A retirement age before 65 adds an early-retirement transition."""
        p = project(current_age=55, end_age=66, retirement_age=60)
        assert [t.type for t in p.major_transitions] == [
            TransitionType.EARLY_RETIREMENT,
            TransitionType.MEDICARE_ELIGIBLE,
        ]

    def test_retirement_at_medicare_age_ignored(self):
        """Retirement at or after 65 is covered by the Medicare transition."""
        p = project(current_age=60, end_age=67, retirement_age=66)
        assert [t.type for t in p.major_transitions] == [TransitionType.MEDICARE_ELIGIBLE]

    def test_each_transition_once(self):
        """A long projection reports each threshold exactly once."""
        p = project(current_age=20, end_age=80)
        types = [yp.transition.type for yp in p.projections if yp.transition]
        assert types == [TransitionType.AGE_26_OFF_PARENTS, TransitionType.MEDICARE_ELIGIBLE]

    def test_detect_transition(self):
        """Detection requires the threshold to be reached inside the projection."""
        assert detect_transition(65, 62).type is TransitionType.MEDICARE_ELIGIBLE
        assert detect_transition(65, 65) is None
        assert detect_transition(40, 30) is None


class TestCollaborators:
    """Test injected rating and variance."""

    def test_custom_rating_provider(self):
        """Projections use the supplied rating provider."""
        p = project(current_age=30, years_to_project=2, metal_tier="Gold", rating=FlatRating())

        for yp in p.projections:
            assert yp.age_rating_factor == 1.0
            assert yp.projected_monthly_premium == pytest.approx(130 * 1.045 ** yp.year, abs=0.01)

    def test_custom_variance(self):
        """Percentile multipliers come from the supplied CostVariance."""
        variance = CostVariance(p10_multiplier=0.5, p90_multiplier=2.0)
        p = project(current_age=40, years_to_project=2, variance=variance)

        for yp in p.projections:
            assert yp.confidence_interval.p10 == round(yp.total_annual_cost * 0.5)
            assert yp.confidence_interval.p90 == yp.total_annual_cost * 2

    def test_invalid_variance_rejected(self):
        """Multipliers must bracket the point estimate."""
        with pytest.raises(ValueError):
            CostVariance(p10_multiplier=1.2)

    @pytest.mark.parametrize("p10,p90", [(1.0, 1.45), (0.7, 1.0), (1.0, 1.0)])
    def test_collapsed_interval_rejected(self, p10, p90):
        """A multiplier of exactly 1.0 would collapse the band onto the estimate."""
        with pytest.raises(ValueError):
            CostVariance(p10_multiplier=p10, p90_multiplier=p90)


class TestInsights:
    """Test narrative insights."""

    def test_pre_medicare_insights(self, pre_medicare_projection):
        """Medicare note and spending total are included."""
        insights = " ".join(pre_medicare_projection.insights)

        assert "Medicare eligibility at age 65" in insights
        assert "Total projected healthcare spending" in insights
        assert "Healthcare inflation (4.5% annually)" in insights

    def test_cost_increase_insight(self, midlife_projection):
        """Rising costs are summarised as a percentage."""
        assert any("projected to increase by" in i for i in midlife_projection.insights)

    def test_age_curve_insight(self):
        """A large move along the age curve is called out."""
        p = project(current_age=30, end_age=63)
        assert any("ACA age curve" in i for i in p.insights)

    def test_no_age_curve_insight_for_short_projection(self, midlife_projection):
        """Small factor changes are not called out."""
        assert not any("ACA age curve" in i for i in midlife_projection.insights)

    def test_insights_need_two_years(self, midlife_projection):
        """A single year gives no insights."""
        one_year = midlife_projection.projections[:1]
        assert generate_insights(one_year, [], InflationFactors()) == []


class TestQuickHelpers:
    """Test the convenience projections and tables."""

    def test_quick_five_year(self):
        """Five years ahead with defaults."""
        p = quick_five_year_projection(40, "NC")

        assert p.end_age == 45
        assert len(p.projections) == 6
        assert p.metal_tier is MetalTier.SILVER

    def test_project_to_medicare(self):
        """Projection runs to 65."""
        p = project_to_medicare(50, "NC")

        assert p.end_age == 65
        assert len(p.projections) == 16
        assert p.projections[-1].transition.type is TransitionType.MEDICARE_ELIGIBLE

    def test_project_to_medicare_already_eligible(self):
        """Someone already 65+ gets ten years."""
        p = project_to_medicare(70, "NC")
        assert p.end_age == 80

    def test_yearly_breakdown(self, pre_medicare_projection):
        """Breakdown has one row per year."""
        df = calculate_yearly_breakdown(pre_medicare_projection)

        assert list(df.columns) == ["year", "premium", "medical", "oop", "total"]
        assert len(df) == 6
        assert df["total"].sum() == pre_medicare_projection.total_lifetime_cost

    def test_to_dataframe(self, pre_medicare_projection):
        """Flattened table includes transitions by type."""
        df = pre_medicare_projection.to_dataframe()

        assert len(df) == 6
        assert df.loc[3, "Transition"] == "medicare-eligible"
        assert df["Cumulative"].iloc[-1] == pre_medicare_projection.total_lifetime_cost
