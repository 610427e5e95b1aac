"""
Multi-Year Cost Projections

Projects an individual's healthcare spending forward year by year from
their current age, accounting for:
- Premium and medical inflation (compounding, separately)
- Movement along the ACA 3:1 age curve
- Health status and chronic-condition utilisation
- Life-stage transitions: aging off a parent's plan at 26, leaving
  employer coverage at an early retirement age, Medicare at 65
- A percentile band around each year's expected total

Every year is derived fresh from the inputs; nothing is carried between
calls except the read-only reference tables.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..affordability import MetalTier
from ..data.medical_costs import HealthStatus, base_medical_cost, base_out_of_pocket
from ..data.rating import (
    METAL_TIER_MULTIPLIERS,
    TOBACCO_RATING_MIN_AGE,
    DefaultRatingProvider,
    RatingProvider,
)
from ..uncertainty import ConfidenceInterval, CostVariance, calculate_confidence_interval

logger = logging.getLogger(__name__)


# =============================================================================
# ASSUMPTIONS
# =============================================================================

DEPENDENT_COVERAGE_END_AGE = 26
MEDICARE_ELIGIBILITY_AGE = 65

# Flat surcharge used when projecting from an estimated premium
TOBACCO_SURCHARGE = 1.5

# Medicare monthly cost model (2025)
MEDICARE_PART_B_PREMIUM = 174.70  # Standard Part B
MEDICARE_PART_D_PREMIUM = 35.00  # Average Part D
MEDIGAP_BASE_PREMIUM = 150.00  # Average Plan G at 65
MEDIGAP_AGE_INCREASE = 5.00  # Per year of age past 65

# Medicare covers more of the bill than marketplace plans
MEDICARE_MEDICAL_COST_FACTOR = 0.8

AGE_CURVE_INSIGHT_THRESHOLD = 0.3
DEFAULT_YEARS_TO_PROJECT = 5


@dataclass
class InflationFactors:
    """Annual growth assumptions (historical averages)."""
    medical_inflation: float = 0.055
    premium_inflation: float = 0.045
    general_cpi: float = 0.030


DEFAULT_INFLATION_FACTORS = InflationFactors()


class TransitionType(Enum):
    """Life-stage events that change how a person gets coverage."""
    AGE_26_OFF_PARENTS = "age-26-off-parents"
    MEDICARE_ELIGIBLE = "medicare-eligible"
    EARLY_RETIREMENT = "early-retirement"


@dataclass(frozen=True)
class AgeTransition:
    """A coverage transition reached in a given projection year."""
    type: TransitionType
    description: str
    impact: str
    recommended_action: str


TRANSITIONS = {
    TransitionType.AGE_26_OFF_PARENTS: AgeTransition(
        type=TransitionType.AGE_26_OFF_PARENTS,
        description="No longer eligible for a parent's health insurance at age 26",
        impact="Must obtain own coverage through an employer, the marketplace, or another source",
        recommended_action="Research marketplace options 2-3 months before the 26th birthday",
    ),
    TransitionType.EARLY_RETIREMENT: AgeTransition(
        type=TransitionType.EARLY_RETIREMENT,
        description="Leaving employer coverage before Medicare eligibility",
        impact="Premiums are paid in full on the marketplace until 65; subsidies depend on retirement income",
        recommended_action="Plan retirement-year MAGI to maximize Premium Tax Credits",
    ),
    TransitionType.MEDICARE_ELIGIBLE: AgeTransition(
        type=TransitionType.MEDICARE_ELIGIBLE,
        description="Eligible for Medicare at age 65",
        impact="Transition from marketplace or employer coverage to Medicare",
        recommended_action="Begin Medicare enrollment 3 months before the 65th birthday",
    ),
}


# =============================================================================
# INPUT / OUTPUT
# =============================================================================

@dataclass
class ProjectionInput:
    """
    Inputs for a multi-year projection.

    Either years_to_project or end_age determines the horizon; end_age wins
    when both are given. The projection covers every age from current_age
    to end_age inclusive.
    """
    current_age: int
    state: str
    years_to_project: int = DEFAULT_YEARS_TO_PROJECT
    end_age: Optional[int] = None
    metal_tier: Union[MetalTier, str] = MetalTier.SILVER
    uses_tobacco: bool = False
    inflation: InflationFactors = field(default_factory=InflationFactors)
    current_monthly_premium: Optional[float] = None  # Estimated from rating data if None
    health_status: Union[HealthStatus, str] = HealthStatus.GOOD
    chronic_conditions: Sequence[str] = ()
    retirement_age: Optional[int] = None  # Leaves employer coverage before 65
    start_year: Optional[int] = None  # Calendar year of year 0; current year if None

    # Collaborators
    rating: RatingProvider = field(default_factory=DefaultRatingProvider)
    variance: CostVariance = field(default_factory=CostVariance)

    def __post_init__(self):
        self.metal_tier = MetalTier.parse(self.metal_tier)
        self.health_status = HealthStatus.parse(self.health_status)
        self.chronic_conditions = tuple(self.chronic_conditions)

        if self.end_age is None:
            self.end_age = self.current_age + max(0, self.years_to_project)
        if self.end_age < self.current_age:
            raise ValueError(
                f"end_age ({self.end_age}) must not be before current_age ({self.current_age})"
            )
        if self.start_year is None:
            self.start_year = date.today().year

    @classmethod
    def from_household(cls, household, **kwargs) -> "ProjectionInput":
        """Projection for the household's primary (oldest) member."""
        return cls(
            current_age=household.primary_age,
            state=household.state,
            uses_tobacco=household.uses_tobacco,
            health_status=household.health_status,
            chronic_conditions=household.chronic_conditions,
            **kwargs,
        )

    @property
    def total_years(self) -> int:
        return self.end_age - self.current_age


@dataclass(frozen=True)
class YearProjection:
    """Projected costs for one calendar year."""
    year: int  # Offset from the start year
    age: int
    calendar_year: int
    projected_monthly_premium: float
    projected_annual_premium: float
    projected_medical_costs: float
    projected_oop: float
    total_annual_cost: float
    cumulative_cost: float
    confidence_interval: ConfidenceInterval
    age_rating_factor: float
    inflation_factor: float  # Premium inflation, compounded from year 0
    transition: Optional[AgeTransition] = None


@dataclass
class LifetimeProjection:
    """Year-by-year projection with summary figures."""
    start_age: int
    end_age: int
    primary_state: str
    metal_tier: MetalTier
    projections: list[YearProjection]
    total_lifetime_cost: float
    average_annual_cost: float
    major_transitions: list[AgeTransition]
    inflation_factors: InflationFactors
    insights: list[str] = field(default_factory=list)

    @property
    def total_costs(self) -> np.ndarray:
        return np.array([p.total_annual_cost for p in self.projections])

    @property
    def calendar_years(self) -> np.ndarray:
        return np.array([p.calendar_year for p in self.projections])

    def to_dataframe(self) -> pd.DataFrame:
        """One row per year, flattened (transition as its type string)."""
        return pd.DataFrame([
            {
                'Year': p.calendar_year,
                'Age': p.age,
                'Monthly Premium': p.projected_monthly_premium,
                'Annual Premium': p.projected_annual_premium,
                'Medical': p.projected_medical_costs,
                'Out-of-Pocket': p.projected_oop,
                'Total': p.total_annual_cost,
                'Cumulative': p.cumulative_cost,
                'P10': p.confidence_interval.p10,
                'P50': p.confidence_interval.p50,
                'P90': p.confidence_interval.p90,
                'Age Factor': p.age_rating_factor,
                'Inflation Factor': p.inflation_factor,
                'Transition': p.transition.type.value if p.transition else None,
            }
            for p in self.projections
        ])


# =============================================================================
# ENGINE
# =============================================================================

def estimate_base_premium(
    age: int,
    state: str,
    metal_tier: MetalTier,
    rating: Optional[RatingProvider] = None,
) -> float:
    """Monthly premium at the given age from the state base rate (no tobacco)."""
    rating = rating or DefaultRatingProvider()
    return (
        rating.state_base_rate(state)
        * rating.age_rating_factor(age)
        * METAL_TIER_MULTIPLIERS[metal_tier]
    )


def calculate_medicare_premium(age: int, state: str = "") -> float:
    """
    Monthly Part B + Part D + Medigap estimate.

    `state` is accepted for symmetry with the marketplace premium; Medigap
    pricing here is national.
    """
    age_adjustment = max(0, age - MEDICARE_ELIGIBILITY_AGE) * MEDIGAP_AGE_INCREASE
    return (
        MEDICARE_PART_B_PREMIUM
        + MEDICARE_PART_D_PREMIUM
        + MEDIGAP_BASE_PREMIUM
        + age_adjustment
    )


def detect_transition(
    age: int,
    start_age: int,
    retirement_age: Optional[int] = None,
) -> Optional[AgeTransition]:
    """Transition reached exactly at `age`, if the projection started before it."""
    if age == DEPENDENT_COVERAGE_END_AGE and start_age < DEPENDENT_COVERAGE_END_AGE:
        return TRANSITIONS[TransitionType.AGE_26_OFF_PARENTS]
    if (
        retirement_age is not None
        and age == retirement_age < MEDICARE_ELIGIBILITY_AGE
        and start_age < retirement_age
    ):
        return TRANSITIONS[TransitionType.EARLY_RETIREMENT]
    if age == MEDICARE_ELIGIBILITY_AGE and start_age < MEDICARE_ELIGIBILITY_AGE:
        return TRANSITIONS[TransitionType.MEDICARE_ELIGIBLE]
    return None


def generate_multi_year_projection(projection_input: ProjectionInput) -> LifetimeProjection:
    """
    Generate a year-by-year cost projection.

    Args:
        projection_input: ProjectionInput describing the person, plan and assumptions

    Returns:
        LifetimeProjection covering current_age to end_age inclusive
    """
    rating = projection_input.rating
    inflation = projection_input.inflation
    start_age = projection_input.current_age
    n_years = projection_input.total_years + 1

    offsets = np.arange(n_years)
    premium_factors = (1 + inflation.premium_inflation) ** offsets
    medical_factors = (1 + inflation.medical_inflation) ** offsets

    supplied_premium = projection_input.current_monthly_premium is not None
    if supplied_premium:
        base_premium = projection_input.current_monthly_premium
    else:
        base_premium = estimate_base_premium(start_age, projection_input.state, projection_input.metal_tier, rating)
    base_age_factor = rating.age_rating_factor(start_age)

    projections: list[YearProjection] = []
    transitions: list[AgeTransition] = []
    cumulative = 0.0

    for year in offsets:
        year = int(year)
        age = start_age + year
        premium_factor = float(premium_factors[year])
        medical_factor = float(medical_factors[year])

        age_factor = rating.age_rating_factor(age)
        monthly_premium = base_premium * (age_factor / base_age_factor) * premium_factor
        if not supplied_premium and projection_input.uses_tobacco and age >= TOBACCO_RATING_MIN_AGE:
            monthly_premium *= TOBACCO_SURCHARGE

        medical = (
            base_medical_cost(age, projection_input.health_status, projection_input.chronic_conditions)
            * medical_factor
        )

        transition = detect_transition(age, start_age, projection_input.retirement_age)
        if transition:
            transitions.append(transition)

        # Medicare pricing applies from 65 onward; a person already 65+ with a
        # known premium keeps projecting that premium
        if age >= MEDICARE_ELIGIBILITY_AGE:
            if not (supplied_premium and start_age >= MEDICARE_ELIGIBILITY_AGE):
                monthly_premium = calculate_medicare_premium(age, projection_input.state) * premium_factor
            medical *= MEDICARE_MEDICAL_COST_FACTOR

        oop = base_out_of_pocket(age, projection_input.health_status, projection_input.metal_tier) * medical_factor

        annual_premium = monthly_premium * 12
        total = float(round(annual_premium + medical + oop))
        cumulative += total

        ci = calculate_confidence_interval(total, projection_input.variance)
        projections.append(YearProjection(
            year=year,
            age=age,
            calendar_year=projection_input.start_year + year,
            projected_monthly_premium=round(monthly_premium, 2),
            projected_annual_premium=float(round(annual_premium)),
            projected_medical_costs=float(round(medical)),
            projected_oop=float(round(oop)),
            total_annual_cost=total,
            cumulative_cost=cumulative,
            confidence_interval=ConfidenceInterval(
                p10=float(round(ci.p10)),
                p50=ci.p50,
                p90=float(round(ci.p90)),
            ),
            age_rating_factor=age_factor,
            inflation_factor=premium_factor,
            transition=transition,
        ))

        logger.debug(
            f"Year {year} (age {age}): premium ${monthly_premium:,.2f}/mo, "
            f"medical ${medical:,.0f}, OOP ${oop:,.0f}, total ${total:,.0f}"
        )

    return LifetimeProjection(
        start_age=start_age,
        end_age=projection_input.end_age,
        primary_state=projection_input.state,
        metal_tier=projection_input.metal_tier,
        projections=projections,
        total_lifetime_cost=cumulative,
        average_annual_cost=float(round(cumulative / n_years)),
        major_transitions=transitions,
        inflation_factors=inflation,
        insights=generate_insights(projections, transitions, inflation),
    )


def generate_insights(
    projections: Sequence[YearProjection],
    transitions: Sequence[AgeTransition],
    inflation: InflationFactors,
) -> list[str]:
    """Narrative summary of the projected changes."""
    insights = []
    if len(projections) < 2:
        return insights

    first, last = projections[0], projections[-1]
    span = len(projections) - 1

    if first.total_annual_cost > 0:
        pct_increase = (last.total_annual_cost - first.total_annual_cost) / first.total_annual_cost * 100
        if pct_increase > 0:
            insights.append(
                f"Healthcare costs are projected to increase by {pct_increase:.0f}% over {span} "
                f"years (from ${first.total_annual_cost:,.0f} to ${last.total_annual_cost:,.0f} "
                f"annually)"
            )

    insights.append(
        f"Total projected healthcare spending: ${last.cumulative_cost:,.0f} over "
        f"{len(projections)} years"
    )

    if any(t.type is TransitionType.MEDICARE_ELIGIBLE for t in transitions):
        insights.append(
            "Medicare eligibility at age 65 typically reduces monthly costs but requires "
            "careful planning for enrollment deadlines"
        )

    age_factor_increase = last.age_rating_factor - first.age_rating_factor
    if age_factor_increase > AGE_CURVE_INSIGHT_THRESHOLD:
        insights.append(
            f"Age-based premium rating will increase premiums by "
            f"{age_factor_increase / first.age_rating_factor * 100:.0f}% due to the ACA age curve"
        )

    inflation_impact = ((1 + inflation.premium_inflation) ** span - 1) * 100
    insights.append(
        f"Healthcare inflation ({inflation.premium_inflation * 100:.1f}% annually) adds "
        f"approximately {inflation_impact:.0f}% to costs over the projection period"
    )

    return insights


# =============================================================================
# QUICK PROJECTION HELPERS
# =============================================================================

def quick_five_year_projection(
    current_age: int,
    state: str,
    metal_tier: Union[MetalTier, str] = MetalTier.SILVER,
) -> LifetimeProjection:
    """Five-year projection with default assumptions."""
    return generate_multi_year_projection(ProjectionInput(
        current_age=current_age,
        state=state,
        years_to_project=5,
        metal_tier=metal_tier,
    ))


def project_to_medicare(
    current_age: int,
    state: str,
    metal_tier: Union[MetalTier, str] = MetalTier.SILVER,
) -> LifetimeProjection:
    """Projection to age 65, or ten years for someone already Medicare-eligible."""
    if current_age >= MEDICARE_ELIGIBILITY_AGE:
        projection_input = ProjectionInput(
            current_age=current_age, state=state, years_to_project=10, metal_tier=metal_tier,
        )
    else:
        projection_input = ProjectionInput(
            current_age=current_age,
            state=state,
            end_age=MEDICARE_ELIGIBILITY_AGE,
            metal_tier=metal_tier,
        )
    return generate_multi_year_projection(projection_input)


def calculate_yearly_breakdown(projection: LifetimeProjection) -> pd.DataFrame:
    """Premium / medical / OOP / total by calendar year."""
    df = projection.to_dataframe()
    return df[['Year', 'Annual Premium', 'Medical', 'Out-of-Pocket', 'Total']].rename(
        columns={
            'Year': 'year',
            'Annual Premium': 'premium',
            'Medical': 'medical',
            'Out-of-Pocket': 'oop',
            'Total': 'total',
        }
    )
