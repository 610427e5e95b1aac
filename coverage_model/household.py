"""
Household snapshot passed to the calculators.

A Household bundles the inputs the PTC engine and the projection engine
both need, so a caller can describe a family once and run either
calculation from it. The calculators themselves take plain arguments and
never require a Household.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .affordability import MetalTier
from .data.medical_costs import HealthStatus
from .data.rating import get_household_premium_range
from .fpl import calculate_fpl_percentage, clamp_household_size, normalize_state
from .projections.multi_year import ProjectionInput
from .ptc import PremiumTaxCreditResult, calculate_premium_tax_credit

# Under-21s are rated on the child portion of the age curve
ADULT_RATING_AGE = 21


@dataclass(frozen=True)
class Household:
    """
    Immutable per-calculation household description.

    Attributes:
        state: Two-letter state code
        household_size: People in the tax household
        ages: Ages of the members seeking coverage
        magi: Modified Adjusted Gross Income (annual)
        chronic_conditions: Conditions of the primary member
        uses_tobacco: Tobacco use by the primary member
        health_status: Self-reported health of the primary member
    """
    state: str
    household_size: int
    ages: tuple[int, ...]
    magi: float
    chronic_conditions: tuple[str, ...] = ()
    uses_tobacco: bool = False
    health_status: HealthStatus = HealthStatus.GOOD

    @classmethod
    def create(
        cls,
        state: str,
        ages: Sequence[int],
        magi: float,
        household_size: Optional[int] = None,
        chronic_conditions: Sequence[str] = (),
        uses_tobacco: bool = False,
        health_status: Union[HealthStatus, str] = HealthStatus.GOOD,
    ) -> "Household":
        """Build a Household from loose inputs; size defaults to the number of ages."""
        if not ages:
            raise ValueError("Household needs at least one member age")
        size = household_size if household_size is not None else len(ages)
        return cls(
            state=normalize_state(state),
            household_size=clamp_household_size(size),
            ages=tuple(int(age) for age in ages),
            magi=float(magi),
            chronic_conditions=tuple(chronic_conditions),
            uses_tobacco=uses_tobacco,
            health_status=HealthStatus.parse(health_status),
        )

    @property
    def primary_age(self) -> int:
        return max(self.ages)

    @property
    def adults(self) -> list[int]:
        return [age for age in self.ages if age >= ADULT_RATING_AGE]

    @property
    def children(self) -> list[int]:
        return [age for age in self.ages if age < ADULT_RATING_AGE]

    @property
    def fpl_percentage(self) -> float:
        return calculate_fpl_percentage(self.magi, self.household_size, self.state)

    def premium_tax_credit(
        self,
        slcsp_monthly_premium: float,
        metal_tier: Optional[Union[MetalTier, str]] = None,
    ) -> PremiumTaxCreditResult:
        """PTC/CSR result for this household against a benchmark premium."""
        return calculate_premium_tax_credit(
            self.magi, self.household_size, self.state, slcsp_monthly_premium, metal_tier,
        )

    def premium_range(self) -> dict:
        """Estimated monthly household premium by metal tier (unsubsidised)."""
        # Only the primary (oldest) adult is flagged, even when ages tie
        adults = self.adults
        primary_index = adults.index(self.primary_age) if self.primary_age in adults else None
        tobacco_users = [self.uses_tobacco and i == primary_index for i in range(len(adults))]
        return get_household_premium_range(adults, self.children, self.state, tobacco_users)

    def projection_input(self, **kwargs) -> ProjectionInput:
        """ProjectionInput for the primary member; kwargs set the remaining fields."""
        return ProjectionInput.from_household(self, **kwargs)
