"""
Modified Adjusted Gross Income (MAGI) Module

MAGI for marketplace purposes is AGI plus three add-backs (tax-exempt
interest, excluded foreign income, non-taxable Social Security), less the
above-the-line adjustments a household can claim.

Reference: IRC 36B(d)(2)(B); HealthCare.gov "What's included as income"
"""

import logging
from dataclasses import dataclass, fields
from typing import Mapping, Union

logger = logging.getLogger(__name__)


INCOME_FIELDS = (
    "wages",
    "self_employment_income",
    "unemployment_benefits",
    "social_security_taxable",
    "investment_income",
    "rental_income",
    "alimony_received",
    "other_income",
)

ADD_BACK_FIELDS = (
    "tax_exempt_interest",
    "foreign_income_exclusion",
    "non_taxable_social_security",
)

DEDUCTION_FIELDS = (
    "student_loan_interest",
    "alimony_paid",
    "ira_contribution",
    "health_savings_account",
    "self_employment_tax",
)

# Questionnaire income buckets -> representative MAGI
INCOME_RANGE_MIDPOINTS = {
    "under-30k": 25_000,
    "30k-50k": 40_000,
    "50k-75k": 62_500,
    "75k-100k": 87_500,
    "100k-150k": 125_000,
    "150k-plus": 175_000,
}
DEFAULT_INCOME_ESTIMATE = 50_000


@dataclass(frozen=True)
class MAGIComponents:
    """
    Income, add-back and deduction amounts that make up MAGI.

    All amounts are annual dollars. Anything not supplied is zero.
    """
    # Income
    wages: float = 0.0
    self_employment_income: float = 0.0
    unemployment_benefits: float = 0.0
    social_security_taxable: float = 0.0
    investment_income: float = 0.0  # Interest, dividends, capital gains
    rental_income: float = 0.0
    alimony_received: float = 0.0  # Pre-2019 divorce decrees only
    other_income: float = 0.0

    # Add-backs
    tax_exempt_interest: float = 0.0  # Municipal bond interest
    foreign_income_exclusion: float = 0.0
    non_taxable_social_security: float = 0.0

    # Above-the-line deductions
    student_loan_interest: float = 0.0  # Capped at $2,500 on the return
    alimony_paid: float = 0.0
    ira_contribution: float = 0.0  # Traditional IRA only
    health_savings_account: float = 0.0
    self_employment_tax: float = 0.0  # Deductible half of SE tax

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "MAGIComponents":
        """Build from a dict, ignoring unknown keys and None values."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            logger.debug(f"Ignoring unknown MAGI fields: {sorted(unknown)}")
        return cls(**{
            key: float(value)
            for key, value in values.items()
            if key in known and value is not None
        })

    @property
    def total_income(self) -> float:
        return sum(getattr(self, name) for name in INCOME_FIELDS)

    @property
    def total_add_backs(self) -> float:
        return sum(getattr(self, name) for name in ADD_BACK_FIELDS)

    @property
    def total_deductions(self) -> float:
        return sum(getattr(self, name) for name in DEDUCTION_FIELDS)


def calculate_magi(components: Union[MAGIComponents, Mapping[str, float]]) -> float:
    """
    Calculate MAGI from income components.

    Args:
        components: MAGIComponents or a plain mapping of the same field names

    Returns:
        MAGI in dollars, never negative
    """
    if not isinstance(components, MAGIComponents):
        components = MAGIComponents.from_mapping(components)

    magi = components.total_income + components.total_add_backs - components.total_deductions
    if magi < 0:
        logger.warning(f"Deductions exceed income (MAGI {magi:,.2f}); flooring at zero")
        return 0.0
    return magi


def estimate_magi_from_range(income_range: str) -> float:
    """Representative MAGI for a questionnaire income bucket."""
    if income_range not in INCOME_RANGE_MIDPOINTS:
        logger.warning(
            f"Unknown income range '{income_range}', using default "
            f"${DEFAULT_INCOME_ESTIMATE:,}"
        )
    return float(INCOME_RANGE_MIDPOINTS.get(income_range, DEFAULT_INCOME_ESTIMATE))
