"""
ACA age rating and state base rates.

Premiums in the individual market may vary only by age (3:1 band), tobacco
use (up to 50%), geography and family size. This module provides the
federal default age curve and estimated age-21 Silver base rates by state,
plus helpers to rate individuals and households.

Sources:
- CMS Market Rating Reforms, 45 CFR 147.102 (federal default age curve)
- KFF average benchmark premiums (state base rate estimates)

The base rates are estimates; callers with real rate filings should supply
their own RatingProvider to the projection engine.
"""

import logging
from typing import Optional, Protocol, Sequence, Union

from ..affordability import MetalTier
from ..fpl import normalize_state

logger = logging.getLogger(__name__)


# =============================================================================
# FEDERAL DEFAULT AGE CURVE
# =============================================================================

# Age 21 = 1.000 base; 64+ = 3.000 (3:1 maximum ratio)
ACA_AGE_CURVE = {
    **{age: 0.635 for age in range(0, 15)},  # Children 0-14
    **{age: 1.000 for age in range(15, 21)},  # Teens priced as age 21
    21: 1.000, 22: 1.024, 23: 1.048, 24: 1.071, 25: 1.095,
    26: 1.119, 27: 1.143, 28: 1.167, 29: 1.190, 30: 1.214,
    31: 1.238, 32: 1.262, 33: 1.286, 34: 1.310, 35: 1.333,
    36: 1.357, 37: 1.381, 38: 1.405, 39: 1.429, 40: 1.452,
    41: 1.476, 42: 1.500, 43: 1.524, 44: 1.548, 45: 1.571,
    46: 1.595, 47: 1.619, 48: 1.643, 49: 1.667, 50: 1.690,
    51: 1.714, 52: 1.738, 53: 1.762, 54: 1.786, 55: 1.810,
    56: 1.833, 57: 1.857, 58: 1.881, 59: 1.905, 60: 1.952,
    61: 2.000, 62: 2.048, 63: 2.095,
    64: 3.000,  # Maximum
}
MAX_AGE_FACTOR = 3.000
MAX_RATED_CHILDREN = 3  # Only the three oldest children under 21 are rated


# =============================================================================
# STATE DATA
# =============================================================================

# Estimated monthly Silver premium for a 21-year-old
ESTIMATED_STATE_BASE_RATES = {
    # High-cost
    "AK": 650, "NY": 580, "MA": 560, "CT": 550, "NJ": 545,
    "VT": 535, "NH": 525, "RI": 515, "DE": 505, "MD": 500,
    # Above-average
    "CA": 480, "WA": 470, "OR": 460, "CO": 450, "IL": 445,
    "FL": 440, "PA": 435, "ME": 430, "MN": 425, "WI": 420,
    # National average
    "NC": 410, "NV": 410, "AZ": 405, "GA": 400, "MI": 395,
    "OH": 390, "IN": 385, "MO": 380,
    # Below average
    "SC": 375, "TN": 370, "KY": 365, "LA": 360, "MS": 355,
    "AR": 350, "OK": 345, "KS": 340, "NE": 338, "IA": 335,
    # Low-cost
    "ND": 332, "SD": 330, "MT": 328, "WY": 325, "ID": 322,
    "UT": 320, "NM": 318, "TX": 315, "WV": 312, "AL": 335,
    "HI": 505, "DC": 415, "VA": 412,
}
DEFAULT_STATE_BASE_RATE = 410

# Multiplier against national average (1.000)
GEOGRAPHIC_COST_INDEX = {
    "AK": 1.450, "NY": 1.280, "MA": 1.250, "CT": 1.230, "NJ": 1.220,
    "VT": 1.210, "NH": 1.180, "RI": 1.170, "DE": 1.150, "MD": 1.140,
    "CA": 1.120, "WA": 1.110, "OR": 1.100, "CO": 1.090, "IL": 1.080,
    "FL": 1.070, "PA": 1.060, "ME": 1.050, "MN": 1.040, "WI": 1.030,
    "DC": 1.020, "VA": 1.010, "NC": 1.000, "NV": 1.000, "AZ": 0.990,
    "GA": 0.980, "MI": 0.970, "OH": 0.960, "IN": 0.950, "MO": 0.940,
    "SC": 0.930, "TN": 0.920, "KY": 0.910, "LA": 0.900, "MS": 0.890,
    "AR": 0.880, "OK": 0.870, "KS": 0.860, "NE": 0.855, "IA": 0.850,
    "ND": 0.845, "SD": 0.840, "MT": 0.835, "WY": 0.830, "ID": 0.825,
    "UT": 0.820, "NM": 0.815, "TX": 0.810, "WV": 0.805, "AL": 0.850,
    "HI": 1.150,
}

# Maximum tobacco surcharge; states not listed allow the federal 50%
TOBACCO_SURCHARGE_LIMITS = {
    "CA": 0.00, "CT": 0.00, "MA": 0.00, "NJ": 0.00,
    "NY": 0.00, "RI": 0.00, "VT": 0.00, "DC": 0.00,
    "AR": 0.20, "CO": 0.15, "KY": 0.40,
}
FEDERAL_TOBACCO_SURCHARGE_LIMIT = 0.50
TOBACCO_RATING_MIN_AGE = 18

# Premium relative to Silver
METAL_TIER_MULTIPLIERS = {
    MetalTier.CATASTROPHIC: 0.60,
    MetalTier.BRONZE: 0.75,
    MetalTier.SILVER: 1.00,
    MetalTier.GOLD: 1.30,
    MetalTier.PLATINUM: 1.60,
}


# =============================================================================
# LOOKUPS
# =============================================================================

def get_age_rating_factor(age: float) -> float:
    """
    Age rating factor on the federal default curve.

    Ages are clamped to 0-120 and truncated to whole years; 64 and older
    share the 3.000 maximum.
    """
    clamped = int(max(0, min(120, age)))
    return ACA_AGE_CURVE.get(clamped, MAX_AGE_FACTOR)


def get_state_base_rate(state: str) -> float:
    """Estimated age-21 Silver premium for a state (national average if unknown)."""
    return float(ESTIMATED_STATE_BASE_RATES.get(normalize_state(state), DEFAULT_STATE_BASE_RATE))


def get_tobacco_surcharge_limit(state: str) -> float:
    """Maximum allowed tobacco surcharge as a decimal (0.50 = 50%)."""
    return TOBACCO_SURCHARGE_LIMITS.get(normalize_state(state), FEDERAL_TOBACCO_SURCHARGE_LIMIT)


class RatingProvider(Protocol):
    """Source of age factors and base premiums for the projection engine."""

    def age_rating_factor(self, age: float) -> float:
        ...

    def state_base_rate(self, state: str) -> float:
        ...


class DefaultRatingProvider:
    """RatingProvider backed by the federal default curve and estimated base rates."""

    def age_rating_factor(self, age: float) -> float:
        return get_age_rating_factor(age)

    def state_base_rate(self, state: str) -> float:
        return get_state_base_rate(state)


# =============================================================================
# PREMIUM CALCULATIONS
# =============================================================================

def calculate_age_rated_premium(
    base_rate: float,
    age: float,
    state: str,
    metal_tier: Union[MetalTier, str] = MetalTier.SILVER,
    uses_tobacco: bool = False,
) -> float:
    """
    Calculate the monthly premium for one individual.

    Args:
        base_rate: Age-21 premium for the rating area
        age: Individual's age
        state: State code (geographic index and tobacco limit)
        metal_tier: Plan metal tier
        uses_tobacco: Whether the individual uses tobacco

    Returns:
        Monthly premium rounded to cents
    """
    tier = MetalTier.parse(metal_tier)
    geo_index = GEOGRAPHIC_COST_INDEX.get(normalize_state(state), 1.000)

    premium = base_rate * get_age_rating_factor(age) * geo_index * METAL_TIER_MULTIPLIERS[tier]

    if uses_tobacco and age >= TOBACCO_RATING_MIN_AGE:
        premium *= 1 + get_tobacco_surcharge_limit(state)

    return round(premium, 2)


def calculate_household_premium(
    base_rate: float,
    adults: Sequence[float],
    children: Sequence[float],
    state: str,
    metal_tier: Union[MetalTier, str] = MetalTier.SILVER,
    tobacco_users: Optional[Sequence[bool]] = None,
) -> float:
    """
    Total monthly premium for a household.

    Adults are rated individually; at most three children are rated and
    none of them is charged a tobacco surcharge.
    """
    tobacco_users = list(tobacco_users or [])
    total = 0.0

    for index, age in enumerate(adults):
        uses_tobacco = tobacco_users[index] if index < len(tobacco_users) else False
        total += calculate_age_rated_premium(base_rate, age, state, metal_tier, uses_tobacco)

    rated_children = sorted(children, reverse=True)[:MAX_RATED_CHILDREN]
    if len(children) > MAX_RATED_CHILDREN:
        logger.debug(f"Rating {MAX_RATED_CHILDREN} of {len(children)} children")
    for age in rated_children:
        total += calculate_age_rated_premium(base_rate, age, state, metal_tier, False)

    return round(total, 2)


def get_household_premium_range(
    adults: Sequence[float],
    children: Sequence[float],
    state: str,
    tobacco_users: Optional[Sequence[bool]] = None,
) -> dict:
    """Household premium at each standard metal tier, using the state base rate."""
    base_rate = get_state_base_rate(state)
    return {
        tier.value.lower(): calculate_household_premium(
            base_rate, adults, children, state, tier, tobacco_users,
        )
        for tier in (MetalTier.BRONZE, MetalTier.SILVER, MetalTier.GOLD, MetalTier.PLATINUM)
    }
