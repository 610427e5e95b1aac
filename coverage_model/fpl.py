"""
Federal Poverty Level Module

HHS poverty guidelines and Medicaid expansion status by state. Every
eligibility and contribution decision downstream is keyed off the
household's income as a percentage of FPL.

Key data sources:
- HHS/ASPE: 2025 Poverty Guidelines (contiguous states, Alaska, Hawaii)
- KFF: Status of State Medicaid Expansion Decisions (2025)
"""

import logging
import math

logger = logging.getLogger(__name__)


# =============================================================================
# FEDERAL POVERTY LEVEL GUIDELINES (2025)
# =============================================================================

# (base for one person, increment per additional person)
FPL_2025 = {
    "default": (15_060, 5_450),  # 48 contiguous states, DC, territories
    "AK": (18_840, 6_810),
    "HI": (17_310, 6_270),
}


# =============================================================================
# MEDICAID EXPANSION STATUS (2025)
# =============================================================================

# 40 states + DC have adopted ACA Medicaid expansion
MEDICAID_EXPANSION_STATES = frozenset({
    "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "HI", "ID",
    "IL", "IN", "IA", "KY", "LA", "ME", "MD", "MA", "MI", "MN",
    "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND",
    "OH", "OR", "PA", "RI", "SD", "UT", "VT", "VA", "WA", "WV", "WI",
})

# States with a coverage gap between traditional Medicaid and PTC eligibility
NON_EXPANSION_STATES = frozenset({
    "AL", "FL", "GA", "KS", "MS", "SC", "TN", "TX", "WY",
})

MEDICAID_EXPANSION_FPL = 138
MEDICAID_TRADITIONAL_FPL = 100


def normalize_state(state_code: str) -> str:
    """Upper-case, whitespace-stripped state code ('' for None)."""
    return (state_code or "").strip().upper()


def clamp_household_size(household_size: float) -> int:
    """Household size floored to an integer, never below one person."""
    size = max(1, math.floor(household_size))
    if size != household_size:
        logger.warning(f"Household size {household_size} clamped to {size}")
    return size


def calculate_fpl(household_size: float, state_code: str = "") -> float:
    """
    Get the Federal Poverty Level for a household.

    Args:
        household_size: Number of people in the tax household. Fractional
            sizes are floored and anything below one is treated as one.
        state_code: Two-letter state code; Alaska and Hawaii use their own
            guidelines, everything else shares the contiguous-states table

    Returns:
        Annual FPL in dollars
    """
    size = clamp_household_size(household_size)
    base, per_additional = FPL_2025.get(normalize_state(state_code), FPL_2025["default"])
    return float(base + per_additional * (size - 1))


def calculate_fpl_percentage(magi: float, household_size: float, state_code: str = "") -> float:
    """Household income as a percentage of FPL (e.g. 250.0 = 250% FPL)."""
    return (max(0.0, magi) / calculate_fpl(household_size, state_code)) * 100


def is_medicaid_expansion_state(state_code: str) -> bool:
    """Check whether a state has adopted ACA Medicaid expansion."""
    return normalize_state(state_code) in MEDICAID_EXPANSION_STATES
