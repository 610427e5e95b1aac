"""
Medical cost assumptions used by the projection engine.

Conservative annual estimates of utilisation by age band, health status
and chronic condition, and out-of-pocket spending by metal tier. These are
planning heuristics, not actuarial claims data.
"""

import logging
from enum import Enum
from typing import Iterable, Union

from ..affordability import MetalTier

logger = logging.getLogger(__name__)


class HealthStatus(Enum):
    """Self-reported health status."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def parse(cls, value: Union["HealthStatus", str]) -> "HealthStatus":
        """Enum member for a value; unrecognised values are rated as GOOD."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for status in cls:
            if status.value == key:
                return status
        logger.warning(f"Unknown health status {value!r}, using 'good'")
        return cls.GOOD


# (upper age bound, exclusive; annual cost)
MEDICAL_COSTS_BY_AGE = (
    (30, 3_000),  # Young adults
    (50, 5_000),  # Middle age
    (65, 8_000),  # Older adults
)
MEDICARE_AGE_MEDICAL_COST = 12_000

HEALTH_STATUS_MULTIPLIERS = {
    HealthStatus.EXCELLENT: 0.6,
    HealthStatus.GOOD: 1.0,
    HealthStatus.FAIR: 1.5,
    HealthStatus.POOR: 2.5,
}

# Additional annual cost per condition
CHRONIC_CONDITION_COSTS = {
    "diabetes": 8_000,
    "heart disease": 12_000,
    "hypertension": 3_000,
    "asthma": 2_000,
    "arthritis": 3_000,
    "copd": 6_000,
    "cancer": 30_000,
    "kidney disease": 15_000,
    "depression": 2_500,
    "obesity": 3_000,
}

# Expected annual out-of-pocket spending by tier (actuarial value)
BASE_OOP_BY_TIER = {
    MetalTier.CATASTROPHIC: 5_000,
    MetalTier.BRONZE: 4_000,
    MetalTier.SILVER: 3_000,
    MetalTier.GOLD: 2_000,
    MetalTier.PLATINUM: 1_000,
}

# (minimum age, utilisation multiplier), checked in order
OOP_AGE_ADJUSTMENTS = (
    (50, 1.3),
    (40, 1.1),
)


def health_multiplier(health_status: Union[HealthStatus, str]) -> float:
    return HEALTH_STATUS_MULTIPLIERS[HealthStatus.parse(health_status)]


def chronic_condition_cost(conditions: Iterable[str]) -> float:
    """Sum of condition add-ons; matching ignores case, unknown conditions add nothing."""
    return float(sum(
        CHRONIC_CONDITION_COSTS.get(condition.strip().lower(), 0)
        for condition in conditions
    ))


def base_medical_cost(
    age: float,
    health_status: Union[HealthStatus, str] = HealthStatus.GOOD,
    chronic_conditions: Iterable[str] = (),
) -> float:
    """Expected annual medical spending before inflation."""
    cost = MEDICARE_AGE_MEDICAL_COST
    for upper_age, band_cost in MEDICAL_COSTS_BY_AGE:
        if age < upper_age:
            cost = band_cost
            break

    return cost * health_multiplier(health_status) + chronic_condition_cost(chronic_conditions)


def base_out_of_pocket(
    age: float,
    health_status: Union[HealthStatus, str],
    metal_tier: Union[MetalTier, str],
) -> float:
    """Expected annual out-of-pocket spending before inflation."""
    oop = BASE_OOP_BY_TIER[MetalTier.parse(metal_tier)]
    for min_age, multiplier in OOP_AGE_ADJUSTMENTS:
        if age >= min_age:
            oop *= multiplier
            break
    return oop * health_multiplier(health_status)
