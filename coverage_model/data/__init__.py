"""
Reference data for coverage_model.

This package provides rating and cost assumptions for:
- ACA federal default age curve and state base rates
- Geographic cost index and tobacco surcharge limits
- Medical and out-of-pocket cost estimates by age, health and tier

Example usage:
    >>> from coverage_model.data import DefaultRatingProvider
    >>> rating = DefaultRatingProvider()
    >>> rating.age_rating_factor(40)
    1.452
    >>> rating.state_base_rate("TX")
    315.0
"""

from coverage_model.data.rating import (
    ACA_AGE_CURVE,
    METAL_TIER_MULTIPLIERS,
    DefaultRatingProvider,
    RatingProvider,
    calculate_age_rated_premium,
    calculate_household_premium,
    get_age_rating_factor,
    get_household_premium_range,
    get_state_base_rate,
    get_tobacco_surcharge_limit,
)
from coverage_model.data.medical_costs import (
    CHRONIC_CONDITION_COSTS,
    HEALTH_STATUS_MULTIPLIERS,
    HealthStatus,
    base_medical_cost,
    base_out_of_pocket,
)

__all__ = [
    'ACA_AGE_CURVE',
    'METAL_TIER_MULTIPLIERS',
    'DefaultRatingProvider',
    'RatingProvider',
    'calculate_age_rated_premium',
    'calculate_household_premium',
    'get_age_rating_factor',
    'get_household_premium_range',
    'get_state_base_rate',
    'get_tobacco_surcharge_limit',
    'CHRONIC_CONDITION_COSTS',
    'HEALTH_STATUS_MULTIPLIERS',
    'HealthStatus',
    'base_medical_cost',
    'base_out_of_pocket',
]
