"""
Uncertainty Module

Range estimates for projected household healthcare spending. Annual costs
vary roughly 25% around the expected value; the percentile band is a fixed
asymmetric multiplier on the point estimate (right-skewed, since a bad
year costs far more than a good year saves).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CostVariance:
    """
    Percentile multipliers for cost confidence intervals.

    Defaults reflect historical household cost variance; recalibrate here
    rather than in the projection engine.
    """
    standard_deviation: float = 0.25  # As share of the mean
    p10_multiplier: float = 0.70  # Optimistic
    p90_multiplier: float = 1.45  # Pessimistic

    def __post_init__(self):
        if not self.p10_multiplier < 1.0 < self.p90_multiplier:
            raise ValueError(
                "p10_multiplier must be < 1.0 < p90_multiplier, got "
                f"{self.p10_multiplier} and {self.p90_multiplier}"
            )


@dataclass(frozen=True)
class ConfidenceInterval:
    """Cost percentiles for one projection year."""
    p10: float
    p50: float
    p90: float

    @property
    def range(self) -> tuple[float, float]:
        return (self.p10, self.p90)


def calculate_confidence_interval(
    expected_cost: float,
    variance: Optional[CostVariance] = None,
) -> ConfidenceInterval:
    """Percentile band around a point estimate; p50 is the estimate itself."""
    variance = variance or CostVariance()
    return ConfidenceInterval(
        p10=expected_cost * variance.p10_multiplier,
        p50=expected_cost,
        p90=expected_cost * variance.p90_multiplier,
    )

