"""
Affordability and Cost-Sharing Reduction Policy

Maps household income (as % of FPL) to:
- The applicable percentage: share of income the household is expected to
  contribute toward the benchmark Silver plan
- The Cost-Sharing Reduction tier available on Silver plans

Current Law (IRA 2022 enhanced credits):
- No upper income limit; contribution capped at 8.5% of income
- 0% contribution up to 200% FPL in this simplified schedule
- CSR only on Silver plans, only up to 250% FPL
"""

from enum import Enum
from typing import Optional, Union

import numpy as np


class MetalTier(Enum):
    """Marketplace plan metal levels."""
    CATASTROPHIC = "Catastrophic"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"

    @classmethod
    def parse(cls, value: Union["MetalTier", str]) -> "MetalTier":
        """Accept an enum member or its name/value in any case."""
        if isinstance(value, cls):
            return value
        for tier in cls:
            if str(value).strip().lower() == tier.value.lower():
                return tier
        raise ValueError(f"Unknown metal tier: {value!r}")


class CSRLevel(Enum):
    """Cost-Sharing Reduction variant (actuarial value of the Silver plan)."""
    CSR_94 = "94%"
    CSR_87 = "87%"
    CSR_73 = "73%"
    NONE = "None"


# =============================================================================
# SCHEDULES
# =============================================================================

# (upper FPL bound, inclusive; applicable percentage)
AFFORDABILITY_TABLE = (
    (200, 0.00),
    (250, 0.02),
    (300, 0.04),
    (350, 0.06),
    (400, 0.08),
)
AFFORDABILITY_CAP = 0.085  # Above 400% FPL; no subsidy cliff

# (upper FPL bound, inclusive; CSR level)
CSR_TABLE = (
    (150, CSRLevel.CSR_94),
    (200, CSRLevel.CSR_87),
    (250, CSRLevel.CSR_73),
)


def _lookup(table, fpl_percent: float, above):
    """
    Value of the band containing fpl_percent.

    Bands are (previous bound, bound]; anything past the last bound gets
    `above`.
    """
    bounds = np.array([bound for bound, _ in table], dtype=float)
    idx = int(np.searchsorted(bounds, fpl_percent, side="left"))
    if idx >= len(table):
        return above
    return table[idx][1]


def get_affordability_percentage(fpl_percent: float) -> float:
    """
    Get the applicable percentage for a given FPL level.

    Args:
        fpl_percent: Household income as % of FPL (e.g., 250 = 250% FPL)

    Returns:
        Expected contribution as decimal of income (e.g., 0.085 = 8.5%)
    """
    return _lookup(AFFORDABILITY_TABLE, fpl_percent, AFFORDABILITY_CAP)


def get_csr_level(fpl_percent: float, metal_tier: Optional[Union[MetalTier, str]]) -> CSRLevel:
    """
    Determine the Cost-Sharing Reduction tier.

    CSR variants only exist for Silver plans, so any other tier (or no
    tier, or an unrecognised one) gets CSRLevel.NONE regardless of income.
    """
    if isinstance(metal_tier, MetalTier):
        is_silver = metal_tier is MetalTier.SILVER
    else:
        is_silver = str(metal_tier or "").strip().lower() == MetalTier.SILVER.value.lower()
    if not is_silver:
        return CSRLevel.NONE
    return _lookup(CSR_TABLE, fpl_percent, CSRLevel.NONE)
