"""
Premium Tax Credit (ACA) Module

Classifies a household as Medicaid-eligible, in the coverage gap, or
eligible for the marketplace Premium Tax Credit, and sizes the credit
against the Second-Lowest-Cost Silver Plan (SLCSP) benchmark.

Eligibility (first match wins):
- Expansion state, income below 138% FPL: Medicaid
- Non-expansion state, 100-138% FPL: coverage gap (neither Medicaid nor PTC)
- Non-expansion state, below 100% FPL: Medicaid (traditional pathways)
- Everyone else: PTC-eligible, with no upper income limit (IRA 2022)

Credit:
    max contribution = MAGI / 12 * applicable percentage
    monthly PTC      = max(0, SLCSP - max contribution)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from .affordability import (
    AFFORDABILITY_CAP,
    CSRLevel,
    MetalTier,
    get_affordability_percentage,
    get_csr_level,
)
from .fpl import (
    MEDICAID_EXPANSION_FPL,
    MEDICAID_TRADITIONAL_FPL,
    calculate_fpl,
    clamp_household_size,
    is_medicaid_expansion_state,
    normalize_state,
)

logger = logging.getLogger(__name__)


class Eligibility(Enum):
    """Mutually exclusive coverage pathways for a household."""
    MEDICAID = "medicaid"
    COVERAGE_GAP = "coverage_gap"
    PTC_ELIGIBLE = "ptc_eligible"


# After-subsidy cost approximations relative to the Silver benchmark
BRONZE_PREMIUM_RATIO = 0.75
GOLD_PREMIUM_RATIO = 1.30

# Subsidy size above which the advisory text calls out CSR Silver plans
HIGH_SUBSIDY_SHARE = 0.9
LARGE_MONTHLY_SUBSIDY = 200

# FPL levels tabulated by calculate_subsidy_breakpoints
DEFAULT_BREAKPOINTS = (100, 138, 150, 200, 250, 300, 350, 400, 500, 600)


@dataclass(frozen=True)
class PremiumTaxCreditResult:
    """Read-only result of a PTC calculation for one household."""
    magi: float
    fpl: float
    fpl_percentage: float
    household_size: int
    state: str
    eligibility: Eligibility
    medicaid_expansion_state: bool

    # Premium Tax Credit
    benchmark_premium: float
    affordability_percentage: float
    max_contribution: float  # Monthly
    monthly_ptc: float
    annual_ptc: float
    csr_level: CSRLevel

    # Monthly cost after subsidy (Bronze-like to Gold-like)
    after_subsidy_cost_low: float
    after_subsidy_cost_high: float

    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def medicaid_eligible(self) -> bool:
        return self.eligibility is Eligibility.MEDICAID

    @property
    def in_coverage_gap(self) -> bool:
        return self.eligibility is Eligibility.COVERAGE_GAP

    @property
    def ptc_eligible(self) -> bool:
        return self.eligibility is Eligibility.PTC_ELIGIBLE


def determine_eligibility(fpl_percentage: float, expansion_state: bool) -> Eligibility:
    """Apply the Medicaid / coverage-gap / PTC rules in order."""
    if expansion_state and fpl_percentage < MEDICAID_EXPANSION_FPL:
        return Eligibility.MEDICAID
    if not expansion_state and MEDICAID_TRADITIONAL_FPL <= fpl_percentage < MEDICAID_EXPANSION_FPL:
        return Eligibility.COVERAGE_GAP
    if not expansion_state and fpl_percentage < MEDICAID_TRADITIONAL_FPL:
        return Eligibility.MEDICAID
    return Eligibility.PTC_ELIGIBLE


def calculate_premium_tax_credit(
    magi: float,
    household_size: float,
    state_code: str,
    slcsp_monthly_premium: float,
    metal_tier: Optional[Union[MetalTier, str]] = None,
) -> PremiumTaxCreditResult:
    """
    Calculate Medicaid/PTC eligibility and the monthly Premium Tax Credit.

    Args:
        magi: Household Modified Adjusted Gross Income (annual)
        household_size: Number of people in the tax household
        state_code: State of residence (FPL table and Medicaid expansion)
        slcsp_monthly_premium: Benchmark Silver premium for the household
        metal_tier: Plan tier being considered (CSR applies to Silver only)

    Returns:
        PremiumTaxCreditResult with amounts, flags and advisory text
    """
    if magi < 0:
        logger.warning(f"Negative MAGI {magi:,.2f} treated as zero")
        magi = 0.0
    slcsp = max(0.0, slcsp_monthly_premium)
    size = clamp_household_size(household_size)
    state = normalize_state(state_code)

    fpl = calculate_fpl(size, state)
    # Rounded far below display precision so an income of exactly N x FPL
    # lands in the band whose inclusive bound is N
    fpl_pct = round((magi / fpl) * 100, 9)
    expansion = is_medicaid_expansion_state(state)
    eligibility = determine_eligibility(fpl_pct, expansion)

    affordability = get_affordability_percentage(fpl_pct)
    max_contribution = (magi / 12) * affordability

    if eligibility is Eligibility.PTC_ELIGIBLE:
        monthly_ptc = max(0.0, slcsp - max_contribution)
        csr_level = get_csr_level(fpl_pct, metal_tier)
    else:
        monthly_ptc = 0.0
        csr_level = CSRLevel.NONE
    annual_ptc = monthly_ptc * 12

    cost_low = max(0.0, slcsp * BRONZE_PREMIUM_RATIO - monthly_ptc)
    cost_high = max(0.0, slcsp * GOLD_PREMIUM_RATIO - monthly_ptc)

    logger.debug(
        f"PTC: state={state} size={size} fpl={fpl_pct:.1f}% "
        f"eligibility={eligibility.value} monthly_ptc={monthly_ptc:.2f}"
    )

    warnings = _build_warnings(
        eligibility, state, fpl, fpl_pct, affordability, monthly_ptc, slcsp, csr_level,
    )
    recommendations = _build_recommendations(
        eligibility, state, fpl_pct, affordability, max_contribution, monthly_ptc,
    )

    return PremiumTaxCreditResult(
        magi=magi,
        fpl=fpl,
        fpl_percentage=round(fpl_pct, 1),
        household_size=size,
        state=state,
        eligibility=eligibility,
        medicaid_expansion_state=expansion,
        benchmark_premium=slcsp,
        affordability_percentage=affordability,
        max_contribution=round(max_contribution, 2),
        monthly_ptc=round(monthly_ptc, 2),
        annual_ptc=round(annual_ptc, 2),
        csr_level=csr_level,
        after_subsidy_cost_low=round(cost_low, 2),
        after_subsidy_cost_high=round(cost_high, 2),
        warnings=warnings,
        recommendations=recommendations,
    )


def _build_warnings(
    eligibility: Eligibility,
    state: str,
    fpl: float,
    fpl_pct: float,
    affordability: float,
    monthly_ptc: float,
    slcsp: float,
    csr_level: CSRLevel,
) -> list[str]:
    warnings = []
    ptc_eligible = eligibility is Eligibility.PTC_ELIGIBLE

    if ptc_eligible and affordability >= AFFORDABILITY_CAP:
        warnings.append(
            f"Your income exceeds 400% FPL (${fpl * 4:,.0f}). You still qualify, but your "
            f"contribution is capped at 8.5% of income, so the subsidy may be very limited "
            f"at high income."
        )

    if eligibility is Eligibility.COVERAGE_GAP:
        warnings.append(
            f'You\'re in the "coverage gap" in {state}. Your income is too high for Medicaid '
            f"but below the subsidy threshold. Consider: (1) increasing income slightly to "
            f"qualify for subsidies, (2) checking traditional Medicaid eligibility, or "
            f"(3) community health centers."
        )

    if csr_level is not CSRLevel.NONE:
        warnings.append(
            f"You qualify for Cost-Sharing Reductions (CSR {csr_level.value}) only on Silver "
            f"plans. Choose a Silver plan to get lower deductibles and out-of-pocket costs."
        )

    if slcsp > 0 and monthly_ptc > slcsp * HIGH_SUBSIDY_SHARE:
        warnings.append(
            f"Your subsidy is very high (covers {monthly_ptc / slcsp * 100:.0f}% of the "
            f"benchmark premium). Consider Silver plans with CSR for enhanced benefits at "
            f"little to no cost."
        )

    if ptc_eligible and monthly_ptc > 0 and fpl_pct <= 200:
        warnings.append(
            "Make sure to report income changes to the marketplace during the year to avoid "
            "tax reconciliation issues."
        )

    if ptc_eligible and 250 < fpl_pct < 300:
        warnings.append(
            "You're close to losing CSR eligibility at 250% FPL. Consider timing income "
            "(bonuses, IRA contributions) to maximize benefits."
        )

    return warnings


def _build_recommendations(
    eligibility: Eligibility,
    state: str,
    fpl_pct: float,
    affordability: float,
    max_contribution: float,
    monthly_ptc: float,
) -> list[str]:
    recommendations = []

    if eligibility is Eligibility.MEDICAID:
        recommendations.append(
            f"You likely qualify for Medicaid in {state}. Apply at your state's Medicaid "
            f"office or through the marketplace."
        )
        if fpl_pct <= MEDICAID_TRADITIONAL_FPL:
            recommendations.append(
                "At your income level Medicaid coverage is likely free or nearly-free."
            )
        return recommendations

    if eligibility is Eligibility.COVERAGE_GAP:
        recommendations.append(
            "Check whether you qualify for traditional Medicaid (pregnancy, disability, "
            "parent/caretaker) and look for sliding-scale community health centers."
        )
        return recommendations

    if monthly_ptc > LARGE_MONTHLY_SUBSIDY:
        recommendations.append(
            f"Your estimated monthly subsidy is ${monthly_ptc:,.0f}. Compare marketplace "
            f"plans to see your actual after-subsidy price."
        )

    if fpl_pct <= 200:
        recommendations.append(
            f"You qualify for free or nearly-free coverage. Your max contribution is "
            f"{affordability * 100:.1f}% of income (${max_contribution:,.0f}/month). "
            f"Look for Silver CSR plans."
        )

    if monthly_ptc == 0:
        recommendations.append(
            "Your income is high enough that the benchmark plan costs less than your "
            "expected contribution. Consider: (1) employer coverage, (2) high-deductible "
            "plans with an HSA for tax savings, (3) professional association plans."
        )

    return recommendations


def calculate_subsidy_breakpoints(
    household_size: float,
    state_code: str,
    slcsp_monthly_premium: float,
    fpl_levels: Sequence[float] = DEFAULT_BREAKPOINTS,
) -> pd.DataFrame:
    """
    Tabulate the credit at a set of FPL levels for one household.

    Returns:
        DataFrame with one row per FPL level: income, eligibility,
        contribution percentage and monthly/annual subsidy
    """
    fpl = calculate_fpl(household_size, state_code)
    levels = np.asarray(fpl_levels, dtype=float)
    rows = []
    for level in levels:
        income = fpl * level / 100
        result = calculate_premium_tax_credit(
            income, household_size, state_code, slcsp_monthly_premium,
        )
        rows.append({
            "fpl_percent": level,
            "income": round(fpl * level / 100, 2),
            "eligibility": result.eligibility.value,
            "contribution_percent": result.affordability_percentage * 100,
            "monthly_subsidy": result.monthly_ptc,
            "annual_subsidy": result.annual_ptc,
        })
    return pd.DataFrame(rows)
