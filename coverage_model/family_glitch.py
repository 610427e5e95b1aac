"""
Family Glitch Analysis

Before 2023, affordability of employer coverage was judged on the
employee's self-only premium, which locked dependents out of marketplace
subsidies even when family coverage was far more expensive. Treasury's
2022 final rule (effective plan year 2023) tests family members against
the family premium instead.

The employer affordability percentage (9.5% in statute, indexed annually)
is distinct from the 8.5% marketplace contribution cap.
"""

from dataclasses import dataclass

# IRS Rev. Proc. indexed affordability percentage for employer coverage
EMPLOYER_AFFORDABILITY_PERCENTAGE_2025 = 0.0839


@dataclass(frozen=True)
class FamilyGlitchAnalysis:
    """Result of testing employer self-only and family premiums."""
    is_glitch_fixed: bool
    employer_self_only_affordable: bool
    employer_family_affordable: bool
    family_can_get_subsidies: bool
    employer_self_only_cost: float
    employer_family_cost: float
    affordability_threshold: float  # Monthly dollars
    explanation: str


def analyze_family_glitch(
    magi: float,
    self_only_premium: float,
    family_premium: float,
    affordability_percentage: float = EMPLOYER_AFFORDABILITY_PERCENTAGE_2025,
) -> FamilyGlitchAnalysis:
    """
    Analyze whether dependents can use marketplace subsidies.

    Args:
        magi: Household MAGI (annual)
        self_only_premium: Employee's monthly cost for self-only coverage
        family_premium: Employee's monthly cost for family coverage
        affordability_percentage: Employer affordability percentage

    Returns:
        FamilyGlitchAnalysis
    """
    threshold = (max(0.0, magi) / 12) * affordability_percentage

    self_only_affordable = self_only_premium <= threshold
    family_affordable = family_premium <= threshold

    if self_only_affordable and not family_affordable:
        explanation = (
            f'The "family glitch" is fixed as of 2023. Your self-only coverage is affordable '
            f"(${self_only_premium:,.0f}/month <= ${threshold:,.0f}/month) but family coverage "
            f"is not (${family_premium:,.0f}/month > ${threshold:,.0f}/month). Your spouse and "
            f"children can get marketplace subsidies while you keep employer coverage."
        )
    elif not self_only_affordable:
        explanation = (
            f"Your employer self-only coverage is unaffordable (${self_only_premium:,.0f}/month "
            f"> ${threshold:,.0f}/month). Your entire household can seek marketplace subsidies."
        )
    else:
        explanation = (
            f"Your employer family coverage is affordable (${family_premium:,.0f}/month <= "
            f"${threshold:,.0f}/month). Your family should use employer coverage and is not "
            f"eligible for marketplace subsidies."
        )

    return FamilyGlitchAnalysis(
        is_glitch_fixed=True,
        employer_self_only_affordable=self_only_affordable,
        employer_family_affordable=family_affordable,
        family_can_get_subsidies=not family_affordable,
        employer_self_only_cost=self_only_premium,
        employer_family_cost=family_premium,
        affordability_threshold=round(threshold, 2),
        explanation=explanation,
    )
