"""
Premium Tax Credit Reconciliation

Advance PTC is paid on projected income and trued up on Form 8962 at
filing. Large gaps between projected and actual MAGI mean either a
repayment or an additional credit.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationSettings:
    """
    Heuristics for the reconciliation estimate.

    The repayment/refund estimate scales the annual credit by the income
    delta, capped at the annual credit; it is a rough guide, not the Form 8962
    calculation.
    """
    warning_threshold: float = 0.05  # Relative income change that triggers a message
    minimum_projected_income: float = 1.0  # Floor for the relative-change denominator


def get_tax_reconciliation_warning(
    projected_income: float,
    actual_income: float,
    monthly_ptc: float,
    settings: Optional[ReconciliationSettings] = None,
) -> Optional[str]:
    """
    Warn when actual income differs enough from the projection to matter.

    Args:
        projected_income: MAGI reported on the marketplace application
        actual_income: MAGI expected on the tax return
        monthly_ptc: Advance credit currently received each month
        settings: Override thresholds

    Returns:
        Message describing the estimated repayment or refund, or None when
        the difference is under the threshold
    """
    settings = settings or ReconciliationSettings()

    base = max(projected_income, settings.minimum_projected_income)
    delta = abs(actual_income - projected_income) / base
    if delta < settings.warning_threshold:
        return None

    # Reconciliation cannot move more than the advance credit received
    annual_ptc = max(0.0, monthly_ptc) * 12
    estimate = min(delta * annual_ptc, annual_ptc)
    logger.debug(f"Reconciliation delta {delta:.1%}, estimated amount ${estimate:,.0f}")

    if projected_income < settings.minimum_projected_income:
        change = "higher" if actual_income > projected_income else "lower"
    elif actual_income > projected_income:
        change = f"{delta * 100:.0f}% higher"
    else:
        change = f"{delta * 100:.0f}% lower"

    if actual_income > projected_income:
        return (
            f"Tax Reconciliation Alert: Your actual income (${actual_income:,.0f}) is "
            f"{change} than projected (${projected_income:,.0f}). You may need "
            f"to repay approximately ${estimate:,.0f} of your subsidy when you file taxes. "
            f"Consider updating your marketplace application to avoid a large tax bill."
        )
    return (
        f"Tax Reconciliation Info: Your actual income (${actual_income:,.0f}) is "
        f"{change} than projected (${projected_income:,.0f}). You may receive "
        f"an additional ${estimate:,.0f} tax credit when you file taxes. Consider updating "
        f"your marketplace application to get more help now."
    )
