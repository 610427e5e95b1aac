"""
Household Health Coverage Model

Marketplace subsidy eligibility (Medicaid, Premium Tax Credit and
cost-sharing reductions) and multi-year healthcare cost projections,
using 2025 federal poverty guidelines and ACA rating rules.
"""

from .fpl import calculate_fpl, calculate_fpl_percentage, is_medicaid_expansion_state
from .magi import MAGIComponents, calculate_magi, estimate_magi_from_range
from .affordability import (
    CSRLevel,
    MetalTier,
    get_affordability_percentage,
    get_csr_level,
)
from .ptc import (
    Eligibility,
    PremiumTaxCreditResult,
    calculate_premium_tax_credit,
    calculate_subsidy_breakpoints,
)
from .family_glitch import FamilyGlitchAnalysis, analyze_family_glitch
from .reconciliation import ReconciliationSettings, get_tax_reconciliation_warning
from .uncertainty import ConfidenceInterval, CostVariance
from .data.medical_costs import HealthStatus
from .projections import (
    InflationFactors,
    LifetimeProjection,
    ProjectionInput,
    TransitionType,
    generate_multi_year_projection,
    project_to_medicare,
    quick_five_year_projection,
)
from .household import Household
from .reporting import ProjectionReport, format_subsidy_summary

__version__ = "1.0.0"
__all__ = [
    "calculate_fpl",
    "calculate_fpl_percentage",
    "is_medicaid_expansion_state",
    "MAGIComponents",
    "calculate_magi",
    "estimate_magi_from_range",
    "CSRLevel",
    "MetalTier",
    "get_affordability_percentage",
    "get_csr_level",
    "Eligibility",
    "PremiumTaxCreditResult",
    "calculate_premium_tax_credit",
    "calculate_subsidy_breakpoints",
    "FamilyGlitchAnalysis",
    "analyze_family_glitch",
    "ReconciliationSettings",
    "get_tax_reconciliation_warning",
    "ConfidenceInterval",
    "CostVariance",
    "HealthStatus",
    "InflationFactors",
    "LifetimeProjection",
    "ProjectionInput",
    "TransitionType",
    "generate_multi_year_projection",
    "project_to_medicare",
    "quick_five_year_projection",
    "Household",
    "ProjectionReport",
    "format_subsidy_summary",
]
