"""
Pytest fixtures for household coverage model tests.
"""

import pytest
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from coverage_model.household import Household
from coverage_model.projections import ProjectionInput, generate_multi_year_projection
from coverage_model.ptc import calculate_premium_tax_credit


# =============================================================================
# HOUSEHOLD FIXTURES
# =============================================================================

@pytest.fixture
def texas_single_adult():
    """Single adult in a non-expansion state at 119.5% FPL."""
    return Household.create(state="TX", ages=[35], magi=18_000)


@pytest.fixture
def ohio_family_of_four():
    """Family of four in an expansion state at exactly 200% FPL."""
    return Household.create(state="OH", ages=[45, 43, 12, 10], magi=62_820)


# =============================================================================
# RESULT FIXTURES
# =============================================================================

@pytest.fixture
def ohio_silver_result():
    """PTC result for the Ohio family against a $1,500 Silver benchmark."""
    return calculate_premium_tax_credit(62_820, 4, "OH", 1_500, "Silver")


@pytest.fixture
def pre_medicare_input():
    """Five-year projection for a 62-year-old in North Carolina."""
    return ProjectionInput(current_age=62, state="NC", years_to_project=5, start_year=2025)


@pytest.fixture
def pre_medicare_projection(pre_medicare_input):
    """Projection crossing the Medicare transition at 65."""
    return generate_multi_year_projection(pre_medicare_input)


@pytest.fixture
def midlife_projection():
    """Ten-year projection for a 40-year-old, entirely before Medicare."""
    return generate_multi_year_projection(
        ProjectionInput(current_age=40, state="NC", years_to_project=10, start_year=2025)
    )
