"""
Regression tests for package wiring.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import coverage_model
from coverage_model import data, projections


def test_package_version():
    assert isinstance(coverage_model.__version__, str)


def test_package_exports_resolve():
    for name in coverage_model.__all__:
        assert hasattr(coverage_model, name), f"Missing export: {name}"


def test_subpackage_exports_resolve():
    for module in (data, projections):
        for name in module.__all__:
            assert hasattr(module, name), f"Missing export: {module.__name__}.{name}"


def test_calculators_callable():
    assert callable(coverage_model.calculate_premium_tax_credit)
    assert callable(coverage_model.generate_multi_year_projection)
    assert callable(coverage_model.analyze_family_glitch)
    assert callable(coverage_model.get_tax_reconciliation_warning)


def test_end_to_end_household():
    household = coverage_model.Household.create(state="NC", ages=[62], magi=40_000)
    result = household.premium_tax_credit(1_200, "Silver")
    projection = coverage_model.generate_multi_year_projection(
        household.projection_input(years_to_project=5, start_year=2025)
    )

    assert result.ptc_eligible
    assert len(projection.projections) == 6
    assert projection.total_lifetime_cost > 0
