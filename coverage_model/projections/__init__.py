"""
Multi-year healthcare cost projections.

Example usage:
    >>> from coverage_model.projections import ProjectionInput, generate_multi_year_projection
    >>> projection = generate_multi_year_projection(ProjectionInput(current_age=62, state="NC"))
    >>> [t.type.value for t in projection.major_transitions]
    ['medicare-eligible']
"""

from coverage_model.projections.multi_year import (
    DEFAULT_INFLATION_FACTORS,
    AgeTransition,
    InflationFactors,
    LifetimeProjection,
    ProjectionInput,
    TransitionType,
    YearProjection,
    calculate_medicare_premium,
    calculate_yearly_breakdown,
    detect_transition,
    generate_insights,
    generate_multi_year_projection,
    project_to_medicare,
    quick_five_year_projection,
)

__all__ = [
    'DEFAULT_INFLATION_FACTORS',
    'AgeTransition',
    'InflationFactors',
    'LifetimeProjection',
    'ProjectionInput',
    'TransitionType',
    'YearProjection',
    'calculate_medicare_premium',
    'calculate_yearly_breakdown',
    'detect_transition',
    'generate_insights',
    'generate_multi_year_projection',
    'project_to_medicare',
    'quick_five_year_projection',
]
