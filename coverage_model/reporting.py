"""
Reporting and Visualization Module

Formatted text reports, charts and CSV export for coverage projections
and subsidy results.
"""

from typing import Optional

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import numpy as np

from .projections.multi_year import LifetimeProjection
from .ptc import PremiumTaxCreditResult


class ProjectionReport:
    """
    Generate reports for a multi-year cost projection.
    """

    def __init__(self, projection: LifetimeProjection):
        self.projection = projection
        self.years = projection.calendar_years

    def generate_text_report(self) -> str:
        """Generate a detailed text report."""
        p = self.projection
        lines = []

        # Header
        lines.append("=" * 78)
        lines.append("HEALTHCARE COST PROJECTION REPORT")
        lines.append("=" * 78)
        lines.append("")

        lines.append("SUMMARY")
        lines.append("-" * 40)
        lines.append(f"State: {p.primary_state}")
        lines.append(f"Plan Tier: {p.metal_tier.value}")
        lines.append(f"Ages: {p.start_age} - {p.end_age}")
        lines.append(f"Total Projected Cost:       ${p.total_lifetime_cost:>12,.0f}")
        lines.append(f"Average Annual Cost:        ${p.average_annual_cost:>12,.0f}")
        lines.append("")

        # Year-by-year table
        lines.append("YEAR-BY-YEAR COSTS ($)")
        lines.append("-" * 78)
        header = (
            f"{'Year':>6} {'Age':>4} {'Premium':>10} {'Medical':>10} {'OOP':>8} "
            f"{'Total':>10} {'Range':>24}"
        )
        lines.append(header)
        lines.append("-" * 78)

        for yp in p.projections:
            row = f"{yp.calendar_year:>6} {yp.age:>4} "
            row += f"{yp.projected_annual_premium:>10,.0f} "
            row += f"{yp.projected_medical_costs:>10,.0f} "
            row += f"{yp.projected_oop:>8,.0f} "
            row += f"{yp.total_annual_cost:>10,.0f} "
            row += f"{yp.confidence_interval.p10:>10,.0f} to {yp.confidence_interval.p90:>10,.0f}"
            if yp.transition:
                row += f"  * {yp.transition.type.value}"
            lines.append(row)

        lines.append("-" * 78)
        p10_total = sum(yp.confidence_interval.p10 for yp in p.projections)
        p90_total = sum(yp.confidence_interval.p90 for yp in p.projections)
        total_row = f"{'TOTAL':>6} {'':>4} "
        total_row += f"{sum(yp.projected_annual_premium for yp in p.projections):>10,.0f} "
        total_row += f"{sum(yp.projected_medical_costs for yp in p.projections):>10,.0f} "
        total_row += f"{sum(yp.projected_oop for yp in p.projections):>8,.0f} "
        total_row += f"{p.total_lifetime_cost:>10,.0f} "
        total_row += f"{p10_total:>10,.0f} to {p90_total:>10,.0f}"
        lines.append(total_row)
        lines.append("")

        if p.major_transitions:
            lines.append("LIFE-STAGE TRANSITIONS")
            lines.append("-" * 40)
            for t in p.major_transitions:
                lines.append(f"- {t.description}")
                lines.append(f"  Impact: {t.impact}")
                lines.append(f"  Action: {t.recommended_action}")
            lines.append("")

        if p.insights:
            lines.append("INSIGHTS")
            lines.append("-" * 40)
            for insight in p.insights:
                lines.append(f"- {insight}")
            lines.append("")

        lines.append("NOTES")
        lines.append("-" * 40)
        lines.append(
            f"- Premium inflation {p.inflation_factors.premium_inflation:.1%}/yr, "
            f"medical inflation {p.inflation_factors.medical_inflation:.1%}/yr"
        )
        lines.append("- Range is the 10th to 90th percentile of annual cost")
        lines.append("- Estimates exclude premium tax credits")
        lines.append("")

        return "\n".join(lines)

    def plot_projection(self,
                        save_path: Optional[str] = None,
                        show: bool = True) -> plt.Figure:
        """
        Annual cost band, cumulative cost and cost components over time.
        """
        p = self.projection
        totals = p.total_costs
        low = np.array([yp.confidence_interval.p10 for yp in p.projections])
        high = np.array([yp.confidence_interval.p90 for yp in p.projections])
        premiums = np.array([yp.projected_annual_premium for yp in p.projections])
        medical = np.array([yp.projected_medical_costs for yp in p.projections])
        oop = np.array([yp.projected_oop for yp in p.projections])

        fig, axes = plt.subplots(1, 3, figsize=(18, 5))
        fig.suptitle(
            f"Healthcare Cost Projection: {p.primary_state}, ages {p.start_age}-{p.end_age}",
            fontsize=14, fontweight='bold',
        )

        # 1. Annual cost with percentile band
        ax1 = axes[0]
        ax1.fill_between(self.years, low, high, alpha=0.3, color='blue',
                         label='10th-90th percentile')
        ax1.plot(self.years, totals, 'b-', linewidth=2, label='Expected')
        for yp in p.projections:
            if yp.transition:
                ax1.axvline(x=yp.calendar_year, color='gray', linestyle='--', linewidth=1)
                ax1.annotate(yp.transition.type.value, xy=(yp.calendar_year, yp.total_annual_cost),
                             xytext=(3, 10), textcoords="offset points", fontsize=8)
        ax1.set_xlabel('Year')
        ax1.set_ylabel('Annual Cost ($)')
        ax1.set_title('Annual Healthcare Cost')
        ax1.legend(loc='best')
        ax1.yaxis.set_major_formatter(mticker.StrMethodFormatter('${x:,.0f}'))
        ax1.grid(True, alpha=0.3)

        # 2. Cumulative cost
        ax2 = axes[1]
        ax2.fill_between(self.years, np.cumsum(low), np.cumsum(high),
                         alpha=0.3, color='red')
        ax2.plot(self.years, [yp.cumulative_cost for yp in p.projections], 'r-', linewidth=2)
        ax2.set_xlabel('Year')
        ax2.set_ylabel('Cumulative Cost ($)')
        ax2.set_title('Cumulative Healthcare Cost')
        ax2.yaxis.set_major_formatter(mticker.StrMethodFormatter('${x:,.0f}'))
        ax2.grid(True, alpha=0.3)

        # 3. Components breakdown
        ax3 = axes[2]
        x = np.arange(len(self.years))
        ax3.bar(x, premiums, label='Premium', color='steelblue', alpha=0.8)
        ax3.bar(x, medical, bottom=premiums, label='Medical', color='orange', alpha=0.8)
        ax3.bar(x, oop, bottom=premiums + medical, label='Out-of-Pocket', color='green', alpha=0.8)
        ax3.set_xlabel('Year')
        ax3.set_ylabel('$')
        ax3.set_title('Cost Components')
        ax3.set_xticks(x)
        ax3.set_xticklabels(self.years, rotation=45)
        ax3.legend()
        ax3.grid(True, alpha=0.3, axis='y')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')

        if show:
            plt.show()

        return fig

    def export_to_csv(self, filepath: str):
        """Export the year-by-year projection to a CSV file."""
        df = self.projection.to_dataframe()
        df.to_csv(filepath, index=False)
        print(f"Projection exported to {filepath}")


def format_subsidy_summary(result: PremiumTaxCreditResult) -> str:
    """Create a text summary of a Premium Tax Credit result."""
    lines = []
    lines.append("SUBSIDY SUMMARY")
    lines.append("=" * 60)
    lines.append(f"State: {result.state}    Household size: {result.household_size}")
    lines.append(f"MAGI: ${result.magi:,.0f}  ({result.fpl_percentage:.1f}% of ${result.fpl:,.0f} FPL)")
    lines.append(f"Eligibility: {result.eligibility.value}")
    lines.append("-" * 60)

    if result.ptc_eligible:
        lines.append(f"Benchmark (SLCSP) premium:  ${result.benchmark_premium:>10,.2f}/mo")
        lines.append(f"Expected contribution:      ${result.max_contribution:>10,.2f}/mo "
                     f"({result.affordability_percentage:.1%} of income)")
        lines.append(f"Premium Tax Credit:         ${result.monthly_ptc:>10,.2f}/mo "
                     f"(${result.annual_ptc:,.0f}/yr)")
        lines.append(f"Cost after subsidy:         ${result.after_subsidy_cost_low:,.2f} to "
                     f"${result.after_subsidy_cost_high:,.2f}/mo")
        lines.append(f"Cost-sharing reduction:     {result.csr_level.value}")

    if result.warnings:
        lines.append("")
        lines.append("WARNINGS")
        for warning in result.warnings:
            lines.append(f"- {warning}")

    if result.recommendations:
        lines.append("")
        lines.append("RECOMMENDATIONS")
        for recommendation in result.recommendations:
            lines.append(f"- {recommendation}")

    return "\n".join(lines)


def create_comparison_table(projections: dict[str, LifetimeProjection]) -> str:
    """Text table comparing labelled projections (e.g. one per metal tier)."""
    lines = []
    lines.append("PROJECTION COMPARISON TABLE")
    lines.append("=" * 72)
    lines.append(f"{'Scenario':<28} {'Total':>14} {'Avg/Year':>12} {'Final Year':>14}")
    lines.append("-" * 72)

    for label, projection in projections.items():
        name = label[:26] + ".." if len(label) > 28 else label
        final = projection.projections[-1].total_annual_cost if projection.projections else 0.0
        lines.append(
            f"{name:<28} ${projection.total_lifetime_cost:>12,.0f} "
            f"${projection.average_annual_cost:>10,.0f} ${final:>12,.0f}"
        )

    return "\n".join(lines)
