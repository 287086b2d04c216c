"""Rich renderer for tax breakdowns and payment plans.

Transforms SDK models into formatted Rich tables.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from esttax.sdk.schemas import PaymentPlan, TaxBreakdown
from esttax.sdk.taxes.schemas import TaxYearRules


def render_plan(console: Console, plan: PaymentPlan, rules: TaxYearRules, warnings: list = None) -> None:
    """Render a payment plan: warnings, summary, schedule, breakdown.

    Args:
        console: Rich Console instance
        plan: Output of compute_quarterly_plan()
        rules: Tax year rules the plan was computed with
        warnings: Optional non-fatal input warnings
    """
    _render_warnings(console, warnings or [])
    _render_summary(console, plan, rules)
    _render_schedule(console, plan)
    render_breakdown(console, plan.breakdown)


def render_breakdown(console: Console, breakdown: TaxBreakdown) -> None:
    """Render a tax breakdown as a two-column table."""
    table = Table(title="Tax Breakdown", box=box.SIMPLE, show_header=False)
    table.add_column("item")
    table.add_column("amount", justify="right")

    table.add_row("Adjusted gross income", _money(breakdown.agi))
    if breakdown.retirement_contributions is not None:
        table.add_row("Retirement contributions", f"-{_money(breakdown.retirement_contributions)}")
    if breakdown.qbi_deduction is not None:
        table.add_row("QBI deduction", f"-{_money(breakdown.qbi_deduction)}")
    table.add_row("Income tax", _money(breakdown.income_tax))
    table.add_row("Self-employment tax", _money(breakdown.se_tax))
    table.add_row("[bold]Total tax[/bold]", f"[bold]{_money(breakdown.total_tax)}[/bold]")

    console.print(table)


def render_rules(console: Console, rules: TaxYearRules) -> None:
    """Render a tax rules table: brackets, then the scalar constants."""
    brackets = Table(title=f"{rules.tax_year} Income Tax Brackets (single)", box=box.SIMPLE)
    brackets.add_column("Over", justify="right")
    brackets.add_column("Up to", justify="right")
    brackets.add_column("Rate", justify="right")
    for b in rules.brackets:
        upper = "-" if b.upper_bound is None else _money(b.upper_bound)
        brackets.add_row(_money(b.lower_bound), upper, f"{b.rate:.0%}")
    console.print(brackets)

    se = rules.self_employment
    constants = Table(show_header=False, box=None, padding=(0, 2))
    constants.add_column("key", style="dim")
    constants.add_column("value")
    constants.add_row("Standard deduction", _money(rules.standard_deduction))
    constants.add_row("SE earnings factor", f"{se.earnings_factor:.2%}")
    constants.add_row("SS wage base", f"{_money(se.wage_base)} at {se.social_security_rate:.1%}")
    constants.add_row("Medicare", f"{se.medicare_rate:.1%}")
    constants.add_row(
        "Additional Medicare",
        f"{se.additional_medicare_rate:.1%} over {_money(se.additional_medicare_threshold)}",
    )
    constants.add_row(
        "QBI",
        f"{rules.qbi.rate:.0%}, phase-out {_money(rules.qbi.phase_out_start)}"
        f" - {_money(rules.qbi.phase_out_end)}",
    )
    harbor = rules.safe_harbor
    constants.add_row(
        "Safe harbor",
        f"{harbor.current_year_rate:.0%} current / {harbor.prior_year_rate:.0%} prior "
        f"({harbor.high_income_prior_year_rate:.0%} over {_money(harbor.high_income_agi_threshold)} AGI)",
    )
    constants.add_row("Minimum liability", _money(harbor.minimum_liability))
    for d in rules.due_dates:
        constants.add_row(f"Q{d.quarter} due", d.due_date.isoformat())

    console.print(Panel(constants, title="Constants", border_style="dim"))


def _render_warnings(console: Console, warnings: list) -> None:
    for warning in warnings:
        console.print(Panel(
            f"[yellow]{warning}[/yellow]",
            title="Note",
            border_style="yellow"
        ))


def _render_summary(console: Console, plan: PaymentPlan, rules: TaxYearRules) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Total estimated tax", _money(plan.total_annual_tax))
    table.add_row("Prior-year safe harbor", _money(plan.prior_year_safe_harbor))
    table.add_row("Current-year safe harbor", _money(plan.current_year_safe_harbor))
    table.add_row("Required annual payment", _money(plan.required_annual_payment))
    table.add_row("Total due", _money(plan.total_due))
    table.add_row("[bold]Remaining to pay[/bold]", f"[bold]{_money(plan.remaining_balance)}[/bold]")

    console.print(Panel(table, title=f"{plan.tax_year} Estimated Tax Summary", border_style="blue"))

    if plan.is_payment_required:
        return

    minimum_liability = rules.safe_harbor.minimum_liability
    if plan.total_annual_tax < minimum_liability:
        reason = f"tax under the {_money(minimum_liability)} minimum liability"
    else:
        reason = f"prior-year safe harbor of {_money(plan.prior_year_safe_harbor)}"
    console.print(f"[green]No estimated payments required ({reason}).[/green]")


def _render_schedule(console: Console, plan: PaymentPlan) -> None:
    table = Table(title="Quarterly Payment Schedule", box=box.SIMPLE)
    table.add_column("Quarter")
    table.add_column("Due", justify="center")
    table.add_column("Amount", justify="right")

    for q in plan.quarterly_installments:
        table.add_row(f"Q{q.quarter_number}", q.due_date.strftime("%b %d, %Y"), _money(q.amount_due))

    console.print(table)


def _money(amount: float) -> str:
    return f"${amount:,.0f}"
