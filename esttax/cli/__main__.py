"""Est Tax CLI - Command-line interface for estimated tax calculations."""

import json
import logging
import os

import click
from pydantic import ValidationError
from rich.console import Console

from esttax import __version__
from esttax.sdk import (
    EstimateRequest,
    compute_quarterly_plan,
    compute_total_tax,
    format_validation_errors,
    get_default_output_format,
    retirement_limit_warnings,
)
from esttax.sdk.config import OUTPUT_FORMATS

from .renderers.plan_renderer import render_breakdown, render_plan
from .rules_commands import load_rules_or_fail, rules_group
from .settings_commands import settings as settings_group


def _configure_logging() -> None:
    """Configure logging based on LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S"
    )


@click.group()
@click.version_option(version=__version__, prog_name="est-tax")
def cli():
    """Est Tax - Federal estimated quarterly taxes for the self-employed.

    Computes income tax, self-employment tax and the safe-harbor
    quarterly payment schedule for a single filer.

    Tax rules are resolved (in order) from:

    \b
    1. --rules FILE option
    2. settings.json 'tax_rules_file' (set via 'est-tax settings rules-file')
    3. Built-in tables for --year, settings 'tax_year', or the latest year

    Set LOG_LEVEL=DEBUG to log intermediate figures.
    """
    _configure_logging()


cli.add_command(settings_group)
cli.add_command(rules_group)


def _build_request(**kwargs) -> EstimateRequest:
    try:
        return EstimateRequest(**kwargs)
    except ValidationError as e:
        raise click.ClickException(f"Invalid input:\n{format_validation_errors(e)}")


@cli.command("estimate")
@click.argument("income", type=float)
@click.option("--prior-year-tax", type=float, required=True,
              help="Total tax from last year's return")
@click.option("--payments-made", type=float, default=0, show_default=True,
              help="Estimated payments already made this year")
@click.option("--qbi", "include_qbi", is_flag=True, help="Apply the 20% QBI deduction")
@click.option("--retirement", "retirement_amount", type=float, default=None,
              help="Deductible retirement contributions (enables the deduction)")
@click.option("--year", type=int, help="Built-in tax year (default: settings or latest)")
@click.option("--rules", "rules_file", type=click.Path(), help="Tax rules YAML file")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Output format (default: settings or text)")
def estimate(income, prior_year_tax, payments_made, include_qbi, retirement_amount, year, rules_file, output_format):
    """Calculate quarterly estimated tax payments.

    INCOME is expected net self-employment income for the year.

    The required annual payment is the smaller of 90% of this year's tax
    and 100% of last year's tax (110% when AGI is over $150,000), split
    into four equal installments. No payments are required when this
    year's tax is under $1,000.

    \b
    Examples:
      est-tax estimate 75000 --prior-year-tax 15000
      est-tax estimate 200000 --prior-year-tax 30000 --payments-made 8250 --qbi
      est-tax estimate 150000 --prior-year-tax 35000 --retirement 20000 --format json
    """
    request = _build_request(
        annual_income=income,
        previous_year_tax=prior_year_tax,
        current_year_payments=payments_made,
        include_qbi=include_qbi,
        retirement_contribution_amount=retirement_amount,
    )
    rules = load_rules_or_fail(rules_file, year)
    output_format = output_format or get_default_output_format()

    warnings = retirement_limit_warnings(request.retirement_contribution_amount, rules)
    plan = compute_quarterly_plan(request.to_calculation_input(), rules)

    if output_format == "json":
        result = plan.to_dict()
        if warnings:
            result["warnings"] = warnings
        click.echo(json.dumps(result, indent=2))
    else:
        render_plan(Console(), plan, rules, warnings)


@cli.command("breakdown")
@click.argument("income", type=float)
@click.option("--qbi", "include_qbi", is_flag=True, help="Apply the 20% QBI deduction")
@click.option("--retirement", "retirement_amount", type=float, default=None,
              help="Deductible retirement contributions (enables the deduction)")
@click.option("--year", type=int, help="Built-in tax year (default: settings or latest)")
@click.option("--rules", "rules_file", type=click.Path(), help="Tax rules YAML file")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Output format (default: settings or text)")
def breakdown(income, include_qbi, retirement_amount, year, rules_file, output_format):
    """Show income tax, SE tax and AGI for a year's income.

    JSON output includes qbi_deduction / retirement_contributions only
    when --qbi / --retirement are given.
    """
    request = _build_request(
        annual_income=income,
        previous_year_tax=0,
        include_qbi=include_qbi,
        retirement_contribution_amount=retirement_amount,
    )
    rules = load_rules_or_fail(rules_file, year)
    output_format = output_format or get_default_output_format()

    calc_input = request.to_calculation_input()
    result = compute_total_tax(
        calc_input.annual_income,
        include_qbi=calc_input.include_qbi,
        include_retirement=calc_input.include_retirement_contributions,
        retirement_amount=calc_input.retirement_contribution_amount,
        rules=rules,
    )

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        render_breakdown(Console(), result)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
