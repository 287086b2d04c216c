"""Tax rules CLI commands."""

import json

import click
from pydantic import ValidationError
from rich.console import Console

from esttax.sdk import (
    UnsupportedTaxYearError,
    format_validation_errors,
    get_default_output_format,
    load_tax_rules,
    resolve_tax_rules,
    rules_to_dict,
)
from esttax.sdk.config import OUTPUT_FORMATS
from .renderers.plan_renderer import render_rules


@click.group("rules")
def rules_group():
    """Inspect and validate tax rules tables.

    \b
    Commands:
      show      Print the effective tax rules
      validate  Check a tax rules YAML file
    """
    pass


@rules_group.command("show")
@click.option("--year", type=int, help="Built-in tax year (default: settings or latest)")
@click.option("--rules", "rules_file", type=click.Path(), help="Tax rules YAML file")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Output format (default: settings or text)")
def rules_show(year, rules_file, output_format):
    """Show the tax rules table that calculations will use."""
    rules = load_rules_or_fail(rules_file, year)
    output_format = output_format or get_default_output_format()

    if output_format == "json":
        click.echo(json.dumps(rules_to_dict(rules), indent=2))
    else:
        render_rules(Console(), rules)


@rules_group.command("validate")
@click.argument("rules_file", type=click.Path(exists=True))
def rules_validate(rules_file):
    """Validate a tax rules YAML file."""
    try:
        rules = load_tax_rules(rules_file)
    except ValidationError as e:
        click.echo(click.style(f"Invalid: {rules_file}", fg="red"), err=True)
        click.echo(format_validation_errors(e), err=True)
        raise SystemExit(1)

    click.echo(click.style(f"Valid: {rules_file} (tax year {rules.tax_year})", fg="green"))


def load_rules_or_fail(rules_file, year):
    """Resolve tax rules, converting lookup errors into CLI errors."""
    try:
        return resolve_tax_rules(rules_file=rules_file, year=year)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except UnsupportedTaxYearError as e:
        raise click.BadParameter(e.args[0] if e.args else str(e), param_hint="--year")
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules file:\n{format_validation_errors(e)}")
