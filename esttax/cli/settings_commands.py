"""Settings CLI commands for Est Tax.

Manages settings.json - tax rules file, tax year, output format.
"""

import click
from pathlib import Path

from pydantic import ValidationError

from esttax.sdk import (
    load_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_settings_path,
    load_tax_rules,
    format_validation_errors,
)
from esttax.sdk.config import OUTPUT_FORMATS


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_rules_file: tax rules YAML replacing the built-in table
    - tax_year: built-in tax year to use
    - default_output_format: text or json
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


@settings.command("rules-file")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom rules file, revert to built-in tables")
def settings_rules_file(path, clear):
    """Set or clear the tax rules file.

    PATH is a tax rules YAML (same shape as tax-rules/2025.yaml). It is
    validated before being saved.

    Examples:
        est-tax settings rules-file ~/tax-rules/2026.yaml
        est-tax settings rules-file --clear
    """
    if clear:
        if clear_setting("tax_rules_file"):
            click.echo("Cleared tax_rules_file setting.")
        else:
            click.echo("tax_rules_file was not set.")
        return

    if not path:
        current = get_setting("tax_rules_file")
        if current:
            click.echo(f"Current tax_rules_file: {current}")
        else:
            click.echo("No custom tax_rules_file set. Using built-in tables.")
        return

    rules_path = Path(path).expanduser().resolve()
    try:
        rules = load_tax_rules(rules_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules file {rules_path}:\n{format_validation_errors(e)}")

    set_setting("tax_rules_file", str(rules_path))
    click.echo(f"Set tax_rules_file: {rules_path} (tax year {rules.tax_year})")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("output-format")
@click.argument("fmt", required=False, type=click.Choice(OUTPUT_FORMATS))
def settings_output_format(fmt):
    """Set or show the default output format (text or json)."""
    if not fmt:
        click.echo(f"default_output_format: {get_setting('default_output_format', 'text')}")
        return

    set_setting("default_output_format", fmt)
    click.echo(f"Set default_output_format: {fmt}")


@settings.command("tax-year")
@click.argument("year", required=False, type=int)
@click.option("--clear", is_flag=True, help="Clear tax_year, revert to the default year")
def settings_tax_year(year, clear):
    """Set or show the built-in tax year used when no rules file is set."""
    from esttax.sdk import available_tax_years, DEFAULT_TAX_YEAR

    if clear:
        clear_setting("tax_year")
        click.echo(f"Cleared tax_year. Using default: {DEFAULT_TAX_YEAR}")
        return

    if year is None:
        click.echo(f"tax_year: {get_setting('tax_year', DEFAULT_TAX_YEAR)}")
        return

    if year not in available_tax_years():
        years = ", ".join(str(y) for y in available_tax_years())
        raise click.BadParameter(f"No built-in tables for {year}. Available: {years}")

    set_setting("tax_year", year)
    click.echo(f"Set tax_year: {year}")
