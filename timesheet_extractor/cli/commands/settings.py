"""Commands for stored preferences: hourly wage and OpenAI API key."""

import click

from timesheet_extractor.cli.error_handlers import (
    DataValidationError,
    with_error_handling,
)
from timesheet_extractor.cli.utils.formatters import format_info, format_success
from timesheet_extractor.config.settings import get_config
from timesheet_extractor.services.key_value_store import open_store
from timesheet_extractor.services.preference_stores import CredentialStore, WageStore
from timesheet_extractor.utils.logging_utils import mask_api_key


@click.group(name="wage")
def wage():
    """Show or set the hourly wage."""
    pass


@wage.command(name="show")
def show_wage():
    """Show the stored hourly wage."""
    with with_error_handling():
        hourly_wage = WageStore(open_store()).get()
        if hourly_wage > 0:
            click.echo(f"Hourly wage: €{hourly_wage:.2f}")
        else:
            click.echo(format_info("No hourly wage set (wage totals are hidden)"))


@wage.command(name="set")
@click.argument("amount", type=float)
def set_wage(amount: float):
    """Store the hourly wage (0 hides wage totals)."""
    with with_error_handling():
        try:
            WageStore(open_store()).set(amount)
        except ValueError as e:
            raise DataValidationError(str(e), "Use a wage of 0 or more") from e

        click.echo(format_success(f"Hourly wage set to €{amount:.2f}"))


@click.group(name="api-key")
def api_key():
    """Manage the stored OpenAI API key."""
    pass


@api_key.command(name="show")
def show_api_key():
    """Show the API key in masked form."""
    with with_error_handling():
        stored = CredentialStore(open_store()).get()
        if stored:
            click.echo(f"API key: {mask_api_key(stored)} (stored)")
            return

        from_env = get_config().openai_api_key
        if from_env:
            click.echo(f"API key: {mask_api_key(from_env)} (from OPENAI_API_KEY)")
        else:
            click.echo(format_info("No API key configured"))


@api_key.command(name="set")
@click.argument("key")
def set_api_key(key: str):
    """Store an OpenAI API key (must start with "sk-")."""
    with with_error_handling():
        try:
            CredentialStore(open_store()).set(key)
        except ValueError as e:
            raise DataValidationError(
                str(e), "Copy the key from your OpenAI account settings"
            ) from e

        click.echo(format_success(f"API key saved ({mask_api_key(key.strip())})"))


@api_key.command(name="delete")
def delete_api_key():
    """Delete the stored API key."""
    with with_error_handling():
        CredentialStore(open_store()).delete()
        click.echo(format_success("API key deleted"))
