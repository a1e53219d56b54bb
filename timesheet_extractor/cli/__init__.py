"""Timesheet Extractor CLI.

Command-line interface for extracting work times from timesheet photos.
It includes commands for extraction, the employee roster and stored
preferences (hourly wage, API key).
"""

import click

from timesheet_extractor import __version__
from timesheet_extractor.cli.commands.employees import employees
from timesheet_extractor.cli.commands.extract import extract
from timesheet_extractor.cli.commands.settings import api_key, wage
from timesheet_extractor.cli.error_handlers import with_error_handling
from timesheet_extractor.config.logging_config import LoggingConfig, configure_logging
from timesheet_extractor.config.settings import get_config


@click.group(
    help="Timesheet Extractor CLI - Extract work times from timesheet photos"
)
@click.version_option(version=__version__)
def cli():
    """Timesheet Extractor CLI main entry point."""
    with with_error_handling():
        configure_logging(LoggingConfig.from_settings(get_config()))


# Register commands
cli.add_command(extract)
cli.add_command(employees)
cli.add_command(wage)
cli.add_command(api_key)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
