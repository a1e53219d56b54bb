"""Extract timesheet data from images."""

import datetime as dt
from pathlib import Path
from typing import List, Optional, Set, Tuple

import click
from openai import OpenAI

from timesheet_extractor.aggregators.extraction_session import (
    EmployeeData,
    ExtractionSession,
)
from timesheet_extractor.calculators.wage_calculator import WageSummary
from timesheet_extractor.cli.error_handlers import (
    ConfigurationError,
    DataValidationError,
    ProcessingError,
    with_error_handling,
)
from timesheet_extractor.cli.utils.formatters import (
    format_group_title,
    format_info,
    format_issue,
    format_success,
    format_table,
    format_warning,
)
from timesheet_extractor.cli.utils.progress import ProgressTracker
from timesheet_extractor.config.logging_config import LoggingConfig, configure_logging
from timesheet_extractor.config.settings import ExtractorConfig, get_config
from timesheet_extractor.models.extraction import ImagePayload
from timesheet_extractor.services.key_value_store import open_store
from timesheet_extractor.services.preference_stores import (
    CredentialStore,
    WageStore,
    validate_wage,
)
from timesheet_extractor.services.retry_handler import RetryHandler
from timesheet_extractor.services.roster_store import RosterStore
from timesheet_extractor.services.timesheet_extraction_service import (
    TimesheetExtractionService,
)
from timesheet_extractor.validators.entry_validator import EntryValidator
from timesheet_extractor.validators.validation_report import ValidationReport
from timesheet_extractor.writers.csv_writer import export_filename, write_csv
from timesheet_extractor.writers.html_writer import write_html

ENTRY_TABLE_HEADERS = ["Date", "Start", "End", "Duration"]
MAX_ISSUES_SHOWN = 20


def resolve_api_key(credential_store: CredentialStore, config: ExtractorConfig) -> str:
    """Stored key first, then OPENAI_API_KEY.

    Raises:
        ConfigurationError: If no key is available
    """
    api_key = credential_store.get() or config.openai_api_key
    if not api_key:
        raise ConfigurationError(
            "No OpenAI API key configured",
            "Run 'timesheet-cli api-key set sk-...' or set OPENAI_API_KEY",
        )
    return api_key


def build_extraction_service(
    config: ExtractorConfig, api_key: str
) -> TimesheetExtractionService:
    """Create the extraction service with an OpenAI client from settings."""
    client = OpenAI(api_key=api_key, **config.get_openai_client_options())
    return TimesheetExtractionService(
        client,
        model=config.batch_model,
        image_model=config.image_model,
        image_detail=config.image_detail,
        retry_handler=RetryHandler(
            max_attempts=config.identification_max_attempts,
            base_delay=config.identification_retry_delay,
        ),
    )


def load_images(paths: Tuple[Path, ...]) -> List[ImagePayload]:
    """Read image files in the given order."""
    images = []
    for path in paths:
        try:
            images.append(ImagePayload.from_path(path))
        except OSError as e:
            raise ProcessingError(
                f"Cannot read image {path}: {e.strerror or e}",
                "Check that the file exists and is readable",
            ) from e
    return images


def unique_export_path(
    directory: Path, employee: Optional[str], extension: str, used: Set[str]
) -> Path:
    """Export path for a group, numbered when the name is already taken."""
    filename = export_filename(employee, extension, dt.date.today())
    stem = filename[: -len(extension) - 1]
    counter = 2
    while filename in used:
        filename = f"{stem}-{counter}.{extension}"
        counter += 1
    used.add(filename)
    return directory / filename


def _echo_group(group: EmployeeData, summary: WageSummary) -> None:
    click.echo()
    click.echo(format_group_title(group.employee, group.source_label))

    if not group.entries:
        click.echo(format_warning("No entries found"))
        return

    rows = [
        [entry.date, entry.start_time, entry.end_time, entry.duration or ""]
        for entry in group.entries
    ]
    click.echo(format_table(ENTRY_TABLE_HEADERS, rows))

    totals = f"Total: {summary.total_hours_display} hours ({summary.entry_count} entries)"
    if summary.hourly_wage > 0:
        totals += (
            f", wage €{summary.hourly_wage:.2f}/h, "
            f"total wage €{summary.total_wage:.2f}"
        )
    click.echo(totals)


def _echo_report(report: ValidationReport) -> None:
    click.echo()
    if not report.issues:
        click.echo(format_success("All entries passed the quality checks"))
        return

    click.echo(f"Entry quality: {report.summary()}")
    for issue in report.issues[:MAX_ISSUES_SHOWN]:
        click.echo(f"  {format_issue(issue)}")
    if len(report.issues) > MAX_ISSUES_SHOWN:
        click.echo(f"  ... and {len(report.issues) - MAX_ISSUES_SHOWN} more")


@click.command(name="extract")
@click.argument(
    "images",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--per-image",
    is_flag=True,
    default=False,
    help="Send one request per image instead of a single batch request",
)
@click.option(
    "--merge-by-employee",
    is_flag=True,
    default=False,
    help="Combine the entries of images that belong to the same employee",
)
@click.option(
    "--wage",
    type=float,
    default=None,
    help="Hourly wage for this run (defaults to the stored wage)",
)
@click.option(
    "--csv-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write one CSV file per employee group into this directory",
)
@click.option(
    "--html-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write one printable HTML file per employee group into this directory",
)
@click.option("--debug", is_flag=True, default=False, help="Verbose logging")
def extract(
    images: Tuple[Path, ...],
    per_image: bool,
    merge_by_employee: bool,
    wage: Optional[float],
    csv_dir: Optional[Path],
    html_dir: Optional[Path],
    debug: bool,
):
    """Extract work time entries from timesheet photos.

    Images are analyzed together in one request. Each image becomes one
    group with its detected employee, entries, total hours and wage.

    Example:
        timesheet-cli extract week1.jpg week2.jpg
        timesheet-cli extract *.jpg --merge-by-employee --csv-dir exports/
        timesheet-cli extract scan.png --per-image --wage 15.50
    """
    with with_error_handling(debug):
        config = get_config()
        if debug:
            configure_logging(LoggingConfig.from_settings(config, debug=True))
        store = open_store(config.store_file)

        if wage is None:
            hourly_wage = WageStore(store).get()
        else:
            try:
                hourly_wage = validate_wage(wage)
            except ValueError as e:
                raise DataValidationError(str(e), "Use a wage of 0 or more") from e

        api_key = resolve_api_key(CredentialStore(store), config)

        stages = ["Loading images", "Extracting timesheet data", "Checking entries"]
        if csv_dir or html_dir:
            stages.append("Writing exports")
        tracker = ProgressTracker(stages)

        tracker.start_next()
        payloads = load_images(images)

        tracker.start_next()
        session = ExtractionSession(
            build_extraction_service(config, api_key), RosterStore(store)
        )
        groups = session.process_images(
            payloads, per_image=per_image, merge_by_employee=merge_by_employee
        )

        tracker.start_next()
        validator = EntryValidator()
        report = ValidationReport()
        for group in groups:
            report.merge(
                validator.validate_entries(
                    group.entries, context={"image": group.source_label}
                )
            )

        for index, group in enumerate(groups):
            _echo_group(group, session.summarize(index, hourly_wage))

        for failure in session.failures:
            click.echo(
                format_warning(f"Skipped {failure.source_label}: {failure.message}")
            )

        _echo_report(report)

        if csv_dir or html_dir:
            tracker.start_next()
            used_names: Set[str] = set()
            for group in groups:
                if csv_dir:
                    path = unique_export_path(csv_dir, group.employee, "csv", used_names)
                    write_csv(path, group.entries, group.employee)
                    click.echo(format_info(f"Wrote {path}"))
                if html_dir:
                    path = unique_export_path(
                        html_dir, group.employee, "html", used_names
                    )
                    write_html(path, group.entries, group.employee, hourly_wage)
                    click.echo(format_info(f"Wrote {path}"))

        click.echo()
        click.echo(
            format_success(
                f"Extracted {session.total_entries} entries from "
                f"{len(payloads)} image(s) in {len(groups)} group(s)"
            )
        )
