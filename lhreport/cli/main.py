"""Main CLI entry point for lhreport."""

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError as PydanticValidationError

from lhreport import __version__
from lhreport.cli.commands.categories import categories_command
from lhreport.core.exceptions import LHReportError, LoaderError
from lhreport.core.logging import (
    configure_logging_from_settings,
    get_logger,
    report_context,
)
from lhreport.core.settings import ReportSettings, get_settings
from lhreport.loader import ResultLoader
from lhreport.protocol.schema import generate_result_schema
from lhreport.report.builder import build_report
from lhreport.reporters import (
    OutputOptions,
    RenderContext,
    create_reporter,
    get_registry,
)

EXIT_SUCCESS = 0  # Report produced for every category
EXIT_FAILURE = 1  # Some categories could not be classified
EXIT_ERROR = 2  # Error (bad input file, invalid config, etc.)


class ConfigContext:
    """Context object to hold configuration state."""

    def __init__(
        self,
        settings: ReportSettings,
        config_file: Path | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize config context."""
        self.settings = settings
        self.config_file = config_file
        self.verbose = verbose


@click.group()
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to lhreport.config.yaml configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output and debug logging",
)
@click.version_option(version=__version__, prog_name="lhreport")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, verbose: bool) -> None:
    """lhreport - classify audit run results into report models.

    Examples:

      # Print a console summary of every category
      lhreport report report.json

      # Write the classified model as JSON
      lhreport report report.json --format json --output classified.json

      # Table of categories with clump counts
      lhreport categories report.json
    """
    try:
        settings = get_settings(config_file=config_file)
    except PydanticValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    configure_logging_from_settings(settings, level="DEBUG" if verbose else None)
    ctx.obj = ConfigContext(settings, config_file=config_file, verbose=verbose)


@cli.command(name="report")
@click.argument("result_file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(get_registry().formats),
    default=None,
    help="Output format (defaults to the configured default_format)",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(path_type=Path),
    help="Write JSON output to this file instead of stdout",
)
@click.option(
    "--category",
    "category_ids",
    multiple=True,
    help="Only report these category ids (repeatable)",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Abort on the first dangling audit or group reference",
)
@click.option(
    "--include-lhr",
    is_flag=True,
    help="Embed the input result in JSON output",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force coloured console output on or off",
)
@click.pass_obj
def report_command(
    obj: ConfigContext,
    result_file: Path,
    output_format: str | None,
    output_file: Path | None,
    category_ids: tuple[str, ...],
    strict: bool | None,
    include_lhr: bool,
    color: bool | None,
) -> None:
    """Classify a result and render it.

    Exit Codes:

      0 - Every category was classified
      1 - Some categories could not be classified
      2 - Error occurred
    """
    settings = obj.settings
    output_format = output_format or settings.default_format
    strict = settings.strict_references if strict is None else strict

    try:
        lhr = ResultLoader().load_file(result_file)
    except LoaderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    unknown = [cid for cid in category_ids if cid not in lhr.categories]
    if unknown:
        click.echo(f"Error: unknown category id(s): {', '.join(unknown)}", err=True)
        sys.exit(EXIT_ERROR)

    with report_context(lhr.final_url or str(result_file)):
        try:
            report = build_report(
                lhr,
                strict=strict,
                flat_clumps=settings.flat_clump_set,
                category_ids=category_ids or None,
            )
        except LHReportError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(EXIT_FAILURE)

        use_colors = sys.stdout.isatty() if color is None else color
        context = RenderContext.from_report(
            report, use_colors=use_colors, verbose=obj.verbose
        )
        reporter = create_reporter(
            output_format,
            OutputOptions(output_file=output_file, include_lhr=include_lhr),
        )
        reporter.report(report, context)
        get_logger(__name__).debug(
            "report_rendered",
            output_format=output_format,
            categories=len(report.categories),
            skipped=sorted(report.category_errors),
        )

    sys.exit(EXIT_FAILURE if report.has_errors else EXIT_SUCCESS)


@cli.command(name="schema")
def schema_command() -> None:
    """Print the JSON Schema of the result data contract."""
    click.echo(json.dumps(generate_result_schema(), indent=2))


cli.add_command(categories_command)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
