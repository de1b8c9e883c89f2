"""CLI command listing the categories of a result."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lhreport.core.exceptions import LoaderError
from lhreport.loader import ResultLoader
from lhreport.report.builder import build_report
from lhreport.report.models import CLUMP_ORDER, ClassifiedCategory
from lhreport.reporters.base import display_score

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_ERROR = 2


def _create_categories_table(title: str = "Categories") -> Table:
    """Create a Rich table for category display."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", style="green", no_wrap=True)
    table.add_column("Title")
    table.add_column("Score", justify="right", style="yellow")
    table.add_column("Audits", justify="right")
    table.add_column("F/W/M/P/NA", justify="right", style="dim")
    table.add_column("Plugin", style="magenta")
    return table


def _add_category_to_table(table: Table, category: ClassifiedCategory) -> None:
    score = display_score(category.score)
    counts = category.clump_counts()
    table.add_row(
        category.id,
        category.title,
        "-" if score is None else str(score),
        str(category.audit_count),
        "/".join(str(counts[clump]) for clump in CLUMP_ORDER),
        "yes" if category.is_plugin else "",
    )


@click.command(name="categories")
@click.argument("result_file", type=click.Path(path_type=Path))
@click.pass_context
def categories_command(ctx: click.Context, result_file: Path) -> None:
    """List the categories of a result with score and clump counts.

    Examples:

      lhreport categories report.json

    Exit Codes:

      0 - Success
      1 - Some categories could not be classified
      2 - Error occurred
    """
    console = Console()
    settings = ctx.obj.settings if ctx.obj is not None else None

    try:
        lhr = ResultLoader().load_file(result_file)
    except LoaderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    report = build_report(
        lhr,
        flat_clumps=settings.flat_clump_set if settings else None,
    )

    if not report.categories and not report.category_errors:
        click.echo("No categories found.")
        sys.exit(EXIT_SUCCESS)

    table = _create_categories_table(title=lhr.final_url or "Categories")
    for category in report.categories:
        _add_category_to_table(table, category)
    console.print(table)

    for category_id, error in report.category_errors.items():
        click.echo(f"Skipped {category_id}: {error}", err=True)

    sys.exit(EXIT_FAILURE if report.has_errors else EXIT_SUCCESS)
