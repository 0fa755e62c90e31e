import json
import logging
import sys
from pathlib import Path

import click

from .exceptions import ChartParseError
from .models import Chart
from .parser import parse_chart
from .report import ChartSummaryFormatter, chart_to_dict


def _read_chart_text(path: Path) -> str:
    """Decode a chart file as UTF-8, dropping a leading byte-order mark."""
    return path.read_bytes().decode("utf-8-sig")


def _select_sections(chart: Chart, names: tuple[str, ...]) -> Chart:
    """Return a chart holding only the sections called *names*, in file order."""
    missing = [name for name in names if chart.section(name) is None]
    if missing:
        raise click.ClickException(f"No such section: {', '.join(missing)}")
    return Chart(sections=[s for s in chart.sections if s.name in names])


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the parsed chart as JSON instead of a summary.")
@click.option("-s", "--section", "section_names", multiple=True, metavar="NAME",
              help="Only show the named section (repeatable).")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Log parser progress to stderr.")
def main(path: Path, as_json: bool, section_names: tuple[str, ...], verbose: bool) -> None:
    """Parse a rhythm-game .chart file and summarise its sections.

    \b
    Each section is listed as:
      [Name] notes=N specials=N bpm=N ts=N events=N metadata=N
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # --- Read + parse ---
    try:
        chart = parse_chart(_read_chart_text(path))
    except UnicodeDecodeError as exc:
        click.echo(f"Error: {path} is not valid UTF-8 ({exc.reason})", err=True)
        sys.exit(1)
    except ChartParseError as exc:
        click.echo(f"Error: {path}: {exc}", err=True)
        sys.exit(1)

    if section_names:
        chart = _select_sections(chart, section_names)

    # --- Output ---
    if as_json:
        click.echo(json.dumps(chart_to_dict(chart), indent=2))
        return
    click.echo(ChartSummaryFormatter().render(chart), nl=False)
