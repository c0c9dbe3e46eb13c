"""CLI entry point for stepaxis."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from stepaxis.core.time_axis import TimeAxis
from stepaxis.io.serialize import dump_axis_summary, dump_steps_csv
from stepaxis.io.yaml_loader import load_schedule_file
from stepaxis.utils.exceptions import StepAxisError
from stepaxis.utils.log import configure_logging

SECONDS_PER_DAY = 86_400


def _build_axis(schedule_path: Path) -> TimeAxis:
    try:
        return TimeAxis.from_schedule(load_schedule_file(schedule_path))
    except StepAxisError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="stepaxis")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stdout.")
def cli(verbose: bool) -> None:
    """stepaxis — report-step time axis for simulation schedules."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command()
@click.argument("schedule_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "csv", "json"]),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the csv/json export to this file instead of stdout.",
)
def steps(schedule_path: Path, output_format: str, output_path: Path | None) -> None:
    """List the report steps of a schedule file (JSON or YAML)."""
    axis = _build_axis(schedule_path)

    if output_format == "table":
        click.echo(f"{'step':>6}  {'date':<19}  {'elapsed [d]':>12}  {'length [d]':>11}")
        for i, t in enumerate(axis):
            elapsed = axis.elapsed_until(i) / SECONDS_PER_DAY
            length = (
                f"{axis.step_length(i) / SECONDS_PER_DAY:11.3f}" if i < axis.last_index() else ""
            )
            click.echo(f"{i:>6}  {t:%Y-%m-%d %H:%M:%S}  {elapsed:12.3f}  {length:>11}")
        return

    text = dump_steps_csv(axis) if output_format == "csv" else dump_axis_summary(axis)
    if output_path is not None:
        output_path.write_text(text)
        click.echo(f"Report steps written to {output_path}")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("schedule_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--by",
    type=click.Choice(["month", "year"]),
    default="month",
    show_default=True,
    help="Calendar unit of the boundaries.",
)
@click.option(
    "--start-offset",
    type=int,
    default=1,
    show_default=True,
    help="Position of the first reported boundary (0 is the start step).",
)
@click.option("--frequency", type=int, default=1, show_default=True, help="Report every Nth boundary.")
def boundaries(schedule_path: Path, by: str, start_offset: int, frequency: int) -> None:
    """List the steps that open a new month or year in a reporting sequence."""
    axis = _build_axis(schedule_path)
    try:
        selected = axis.boundary_steps(
            by_year=by == "year", start_offset=start_offset, frequency=frequency
        )
    except StepAxisError as exc:
        raise click.ClickException(str(exc)) from exc

    for i in selected:
        click.echo(f"{i:>6}  {axis.start_of(i):%Y-%m-%d %H:%M:%S}")


if __name__ == "__main__":
    cli()
