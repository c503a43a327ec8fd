"""`flexduration` console command."""

import json
import logging
from datetime import datetime, timezone

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table as RichTable

from flexduration.adapters.cli import duration_argument
from flexduration.config import Config
from flexduration.duration import UNITS, FlexDuration, FlexDurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DurationReport(BaseModel):
    """JSON output for a single duration."""

    duration: FlexDuration
    seconds: int


def _report(value: FlexDuration) -> dict:
    return DurationReport(duration=value, seconds=value.seconds).model_dump(mode="json")


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (overrides FLEXDURATION_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Parse, normalize and apply compact durations such as 1w2d3h."""
    config = Config()
    level = (log_level or config.log_level).upper()
    if level not in LOG_LEVELS:
        raise click.BadParameter(
            f"{config.log_level!r} is not one of {', '.join(LOG_LEVELS)}", param_hint="FLEXDURATION_LOG_LEVEL"
        )
    logging.basicConfig(
        level=level,
        format="%(levelname).1s %(asctime)s %(filename)s:%(lineno)d - %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
    ctx.obj = config


@cli.command()
@duration_argument("durations", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of plain text")
def normalize(durations: tuple[FlexDuration, ...], as_json: bool):
    """Print the canonical form of each DURATION."""
    if as_json:
        click.echo(json.dumps([_report(d) for d in durations], indent=2))
        return
    for duration in durations:
        click.echo(str(duration))


@cli.command()
@duration_argument("duration")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of plain text")
def seconds(duration: FlexDuration, as_json: bool):
    """Print the total number of seconds in DURATION."""
    if as_json:
        click.echo(json.dumps(_report(duration), indent=2))
    else:
        click.echo(duration.seconds)


@cli.command()
@duration_argument("duration")
def explain(duration: FlexDuration):
    """Show how DURATION breaks down into units."""
    console = Console()
    rich_table = RichTable(title=str(duration) or "0s")
    rich_table.add_column("unit", style="cyan")
    rich_table.add_column("magnitude", justify="right")
    rich_table.add_column("seconds", justify="right", style="dim")

    components = duration.components()
    for name, _, span in UNITS:
        magnitude = components[name]
        if magnitude:
            rich_table.add_row(name, str(magnitude), str(magnitude * span))
    rich_table.add_row("total", "", str(duration.seconds), style="bold")

    console.print(rich_table)


@cli.command()
@duration_argument("duration", required=False)
@click.option("--from", "reference", help="ISO 8601 reference timestamp (default: now)")
@click.option("--subtract", is_flag=True, help="Move backwards in time")
@click.pass_obj
def shift(config: Config, duration: FlexDuration | None, reference: str | None, subtract: bool):
    """Print the reference timestamp shifted by DURATION."""
    if duration is None:
        try:
            duration = FlexDuration.parse(config.default_duration)
        except FlexDurationError as e:
            raise click.UsageError(f"Invalid FLEXDURATION_DEFAULT_DURATION: {e}") from e

    if reference is None:
        start = datetime.now(timezone.utc) if config.utc else datetime.now()
    else:
        try:
            start = datetime.fromisoformat(reference)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--from") from e

    logger.info(f"Shifting {start.isoformat()} by {'-' if subtract else '+'}{duration}")
    try:
        result = start - duration if subtract else start + duration
    except OverflowError as e:
        raise click.ClickException(f"Result out of range: {e}") from e
    click.echo(result.isoformat())


def main():
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
