from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import click

from sleepcycle.config import settings
from sleepcycle.services.sleep import (
    CLOCK_FORMATS,
    InvalidTimestamp,
    compute_wake_times,
    parse_bedtime,
    serialize_wake_times,
)
from sleepcycle.services.timezone import resolve_timezone


@click.command()
@click.argument("bedtime", required=False)
@click.option("--tz", "tz_name", default=None, help="Timezone for naive timestamps (default: TIMEZONE setting)")
@click.option(
    "--clock",
    "clock_format",
    type=click.Choice(CLOCK_FORMATS),
    default=None,
    help="12h (6:30 AM) or 24h (06:30) clock (default: CLOCK_FORMAT setting)",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON with this indent")
def main(bedtime: Optional[str], tz_name: Optional[str], clock_format: Optional[str], indent: Optional[int]) -> None:
    """Print recommended wake-up times for BEDTIME (ISO-8601, default: now) as JSON."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    tz = resolve_timezone(tz_name)
    if bedtime is None:
        moment = datetime.now(tz)
    else:
        try:
            moment = parse_bedtime(bedtime, tz)
        except InvalidTimestamp as exc:
            raise click.ClickException(f"InvalidTimestamp: {exc}") from exc

    entries = compute_wake_times(
        moment,
        onset_minutes=settings.sleep_onset_minutes,
        cycle_minutes=settings.sleep_cycle_minutes,
        cycles=settings.wake_cycles,
        clock_format=clock_format or settings.clock_format,
    )
    click.echo(serialize_wake_times(entries, indent=indent))


if __name__ == "__main__":
    main()
