"""CLI for running price calendars from the terminal."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING

import click

from fare_calendar_core.schemas import (
    WINDOW_PRESETS,
    CalendarRequest,
    CalendarVariant,
    DayStatus,
)

from .amadeus import AmadeusOfferProvider
from .config import settings
from .errors import CalendarError, ConfigurationError
from .orchestrator import CalendarConfig, compute_calendar
from .retry import RetryingFetcher
from .scheduler import BatchScheduler
from .window import parse_anchor_date, plan_request

if TYPE_CHECKING:
    from fare_calendar_core.schemas import CalendarResult, DayPriceRecord

logger = logging.getLogger(__name__)


def _format_record(record: DayPriceRecord) -> str:
    if record.status == DayStatus.SUCCESS:
        offer = record.cheapest_offer
        detail = f"{record.price:>10.0f}  {offer.get('flightNumber', '')}"
    else:
        detail = f"{'-':>10}  {record.status.value}"
    return f"  {record.date}  {record.offset_days:+4d}  {detail}"


def _print_result(result: CalendarResult) -> None:
    for record in result.records:
        click.echo(_format_record(record))
    stats, meta = result.stats, result.meta
    click.echo(
        f"\n{meta.valid_day_count}/{meta.total_days} day(s) priced "
        f"in {meta.duration_ms}ms{' (cancelled)' if meta.cancelled else ''}"
    )
    if stats.lowest_price is None:
        click.echo("No price data.")
        return
    click.echo(
        f"Lowest {stats.lowest_price:.0f} on {stats.best_date} "
        f"({stats.best_date_offset:+d}d) | highest {stats.highest_price:.0f} | "
        f"average {stats.average_price}"
    )
    if stats.potential_savings is not None:
        click.echo(
            f"Anchor day {stats.anchor_date_price:.0f}, "
            f"potential savings {stats.potential_savings:.0f}"
        )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose: bool) -> None:
    """Fare Calendar CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@cli.command("calendar")
@click.argument("origin")
@click.argument("destination")
@click.argument("depart_date")
@click.option(
    "--variant",
    type=click.Choice([v.value for v in CalendarVariant]),
    default=CalendarVariant.DAYS_45.value,
    help="Window preset",
)
@click.option("--before", type=int, default=None, help="Days before the anchor")
@click.option("--after", type=int, default=None, help="Days after the anchor")
@click.option("--passengers", type=int, default=1, show_default=True)
@click.option("--json-output", is_flag=True, help="Output as JSON")
@click.option("--stream", is_flag=True, help="Print each batch as it completes")
def calendar(
    origin: str,
    destination: str,
    depart_date: str,
    variant: str,
    before: int | None,
    after: int | None,
    passengers: int,
    json_output: bool,
    stream: bool,
) -> None:
    """Cheapest price per day around DEPART_DATE."""
    preset = WINDOW_PRESETS[CalendarVariant(variant)]
    try:
        request = CalendarRequest(
            origin=origin,
            destination=destination,
            anchor_date=parse_anchor_date(depart_date),
            passenger_count=passengers,
            window_before_days=preset.before_days if before is None else before,
            window_after_days=preset.after_days if after is None else after,
        )
    except (CalendarError, ValueError) as exc:
        raise click.BadParameter(str(exc)) from exc

    config = CalendarConfig.from_settings(settings)

    async def _run() -> CalendarResult | None:
        provider = AmadeusOfferProvider.from_settings(settings)
        try:
            if stream:
                await _stream(request, provider, config)
                return None
            return await compute_calendar(request, provider=provider, config=config)
        finally:
            await provider.close()

    try:
        result = asyncio.run(_run())
    except CalendarError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if result is None:
        return
    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        click.echo(f"\n{request.route} around {request.anchor_date}:\n")
        _print_result(result)


async def _stream(
    request: CalendarRequest,
    provider: AmadeusOfferProvider,
    config: CalendarConfig,
) -> None:
    if not provider.is_configured():
        raise ConfigurationError("Offer search provider credentials not configured")
    scheduler = BatchScheduler(
        RetryingFetcher(provider, config.retry),
        config.batch,
        max_results=config.max_results_per_day,
    )
    slots = plan_request(request)
    async for records in scheduler.iter_batches(request, slots):
        for record in records:
            click.echo(_format_record(record))


@cli.command("health")
def health_check() -> None:
    """Check the offer search provider's credentials and reachability."""

    async def _run() -> bool:
        provider = AmadeusOfferProvider.from_settings(settings)
        try:
            return await provider.health_check()
        finally:
            await provider.close()

    ok = asyncio.run(_run())
    click.echo(f"  Amadeus ({settings.amadeus_hostname}): {'OK' if ok else 'FAIL'}")
    if not ok:
        sys.exit(1)


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
def serve(host: str, port: int) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("fare_calendar_api.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
