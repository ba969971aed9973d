"""
pytzcmp - compare wall-clock time across zones and share it as a URL token.

Commands that change the comparison print the new token; pass it back in to
keep editing. An empty token means "just my local zone, live".
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Annotated

import typer

from .catalog import TimezoneCatalog
from .civil import CivilTime
from .codec import StateCodec
from .config import Settings, config_path, resolve_local_timezone
from .conversion import TimeConverter, parse_instant, utc_now
from .display import build_rows, header
from .log import configure_logging
from .search import search as search_zones
from .state import (
    AppState,
    Slot,
    add_timezone,
    effective_time,
    remove_timezone,
    reset_to_now,
    select_range,
    set_reference,
    set_reference_time,
    shift_reference_day,
    validated_entry,
)

logger = logging.getLogger(__name__)

INPUT_FMT = "%Y-%m-%d %H:%M"
INPUT_DISPLAY = "YYYY-MM-DD HH:MM"

app = typer.Typer(
    help="Compare times across timezones",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)

TokenArg = Annotated[str, typer.Argument(help="State token, e.g. \"?s=(tz:!(Asia/Tokyo))\"")]


@dataclass(frozen=True)
class Services:
    catalog: TimezoneCatalog
    converter: TimeConverter
    codec: StateCodec


@lru_cache(maxsize=None)
def _services(local_override: str | None) -> Services:
    converter = TimeConverter()
    catalog = TimezoneCatalog(converter.service)
    local = resolve_local_timezone(Settings(local_timezone=local_override), catalog)
    return Services(catalog, converter, StateCodec(catalog, local))


def services() -> Services:
    return _services(Settings.load().local_timezone)


@contextmanager
def handle_errors(operation: str) -> Generator[None, None, None]:
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error during %s", operation)
        typer.secho(f"x {operation} failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def emit(svc: Services, state: AppState) -> None:
    typer.echo(svc.codec.encode(state) or "?")


def place(region: str, country: str | None) -> str:
    return f"{country}, {region}" if country else region


def parse_local(text: str) -> CivilTime:
    try:
        dt = datetime.strptime(text.strip(), INPUT_FMT)
    except ValueError as exc:
        raise ValueError(f"Bad datetime format. Use {INPUT_DISPLAY}.") from exc
    return CivilTime(dt.year, dt.month, dt.day, dt.hour, dt.minute)


def parse_slot(text: str) -> Slot:
    if ":" in text:
        hour, _, minute = text.partition(":")
        return Slot.of(int(hour), int(minute))
    return Slot(int(text))


@app.callback()
def main_callback() -> None:
    configure_logging(Settings.load().log_level)


# -----------------------------
# Read-only commands
# -----------------------------

@app.command("show")
def show(
    token: TokenArg = "",
    at: Annotated[
        str | None,
        typer.Option("--at", help="Instant to use as 'now' in live mode (ISO-8601)"),
    ] = None,
) -> None:
    """Print every zone of the comparison at the reference instant."""
    with handle_errors("show"):
        svc = services()
        state = svc.codec.decode(token)
        now = utc_now()
        if at:
            parsed = parse_instant(at)
            if parsed is None:
                raise ValueError(f"Bad instant: {at}")
            now = parsed

        mode = "live" if state.is_live else "fixed"
        typer.echo(f"{header(state, svc.converter, now)}  ({mode})")
        for row in build_rows(state, svc.converter, svc.catalog, now):
            marker = "*" if row.is_reference else " "
            line = (
                f"{marker} {row.name:<20} {row.time}  {row.date:<12} "
                f"{row.abbreviation:<6} {row.offset:<10} {row.period:<9} {place(row.region, row.country)}"
            )
            if row.range_start:
                line += f"  {row.range_start}-{row.range_end} ({row.duration})"
            typer.echo(line)


@app.command("search")
def search(
    query: Annotated[str, typer.Argument(help="City, zone, abbreviation or offset")],
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", "-x", help="Zone id to leave out (repeatable)"),
    ] = None,
) -> None:
    """List zones matching QUERY, best matches first."""
    with handle_errors("search"):
        svc = services()
        results = search_zones(svc.catalog, query, exclude or ())
        if not results:
            typer.echo("No matches.")
            return
        now = svc.catalog.clock()
        for result in results:
            info = svc.catalog.info(result.id, now)
            name = f"{result.label} ({result.id})" if result.label else result.id
            typer.echo(
                f"{name:<40} {info.abbreviation:<6} {info.offset:<10} {place(info.region, info.country)}"
            )


# -----------------------------
# Editing commands
# -----------------------------

@app.command("add")
def add(
    token: TokenArg,
    tz_id: Annotated[str, typer.Argument(help="Zone id, e.g. Asia/Tokyo")],
    label: Annotated[str | None, typer.Option("--label", "-l", help="Display name")] = None,
) -> None:
    """Append a zone to the comparison."""
    with handle_errors("add"):
        svc = services()
        entry = validated_entry(svc.catalog, tz_id, label)
        emit(svc, add_timezone(svc.codec.decode(token), entry))


@app.command("remove")
def remove(
    token: TokenArg,
    tz_id: Annotated[str, typer.Argument(help="Zone id to remove")],
) -> None:
    """Drop a zone from the comparison."""
    with handle_errors("remove"):
        svc = services()
        emit(svc, remove_timezone(svc.codec.decode(token), tz_id))


@app.command("ref")
def ref(
    token: TokenArg,
    tz_id: Annotated[str | None, typer.Argument(help="Zone id; omit to use the first zone")] = None,
) -> None:
    """Choose the reference zone."""
    with handle_errors("ref"):
        svc = services()
        emit(svc, set_reference(svc.codec.decode(token), tz_id))


@app.command("at")
def at(
    token: TokenArg,
    local: Annotated[
        str | None,
        typer.Argument(help=f"Local time in the reference zone ({INPUT_DISPLAY}); omit for live"),
    ] = None,
) -> None:
    """Freeze the reference instant, or go back to live mode."""
    with handle_errors("at"):
        svc = services()
        state = svc.codec.decode(token)
        if local is None:
            emit(svc, set_reference_time(state, None))
            return
        instant = svc.converter.civil_to_instant(parse_local(local), state.effective_reference_id)
        emit(svc, set_reference_time(state, instant))


@app.command("now")
def now(token: TokenArg) -> None:
    """Return to live mode and clear any range."""
    with handle_errors("now"):
        svc = services()
        emit(svc, reset_to_now(svc.codec.decode(token)))


@app.command("range")
def range_(
    token: TokenArg,
    end: Annotated[
        str | None,
        typer.Argument(help="Range end as slot 0-95 or HH:MM (quarter hours); omit to clear"),
    ] = None,
) -> None:
    """Select a range from the reference instant to END."""
    with handle_errors("range"):
        svc = services()
        state = svc.codec.decode(token)
        slot = None if end is None else parse_slot(end)
        start = effective_time(state, utc_now())
        emit(svc, select_range(state, svc.converter, start, slot))


@app.command("shift")
def shift(
    token: TokenArg,
    days: Annotated[int, typer.Option("--days", "-d", help="Days to move (negative for back)")] = 1,
) -> None:
    """Move the reference instant by whole days in the reference zone."""
    with handle_errors("shift"):
        svc = services()
        emit(svc, shift_reference_day(svc.codec.decode(token), svc.converter, utc_now(), days))


@app.command("config")
def config(
    local_timezone: Annotated[
        str | None,
        typer.Option("--local-timezone", help="Zone used when a token names none"),
    ] = None,
) -> None:
    """Show or update the settings file."""
    with handle_errors("config"):
        settings = Settings.load()
        if local_timezone is not None:
            svc = services()
            svc.catalog.require(local_timezone)
            settings = Settings(local_timezone=local_timezone, log_level=settings.log_level)
            path = settings.save()
            typer.echo(f"Saved {path}")
        typer.echo(f"config: {config_path()}")
        typer.echo(f"local_timezone: {settings.local_timezone or '(detected)'}")
        typer.echo(f"log_level: {settings.log_level}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
