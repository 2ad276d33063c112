"""CLI entry point.

Looks up Japanese national holidays from a locally downloaded copy of the
Cabinet Office list (https://www8.cao.go.jp/chosei/shukujitsu/syukujitsu.csv)::

    nan-no-hi holidays --encoding cp932 2025 5
"""

from __future__ import annotations

from pathlib import Path

import click

from .core.config import Settings, load_settings
from .core.errors import ConfigError, InvalidImportError
from .observability.logger import get_logger, setup_logging
from .store import EventStore

logger = get_logger(__name__)


def _load_store(settings: Settings) -> EventStore:
    path = Path(settings.holidays.csv_path)
    try:
        text = path.read_text(encoding=settings.holidays.encoding)
    except (OSError, LookupError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Cannot read {path}: {exc}") from exc

    store = EventStore(name=settings.store_name or path.stem)
    try:
        store.import_events(text)
    except InvalidImportError as exc:
        raise click.ClickException(
            f"{path} has {len(exc.items)} invalid row(s): {exc.items!r}"
        ) from exc
    return store


@click.group()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.pass_context
def main(ctx: click.Context, config: str | None) -> None:
    """Calendar event dictionary."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.option("--csv", "csv_path", default=None, help="Holiday CSV file path")
@click.option("--encoding", default=None, help="Holiday CSV encoding (e.g. cp932)")
@click.argument("year", type=click.IntRange(min=1))
@click.argument("month", type=click.IntRange(1, 12), required=False)
@click.argument("day", type=click.IntRange(1, 31), required=False)
@click.pass_context
def holidays(
    ctx: click.Context,
    csv_path: str | None,
    encoding: str | None,
    year: int,
    month: int | None,
    day: int | None,
) -> None:
    """Print the holidays in YEAR [MONTH [DAY]]."""
    overrides: dict = {}
    if csv_path:
        overrides.setdefault("holidays", {})["csv_path"] = csv_path
    if encoding:
        overrides.setdefault("holidays", {})["encoding"] = encoding

    try:
        settings = load_settings(ctx.obj["config"], overrides=overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
        store_name=settings.store_name or Path(settings.holidays.csv_path).stem,
    )

    store = _load_store(settings)
    logger.debug("holidays_loaded", count=len(store), path=settings.holidays.csv_path)

    events = store.lookup(year, month, day)
    if not events:
        click.echo("No events")
        return
    for event in events:
        click.echo(f"{event.date.isoformat()} {event.payload}")


if __name__ == "__main__":
    main()
