import logging
from datetime import date, datetime, timedelta, timezone
from functools import partial
from pathlib import Path
from typing import Annotated, Literal

import typer
from dotenv import load_dotenv

from satnogsctl.utils import setup_logging

load_dotenv()
app = typer.Typer(
    name="satnogsctl",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
context = {}
log = logging.getLogger(__name__)

DATE_FORMATS = ["%Y-%m-%d"]
MULTI_PAYLOAD_POLICIES = ("overwrite", "indexed")


def init_reporter() -> None:
    if "progress" not in context:
        raise ValueError("Missing reporter, please ensure at least an `empty` reporter is registered")
    reporter = context["progress"]
    reporter.start()


def stop_reporter() -> None:
    from satnogsctl.progress.events import get_bus

    reporter = context.pop("progress", None)
    if reporter is not None:
        reporter.stop()
        get_bus().unsubscribe(reporter.handle)


def default_end_date() -> date:
    return (datetime.now(timezone.utc) + timedelta(days=1)).date()


@app.callback()
def main(
    log_level: Annotated[str, typer.Option("--log-level", "-l", help="Set logging level")] = "INFO",
    progress: Annotated[Literal["empty", "simple", "rich"], typer.Option("--progress", "-p")] = "empty",
):
    from satnogsctl.progress import create_reporter, registry

    reporter_cls = registry.get(progress)
    setup_logging(
        log_level=log_level,
        reporter_cls=reporter_cls,
        suppressions={"error": ["urllib3", "requests"]},
    )
    context["progress"] = create_reporter(reporter_name=progress)


@app.command()
def download(
    start: Annotated[
        datetime | None, typer.Option("--start", "-s", formats=DATE_FORMATS, help="Start date (inclusive).")
    ] = None,
    end: Annotated[
        datetime | None, typer.Option("--end", "-e", formats=DATE_FORMATS, help="End date (inclusive), tomorrow if empty.")
    ] = None,
    satellites: Annotated[
        list[str] | None,
        typer.Option("--satellite", "-t", help="Satellite name or NORAD id, all configured ones if empty."),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Path to where the payloads will be stored"),
    ] = None,
    layout_name: Annotated[
        str | None,
        typer.Option("--layout", help="How files are named and grouped on disk (satellite, norad, observation)"),
    ] = None,
    multi_payload: Annotated[
        str | None,
        typer.Option("--multi-payload", help="Keep only the last payload (overwrite) or all of them (indexed)"),
    ] = None,
):
    from satnogsctl.auth import registry as auth_registry
    from satnogsctl.config import get_settings
    from satnogsctl.downloaders import create_downloader
    from satnogsctl.errors import ConfigurationError, SatnogsCtlError
    from satnogsctl.model import DEFAULT_START_DATE, SearchParams
    from satnogsctl.runner import run
    from satnogsctl.storage import create_layout

    init_reporter()
    try:
        try:
            settings = get_settings()
            params = SearchParams(
                start=start.date() if start else DEFAULT_START_DATE,
                end=end.date() if end else default_end_date(),
            )
            layout = create_layout(layout_name or settings.layout)
            multi_payload = multi_payload or settings.multi_payload
            if multi_payload not in MULTI_PAYLOAD_POLICIES:
                raise ValueError(f"Unknown multi-payload policy '{multi_payload}', use one of {MULTI_PAYLOAD_POLICIES}")
        except ValueError as e:
            # pydantic validation errors included
            raise ConfigurationError(str(e)) from e
        authenticator = auth_registry.create("token", token=settings.require_token())
        targets = settings.select_satellites(satellites)

        run(
            targets,
            params,
            output_dir or Path("download"),
            authenticator,
            api_url=settings.api_url,
            layout=layout,
            multi_payload=multi_payload,
            downloader_factory=partial(create_downloader, **settings.download),
        )
    except SatnogsCtlError as e:
        log.error("%s failed: %s", e.operation.capitalize(), e)
        raise typer.Exit(code=1)
    finally:
        stop_reporter()


@app.command("satellites")
def list_satellites():
    from satnogsctl.config import get_settings
    from satnogsctl.errors import SatnogsCtlError

    try:
        for satellite in get_settings().satellites:
            typer.echo(f"{satellite.name}\t{satellite.norad_id}")
    except SatnogsCtlError as e:
        log.error("%s failed: %s", e.operation.capitalize(), e)
        raise typer.Exit(code=1)
    finally:
        stop_reporter()


if __name__ == "__main__":
    app()
