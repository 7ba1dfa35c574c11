"""CLI entry point for remotepin."""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys
from typing import Iterable

import click

from remotepin.app import RemotePinning
from remotepin.config import load_config
from remotepin.errors import RemotePinError
from remotepin.models.records import AddOptions, ListOptions, PinRecord, RemoveOptions


def _fail(exc: Exception) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _split(values: Iterable[str]) -> list[str]:
    """Flatten repeated, comma separated option values."""
    out = []
    for v in values:
        out.extend(part.strip() for part in v.split(",") if part.strip())
    return out


def _emit(record: PinRecord, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(record.to_dict()))
        return
    click.echo(f"pin_id={record.request_id}")
    click.echo(f"pin_name={json.dumps(record.name or '')}")
    for d in record.delegates:
        click.echo(f"pin_delegate={d}")
    click.echo(f"pin_status={record.status.value}")
    click.echo(f"pin_cid={record.cid}")


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except RemotePinError as exc:
        _fail(exc)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """remotepin - Pin (and unpin) objects to remote pinning services."""
    ctx.ensure_object(dict)
    cfg = load_config(config_path)

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if "app" not in ctx.obj:
        ctx.obj["app"] = RemotePinning(cfg)


# ── Remote pins ────────────────────────────────────────


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.option("--name", default=None, help="An optional name for the pin.")
@click.option("--service", default=None, help="Name of the remote pinning service to use.")
@click.option("--background/--no-background", default=True, show_default=True,
              help="Return once the request is queued instead of waiting for it to be pinned.")
@click.option("--timeout", type=float, default=None,
              help="Give up waiting after this many seconds (with --no-background).")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text.")
@click.pass_context
def add(
    ctx: click.Context,
    paths: tuple[str, ...],
    name: str | None,
    service: str | None,
    background: bool,
    timeout: float | None,
    as_json: bool,
) -> None:
    """Pin an object to remote storage."""
    app: RemotePinning = ctx.obj["app"]
    opts = AddOptions(
        service=app.service_name(service),
        name=name,
        background=background,
        timeout=timeout,
    )

    async def _add():
        cancel = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, cancel.set)
            except (NotImplementedError, RuntimeError):
                # Windows, or not running in the main thread
                pass
        try:
            record = await app.adder.add(list(paths), opts, cancel=cancel)
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                try:
                    loop.remove_signal_handler(sig)
                except (NotImplementedError, RuntimeError):
                    pass
        _emit(record, as_json)

    _run(_add())


@cli.command("ls")
@click.option("--name", default=None,
              help="Return pins with this name (case-sensitive, exact match).")
@click.option("--cid", "cids", multiple=True, help="Return only pins for these CIDs; comma separated.")
@click.option("--status", "statuses", multiple=True,
              help="Return only pins with these statuses; comma separated.")
@click.option("--service", default=None, help="Name of the remote pinning service to use.")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of text.")
@click.pass_context
def ls_cmd(
    ctx: click.Context,
    name: str | None,
    cids: tuple[str, ...],
    statuses: tuple[str, ...],
    service: str | None,
    as_json: bool,
) -> None:
    """List objects pinned to a remote pinning service."""
    app: RemotePinning = ctx.obj["app"]
    opts = ListOptions(
        service=app.service_name(service),
        name=name,
        cids=_split(cids),
        statuses=_split(statuses),
    )

    async def _ls():
        async with app.lister.ls(opts) as listing:
            async for record in listing:
                _emit(record, as_json)
            await listing.finish()

    _run(_ls())


@cli.command("rm")
@click.argument("request_ids", nargs=-1)
@click.option("--name", default=None,
              help="Remove pins with this name (case-sensitive, exact match).")
@click.option("--cid", "cids", multiple=True, help="Remove only pins for these CIDs; comma separated.")
@click.option("--status", "statuses", multiple=True,
              help="Remove only pins with these statuses; comma separated.")
@click.option("--service", default=None, help="Name of the remote pinning service to use.")
@click.option("--force", is_flag=True, help="Allow a filter to remove multiple pins.")
@click.pass_context
def rm_cmd(
    ctx: click.Context,
    request_ids: tuple[str, ...],
    name: str | None,
    cids: tuple[str, ...],
    statuses: tuple[str, ...],
    service: str | None,
    force: bool,
) -> None:
    """Remove pinned objects from a remote pinning service."""
    app: RemotePinning = ctx.obj["app"]
    opts = RemoveOptions(
        service=app.service_name(service),
        name=name,
        cids=_split(cids),
        statuses=_split(statuses),
        force=force,
    )

    async def _rm():
        await app.remover.rm(list(request_ids), opts)

    _run(_rm())


# ── Services ───────────────────────────────────────────


@cli.group()
def service():
    """Configure remote pinning services."""
    pass


@service.command("add")
@click.argument("name")
@click.argument("url")
@click.argument("key")
@click.pass_context
def service_add(ctx: click.Context, name: str, url: str, key: str) -> None:
    """Add credentials for a remote pinning service."""
    app: RemotePinning = ctx.obj["app"]
    _run(app.registry.add_service(name, url, key))


@service.command("rm")
@click.argument("name")
@click.pass_context
def service_rm(ctx: click.Context, name: str) -> None:
    """Remove credentials for a remote pinning service."""
    app: RemotePinning = ctx.obj["app"]
    _run(app.registry.remove_service(name))


@service.command("ls")
@click.pass_context
def service_ls(ctx: click.Context) -> None:
    """List remote pinning services."""
    app: RemotePinning = ctx.obj["app"]

    async def _ls():
        for entry in await app.registry.list_services():
            click.echo(f"{entry.name} {entry.url}")

    _run(_ls())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
