"""Cloudflare purge commands."""
from typing import Annotated

from cf_purge.cache_service import CacheService
from cf_purge.host import EventRegistry, KeyringSettingsStore, PluginServices
from cf_purge.models.content import (
    ContentEventContext,
    ContentKind,
    ContentObject,
    EventKind,
    Operation,
)
from cf_purge.utils.cf_cache import PurgeClient

import typer
from typer import Option

app = typer.Typer(no_args_is_help=True)

SiteType = Annotated[str, Option("--site", "-s", help="Site to load settings for")]


@app.command()
def purge(url: str, site: SiteType = "global", hostname: str = ""):
    """Purge a URL from Cloudflare's cache."""
    typer.echo(f"Purging {url!r} from Cloudflare's cache...")
    client = PurgeClient(PluginServices(settings=KeyringSettingsStore()))
    try:
        res = client.purge_site(site, hostname or url, url)
    finally:
        client.close()

    if res is None:
        typer.echo("❌  Nothing purged, see log for details.")
        raise typer.Exit(1)
    typer.echo(f"✅  ({res.status_code})")


@app.command()
def notify(
    kind: ContentKind,
    event: EventKind,
    url: str,
    hostname: Annotated[str, Option("--hostname", "-h")],
    site: SiteType = "global",
    create: Annotated[bool, Option("--create", help="Saved object is new")] = False,
    draft: Annotated[int, Option("--draft")] = 0,
):
    """Raise a content event as the host would and wait for the purge."""
    if event is EventKind.AFTER_DELETE:
        operation = Operation.DELETE
    else:
        operation = Operation.CREATE if create else Operation.UPDATE

    context = ContentEventContext(
        site=site,
        hostname=hostname,
        object_type=kind,
        data=ContentObject(url=url, draft=draft, object_type=kind),
        operation=operation,
    )

    registry = EventRegistry()
    service = CacheService(PluginServices(settings=KeyringSettingsStore()))
    service.register(registry)
    try:
        errors = registry.emit(kind, event, context)
    finally:
        service.shutdown(wait=True)

    if errors:
        typer.echo(f"❌  Error: {errors[0]}")
        raise typer.Exit(1)
    typer.echo(f"✅  Handled {kind}.{event}")
