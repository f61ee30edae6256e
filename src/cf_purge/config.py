"""Per-site Cloudflare settings."""
from __future__ import annotations

from typing import Optional

import pyperclip
import rich
import typer
from typing_extensions import Annotated

from cf_purge.models.keyring_config import ConfigKey, KeyringSiteConfig

app = typer.Typer(no_args_is_help=True)
cp = rich.print

SiteType = Annotated[str, typer.Option("--site", "-s", help="Site the settings apply to")]


@app.command(name="set")
def set_config(
        key: ConfigKey,
        value: Annotated[Optional[str], typer.Argument()] = None,
        site: SiteType = "global",
):
    """Set a configuration value."""
    with KeyringSiteConfig.load_from_keyring(site) as config:
        if value is None:
            config.pop(key.value, None)
        else:
            config[key.value] = value

    cp(f"{'Cleared' if value is None else 'Saved'} key {repr(key.value)} for site {site!r}")


@app.command(name="set-cp")
def set_cp_config(
    key: ConfigKey,
    site: SiteType = "global",
):
    """Set a configuration value from clipboard."""
    value = pyperclip.paste()
    if not value:
        cp("[red]Error:[/red] Clipboard is empty.")
        raise typer.Exit(1)

    with KeyringSiteConfig.load_from_keyring(site) as config:
        config[key.value] = value

    cp(f"Saved key {repr(key.value)} for site {site!r} from clipboard ({len(value)} chars)")


@app.command()
def show(site: SiteType = "global"):
    """Show a site's configuration."""
    config = KeyringSiteConfig.load_from_keyring(site)
    cp(config.to_keys_json())
