"""CLI: pubnub config set|show|clear"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _load_config() -> dict:
    from pubnub_lite.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from pubnub_lite.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Saved host and keys."""


@config.command("set")
@click.option("--host", default=None, help="host:port of the PubNub origin")
@click.option("--publish-key", default=None)
@click.option("--subscribe-key", default=None)
def config_set(host: Optional[str], publish_key: Optional[str], subscribe_key: Optional[str]):
    """Save connection settings."""
    updates = {"host": host, "publish_key": publish_key, "subscribe_key": subscribe_key}
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        console.print("[yellow]Nothing to save. Pass --host, --publish-key or --subscribe-key.[/yellow]")
        return
    _save_config({**_load_config(), **updates})
    console.print(f"[green]Saved {', '.join(sorted(updates))}.[/green]")


@config.command("show")
def config_show():
    """Show saved settings."""
    from pubnub_lite.cli.main import CONFIG_KEYS
    cfg = _load_config()
    table = Table(title="pubnub config")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key in CONFIG_KEYS:
        table.add_row(key, cfg.get(key, "[dim]unset[/dim]"))
    console.print(table)


@config.command("clear")
def config_clear():
    """Forget saved settings."""
    _save_config({})
    console.print("[green]Config cleared.[/green]")
