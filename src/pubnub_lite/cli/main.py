"""
pubnub-lite CLI — `pubnub` command.

Commands:
  pubnub publish <channel> <message>   Publish one message
  pubnub subscribe <channel>           Print messages as they arrive
  pubnub config set|show|clear         Saved host and keys
"""

import json
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install pubnub-lite[cli]")

from pubnub_lite.transport.http import DEFAULT_HOST

console = Console()
CONFIG_FILE = Path.home() / ".pubnub" / "config.json"
CONFIG_KEYS = ("host", "publish_key", "subscribe_key")


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _settings(host: Optional[str], publish_key: Optional[str], subscribe_key: Optional[str]) -> dict:
    """Command-line values win over the saved config."""
    cfg = _load_config()
    settings = {
        "host": host or cfg.get("host") or DEFAULT_HOST,
        "publish_key": publish_key or cfg.get("publish_key"),
        "subscribe_key": subscribe_key or cfg.get("subscribe_key"),
    }
    if not settings["subscribe_key"]:
        console.print("[red]No subscribe key. Pass --subscribe-key or run `pubnub config set`.[/red]")
        raise SystemExit(1)
    return settings


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log protocol traffic")
def main(verbose: bool):
    """pubnub-lite CLI — publish and subscribe from the terminal."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)-7s %(name)s %(message)s")


# Register subcommands from separate modules
from pubnub_lite.cli.config import config
from pubnub_lite.cli.messaging import publish_cmd, subscribe_cmd

main.add_command(config)
main.add_command(publish_cmd)
main.add_command(subscribe_cmd)


if __name__ == "__main__":
    main()
