"""CLI: pubnub publish, pubnub subscribe"""

import logging
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from pubnub_lite.errors import PubNubError, SubscribeReadError
from pubnub_lite.publish import PublishClient
from pubnub_lite.subscribe import SUBSCRIBE_TIMEOUT_S, SubscribeClient

logger = logging.getLogger(__name__)
console = Console()


def _settings(host, publish_key, subscribe_key) -> dict:
    from pubnub_lite.cli.main import _settings
    return _settings(host, publish_key, subscribe_key)


def _fail(e: PubNubError) -> None:
    console.print(f"[red]{escape(str(e))} ({e.code})[/red]")
    raise SystemExit(1)


connection_options = [
    click.option("--host", envvar="PUBNUB_HOST", default=None, help="host:port of the PubNub origin"),
    click.option("--publish-key", envvar="PUBNUB_PUBLISH_KEY", default=None),
    click.option("--subscribe-key", envvar="PUBNUB_SUBSCRIBE_KEY", default=None),
]


def with_connection_options(fn):
    for option in reversed(connection_options):
        fn = option(fn)
    return fn


@click.command("publish")
@click.argument("channel")
@click.argument("message")
@with_connection_options
def publish_cmd(channel: str, message: str, host: Optional[str], publish_key: Optional[str], subscribe_key: Optional[str]):
    """Publish MESSAGE to CHANNEL and print its timetoken."""
    settings = _settings(host, publish_key, subscribe_key)
    if not settings["publish_key"]:
        console.print("[red]No publish key. Pass --publish-key or run `pubnub config set`.[/red]")
        raise SystemExit(1)
    try:
        with PublishClient(settings["publish_key"], settings["subscribe_key"], host=settings["host"]) as client:
            timetoken = client.publish(channel, message)
    except PubNubError as e:
        _fail(e)
    click.echo(timetoken)


@click.command("subscribe")
@click.argument("channel")
@click.option("-n", "--count", default=0, type=int, help="Exit after N messages (0 = forever)")
@click.option("--json-output", "--json", is_flag=True)
@click.option("--timeout", default=SUBSCRIBE_TIMEOUT_S, type=float, show_default=True, help="Socket timeout per long-poll, in seconds")
@with_connection_options
def subscribe_cmd(
    channel: str,
    count: int,
    json_output: bool,
    timeout: float,
    host: Optional[str],
    publish_key: Optional[str],
    subscribe_key: Optional[str],
):
    """Print messages published to CHANNEL."""
    settings = _settings(host, publish_key, subscribe_key)
    received = 0
    try:
        with SubscribeClient(channel, settings["subscribe_key"], host=settings["host"], timeout=timeout) as client:
            if not json_output:
                console.print(f"[cyan]Subscribed to {escape(channel)} (Ctrl+C to exit)[/cyan]")
            while not count or received < count:
                try:
                    message = client.pull_one_message()
                except SubscribeReadError as e:
                    # A quiet channel outlasts the socket timeout; the recovery poll is already out.
                    logger.warning(f"{e}; polling again")
                    continue
                if json_output:
                    click.echo(message.model_dump_json())
                else:
                    console.print(f"[dim]{message.id}[/dim] [green]{escape(message.channel)}[/green] {escape(message.data)}")
                received += 1
    except PubNubError as e:
        _fail(e)
    except KeyboardInterrupt:
        pass
