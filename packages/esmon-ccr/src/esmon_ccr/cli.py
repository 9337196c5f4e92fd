"""CCR collector CLI.

This module provides CLI commands for the collector:
- once: Run a single collection cycle and print the events
- run: Collect continuously until interrupted

Options override environment settings (ESMON_CCR_*). asyncio.run() drives
the async collector from the sync typer commands.
"""

import asyncio
import json
import logging

import typer
from rich.console import Console
from rich.table import Table

from esmon_ccr.config import Settings
from esmon_ccr.exceptions import CollectorError
from esmon_ccr.factory import create_ccr_collector, create_http_client
from esmon_ccr.loop import CollectorLoop
from esmon_ccr.scope import Scope
from esmon_ccr.sinks import ConsoleEventSink

app = typer.Typer(
    name="esmon-ccr",
    help="Collect Elasticsearch cross-cluster replication stats",
    no_args_is_help=True,
)


def _load_settings(**overrides) -> Settings:
    """Build settings from the environment, applying non-None CLI overrides."""
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


@app.command("once")
def collect_once(
    url: str = typer.Option(
        None, "--url", "-u", help="Elasticsearch URL (e.g., http://es:9200)"
    ),
    scope: Scope = typer.Option(None, "--scope", help="Collection scope (node, cluster)"),
    extended: bool = typer.Option(
        None, "--extended/--reduced", help="Emit the full field set"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Run one collection cycle and print the resulting events."""
    settings = _load_settings(elasticsearch_url=url, scope=scope, extended=extended)

    async def _once():
        async with create_http_client(settings) as http:
            collector = create_ccr_collector(settings, http=http)
            return await collector.run_cycle()

    try:
        events = asyncio.run(_once())
    except CollectorError as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps([e.to_dict() for e in events], indent=2, default=str))
        return

    console = Console()
    if not events:
        console.print("No follower shards reported (or CCR unavailable)")
        return

    table = Table(title="CCR follower shards")
    table.add_column("Cluster", style="cyan")
    table.add_column("Follower index")
    table.add_column("Shard", justify="right")
    table.add_column("Ops written", justify="right")
    table.add_column("Checkpoint lag", justify="right")
    table.add_column("Since last read (ms)", justify="right")

    for event in events:
        m = event.metrics
        table.add_row(
            event.tags.get("cluster.name", "-"),
            str(m["follower.index"]),
            str(m["follower.shard.number"]),
            str(m["follower.operations_written"]),
            str(m["follower.checkpoint_lag"]),
            str(m["follower.time_since_last_read.ms"]),
        )

    console.print(table)


@app.command("run")
def run_collector(
    url: str = typer.Option(
        None, "--url", "-u", help="Elasticsearch URL (e.g., http://es:9200)"
    ),
    scope: Scope = typer.Option(None, "--scope", help="Collection scope (node, cluster)"),
    interval: float = typer.Option(
        None, "--interval", "-i", help="Collection interval in seconds"
    ),
    extended: bool = typer.Option(
        None, "--extended/--reduced", help="Emit the full field set"
    ),
) -> None:
    """
    Run the collector daemon.

    Collects at the configured interval and prints events as JSON. Runs
    until interrupted with Ctrl+C.
    """
    settings = _load_settings(
        elasticsearch_url=url,
        scope=scope,
        interval_seconds=interval,
        extended=extended,
    )

    print(f"Collecting CCR stats from {settings.elasticsearch_url}")
    print(f"  Scope: {settings.scope.value}")
    print(f"  Interval: {settings.interval_seconds}s")
    print()
    print("Press Ctrl+C to stop")
    print()

    async def _run() -> None:
        async with create_http_client(settings) as http:
            collector = create_ccr_collector(settings, http=http, sink=ConsoleEventSink())
            await CollectorLoop(collector, interval_seconds=settings.interval_seconds).run()

    asyncio.run(_run())


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
