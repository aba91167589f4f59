import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from sched_debugger import __version__
from sched_debugger.config.loader import ClusterState, ConfigError, StateLoader
from sched_debugger.debugger.dumper import CacheDumper
from sched_debugger.logging_config import configure_logging

console = Console()

DEFAULT_STATE_PATH = Path("./cluster-state.yaml")


def _load_state(ctx: click.Context, error_prefix: str = "") -> ClusterState:
    """Load the state file and configure logging from it, exiting 1 on error."""
    loader = StateLoader(Path(ctx.obj["state_path"]))
    try:
        config = loader.load_config()
    except ConfigError as e:
        console.print(f"{error_prefix}[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    log_file = ctx.obj["log_file"]
    configure_logging(
        level=ctx.obj["log_level"] or config.debugger.log_level,
        log_file=Path(log_file) if log_file else None,
    )
    return loader.build(config)


@click.group()
@click.version_option(version=__version__, prog_name="sched-debug")
@click.option(
    "--state",
    "state_path",
    default=str(DEFAULT_STATE_PATH),
    type=click.Path(),
    help="Cluster state YAML file",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the log level from the state file",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Append logs (and dumps) to this file instead of stderr",
)
@click.pass_context
def cli(
    ctx: click.Context, state_path: str, log_level: str | None, log_file: str | None
) -> None:
    """Scheduler cache debugger: dump cached nodes and the scheduling queue."""
    ctx.ensure_object(dict)
    ctx.obj["state_path"] = state_path
    ctx.obj["log_level"] = log_level
    ctx.obj["log_file"] = log_file


@cli.command()
@click.option("--nodes-only", is_flag=True, help="Dump only the cached nodes")
@click.option("--queue-only", is_flag=True, help="Dump only the scheduling queue")
@click.pass_context
def dump(ctx: click.Context, nodes_only: bool, queue_only: bool) -> None:
    """Dump cached nodes and the scheduling queue to the log."""
    if nodes_only and queue_only:
        console.print("[red]--nodes-only and --queue-only are mutually exclusive[/red]")
        raise SystemExit(1)

    state = _load_state(ctx)
    dumper = CacheDumper(state.cache, state.queue)
    if nodes_only:
        dumper.dump_nodes()
    elif queue_only:
        dumper.dump_scheduling_queue()
    else:
        dumper.dump_all()


@cli.command()
@click.pass_context
def listen(ctx: click.Context) -> None:
    """Dump on every debug signal until interrupted (foreground)."""
    from sched_debugger.debugger.signals import DumpSignalListener

    state = _load_state(ctx)
    listener = DumpSignalListener(
        CacheDumper(state.cache, state.queue),
        dump_signal=state.config.debugger.dump_signal,
    )
    console.print(
        f"[green]Listening for {listener.dump_signal.name}.[/green] Press Ctrl+C to stop."
    )
    asyncio.run(listener.run())
    console.print(f"[yellow]Stopped after {listener.dump_count} dump(s).[/yellow]")


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate the cluster state file without dumping."""
    path = Path(ctx.obj["state_path"])
    state = _load_state(ctx, error_prefix="[red]invalid[/red] ")

    console.print(
        f"[green]valid[/green] {path}: {state.cache.node_count()} node(s), "
        f"{state.cache.pod_count()} bound pod(s), {len(state.queue)} queued pod(s)"
    )


def main() -> None:
    cli(obj={})
