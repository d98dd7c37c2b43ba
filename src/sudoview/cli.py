"""
sudoview CLI Module
Main command-line interface using Click.
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from sudoview import __version__
from sudoview.config import Config
from sudoview.errors import SourceReadError, StartupError
from sudoview.highlighter import Highlighter, spans_to_text
from sudoview.paginator import Paginator, Tab
from sudoview.session import Dataset, ViewerSession, load_dataset
from sudoview.utils import setup_logging, is_admin, print_banner, get_platform, resolve_log_level


console = Console()


def get_version_info() -> str:
    """Get detailed version information."""
    import platform
    lines = [
        f"sudoview {__version__}",
        f"Python {platform.python_version()}",
        f"Platform: {platform.system()} {platform.release()} ({platform.machine()})",
    ]
    return "\n".join(lines)


def source_options(func):
    """Add --log and --group options overriding the configured input files."""
    func = click.option(
        "--group", "-g", "group_path",
        type=click.Path(path_type=Path),
        help="Group membership file (default: /etc/group)",
    )(func)
    func = click.option(
        "--log", "-l", "log_path",
        type=click.Path(path_type=Path),
        help="Authentication log to read (default: /var/log/auth.log)",
    )(func)
    return func


@click.group(invoke_without_command=True)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-essential output",
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output results as JSON",
)
@click.version_option(
    version=__version__,
    prog_name="sudoview",
    message=get_version_info(),
)
@click.pass_context
def cli(ctx, config, verbose, quiet, json_output):
    """
    sudoview - Super User Management Interface

    Browse sudo activity recorded in the system authentication log.
    Runs the interactive viewer when no command is given.

    Examples:

        sudoview

        sudoview view --log ./auth.log --group ./group

        sudoview events --page-size 50

        sudoview commands --top 10
    """
    ctx.ensure_object(dict)

    # Load configuration
    try:
        ctx.obj["config"] = Config.load_or_default(config)
    except Exception as e:
        if not quiet:
            console.print(f"[yellow]Warning: Could not load config: {e}[/yellow]")
        ctx.obj["config"] = Config()

    # Set up logging
    log_level = resolve_log_level(ctx.obj["config"].log_level)
    if verbose:
        log_level = logging.DEBUG
    if quiet:
        log_level = logging.WARNING

    interactive = ctx.invoked_subcommand in (None, "view")
    logger = setup_logging(
        log_file=ctx.obj["config"].log_file,
        level=log_level,
        console=not quiet and not json_output and not interactive,
    )
    ctx.obj["logger"] = logger
    ctx.obj["log_level"] = log_level
    ctx.obj["json_output"] = json_output
    ctx.obj["quiet"] = quiet

    ctx.obj["banner"] = not quiet and not json_output and not interactive

    if ctx.invoked_subcommand is None:
        ctx.invoke(view)


def _announce(ctx, output: str) -> None:
    """Print the banner ahead of table output; JSON output keeps stdout clean."""
    if ctx.obj["banner"] and output == "table":
        print_banner()
        console.print(f"[dim]Platform: {get_platform()} | Root: {is_admin()}[/dim]\n")


def _load(ctx, log_path: Path | None, group_path: Path | None) -> Dataset:
    """Read the configured sources, exiting with status 1 on failure."""
    config = ctx.obj["config"]
    log_path = log_path or config.sources.log_path
    group_path = group_path or config.sources.group_path

    try:
        return load_dataset(
            log_path,
            group_path,
            markers=config.markers.to_markers(),
            privileged_group=config.markers.privileged_group,
        )
    except StartupError as e:
        ctx.obj["logger"].error(str(e))
        console.print(f"[red]Error: {e}[/red]")
        if isinstance(e, SourceReadError) and not is_admin():
            console.print("[dim]Authentication logs are usually root-only. Try running with sudo.[/dim]")
        raise SystemExit(1)


@cli.command("view")
@source_options
@click.pass_context
def view(ctx, log_path=None, group_path=None):
    """
    Open the interactive log viewer.

    Keys: Up/Down change page, Left/Right change tab, q quits.
    """
    config = ctx.obj["config"]
    dataset = _load(ctx, log_path, group_path)

    session = ViewerSession(
        dataset,
        keyword=config.markers.keyword,
        recent_count=config.display.recent_commands,
        top_commands=config.display.top_commands,
    )

    from sudoview.tui import run_viewer
    run_viewer(session)


@cli.command("events")
@source_options
@click.option(
    "--tab", "-t",
    type=click.Choice([tab.value for tab in (Tab.ALL, Tab.SUDO)], case_sensitive=False),
    default=Tab.SUDO.value,
    help="Show all log lines or only sudo events (default: SUDO)",
)
@click.option(
    "--page", "-p",
    type=click.IntRange(min=1),
    help="Page number, 1-based (default: last page)",
)
@click.option(
    "--page-size", "-n",
    type=click.IntRange(min=1),
    default=20,
    help="Lines per page (default: 20)",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.pass_context
def events(ctx, log_path, group_path, tab, page, page_size, output):
    """
    Print one page of log lines with sudo and privileged users highlighted.

    Examples:

        sudoview events

        sudoview events --tab ALL --page 1 --page-size 50

        sudoview --json-output events
    """
    config = ctx.obj["config"]
    if ctx.obj["json_output"]:
        output = "json"
    _announce(ctx, output)

    dataset = _load(ctx, log_path, group_path)
    tab = Tab(tab.upper())
    records = dataset.lines if tab is Tab.ALL else dataset.events

    paginator = Paginator()
    state = paginator.recompute(len(records), page_size, tab_changed=True)
    if page is not None:
        state = paginator.jump_to(page - 1)
    page_records = state.slice(records)

    if output == "json":
        click.echo(json.dumps({
            "log_path": str(dataset.log_path),
            "tab": tab.value,
            "page": state.page_index + 1 if state.num_pages else 0,
            "num_pages": state.num_pages,
            "total_items": state.total_items,
            "items": [record.to_dict() for record in page_records],
        }, indent=2))
        return

    highlighter = Highlighter(dataset.sudoers, config.markers.keyword)
    table = Table(title=f"{tab.value} - {dataset.log_path}", box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Line", overflow="fold")

    for record in page_records:
        table.add_row(str(record.index + 1), spans_to_text(highlighter.tokenize(record.text), no_wrap=False))

    console.print(table)
    shown = state.page_index + 1 if state.num_pages else 0
    console.print(f"[dim]page: {shown}/{state.num_pages} logs: {state.total_items}[/dim]")


@cli.command("commands")
@source_options
@click.option(
    "--top", "-n",
    type=click.IntRange(min=0),
    help="Show only the N most used commands (0 = all)",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.pass_context
def commands(ctx, log_path, group_path, top, output):
    """
    Summarise commands run through sudo, most used first.

    Examples:

        sudoview commands

        sudoview commands --top 5 --output json
    """
    config = ctx.obj["config"]
    if ctx.obj["json_output"]:
        output = "json"
    if top is None:
        top = config.display.top_commands
    _announce(ctx, output)

    dataset = _load(ctx, log_path, group_path)
    ranked = dataset.frequency.most_common(top or None)

    if output == "json":
        click.echo(json.dumps({
            "log_path": str(dataset.log_path),
            "total_events": len(dataset.events),
            "distinct_commands": len(dataset.frequency),
            "commands": [{"command": c, "count": n} for c, n in ranked],
        }, indent=2))
        return

    console.print(Panel(
        f"[bold]Log:[/bold] {dataset.log_path}\n"
        f"[bold]Lines:[/bold] {len(dataset.lines):,}\n"
        f"[bold]Sudo events:[/bold] {len(dataset.events):,}\n"
        f"[bold]Distinct commands:[/bold] {len(dataset.frequency):,}",
        title="Sudo Summary",
        border_style="cyan",
    ))

    if not ranked:
        console.print("\n[green]No sudo commands found.[/green]")
        return

    table = Table(title="Most Used Commands", box=box.ROUNDED)
    table.add_column("Rank", style="dim", justify="right")
    table.add_column("Command", style="cyan", overflow="fold")
    table.add_column("Count", justify="right")
    for rank, (command, count) in enumerate(ranked, 1):
        table.add_row(str(rank), command, str(count))
    console.print(table)


@cli.command("sudoers")
@source_options
@click.option(
    "--output", "-o",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.pass_context
def sudoers(ctx, log_path, group_path, output):
    """List members of privileged (sudo) groups and their sudo event counts."""
    if ctx.obj["json_output"]:
        output = "json"
    _announce(ctx, output)

    dataset = _load(ctx, log_path, group_path)
    per_user: dict[str, int] = {}
    for event in dataset.events:
        if event.user:
            per_user[event.user] = per_user.get(event.user, 0) + 1

    users = sorted(dataset.sudoers)

    if output == "json":
        click.echo(json.dumps({
            "sudoers": users,
            "events_per_user": {user: per_user.get(user, 0) for user in users},
        }, indent=2))
        return

    if not users:
        console.print("[yellow]No privileged users found.[/yellow]")
        return

    table = Table(title="Privileged Users", box=box.ROUNDED)
    table.add_column("User", style="bold white")
    table.add_column("Sudo events", justify="right")
    for user in users:
        table.add_row(user, str(per_user.get(user, 0)))
    console.print(table)


def main():
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
