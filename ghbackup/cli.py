"""Click-based CLI for ghbackup - GitHub Backup."""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.markup import escape

from ghbackup import __version__
from ghbackup.config import (
    BackupConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from ghbackup.output.console import Console, create_console
from ghbackup.remote.client import GitHubClient, GitHubError
from ghbackup.sync.agent import SyncAgent
from ghbackup.sync.orchestrator import BackupOrchestrator
from ghbackup.sync.schedule import SchedulePolicy


@click.group()
@click.version_option(version=__version__, prog_name="ghbackup")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.config/ghbackup/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """ghbackup - GitHub Backup.

    Keeps a fixed list of local text files in sync with a private GitHub
    repository. Each pass pulls the GitHub copy when it is larger or
    different, then pushes the local copy when it is new, larger or
    different.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


def _load(ctx: click.Context) -> tuple[BackupConfig, Console]:
    """Load config and build the console, exiting with status 1 on failure."""
    try:
        config = load_config(ctx.obj.get("config_path"))
    except FileNotFoundError as e:
        create_console().print_error(str(e))
        sys.exit(1)
    except ValidationError as e:
        create_console().print_error(f"Invalid configuration:\n{e}")
        sys.exit(1)

    console = create_console(
        verbose=ctx.obj.get("verbose") or config.output.verbose,
        colored=config.output.colored,
    )
    return config, console


def _build_agent(config: BackupConfig, console: Console, *, dry_run: bool = False) -> SyncAgent:
    """Create an authenticated agent, exiting with status 1 if credentials are missing."""
    try:
        client = GitHubClient(
            config.github.owner,
            config.github.resolve_token(),
            api_url=config.github.api_url,
            timeout=config.github.timeout,
        )
    except ValueError as e:
        console.print_error(f"{e} Set github.owner and {config.github.token_env}.")
        sys.exit(1)

    return SyncAgent(
        client,
        console=console,
        private=config.repository.private,
        commit_prefix=config.repository.commit_prefix,
        dry_run=dry_run,
    )


def _run_backup(config: BackupConfig, agent: SyncAgent, schedule: SchedulePolicy) -> None:
    orchestrator = BackupOrchestrator(agent, schedule=schedule)
    previous_handler = signal.signal(signal.SIGTERM, lambda signum, frame: orchestrator.stop())
    try:
        passes = orchestrator.start_backup(config.tracked_paths(), config.repository.name, config.base_dir)
    except GitHubError:
        sys.exit(1)
    except KeyboardInterrupt:
        agent.console.print_warning("Interrupted")
        return
    finally:
        signal.signal(signal.SIGTERM, previous_handler)
        agent.client.close()

    if passes and passes[-1].has_errors:
        sys.exit(1)


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Run the backup loop until stopped.

    Ensures the repository exists, then runs a pass every
    schedule.interval seconds. Ctrl-C or SIGTERM stops it.
    """
    config, console = _load(ctx)
    agent = _build_agent(config, console)

    schedule = SchedulePolicy(
        interval=config.schedule.interval,
        jitter=config.schedule.jitter,
        max_cycles=config.schedule.max_cycles,
    )
    console.print_config_summary(
        str(ctx.obj.get("config_path") or get_config_path()), config.repository.name, len(config.files.paths)
    )
    _run_backup(config, agent, schedule)


@cli.command()
@click.option("--dry-run", "-n", is_flag=True, help="Report what would change without writing")
@click.pass_context
def once(ctx: click.Context, dry_run: bool) -> None:
    """Run a single backup pass and exit."""
    config, console = _load(ctx)
    agent = _build_agent(config, console, dry_run=dry_run)
    _run_backup(config, agent, SchedulePolicy(interval=0, max_cycles=1))


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Compare tracked files with GitHub without changing anything."""
    config, console = _load(ctx)
    agent = _build_agent(config, console, dry_run=True)

    with agent.client:
        statuses = [
            agent.check_file(config.repository.name, path, config.base_dir) for path in config.tracked_paths()
        ]
    console.print_file_status(statuses)

    if any(s.error for s in statuses):
        sys.exit(1)


@cli.group()
def config() -> None:
    """Manage configuration."""
    pass


@config.command("init")
@click.pass_context
def config_init(ctx: click.Context) -> None:
    """Create a default configuration file."""
    console = create_console()
    path, created = ensure_config_exists(ctx.obj.get("config_path"))
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective configuration."""
    cfg, console = _load(ctx)
    console.print_config_summary(
        str(ctx.obj.get("config_path") or get_config_path()), cfg.repository.name, len(cfg.files.paths)
    )
    console.print(f"[bold]Owner:[/bold] {escape(cfg.github.owner) or '[red]not set[/red]'}")
    token_state = "[green]set[/green]" if cfg.github.resolve_token() else "[red]not set[/red]"
    console.print(f"[bold]Token ({escape(cfg.github.token_env)}):[/bold] {token_state}")
    console.print(f"[bold]Base directory:[/bold] {escape(cfg.files.base_dir)}")
    console.print(f"[bold]Interval:[/bold] {cfg.schedule.interval:g}s")
    for path in cfg.tracked_paths():
        console.print(f"  • {escape(str(path))}")


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file."""
    console = create_console()
    valid, errors = validate_config_file(ctx.obj.get("config_path"))
    if valid:
        console.print_success("Configuration is valid")
        return
    for error in errors:
        console.print_error(error)
    sys.exit(1)


@config.command("path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the configuration file path."""
    click.echo(str(ctx.obj.get("config_path") or get_config_path()))


if __name__ == "__main__":
    cli()
