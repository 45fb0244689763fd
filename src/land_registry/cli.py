"""
Land Registry CLI - Command-line interface.

Operates on a registry instance persisted under a state directory.
"""

import fcntl
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from land_registry import __version__
from land_registry.audit.logger import EventLog, read_log
from land_registry.bridge.query import ExternalQueryBridge
from land_registry.core.config import RegistryConfig
from land_registry.core.exceptions import LandRegistryError, format_exception
from land_registry.registry.service import RegistryService
from land_registry.registry.snapshot import SnapshotPeer, load_snapshot, save_snapshot

app = typer.Typer(
    name="land-registry",
    help="Land Registry - parcel registration, verification and transfer",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main_options(
    ctx: typer.Context,
    state_dir: Optional[Path] = typer.Option(
        None, "--state-dir", "-s", help="Registry state directory"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Shared options for all commands."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        ctx.obj = RegistryConfig.load(config_file, state_dir=state_dir)
    except LandRegistryError as e:
        console.print(f"[red]{format_exception(e)}[/red]")
        raise typer.Exit(1)


def _open(config: RegistryConfig) -> RegistryService:
    """Load the registry held in the configured state directory."""
    try:
        event_log = _event_log(config)
        bridge = ExternalQueryBridge(
            event_log=event_log, timeout_seconds=config.query_timeout_seconds
        )
        return load_snapshot(config.snapshot_path, event_log=event_log, bridge=bridge)
    except LandRegistryError as e:
        console.print(f"[red]{format_exception(e)}[/red]")
        console.print("Run 'land-registry init --admin <address>' first.")
        raise typer.Exit(1)


def _event_log(config: RegistryConfig) -> EventLog:
    return EventLog(config.audit_path if config.audit_log else None)


@contextmanager
def _state_lock(config: RegistryConfig):
    """Hold an exclusive lock on the state directory until the block exits."""
    config.state_dir.mkdir(parents=True, exist_ok=True)
    fd = os.open(config.lock_path, os.O_CREAT | os.O_WRONLY)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX)
        yield
    finally:
        # Closing the descriptor releases the lock
        os.close(fd)


def _mutate(config: RegistryConfig, operation, success_message: str) -> None:
    """Run ``operation`` against the registry and persist the result."""
    with _state_lock(config):
        service = _open(config)
        try:
            operation(service)
            save_snapshot(service, config.snapshot_path)
        except LandRegistryError as e:
            console.print(f"[red]{format_exception(e)}[/red]")
            raise typer.Exit(1)
        finally:
            service.close()
    console.print(f"[green]{success_message}[/green]")


@app.command()
def init(
    ctx: typer.Context,
    admin: Optional[str] = typer.Option(None, "--admin", "-a", help="Administrator address"),
    fee: Optional[int] = typer.Option(None, "--fee", help="Registration fee"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing registry"),
):
    """Create a new registry instance."""
    config: RegistryConfig = ctx.obj
    admin = admin or config.admin
    if not admin:
        console.print("[red]An administrator address is required (--admin or LR_ADMIN)[/red]")
        raise typer.Exit(1)

    with _state_lock(config):
        if config.snapshot_path.exists() and not force:
            console.print(f"[red]Registry already exists at {config.snapshot_path}[/red]")
            raise typer.Exit(1)

        try:
            service = RegistryService.from_config(
                config.model_copy(
                    update={
                        "admin": admin,
                        "registration_fee": fee if fee is not None else config.registration_fee,
                    }
                )
            )
        except LandRegistryError as e:
            console.print(f"[red]{format_exception(e)}[/red]")
            raise typer.Exit(1)

        path = save_snapshot(service, config.snapshot_path)
        service.close()
    console.print(
        Panel.fit(
            f"[bold blue]Land Registry[/bold blue]\n"
            f"Administrator: {service.admin}\n"
            f"Registration fee: {service.registration_fee}\n"
            f"State: {path}",
        )
    )


@app.command("add-agent")
def add_agent(
    ctx: typer.Context,
    agent: str = typer.Argument(..., help="Address to authorize"),
    caller: str = typer.Option(..., "--caller", "-c", help="Calling address"),
):
    """Authorize a verification agent (administrator only)."""
    _mutate(ctx.obj, lambda s: s.add_agent(caller, agent), f"Agent added: {agent}")


@app.command("revoke-agent")
def revoke_agent(
    ctx: typer.Context,
    agent: str = typer.Argument(..., help="Address to revoke"),
    caller: str = typer.Option(..., "--caller", "-c", help="Calling address"),
):
    """Revoke a verification agent (administrator only)."""
    _mutate(ctx.obj, lambda s: s.revoke_agent(caller, agent), f"Agent revoked: {agent}")


@app.command()
def register(
    ctx: typer.Context,
    certificate: int = typer.Argument(..., help="Parcel certificate"),
    size: int = typer.Argument(..., help="Parcel size"),
    caller: str = typer.Option(..., "--caller", "-c", help="Registrant address"),
    amount: int = typer.Option(..., "--amount", help="Tendered fee"),
):
    """Register a parcel, paying the registration fee."""
    _mutate(
        ctx.obj,
        lambda s: s.register_land(caller, certificate, size, amount),
        f"Land registered: {certificate}",
    )


@app.command()
def verify(
    ctx: typer.Context,
    certificate: int = typer.Argument(..., help="Parcel certificate"),
    caller: str = typer.Option(..., "--caller", "-c", help="Agent address"),
):
    """Verify a parcel's ownership (agents only)."""
    _mutate(
        ctx.obj,
        lambda s: s.verify_ownership(caller, certificate),
        f"Land verified: {certificate}",
    )


@app.command()
def transfer(
    ctx: typer.Context,
    certificate: int = typer.Argument(..., help="Parcel certificate"),
    new_owner: str = typer.Argument(..., help="Receiving address"),
    caller: str = typer.Option(..., "--caller", "-c", help="Current owner address"),
):
    """Transfer a verified parcel (current owner only)."""
    _mutate(
        ctx.obj,
        lambda s: s.transfer_land(caller, certificate, new_owner),
        f"Land transferred: {certificate} -> {new_owner}",
    )


@app.command()
def view(
    ctx: typer.Context,
    certificate: int = typer.Argument(..., help="Parcel certificate"),
):
    """Show a parcel's owner, size and status."""
    service = _open(ctx.obj)
    try:
        land = service.view_land(certificate)
    except LandRegistryError as e:
        console.print(f"[red]{format_exception(e)}[/red]")
        raise typer.Exit(1)
    finally:
        service.close()

    table = Table(title=f"Parcel {certificate}")
    table.add_column("Owner", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Status", style="magenta")
    table.add_row(land.owner, str(land.size), land.status)
    console.print(table)


@app.command()
def certificates(ctx: typer.Context):
    """List every registered certificate."""
    service = _open(ctx.obj)
    certs = service.view_all_certificates()
    service.close()

    table = Table(title=f"Certificates ({len(certs)})")
    table.add_column("#", justify="right")
    table.add_column("Certificate", style="cyan")
    for i, cert in enumerate(certs, 1):
        table.add_row(str(i), str(cert))
    console.print(table)


@app.command()
def agents(ctx: typer.Context):
    """List authorized verification agents."""
    service = _open(ctx.obj)
    roster = service.get_agents()
    service.close()

    table = Table(title=f"Agents ({len(roster)})")
    table.add_column("Address", style="cyan")
    for agent in roster:
        table.add_row(agent)
    console.print(table)


@app.command("query-remote")
def query_remote(
    ctx: typer.Context,
    certificate: int = typer.Argument(..., help="Parcel certificate"),
    peer_dir: Path = typer.Option(..., "--peer-dir", "-p", help="Peer registry state directory"),
):
    """Ask a peer registry who owns a certificate."""
    config: RegistryConfig = ctx.obj
    service = _open(config)
    peer = SnapshotPeer(peer_dir / config.snapshot_path.name)
    result = service.query_remote(peer, certificate)
    service.close()

    if result.success:
        console.print(f"[green]Owner:[/green] {result.owner}")
    else:
        console.print(f"[yellow]Peer query failed[/yellow] (owner {result.owner})")


@app.command()
def events(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", "-n", help="Most recent events to show"),
):
    """Show recent notifications from the audit log."""
    config: RegistryConfig = ctx.obj
    entries = read_log(config.audit_path)

    table = Table(title=f"Events ({len(entries)})")
    table.add_column("Timestamp", style="dim")
    table.add_column("Event", style="cyan")
    table.add_column("Payload")
    for event in entries[-limit:]:
        payload = ", ".join(f"{k}={v}" for k, v in event.payload.items())
        table.add_row(event.timestamp, event.name.value, payload)
    console.print(table)


@app.command()
def version():
    """Show version information."""
    console.print(f"Land Registry v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
