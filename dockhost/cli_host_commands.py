"""Docker host CLI commands (show, start, stop, rm, containers)."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from dockhost.cli_support import build_host, print_success, print_warning
from dockhost.core.errors import (
    CertificateError,
    ConfigurationError,
    ContainerQueryError,
    HostStateError,
    OperationFailedError,
)
from dockhost.services.hosts import DockerHost

HostTyper = typer.Typer(help="Inspect and control Docker hosts")

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Host definitions file (dockhost.yml).")
NATIVE_OPTION = typer.Option(None, "--native/--machine", help="Native host from Docker env, or a docker-machine host.")
URI_OPTION = typer.Option(None, "--docker-uri", help="Daemon URI for native hosts (overrides DOCKER_HOST).")
CERT_OPTION = typer.Option(None, "--cert-path", help="Certificate directory for native hosts (overrides DOCKER_CERT_PATH).")


def register_host_commands(root: typer.Typer, console: Console) -> None:
    """Attach host-related commands to the main CLI."""

    def _open(name, config, native, docker_uri, cert_path) -> DockerHost:
        try:
            return build_host(name, config_path=config, native=native, docker_uri=docker_uri, cert_path=cert_path)
        except (ConfigurationError, CertificateError) as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(2) from exc
        except OperationFailedError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from exc

    def _transition(host: DockerHost, action, done: str) -> None:
        try:
            action()
        except (HostStateError, OperationFailedError) as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from exc
        except CertificateError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(2) from exc
        print_success(console, f"{done} {host.name} ({host.state.value})")

    @HostTyper.command("show")
    def show_command(
        name: str = typer.Argument(..., help="Host or machine name."),
        config: Optional[str] = CONFIG_OPTION,
        native: Optional[bool] = NATIVE_OPTION,
        docker_uri: Optional[str] = URI_OPTION,
        cert_path: Optional[str] = CERT_OPTION,
    ) -> None:
        """Show connection details and state of a host."""
        host = _open(name, config, native, docker_uri, cert_path)
        connection = host.connection

        console.print(f"[bold]{host.name}[/bold] ({'native' if host.is_native else 'machine'})")
        console.print(f"  State:       {host.state.value}")
        if connection is None:
            print_warning(console, "No connection resolved")
            return

        console.print(f"  Endpoint:    {connection.endpoint_uri}")
        console.print(f"  Require TLS: {'yes' if connection.require_tls else 'no'}")
        console.print(f"  CA cert:     {connection.ca_certificate_path}")
        console.print(f"  Client cert: {connection.client_certificate_path}")
        console.print(f"  Client key:  {connection.client_key_path}")
        if connection.client_certificate:
            console.print(f"  Subject:     {connection.client_certificate.subject}")

    @HostTyper.command("start")
    def start_command(
        name: str = typer.Argument(..., help="Machine name."),
        config: Optional[str] = CONFIG_OPTION,
        native: Optional[bool] = NATIVE_OPTION,
        docker_uri: Optional[str] = URI_OPTION,
        cert_path: Optional[str] = CERT_OPTION,
    ) -> None:
        """Start a stopped docker-machine host."""
        host = _open(name, config, native, docker_uri, cert_path)
        console.print(f"[dim]Starting docker host {host.name}...[/dim]")
        _transition(host, host.start, "Started")

    @HostTyper.command("stop")
    def stop_command(
        name: str = typer.Argument(..., help="Machine name."),
        config: Optional[str] = CONFIG_OPTION,
        native: Optional[bool] = NATIVE_OPTION,
        docker_uri: Optional[str] = URI_OPTION,
        cert_path: Optional[str] = CERT_OPTION,
    ) -> None:
        """Stop a running docker-machine host."""
        host = _open(name, config, native, docker_uri, cert_path)
        console.print(f"[dim]Stopping docker host {host.name}...[/dim]")
        _transition(host, host.stop, "Stopped")

    @HostTyper.command("rm")
    def remove_command(
        name: str = typer.Argument(..., help="Machine name."),
        force: bool = typer.Option(False, "--force", "-f", help="Remove even if the host is running."),
        config: Optional[str] = CONFIG_OPTION,
        native: Optional[bool] = NATIVE_OPTION,
        docker_uri: Optional[str] = URI_OPTION,
        cert_path: Optional[str] = CERT_OPTION,
    ) -> None:
        """Remove a docker-machine host."""
        host = _open(name, config, native, docker_uri, cert_path)
        _transition(host, lambda: host.remove(force=force), "Removed")

    @HostTyper.command("containers")
    def containers_command(
        name: str = typer.Argument(..., help="Host or machine name."),
        running: bool = typer.Option(False, "--running", help="Only list running containers."),
        filter: Optional[str] = typer.Option(None, "--filter", help="Filter expression passed to docker ps."),
        strict: bool = typer.Option(False, "--strict", help="Fail instead of listing nothing when the query fails."),
        config: Optional[str] = CONFIG_OPTION,
        native: Optional[bool] = NATIVE_OPTION,
        docker_uri: Optional[str] = URI_OPTION,
        cert_path: Optional[str] = CERT_OPTION,
    ) -> None:
        """List containers on a host."""
        host = _open(name, config, native, docker_uri, cert_path)

        try:
            if strict:
                handles = host.try_get_containers(all=not running, filter=filter)
            else:
                handles = host.get_containers(all=not running, filter=filter)
        except ContainerQueryError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from exc

        if not handles:
            print_warning(console, f"No containers found on {host.name}")
            return

        table = Table(title=f"Containers on {host.name} ({len(handles)})", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim", width=12)
        table.add_column("Name", style="cyan")
        for handle in handles:
            table.add_row(handle.id[:12], handle.name)
        console.print(table)

    root.add_typer(HostTyper, name="host")
