"""Shared utilities for dockhost CLI modules."""
from __future__ import annotations

import os
from typing import Optional

from rich.console import Console

from dockhost.config.loader import HostsConfigLoader, find_config
from dockhost.core.errors import ConfigurationError
from dockhost.services.docker import DockerClient
from dockhost.services.hosts import DockerHost, create_host
from dockhost.services.machine import MachineClient


def is_mock() -> bool:
    """Return True when CLI runs in mock mode."""
    return os.environ.get("DH_MOCK") == "1"


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging
    """
    from dockhost.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def build_host(
    name: str,
    config_path: Optional[str] = None,
    native: Optional[bool] = None,
    docker_uri: Optional[str] = None,
    cert_path: Optional[str] = None,
) -> DockerHost:
    """Build a host from dockhost.yml, falling back to command-line options.

    Command-line options override the matching fields of a definition.
    """
    definition = None
    resolved_path = find_config(config_path)
    if resolved_path:
        loader = HostsConfigLoader(resolved_path)
        loader.load()
        definition = loader.get(name)
        if definition is None and config_path:
            raise ConfigurationError(f"Host '{name}' is not defined in {resolved_path}")

    if definition is not None:
        if native is None:
            native = definition.native
        docker_uri = docker_uri or definition.docker_uri
        cert_path = cert_path or definition.cert_path

    mock = is_mock()
    return create_host(
        name,
        native=bool(native),
        docker_uri=docker_uri,
        cert_path=cert_path,
        machine=MachineClient(mock=mock),
        docker=DockerClient(mock=mock),
        load_certificates=not mock,
    )


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")
