#!/usr/bin/env python3
"""dockhost CLI - native and docker-machine Docker hosts behind one contract."""
from typing import Optional

import typer
from rich.console import Console

from dockhost.cli_host_commands import register_host_commands
from dockhost.cli_support import setup_file_logging

app = typer.Typer(
    name="dockhost",
    help="""dockhost - Docker hosts behind one contract

Native hosts come from DOCKER_HOST / DOCKER_CERT_PATH / DOCKER_TLS_VERIFY,
managed hosts from docker-machine.

Quick start:
  dh host show local --native      # Connection details from Docker env
  dh host start dev                # Start a docker-machine host
  dh host containers dev --running # Running containers on it
""",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level file logging."),
) -> None:
    if log_file or verbose:
        setup_file_logging(log_file=log_file, verbose=verbose)


register_host_commands(app, console)

if __name__ == "__main__":
    app()
