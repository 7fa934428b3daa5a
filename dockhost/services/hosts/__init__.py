"""Docker host implementations.

dockhost supports two kinds of hosts:
- Native: a daemon reached via DOCKER_HOST / DOCKER_CERT_PATH (always running)
- Machine: a daemon provisioned by docker-machine (start/stop/remove)
"""
from typing import Mapping, Optional

from .base import DockerHost
from .containers import ContainerEnumerator
from .machine import MachineDockerHost
from .native import NativeDockerHost
from dockhost.services.certificates import CertificateLocator
from dockhost.services.docker import DockerClient
from dockhost.services.machine import MachineClient


def create_host(
    name: str,
    native: bool,
    stop_when_disposed: bool = False,
    docker_uri: Optional[str] = None,
    cert_path: Optional[str] = None,
    machine: Optional[MachineClient] = None,
    docker: Optional[DockerClient] = None,
    locator: Optional[CertificateLocator] = None,
    environ: Optional[Mapping[str, str]] = None,
    load_certificates: bool = True,
) -> DockerHost:
    """Create and resolve a Docker host.

    Args:
        name: Host or machine name
        native: Resolve from Docker environment config instead of docker-machine
        stop_when_disposed: Stop a managed host on close() (ignored for native)
        docker_uri: Explicit daemon URI for native hosts (overrides DOCKER_HOST)
        cert_path: Explicit certificate directory for native hosts
        machine: docker-machine client for managed hosts
        docker: Docker CLI client for container enumeration
        locator: Certificate locator
        environ: Environment mapping for native resolution (default: os.environ)
        load_certificates: Load PEM material for managed hosts (off for mock clients)

    Returns:
        NativeDockerHost or MachineDockerHost, already resolved
    """
    if native:
        return NativeDockerHost(
            name,
            docker_uri=docker_uri,
            cert_path=cert_path,
            docker=docker,
            locator=locator,
            environ=environ,
        )

    return MachineDockerHost(
        name,
        machine=machine,
        docker=docker,
        locator=locator,
        stop_when_disposed=stop_when_disposed,
        load_certificates=load_certificates,
    )


__all__ = [
    'ContainerEnumerator',
    'DockerHost',
    'MachineDockerHost',
    'NativeDockerHost',
    'create_host',
]
