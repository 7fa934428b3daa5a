"""Abstract base class for Docker hosts."""
import threading
from abc import ABC, abstractmethod
from typing import List, Optional

from cryptography import x509

from dockhost.core.logger import get_logger
from dockhost.models.host import (
    ClientCertificate,
    ContainerHandle,
    HostConnection,
    HostIdentity,
    LifecycleState,
)
from dockhost.services.docker import DockerClient
from dockhost.services.hosts.containers import ContainerEnumerator

logger = get_logger(__name__)


class DockerHost(ABC):
    """Common interface for native and machine-managed Docker hosts.

    The resolved state and connection are replaced together under the
    host's lock; readers always see a complete HostConnection.
    """

    def __init__(
        self,
        name: str,
        is_native: bool,
        docker: Optional[DockerClient] = None,
        stop_when_disposed: bool = False,
    ):
        """Initialize host.

        Args:
            name: Host name (machine name for managed hosts)
            is_native: True for hosts reached directly via Docker env config
            docker: Docker CLI client used for container enumeration
            stop_when_disposed: Stop a managed host when close() is called
        """
        self.identity = HostIdentity(name=name, is_native=is_native)
        self.stop_when_disposed = stop_when_disposed
        self.containers = ContainerEnumerator(docker)
        self._lock = threading.RLock()
        self._state = LifecycleState.UNKNOWN
        self._connection: Optional[HostConnection] = None

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def is_native(self) -> bool:
        return self.identity.is_native

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def connection(self) -> Optional[HostConnection]:
        return self._connection

    @property
    def host(self) -> Optional[str]:
        """Endpoint URI of the daemon, if resolved."""
        connection = self._connection
        return connection.endpoint_uri if connection else None

    @property
    def require_tls(self) -> bool:
        connection = self._connection
        return bool(connection and connection.require_tls)

    @property
    def ca_certificate(self) -> Optional[x509.Certificate]:
        connection = self._connection
        return connection.ca_certificate if connection else None

    @property
    def client_certificate(self) -> Optional[ClientCertificate]:
        connection = self._connection
        return connection.client_certificate if connection else None

    def _install(self, state: LifecycleState, connection: Optional[HostConnection]) -> None:
        with self._lock:
            self._state = state
            self._connection = connection

    @abstractmethod
    def resolve(self) -> None:
        """Determine the host's state and connection parameters."""
        pass

    @abstractmethod
    def start(self) -> None:
        """Start the host."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the host."""
        pass

    @abstractmethod
    def remove(self, force: bool = False) -> None:
        """Remove the host.

        Args:
            force: Allow removing a running host
        """
        pass

    def get_containers(self, all: bool = True, filter: Optional[str] = None) -> List[ContainerHandle]:
        """List containers on the host (best effort, [] on query failure).

        Args:
            all: Include stopped containers
            filter: Filter expression forwarded verbatim to docker
        """
        with self._lock:
            connection = self._connection
        return self.containers.list_containers(connection, include_stopped=all, filter=filter)

    def try_get_containers(self, all: bool = True, filter: Optional[str] = None) -> List[ContainerHandle]:
        """List containers on the host, raising ContainerQueryError on failure."""
        with self._lock:
            connection = self._connection
        return self.containers.try_list_containers(connection, include_stopped=all, filter=filter)

    @property
    def running_containers(self) -> List[ContainerHandle]:
        return self.get_containers(all=False)

    def close(self) -> None:
        """Release the host; managed hosts may stop on close."""
        pass

    def __enter__(self) -> "DockerHost":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        kind = "native" if self.is_native else "machine"
        return f"<{type(self).__name__} {self.name} ({kind}, {self._state.value})>"
