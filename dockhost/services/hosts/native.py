"""Native Docker host reached through DOCKER_HOST / DOCKER_CERT_PATH."""
from typing import Mapping, Optional

from dockhost.core.errors import InvalidStateError
from dockhost.core.logger import get_logger
from dockhost.models.host import LifecycleState
from dockhost.services.certificates import CertificateLocator
from dockhost.services.docker import DockerClient
from dockhost.services.hosts.base import DockerHost
from dockhost.services.hosts.resolver import resolve_native

logger = get_logger(__name__)


class NativeDockerHost(DockerHost):
    """A daemon that is already running and not managed by dockhost.

    Its state is pinned to RUNNING; start, stop and remove always fail.
    """

    def __init__(
        self,
        name: str,
        docker_uri: Optional[str] = None,
        cert_path: Optional[str] = None,
        docker: Optional[DockerClient] = None,
        locator: Optional[CertificateLocator] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(name, is_native=True, docker=docker)
        self._docker_uri = docker_uri
        self._cert_path = cert_path
        self._locator = locator or CertificateLocator()
        self._environ = environ
        self.resolve()

    def resolve(self) -> None:
        connection = resolve_native(
            self.name,
            docker_uri=self._docker_uri,
            cert_path=self._cert_path,
            locator=self._locator,
            environ=self._environ,
        )
        self._install(LifecycleState.RUNNING, connection)
        logger.info(f"Native docker host {self.name} at {connection.endpoint_uri}")

    def _reject(self, operation: str) -> None:
        raise InvalidStateError(f"Cannot {operation} docker host {self.name} since it is native")

    def start(self) -> None:
        self._reject("start")

    def stop(self) -> None:
        self._reject("stop")

    def remove(self, force: bool = False) -> None:
        self._reject("remove")
