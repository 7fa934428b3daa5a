"""Docker host provisioned and controlled through docker-machine."""
from typing import Optional

from dockhost.core.errors import (
    IllegalTransitionError,
    OperationFailedError,
)
from dockhost.core.logger import get_logger
from dockhost.models.host import LifecycleState
from dockhost.services.certificates import CertificateLocator
from dockhost.services.docker import DockerClient
from dockhost.services.hosts.base import DockerHost
from dockhost.services.hosts.resolver import resolve_machine
from dockhost.services.machine import MachineClient

logger = get_logger(__name__)


class MachineDockerHost(DockerHost):
    """A docker-machine host with a Stopped -> Running -> Stopped -> Removed lifecycle.

    Running -> Removed is only allowed with ``force``. A failed machine
    operation raises OperationFailedError and leaves the recorded state
    untouched; callers re-query with resolve() if they need certainty.
    """

    def __init__(
        self,
        name: str,
        machine: Optional[MachineClient] = None,
        docker: Optional[DockerClient] = None,
        locator: Optional[CertificateLocator] = None,
        stop_when_disposed: bool = False,
        load_certificates: bool = True,
    ):
        super().__init__(name, is_native=False, docker=docker, stop_when_disposed=stop_when_disposed)
        self.machine = machine or MachineClient()
        self._locator = locator or CertificateLocator()
        self._load_certificates = load_certificates
        self.resolve()

    def resolve(self, refresh: bool = False) -> None:
        """Query machine status and, when needed, inspect its connection.

        Args:
            refresh: Inspect even if the machine is running and resolved
        """
        with self._lock:
            state, connection = resolve_machine(
                self.name,
                self.machine,
                locator=self._locator,
                previous=self._connection,
                refresh=refresh,
                load_certificates=self._load_certificates,
            )
            self._install(state, connection)

    def _refresh_state(self) -> None:
        with self._lock:
            self._state = self.machine.status(self.name)

    def start(self) -> None:
        with self._lock:
            if self._state != LifecycleState.STOPPED:
                raise IllegalTransitionError(
                    f"Cannot start docker host {self.name} since it has state {self._state.value}"
                )

            logger.info(f"Starting docker host {self.name}")
            response = self.machine.start(self.name)
            if not response.success:
                raise OperationFailedError(f"Could not start docker host {self.name}", response.message)

            # The engine address can change across restarts
            self.resolve(refresh=True)
            logger.info(f"Docker host {self.name} is {self._state.value} at {self.host}")

    def stop(self) -> None:
        with self._lock:
            if self._state != LifecycleState.RUNNING:
                raise IllegalTransitionError(
                    f"Cannot stop docker host {self.name} since it has state {self._state.value}"
                )

            logger.info(f"Stopping docker host {self.name}")
            response = self.machine.stop(self.name)
            if not response.success:
                raise OperationFailedError(f"Could not stop docker host {self.name}", response.message)

            self._refresh_state()

    def remove(self, force: bool = False) -> None:
        with self._lock:
            if self._state == LifecycleState.REMOVED:
                raise IllegalTransitionError(f"Cannot remove docker host {self.name} since it is already removed")

            if self._state == LifecycleState.RUNNING and not force:
                raise IllegalTransitionError(
                    f"Cannot remove docker host {self.name} since it has state "
                    f"{self._state.value} and force is not enabled"
                )

            logger.info(f"Removing docker host {self.name}{' (forced)' if force else ''}")
            response = self.machine.delete(self.name, force)
            if not response.success:
                raise OperationFailedError(f"Could not remove docker host {self.name}", response.message)

            self._refresh_state()

    def close(self) -> None:
        """Stop the machine if it was created with ``stop_when_disposed``."""
        with self._lock:
            if not self.stop_when_disposed or self._state != LifecycleState.RUNNING:
                return
            try:
                self.stop()
            except OperationFailedError as e:
                logger.error(f"Failed to stop docker host {self.name} on close: {e}")
