"""Connection resolution for native and docker-machine managed hosts."""
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dockhost.core.errors import ConfigurationError, OperationFailedError
from dockhost.core.logger import get_logger
from dockhost.models.host import HostConnection, LifecycleState
from dockhost.services.certificates import (
    DEFAULT_CA_CERT_NAME,
    DEFAULT_CLIENT_CERT_NAME,
    DEFAULT_CLIENT_KEY_NAME,
    CertificateLocator,
)
from dockhost.services.machine import MachineClient

logger = get_logger(__name__)

DOCKER_HOST = "DOCKER_HOST"
DOCKER_CERT_PATH = "DOCKER_CERT_PATH"
DOCKER_TLS_VERIFY = "DOCKER_TLS_VERIFY"


def resolve_native(
    name: str,
    docker_uri: Optional[str] = None,
    cert_path: Optional[str] = None,
    locator: Optional[CertificateLocator] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> HostConnection:
    """Resolve a native host from explicit arguments or the Docker environment.

    Arguments win over DOCKER_HOST / DOCKER_CERT_PATH. TLS is required only
    when DOCKER_TLS_VERIFY is exactly "1".

    Raises:
        ConfigurationError: If the URI or the certificate directory is undefined
        CertificateError: If ca.pem, cert.pem or key.pem cannot be loaded
    """
    env = os.environ if environ is None else environ
    locator = locator or CertificateLocator()

    uri = docker_uri or env.get(DOCKER_HOST)
    if not uri:
        raise ConfigurationError(
            f"Docker host {name} cannot be native when {DOCKER_HOST} is not defined"
        )

    cert_dir = cert_path or env.get(DOCKER_CERT_PATH)
    if not cert_dir:
        raise ConfigurationError(
            f"Docker host {name} cannot be native when {DOCKER_CERT_PATH} is not defined"
        )

    directory = Path(cert_dir)
    connection = HostConnection(
        endpoint_uri=uri,
        require_tls=env.get(DOCKER_TLS_VERIFY) == "1",
        ca_certificate_path=str(directory / DEFAULT_CA_CERT_NAME),
        client_certificate_path=str(directory / DEFAULT_CLIENT_CERT_NAME),
        client_key_path=str(directory / DEFAULT_CLIENT_KEY_NAME),
        ca_certificate=locator.locate(directory, DEFAULT_CA_CERT_NAME),
        client_certificate=locator.locate(
            directory, DEFAULT_CA_CERT_NAME, DEFAULT_CLIENT_CERT_NAME, DEFAULT_CLIENT_KEY_NAME
        ),
    )
    logger.debug(f"Resolved native host {name}: {uri} (tls={connection.require_tls})")
    return connection


def resolve_machine(
    name: str,
    machine: MachineClient,
    locator: Optional[CertificateLocator] = None,
    previous: Optional[HostConnection] = None,
    refresh: bool = False,
    load_certificates: bool = True,
) -> Tuple[LifecycleState, Optional[HostConnection]]:
    """Resolve a docker-machine managed host.

    A running machine that already has a connection keeps it unless
    ``refresh`` is set; otherwise the machine is inspected and its
    certificates are loaded into a new connection. With
    ``load_certificates`` off only the reported paths are kept, for
    inspections that do not point at real files (mock mode).

    Returns:
        (state, connection) where connection is new or ``previous``

    Raises:
        OperationFailedError: If the machine cannot be inspected
        CertificateError: If the reported certificates cannot be loaded
    """
    state = machine.status(name)
    if state == LifecycleState.RUNNING and previous is not None and not refresh:
        logger.debug(f"Machine {name} is running, keeping resolved connection")
        return state, previous

    if state == LifecycleState.REMOVED:
        logger.debug(f"Machine {name} does not exist, nothing to resolve")
        return state, previous

    response = machine.inspect(name)
    if not response.success:
        raise OperationFailedError(f"Could not inspect docker host {name}", response.message)

    info = response.data
    ca_certificate = client_certificate = None
    if load_certificates:
        locator = locator or CertificateLocator()
        ca_certificate = locator.locate_ca(info.ca_cert_path)
        client_certificate = locator.locate_client(info.client_cert_path, info.client_key_path)

    connection = HostConnection(
        endpoint_uri=info.uri,
        require_tls=info.require_tls,
        ca_certificate_path=info.ca_cert_path,
        client_certificate_path=info.client_cert_path,
        client_key_path=info.client_key_path,
        ca_certificate=ca_certificate,
        client_certificate=client_certificate,
    )
    logger.debug(f"Resolved machine {name} ({state.value}): {info.uri} (tls={info.require_tls})")
    return state, connection
