"""Docker host models: identity, lifecycle state, connection, containers."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes


class LifecycleState(Enum):
    """Last observed run state of a Docker host."""
    RUNNING = "running"
    STOPPED = "stopped"
    REMOVED = "removed"
    UNKNOWN = "unknown"  # also covers docker-machine's "Error" state

    @classmethod
    def parse(cls, status: str) -> "LifecycleState":
        """Map docker-machine status text to a lifecycle state.

        Args:
            status: Output of ``docker-machine status`` (e.g. "Running")

        Returns:
            Matching LifecycleState, UNKNOWN for anything unrecognised
        """
        value = (status or "").strip().lower()
        if value in ("running", "starting"):
            return cls.RUNNING
        if value in ("stopped", "stopping", "saved", "paused"):
            return cls.STOPPED
        if value in ("removed", "does not exist"):
            return cls.REMOVED
        return cls.UNKNOWN


@dataclass(frozen=True)
class HostIdentity:
    """Immutable identity of a host."""
    name: str
    is_native: bool


@dataclass(frozen=True)
class CertificatePaths:
    """Locations of the PEM files used to talk to a daemon."""
    ca_certificate: str
    client_certificate: str
    client_key: str


@dataclass(frozen=True)
class ClientCertificate:
    """A client certificate bound to its private key."""
    certificate: x509.Certificate
    private_key: PrivateKeyTypes

    @property
    def subject(self) -> str:
        return self.certificate.subject.rfc4514_string()


@dataclass(frozen=True)
class HostConnection:
    """How to reach a Docker daemon.

    Built in one piece by a resolution step and swapped as a whole; the
    paths and the certificates loaded from them always belong together.
    """
    endpoint_uri: str
    require_tls: bool
    ca_certificate_path: str
    client_certificate_path: str
    client_key_path: str
    ca_certificate: Optional[x509.Certificate] = None
    client_certificate: Optional[ClientCertificate] = None

    def cert_paths(self) -> CertificatePaths:
        return CertificatePaths(
            ca_certificate=self.ca_certificate_path,
            client_certificate=self.client_certificate_path,
            client_key=self.client_key_path,
        )


@dataclass(frozen=True)
class ContainerHandle:
    """A container discovered on a host at enumeration time."""
    id: str
    name: str
    connection: HostConnection

    @property
    def endpoint_uri(self) -> str:
        return self.connection.endpoint_uri

    @property
    def cert_paths(self) -> CertificatePaths:
        return self.connection.cert_paths()
