"""Data models for dockhost."""
from dockhost.models.host import (
    CertificatePaths,
    ClientCertificate,
    ContainerHandle,
    HostConnection,
    HostIdentity,
    LifecycleState,
)

__all__ = [
    'CertificatePaths',
    'ClientCertificate',
    'ContainerHandle',
    'HostConnection',
    'HostIdentity',
    'LifecycleState',
]
