"""Error types raised by dockhost."""


class DockhostError(Exception):
    """Base class for all dockhost errors."""
    pass


class ConfigurationError(DockhostError):
    """Raised when required host configuration is missing or invalid."""
    pass


class CertificateError(DockhostError):
    """Raised when certificate material cannot be used."""
    pass


class CertificateNotFoundError(CertificateError):
    """Raised when an expected PEM file does not exist."""
    pass


class CertificateParseError(CertificateError):
    """Raised when a PEM file exists but cannot be parsed."""
    pass


class HostStateError(DockhostError):
    """Raised when a lifecycle operation is not allowed for a host."""
    pass


class InvalidStateError(HostStateError):
    """Raised for lifecycle operations on a native host."""
    pass


class IllegalTransitionError(HostStateError):
    """Raised when the host's current state does not permit the transition."""
    pass


class OperationFailedError(DockhostError):
    """Raised when the provisioning layer reports a failed operation."""

    def __init__(self, message: str, detail: str = ""):
        super().__init__(f"{message}: {detail}" if detail else message)
        self.detail = detail


class ContainerQueryError(DockhostError):
    """Raised by strict container enumeration when the docker query fails."""
    pass
