"""Locate and load PEM certificate material for Docker TLS connections."""
from pathlib import Path
from typing import Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from dockhost.core.errors import CertificateNotFoundError, CertificateParseError
from dockhost.core.logger import get_logger
from dockhost.models.host import ClientCertificate

logger = get_logger(__name__)

DEFAULT_CA_CERT_NAME = "ca.pem"
DEFAULT_CLIENT_CERT_NAME = "cert.pem"
DEFAULT_CLIENT_KEY_NAME = "key.pem"


class CertificateLocator:
    """Resolves conventionally named PEM files in a directory."""

    def locate(
        self,
        directory: Union[str, Path],
        ca_file_name: str,
        client_cert_file_name: Optional[str] = None,
        client_key_file_name: Optional[str] = None,
    ) -> Union[x509.Certificate, ClientCertificate]:
        """Load certificate material from a directory.

        With only ``ca_file_name`` a CA certificate is loaded. When a
        cert/key pair is given, ``ca_file_name`` is ignored and a client
        certificate bound to its private key is returned.

        Args:
            directory: Directory holding the PEM files
            ca_file_name: CA certificate file name (e.g. ca.pem)
            client_cert_file_name: Client certificate file name (e.g. cert.pem)
            client_key_file_name: Client private key file name (e.g. key.pem)

        Returns:
            x509.Certificate for a CA, ClientCertificate for a pair

        Raises:
            CertificateNotFoundError: If an expected file is absent
            CertificateParseError: If a file is present but malformed
        """
        base = Path(directory)
        if client_cert_file_name or client_key_file_name:
            if not (client_cert_file_name and client_key_file_name):
                raise ValueError("Client certificate and key file names must be given together")
            return self._load_client(base / client_cert_file_name, base / client_key_file_name)

        return self._load_certificate(base / ca_file_name)

    def locate_ca(self, path: Union[str, Path]) -> x509.Certificate:
        """Load a CA certificate from a full file path."""
        path = Path(path)
        return self.locate(path.parent, path.name)

    def locate_client(self, cert_path: Union[str, Path], key_path: Union[str, Path]) -> ClientCertificate:
        """Load a client certificate/key pair from full file paths."""
        return self._load_client(Path(cert_path), Path(key_path))

    def _read(self, path: Path) -> bytes:
        if not path.is_file():
            raise CertificateNotFoundError(f"Certificate file not found: {path}")
        return path.read_bytes()

    def _load_certificate(self, path: Path) -> x509.Certificate:
        data = self._read(path)
        try:
            certificate = x509.load_pem_x509_certificate(data)
        except ValueError as e:
            raise CertificateParseError(f"Invalid PEM certificate {path}: {e}") from e

        logger.debug(f"Loaded certificate {path} ({certificate.subject.rfc4514_string()})")
        return certificate

    def _load_client(self, cert_path: Path, key_path: Path) -> ClientCertificate:
        certificate = self._load_certificate(cert_path)
        data = self._read(key_path)
        try:
            private_key = serialization.load_pem_private_key(data, password=None)
        except (ValueError, TypeError) as e:
            raise CertificateParseError(f"Invalid PEM private key {key_path}: {e}") from e

        if _public_bytes(private_key.public_key()) != _public_bytes(certificate.public_key()):
            raise CertificateParseError(
                f"Private key {key_path} does not match certificate {cert_path}"
            )

        return ClientCertificate(certificate=certificate, private_key=private_key)


def _public_bytes(public_key) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
