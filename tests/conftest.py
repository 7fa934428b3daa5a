"""Shared test fixtures for dockhost tests."""
import datetime
import logging
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from dockhost.models.host import LifecycleState
from dockhost.services.command import CommandResult
from dockhost.services.machine import MachineInspection


def _name(common_name):
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


def _certificate(subject, public_key, issuer, signing_key):
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(_name(subject))
        .issuer_name(_name(issuer))
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(minutes=5))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(signing_key, hashes.SHA256())
    )


def _key_pem(key):
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


def write_cert_dir(directory, client_name="dockhost-client"):
    """Write ca.pem, cert.pem and key.pem into directory and return it."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    ca_key = ec.generate_private_key(ec.SECP256R1())
    ca_cert = _certificate("dockhost-ca", ca_key.public_key(), "dockhost-ca", ca_key)

    client_key = ec.generate_private_key(ec.SECP256R1())
    client_cert = _certificate(client_name, client_key.public_key(), "dockhost-ca", ca_key)

    (directory / "ca.pem").write_bytes(ca_cert.public_bytes(serialization.Encoding.PEM))
    (directory / "cert.pem").write_bytes(client_cert.public_bytes(serialization.Encoding.PEM))
    (directory / "key.pem").write_bytes(_key_pem(client_key))
    return directory


@pytest.fixture
def cert_dir(tmp_path):
    """Directory holding a valid CA and client cert/key pair."""
    return write_cert_dir(tmp_path / "certs")


@pytest.fixture
def make_cert_dir(tmp_path):
    """Factory for additional certificate directories under tmp_path."""
    def _make(name, client_name="dockhost-client"):
        return write_cert_dir(tmp_path / name, client_name=client_name)
    return _make


@pytest.fixture
def clean_docker_env(monkeypatch):
    """Remove Docker environment variables for the test."""
    for var in ("DOCKER_HOST", "DOCKER_CERT_PATH", "DOCKER_TLS_VERIFY", "DOCKHOST_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def inspection_for(directory, uri="tcp://192.168.99.100:2376", require_tls=True):
    """MachineInspection pointing at the PEM files in directory."""
    directory = Path(directory)
    return MachineInspection(
        require_tls=require_tls,
        uri=uri,
        ca_cert_path=str(directory / "ca.pem"),
        client_cert_path=str(directory / "cert.pem"),
        client_key_path=str(directory / "key.pem"),
    )


class FakeMachineClient:
    """Scripted docker-machine client.

    ``statuses`` and ``inspections`` are consumed in order; the last entry
    repeats once the list is exhausted.
    """

    def __init__(self, statuses, inspections=(), start_ok=True, stop_ok=True, delete_ok=True):
        self.statuses = list(statuses)
        self.inspections = list(inspections)
        self.start_ok = start_ok
        self.stop_ok = stop_ok
        self.delete_ok = delete_ok
        self.calls = []

    @staticmethod
    def _next(items):
        return items.pop(0) if len(items) > 1 else items[0]

    def status(self, name):
        self.calls.append(("status", name))
        return self._next(self.statuses)

    def inspect(self, name):
        self.calls.append(("inspect", name))
        if not self.inspections:
            return CommandResult(success=False, message="inspect failed")
        return CommandResult(success=True, data=self._next(self.inspections))

    def start(self, name):
        self.calls.append(("start", name))
        return CommandResult(success=self.start_ok, message="" if self.start_ok else "VM failed to boot")

    def stop(self, name):
        self.calls.append(("stop", name))
        return CommandResult(success=self.stop_ok, message="" if self.stop_ok else "stop failed")

    def delete(self, name, force=False):
        self.calls.append(("delete", name, force))
        return CommandResult(success=self.delete_ok, message="" if self.delete_ok else "rm failed")

    def called(self, operation):
        return [call for call in self.calls if call[0] == operation]


class FakeDockerClient:
    """Scripted docker CLI client recording ps/inspect calls."""

    def __init__(self, containers=None, ps_ok=True, missing=()):
        self.containers = dict(containers or {})
        self.ps_ok = ps_ok
        self.missing = set(missing)
        self.ps_calls = []
        self.inspect_calls = []

    def ps(self, endpoint, cert_paths=None, all=True, filter=None, require_tls=False):
        self.ps_calls.append({
            'endpoint': endpoint,
            'cert_paths': cert_paths,
            'all': all,
            'filter': filter,
            'require_tls': require_tls,
        })
        if not self.ps_ok:
            return CommandResult(success=False, message="Cannot connect to the Docker daemon")
        return CommandResult(success=True, data=list(self.containers))

    def inspect_container(self, endpoint, container_id, cert_paths=None, require_tls=False):
        self.inspect_calls.append((endpoint, container_id, cert_paths))
        if container_id in self.missing:
            return CommandResult(success=False, message=f"No such container: {container_id}")
        return CommandResult(success=True, data={'id': container_id, 'name': self.containers[container_id]})


@pytest.fixture
def fake_machine_factory():
    return FakeMachineClient


@pytest.fixture
def fake_docker():
    return FakeDockerClient({
        'a1b2c3d4e5f6': 'web',
        'f6e5d4c3b2a1': 'db',
    })


@pytest.fixture
def stopped_machine(cert_dir):
    """Machine that reports Stopped and inspects to cert_dir."""
    return FakeMachineClient(
        statuses=[LifecycleState.STOPPED],
        inspections=[inspection_for(cert_dir)],
    )


@pytest.fixture
def inspection():
    """Factory building a MachineInspection for a certificate directory."""
    return inspection_for


@pytest.fixture
def fake_docker_factory():
    return FakeDockerClient


@pytest.fixture
def isolated_logging(monkeypatch):
    """Let a test configure file logging, then restore the dockhost logger."""
    root_logger = logging.getLogger("dockhost")
    handlers = list(root_logger.handlers)
    level = root_logger.level
    monkeypatch.setattr("dockhost.core.logger._file_logging_configured", False)

    yield root_logger

    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
