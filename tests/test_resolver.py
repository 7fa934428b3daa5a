"""Tests for native and docker-machine connection resolution."""
import pytest

from dockhost.core.errors import CertificateNotFoundError, ConfigurationError, OperationFailedError
from dockhost.models.host import LifecycleState
from dockhost.services.hosts.resolver import resolve_machine, resolve_native


class TestNativeResolution:
    """Resolution from arguments and DOCKER_* environment variables."""

    def test_environment(self, cert_dir):
        env = {
            'DOCKER_HOST': 'tcp://127.0.0.1:2376',
            'DOCKER_CERT_PATH': str(cert_dir),
            'DOCKER_TLS_VERIFY': '1',
        }

        connection = resolve_native('local', environ=env)

        assert connection.endpoint_uri == 'tcp://127.0.0.1:2376'
        assert connection.require_tls is True
        assert connection.ca_certificate_path == str(cert_dir / 'ca.pem')
        assert connection.client_certificate_path == str(cert_dir / 'cert.pem')
        assert connection.client_key_path == str(cert_dir / 'key.pem')
        assert connection.ca_certificate is not None
        assert connection.client_certificate.subject == 'CN=dockhost-client'

    def test_arguments_override_environment(self, cert_dir, make_cert_dir):
        other = make_cert_dir('other')
        env = {'DOCKER_HOST': 'tcp://ignored:2376', 'DOCKER_CERT_PATH': str(other)}

        connection = resolve_native(
            'local', docker_uri='tcp://10.0.0.5:2376', cert_path=str(cert_dir), environ=env
        )

        assert connection.endpoint_uri == 'tcp://10.0.0.5:2376'
        assert connection.ca_certificate_path == str(cert_dir / 'ca.pem')

    @pytest.mark.parametrize('value', ['0', 'true', 'yes', ''])
    def test_tls_only_for_literal_one(self, cert_dir, value):
        env = {'DOCKER_TLS_VERIFY': value}

        connection = resolve_native('local', 'tcp://h:2376', str(cert_dir), environ=env)

        assert connection.require_tls is False

    def test_tls_absent(self, cert_dir):
        connection = resolve_native('local', 'tcp://h:2376', str(cert_dir), environ={})

        assert connection.require_tls is False

    @pytest.mark.parametrize('env, missing', [
        ({'DOCKER_CERT_PATH': '/certs'}, 'DOCKER_HOST'),
        ({'DOCKER_HOST': 'tcp://h:2376'}, 'DOCKER_CERT_PATH'),
        ({'DOCKER_HOST': '', 'DOCKER_CERT_PATH': '/certs'}, 'DOCKER_HOST'),
        ({}, 'DOCKER_HOST'),
    ])
    def test_missing_configuration(self, env, missing):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_native('local', environ=env)

        assert missing in str(exc_info.value)
        assert 'local' in str(exc_info.value)

    def test_missing_certificates(self, tmp_path):
        with pytest.raises(CertificateNotFoundError):
            resolve_native('local', 'tcp://h:2376', str(tmp_path), environ={})


class TestMachineResolution:
    """Resolution through docker-machine status and inspect."""

    def test_stopped_machine_is_inspected(self, stopped_machine, cert_dir):
        state, connection = resolve_machine('dev', stopped_machine)

        assert state == LifecycleState.STOPPED
        assert connection.endpoint_uri == 'tcp://192.168.99.100:2376'
        assert connection.require_tls is True
        assert connection.ca_certificate_path == str(cert_dir / 'ca.pem')
        assert connection.client_certificate is not None

    def test_running_with_previous_short_circuits(self, fake_machine_factory, inspection, cert_dir):
        machine = fake_machine_factory([LifecycleState.STOPPED, LifecycleState.RUNNING], [inspection(cert_dir)])
        _, previous = resolve_machine('dev', machine)

        state, connection = resolve_machine('dev', machine, previous=previous)

        assert state == LifecycleState.RUNNING
        assert connection is previous
        assert len(machine.called('inspect')) == 1

    def test_running_without_previous_is_inspected(self, fake_machine_factory, inspection, cert_dir):
        machine = fake_machine_factory([LifecycleState.RUNNING], [inspection(cert_dir)])

        state, connection = resolve_machine('dev', machine)

        assert state == LifecycleState.RUNNING
        assert connection is not None

    def test_refresh_forces_inspect(self, fake_machine_factory, inspection, cert_dir, make_cert_dir):
        fresh = make_cert_dir('fresh')
        machine = fake_machine_factory(
            [LifecycleState.RUNNING],
            [inspection(cert_dir), inspection(fresh, uri='tcp://192.168.99.101:2376')],
        )
        _, previous = resolve_machine('dev', machine)

        _, connection = resolve_machine('dev', machine, previous=previous, refresh=True)

        assert connection is not previous
        assert connection.endpoint_uri == 'tcp://192.168.99.101:2376'
        assert connection.ca_certificate_path == str(fresh / 'ca.pem')

    def test_removed_machine_not_inspected(self, fake_machine_factory):
        machine = fake_machine_factory([LifecycleState.REMOVED])

        state, connection = resolve_machine('gone', machine)

        assert state == LifecycleState.REMOVED
        assert connection is None
        assert machine.called('inspect') == []

    def test_inspect_failure(self, fake_machine_factory):
        machine = fake_machine_factory([LifecycleState.STOPPED])

        with pytest.raises(OperationFailedError) as exc_info:
            resolve_machine('dev', machine)

        assert 'dev' in str(exc_info.value)

    def test_paths_kept_without_loading_certificates(self, fake_machine_factory, inspection, tmp_path):
        machine = fake_machine_factory([LifecycleState.STOPPED], [inspection(tmp_path / 'absent')])

        state, connection = resolve_machine('dev', machine, load_certificates=False)

        assert state == LifecycleState.STOPPED
        assert connection.ca_certificate_path == str(tmp_path / 'absent' / 'ca.pem')
        assert connection.ca_certificate is None
        assert connection.client_certificate is None

    def test_missing_certificates_fail_when_loading(self, fake_machine_factory, inspection, tmp_path):
        machine = fake_machine_factory([LifecycleState.STOPPED], [inspection(tmp_path / 'absent')])

        with pytest.raises(CertificateNotFoundError):
            resolve_machine('dev', machine)
