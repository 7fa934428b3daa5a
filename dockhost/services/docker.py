"""Docker CLI client for listing and inspecting containers on a host."""
import json
from typing import List, Optional

from dockhost.core.config import DockhostConfig, get_config
from dockhost.core.logger import get_logger
from dockhost.models.host import CertificatePaths
from dockhost.services.command import CommandResult, run_command

logger = get_logger(__name__)


class DockerClient:
    """
    Run docker commands against an explicit endpoint.

    Every call names the daemon and its TLS material explicitly, so the
    caller's environment (DOCKER_HOST and friends) never leaks in.
    """

    def __init__(self, config: Optional[DockhostConfig] = None, mock: bool = False):
        self.config = config or get_config()
        self.mock = mock

    def _base_command(
        self,
        endpoint: str,
        cert_paths: Optional[CertificatePaths],
        require_tls: bool,
    ) -> List[str]:
        cmd = [self.config.docker_binary, '--host', endpoint]

        if require_tls:
            cmd.append('--tlsverify')
        elif cert_paths:
            cmd.append('--tls')

        if cert_paths:
            cmd.extend([
                '--tlscacert', cert_paths.ca_certificate,
                '--tlscert', cert_paths.client_certificate,
                '--tlskey', cert_paths.client_key,
            ])
        return cmd

    def ps(
        self,
        endpoint: str,
        cert_paths: Optional[CertificatePaths] = None,
        all: bool = True,
        filter: Optional[str] = None,
        require_tls: bool = False,
    ) -> CommandResult:
        """
        List container ids.

        Args:
            endpoint: Daemon address (tcp://host:2376)
            cert_paths: TLS material for the daemon
            all: Include stopped containers
            filter: Filter expression passed through as-is
            require_tls: Verify the daemon certificate

        Returns:
            CommandResult whose ``data`` is a list of full container ids
        """
        cmd = self._base_command(endpoint, cert_paths, require_tls)
        cmd.extend(['ps', '--quiet', '--no-trunc'])
        if all:
            cmd.append('--all')
        if filter:
            cmd.extend(['--filter', filter])

        if self.mock:
            logger.info(f"MOCK: Would run {' '.join(cmd)}")
            return CommandResult(success=True, command=cmd, data=[
                '3f4e8a9c2b1d7e6f',
                '9a8b7c6d5e4f3a2b',
            ])

        result = run_command(cmd, timeout=self.config.command_timeout)
        if result.success:
            result.data = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        return result

    def inspect_container(
        self,
        endpoint: str,
        container_id: str,
        cert_paths: Optional[CertificatePaths] = None,
        require_tls: bool = False,
    ) -> CommandResult:
        """
        Inspect a single container.

        Returns:
            CommandResult whose ``data`` is a dict with name, id, state, image
        """
        cmd = self._base_command(endpoint, cert_paths, require_tls)
        cmd.extend(['container', 'inspect', container_id])

        if self.mock:
            logger.info(f"MOCK: Would run {' '.join(cmd)}")
            return CommandResult(success=True, command=cmd, data={
                'id': container_id,
                'name': f'mock-{container_id[:6]}',
                'state': 'running',
                'image': 'alpine:latest',
            })

        result = run_command(cmd, timeout=self.config.command_timeout)
        if not result.success:
            return result

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            return CommandResult(
                success=False,
                message=f"Unparseable inspect output for {container_id}: {e}",
                command=cmd,
            )

        info = payload[0] if isinstance(payload, list) and payload else payload
        if not isinstance(info, dict):
            return CommandResult(success=False, message=f"No such container: {container_id}", command=cmd)

        result.data = {
            'id': info.get('Id', container_id),
            'name': (info.get('Name') or '').lstrip('/'),
            'state': (info.get('State') or {}).get('Status', ''),
            'image': (info.get('Config') or {}).get('Image', ''),
        }
        return result
