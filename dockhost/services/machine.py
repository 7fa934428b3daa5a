"""docker-machine CLI client (start, stop, remove, status, inspect)."""
import json
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from dockhost.core.config import DockhostConfig, get_config
from dockhost.core.logger import get_logger
from dockhost.models.host import LifecycleState
from dockhost.services.command import CommandResult, run_command

logger = get_logger(__name__)

# docker-machine prints: Host does not exist: "<name>"
MACHINE_NOT_FOUND_MARKER = "host does not exist"


@dataclass(frozen=True)
class MachineInspection:
    """Connection details reported by ``docker-machine inspect``."""
    require_tls: bool
    uri: str
    ca_cert_path: str
    client_cert_path: str
    client_key_path: str


class MachineClient:
    """Thin wrapper over the docker-machine command line."""

    def __init__(self, config: Optional[DockhostConfig] = None, mock: bool = False):
        self.config = config or get_config()
        self.mock = mock

    def _run(self, args: List[str]) -> CommandResult:
        cmd = [self.config.machine_binary] + args
        if self.mock:
            logger.info(f"MOCK: Would run {' '.join(cmd)}")
            return CommandResult(success=True, command=cmd)
        return run_command(cmd, timeout=self.config.command_timeout)

    def start(self, name: str) -> CommandResult:
        """Start a machine and wait for it to come up."""
        result = self._run(["start", name])
        if not result.success:
            logger.error(f"docker-machine start {name} failed: {result.message}")
        return result

    def stop(self, name: str) -> CommandResult:
        """Stop a running machine."""
        result = self._run(["stop", name])
        if not result.success:
            logger.error(f"docker-machine stop {name} failed: {result.message}")
        return result

    def delete(self, name: str, force: bool = False) -> CommandResult:
        """Remove a machine (``rm -y``, plus ``-f`` when forced)."""
        args = ["rm", "-y"]
        if force:
            args.append("-f")
        args.append(name)

        result = self._run(args)
        if not result.success:
            logger.error(f"docker-machine rm {name} failed: {result.message}")
        return result

    def status(self, name: str) -> LifecycleState:
        """Query the machine's run state.

        Returns:
            Parsed state; REMOVED when the machine does not exist and
            UNKNOWN when the status query itself fails for another reason
        """
        if self.mock:
            logger.info(f"MOCK: Would query status of {name}")
            return LifecycleState.STOPPED

        result = self._run(["status", name])
        if not result.success:
            if MACHINE_NOT_FOUND_MARKER in result.message.lower():
                return LifecycleState.REMOVED
            logger.warning(f"Could not query status of {name}: {result.message}")
            return LifecycleState.UNKNOWN

        return LifecycleState.parse(result.stdout)

    def url(self, name: str) -> Optional[str]:
        """Return the engine URL of a running machine, or None."""
        result = self._run(["url", name])
        if not result.success or not result.stdout:
            return None
        return result.stdout.splitlines()[0].strip()

    def inspect(self, name: str) -> CommandResult:
        """Inspect a machine's TLS settings, certificate paths and URL.

        Returns:
            CommandResult whose ``data`` is a MachineInspection on success
        """
        if self.mock:
            logger.info(f"MOCK: Would inspect {name}")
            base = f"/root/.docker/machine/machines/{name}"
            return CommandResult(success=True, data=MachineInspection(
                require_tls=True,
                uri="tcp://192.168.99.100:2376",
                ca_cert_path=f"{base}/ca.pem",
                client_cert_path=f"{base}/cert.pem",
                client_key_path=f"{base}/key.pem",
            ))

        result = self._run(["inspect", name])
        if not result.success:
            return result

        try:
            info = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            return CommandResult(
                success=False,
                message=f"Unparseable inspect output for {name}: {e}",
                command=result.command,
            )

        host_options = info.get("HostOptions") or {}
        engine = host_options.get("EngineOptions") or {}
        auth = host_options.get("AuthOptions") or {}

        uri = self.url(name) or self._uri_from_driver(info)
        result.data = MachineInspection(
            require_tls=bool(engine.get("TlsVerify", False)),
            uri=uri or "",
            ca_cert_path=auth.get("CaCertPath", ""),
            client_cert_path=auth.get("ClientCertPath", ""),
            client_key_path=auth.get("ClientKeyPath", ""),
        )
        return result

    def _uri_from_driver(self, info: dict) -> Optional[str]:
        """Derive ``tcp://ip:port`` from the driver section for stopped machines."""
        ip = (info.get("Driver") or {}).get("IPAddress")
        if not ip:
            return None
        if "://" in ip:
            ip = urlparse(ip).hostname or ip
        return f"tcp://{ip}:{self.config.machine_engine_port}"
