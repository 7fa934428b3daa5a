"""YAML loader for named Docker host definitions."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dockhost.core.errors import ConfigurationError

# Default config search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./dockhost.yml",
    str(Path.home() / ".dockhost" / "dockhost.yml"),
]

HOST_KEYS = {'native', 'docker_uri', 'cert_path'}


@dataclass
class HostDefinition:
    """A named host as declared in dockhost.yml."""
    name: str
    native: bool = False
    docker_uri: Optional[str] = None
    cert_path: Optional[str] = None


def find_config(config_path: Optional[str] = None) -> Optional[str]:
    """Locate the active host definitions file, if any."""
    if config_path:
        return config_path

    if env_config := os.environ.get("DOCKHOST_CONFIG"):
        return env_config

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return path

    return None


class HostsConfigLoader:
    """Loads host definitions from a YAML file.

    Example::

        hosts:
          local:
            native: true
            docker_uri: tcp://127.0.0.1:2376
            cert_path: ~/.docker
          dev: {}
    """

    def __init__(self, config_path: str = "dockhost.yml"):
        self.config_path = Path(config_path)
        self.hosts: Dict[str, HostDefinition] = {}

    def load(self) -> Dict[str, HostDefinition]:
        """Load and validate host definitions from file."""
        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not raw:
            raise ConfigurationError(f"Config file is empty: {self.config_path}")

        if not isinstance(raw, dict) or not isinstance(raw.get('hosts'), dict):
            raise ConfigurationError(f"{self.config_path} must contain a 'hosts' mapping")

        self.hosts = {
            str(name): self._parse_host(str(name), entry)
            for name, entry in raw['hosts'].items()
        }
        return self.hosts

    def get(self, name: str) -> Optional[HostDefinition]:
        if not self.hosts:
            self.load()
        return self.hosts.get(name)

    def _parse_host(self, name: str, entry: Any) -> HostDefinition:
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Host '{name}' must be a mapping")

        unknown = set(entry) - HOST_KEYS
        if unknown:
            raise ConfigurationError(
                f"Host '{name}' has unknown keys: {', '.join(sorted(unknown))}"
            )

        if 'native' in entry and not isinstance(entry['native'], bool):
            raise ConfigurationError(f"Host '{name}': 'native' must be true or false")

        cert_path = entry.get('cert_path')
        if cert_path:
            cert_path = os.path.expanduser(str(cert_path))

        return HostDefinition(
            name=name,
            native=entry.get('native', False),
            docker_uri=entry.get('docker_uri'),
            cert_path=cert_path,
        )
