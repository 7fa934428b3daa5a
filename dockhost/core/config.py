"""dockhost runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class DockhostConfig:
    """Runtime configuration for the docker and docker-machine clients.

    Attributes:
        docker_binary: Docker CLI executable (default: docker)
        machine_binary: docker-machine CLI executable (default: docker-machine)
        command_timeout: Timeout in seconds for a single CLI call (default: 120)
        machine_engine_port: Engine port used when a machine URL must be
            derived from its driver IP address (default: 2376)
    """

    docker_binary: str = "docker"
    machine_binary: str = "docker-machine"
    command_timeout: int = 120  # machine start can take a while
    machine_engine_port: int = 2376

    @classmethod
    def from_env(cls) -> "DockhostConfig":
        """Create config from environment variables.

        Environment variables:
            DOCKHOST_DOCKER_BIN: Docker CLI executable
            DOCKHOST_MACHINE_BIN: docker-machine CLI executable
            DOCKHOST_COMMAND_TIMEOUT: CLI timeout in seconds
            DOCKHOST_ENGINE_PORT: Engine port for derived machine URLs

        Returns:
            DockhostConfig instance with values from environment or defaults
        """
        return cls(
            docker_binary=os.getenv("DOCKHOST_DOCKER_BIN", cls.docker_binary),
            machine_binary=os.getenv("DOCKHOST_MACHINE_BIN", cls.machine_binary),
            command_timeout=int(
                os.getenv("DOCKHOST_COMMAND_TIMEOUT", cls.command_timeout)
            ),
            machine_engine_port=int(
                os.getenv("DOCKHOST_ENGINE_PORT", cls.machine_engine_port)
            ),
        )


# Global config instance (can be overridden)
_config: Optional[DockhostConfig] = None


def get_config() -> DockhostConfig:
    """Get the global dockhost configuration.

    Returns:
        DockhostConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = DockhostConfig.from_env()
    return _config


def set_config(config: Optional[DockhostConfig]) -> None:
    """Override the global configuration (None resets to environment)."""
    global _config
    _config = config
