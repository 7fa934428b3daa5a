"""Configuration loading for dockhost."""
from dockhost.config.loader import HostDefinition, HostsConfigLoader, find_config

__all__ = ['HostDefinition', 'HostsConfigLoader', 'find_config']
