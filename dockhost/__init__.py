"""dockhost - one contract for native and docker-machine managed Docker hosts."""

__version__ = "0.1.0"
