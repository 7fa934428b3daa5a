"""Enumerate containers on a resolved Docker host."""
from typing import List, Optional

from dockhost.core.errors import ContainerQueryError
from dockhost.core.logger import get_logger
from dockhost.models.host import ContainerHandle, HostConnection
from dockhost.services.docker import DockerClient

logger = get_logger(__name__)


class ContainerEnumerator:
    """Lists containers through the docker CLI and wraps them in handles.

    Nothing is cached: each call queries the daemon with the connection it
    is given and returns fresh handles.
    """

    def __init__(self, docker: Optional[DockerClient] = None):
        self.docker = docker or DockerClient()

    def list_containers(
        self,
        connection: Optional[HostConnection],
        include_stopped: bool = True,
        filter: Optional[str] = None,
    ) -> List[ContainerHandle]:
        """List containers, returning an empty list when the query fails.

        A failed query and a host without containers look the same here;
        use try_list_containers() to tell them apart.

        Args:
            connection: Current host connection (None yields no containers)
            include_stopped: Include containers that are not running
            filter: Filter expression forwarded verbatim to ``docker ps``

        Returns:
            List of ContainerHandle objects
        """
        try:
            return self._query(connection, include_stopped, filter, strict=False)
        except ContainerQueryError as e:
            logger.warning(f"Container query failed, reporting no containers: {e}")
            return []

    def try_list_containers(
        self,
        connection: Optional[HostConnection],
        include_stopped: bool = True,
        filter: Optional[str] = None,
    ) -> List[ContainerHandle]:
        """List containers, raising ContainerQueryError when any query fails."""
        return self._query(connection, include_stopped, filter, strict=True)

    def _query(
        self,
        connection: Optional[HostConnection],
        include_stopped: bool,
        filter: Optional[str],
        strict: bool,
    ) -> List[ContainerHandle]:
        if connection is None or not connection.endpoint_uri:
            raise ContainerQueryError("Host has no resolved connection")

        cert_paths = connection.cert_paths()
        result = self.docker.ps(
            connection.endpoint_uri,
            cert_paths,
            all=include_stopped,
            filter=filter or None,
            require_tls=connection.require_tls,
        )
        if not result.success:
            raise ContainerQueryError(
                f"Could not list containers on {connection.endpoint_uri}: {result.message}"
            )

        handles = []
        for container_id in result.data or []:
            info = self.docker.inspect_container(
                connection.endpoint_uri,
                container_id,
                cert_paths,
                require_tls=connection.require_tls,
            )
            if not info.success:
                if strict:
                    raise ContainerQueryError(
                        f"Could not inspect container {container_id}: {info.message}"
                    )
                # Gone between ps and inspect
                logger.warning(f"Skipping container {container_id}: {info.message}")
                continue

            handles.append(ContainerHandle(
                id=container_id,
                name=info.data.get('name', ''),
                connection=connection,
            ))

        return handles
