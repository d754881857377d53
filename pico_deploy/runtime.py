"""
Docker runtime access for pico-deploy.

Wraps the Docker SDK for the read-mostly operations the bootstrap needs:
image lookups, daemon info, container state and the throwaway GPU probe.
"""

import logging
from typing import Dict, List, Optional

import docker
from docker.errors import APIError, ContainerError, DockerException, ImageNotFound, NotFound
from docker.types import DeviceRequest
from requests.exceptions import ConnectionError as RequestsConnectionError

from .errors import RuntimeUnavailable

logger = logging.getLogger("PICO.Deploy.Runtime")


def _connection_lost(e: Exception) -> RuntimeUnavailable:
    logger.error(f"Lost connection to Docker: {e}")
    return RuntimeUnavailable(
        f"Lost connection to the Docker daemon: {e}",
        hint="Start the Docker daemon and make sure your user can access it",
    )


class DockerRuntime:
    """Lazy Docker SDK client with the handful of calls the stages use."""

    def __init__(self, client: Optional[docker.DockerClient] = None):
        self._client = client

    @property
    def client(self) -> docker.DockerClient:
        """Get or create Docker client."""
        if self._client is None:
            try:
                self._client = docker.from_env()
            except DockerException as e:
                logger.error(f"Failed to connect to Docker: {e}")
                raise RuntimeUnavailable(
                    f"Cannot connect to the Docker daemon: {e}",
                    hint="Start the Docker daemon and make sure your user can access it",
                ) from e
        return self._client

    def has_image(self, name: str) -> bool:
        """True if an image with this tag is in the local image store."""
        try:
            self.client.images.get(name)
            return True
        except ImageNotFound:
            return False
        except RequestsConnectionError as e:
            raise _connection_lost(e) from e
        except APIError as e:
            raise RuntimeUnavailable(
                f"Docker refused image lookup for {name}: {e}",
                hint="Check `docker info` for daemon errors",
            ) from e

    def runtimes(self) -> Dict[str, dict]:
        """Container runtimes advertised by the daemon."""
        try:
            return self.client.info().get("Runtimes") or {}
        except RequestsConnectionError as e:
            raise _connection_lost(e) from e
        except APIError as e:
            logger.warning(f"Could not read daemon info: {e}")
            return {}

    def probe_gpu(self, image: str, command: str) -> bool:
        """Run command in a throwaway container with all GPUs attached.

        Returns True if the container exited 0.
        """
        try:
            self.client.containers.run(
                image,
                command,
                remove=True,
                device_requests=[DeviceRequest(count=-1, capabilities=[["gpu"]])],
            )
            return True
        except ContainerError as e:
            logger.warning(f"GPU probe exited with status {e.exit_status}")
            return False
        except RequestsConnectionError as e:
            raise _connection_lost(e) from e
        except (ImageNotFound, APIError) as e:
            logger.warning(f"GPU probe could not run: {e}")
            return False

    def container_state(self, name: str) -> Optional[str]:
        """Lower-cased container status, or None if no such container."""
        try:
            return self.client.containers.get(name).status.lower()
        except NotFound:
            return None
        except RequestsConnectionError as e:
            raise _connection_lost(e) from e
        except APIError as e:
            logger.warning(f"Error getting container state for {name}: {e}")
            return None

    def running(self, names: List[str]) -> bool:
        """True if every named container is running."""
        return all(self.container_state(n) == "running" for n in names)
