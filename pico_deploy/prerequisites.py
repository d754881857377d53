"""
Host prerequisite checks.

Docker must be installed, plus either the standalone docker-compose or the
docker compose plugin. The selected form is returned to the caller and
threaded through every later stage.
"""

import logging

from .errors import MissingDependency
from .host import HostTools
from .models.schemas import ComposeCommand

logger = logging.getLogger("PICO.Deploy.Prerequisites")


def _plugin_available(host: HostTools) -> bool:
    result = host.run(ComposeCommand.integrated().argv("version"))
    return result.returncode == 0


def check_prerequisites(host: HostTools) -> ComposeCommand:
    """Verify docker and compose are installed; return the compose command to use.

    The standalone docker-compose binary is preferred when both are present.

    Raises:
        MissingDependency: docker, or both compose forms, are missing.
    """
    if host.which("docker") is None:
        raise MissingDependency(
            "Docker is not installed",
            hint="Install Docker Engine: https://docs.docker.com/engine/install/",
        )

    if host.which("docker-compose") is not None:
        compose = ComposeCommand.standalone()
    elif _plugin_available(host):
        compose = ComposeCommand.integrated()
    else:
        raise MissingDependency(
            "Docker Compose is not installed",
            hint="Install the compose plugin: https://docs.docker.com/compose/install/",
        )

    logger.info("Using compose command: %s", compose)
    return compose
