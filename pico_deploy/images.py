"""Gate on the proving service image being loaded locally. Never builds or pulls."""

import logging

from .errors import ImageNotLoaded
from .models.schemas import Variant
from .runtime import DockerRuntime

logger = logging.getLogger("PICO.Deploy.Images")


def check_image(runtime: DockerRuntime, variant: Variant) -> None:
    """Raise ImageNotLoaded unless variant.image is in the local image store."""
    if not runtime.has_image(variant.image):
        raise ImageNotLoaded(
            f"Docker image '{variant.image}' not found",
            hint=f"Please load the Docker image first:\n  docker load -i {variant.image_archive}",
        )
    logger.info("Found image %s", variant.image)
