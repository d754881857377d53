"""Read-only inspection of a deployment's state."""

import logging

from .config import BootstrapConfig
from .errors import RuntimeUnavailable
from .models.schemas import DeploymentState, Variant
from .runtime import DockerRuntime
from .variants import GNARK_SERVER_NAME, build_manifest

logger = logging.getLogger("PICO.Deploy.Status")


def inspect_state(config: BootstrapConfig, variant: Variant, runtime: DockerRuntime) -> DeploymentState:
    """Infer the deployment state from the filesystem and the Docker daemon.

    If the daemon is unreachable, image and service checks report False.
    """
    state = DeploymentState(
        config_present=config.env_path.is_file(),
        assets_present=not build_manifest(config.asset_base_url).missing(config.assets_path),
        data_dir_present=config.data_path.is_dir(),
    )
    try:
        state.image_present = runtime.has_image(variant.image)
        state.services_running = runtime.running([variant.container_name, GNARK_SERVER_NAME])
    except RuntimeUnavailable as e:
        logger.warning("%s", e)
    return state
