"""
GPU access gate for the GPU variant.

Probing can give false negatives on some hosts, so a failed probe only
warns and asks the operator whether to carry on.
"""

import logging

from .confirm import Confirmer
from .errors import HardwareUnavailable
from .runtime import DockerRuntime

logger = logging.getLogger("PICO.Deploy.Hardware")

NVIDIA_RUNTIME = "nvidia"


def check_hardware(
    runtime: DockerRuntime,
    confirm: Confirmer,
    probe_image: str,
    probe_command: str = "nvidia-smi",
) -> bool:
    """Check that containers can reach the GPU.

    Returns:
        True if the probe succeeded, False if the operator chose to
        continue without verified GPU access.

    Raises:
        HardwareUnavailable: the probe failed and the operator declined.
    """
    logger.info("Checking NVIDIA Docker runtime...")

    has_runtime = NVIDIA_RUNTIME in runtime.runtimes()
    if not has_runtime:
        logger.warning("Docker daemon does not advertise the %s runtime", NVIDIA_RUNTIME)

    probe_ok = runtime.probe_gpu(probe_image, probe_command)
    if has_runtime and probe_ok:
        logger.info("GPU access verified")
        return True

    logger.warning("NVIDIA Docker runtime may not be properly configured")
    logger.warning("The service requires GPU access. Please install NVIDIA Container Toolkit.")
    if confirm("Continue anyway?"):
        logger.warning("Continuing without verified GPU access")
        return False

    raise HardwareUnavailable(
        "GPU access could not be verified",
        hint=(
            "Install the NVIDIA Container Toolkit, then check "
            f"`docker run --rm --gpus all {probe_image} {probe_command}`"
        ),
    )
