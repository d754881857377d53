"""
Service launcher.

Brings the compose topology up in detached mode. Earlier stages are left
as they are on failure; every one of them is safe to re-run.
"""

import logging
from pathlib import Path

from .errors import OrchestrationFailed
from .host import HostTools
from .models.schemas import ComposeCommand, LaunchReport, Variant
from .variants import GNARK_SERVER_NAME

logger = logging.getLogger("PICO.Deploy.Launcher")


def launch_services(
    host: HostTools,
    compose: ComposeCommand,
    deploy_dir: Path,
    variant: Variant,
) -> LaunchReport:
    """Run `<compose> up -d` in deploy_dir.

    Raises:
        OrchestrationFailed: compose exited non-zero.
    """
    logger.info("Starting %s...", variant.title)
    result = host.run(compose.argv("up", "-d"), cwd=deploy_dir, capture=False)

    if result.returncode != 0:
        logger.error("%s exited with status %d", compose.display("up", "-d"), result.returncode)
        raise OrchestrationFailed(
            "Failed to start service",
            hint=f"Check logs for errors:\n  {compose.display('logs')}",
        )

    return LaunchReport(
        variant=variant,
        services=[
            f"{variant.container_name} ({variant.description})",
            f"{GNARK_SERVER_NAME} (on-chain proofs)",
        ],
        logs_command=compose.display("logs", "-f"),
        status_command=compose.display("ps"),
        stop_command=compose.display("down"),
        shell_command=f"docker exec -it {variant.container_name} bash",
    )
