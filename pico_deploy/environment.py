"""
Environment file bootstrap.

The proving service reads its settings from a .env file in the deployment
directory. On first run it is copied verbatim from env.example and the
operator is given a chance to review it. An existing .env is never touched.
"""

import logging
import shutil
from pathlib import Path

from dotenv import dotenv_values
from pydantic import ValidationError

from .confirm import Confirmer
from .errors import InvalidConfiguration, MissingTemplate, OperatorAborted
from .models.schemas import EnvironmentSettings

logger = logging.getLogger("PICO.Deploy.Environment")


def ensure_environment(
    deploy_dir: Path,
    confirm: Confirmer,
    env_name: str = ".env",
    template_name: str = "env.example",
) -> bool:
    """Make sure the deployment has an environment file.

    Returns:
        True if the file was created from the template on this run.

    Raises:
        MissingTemplate: neither the env file nor its template exists.
        OperatorAborted: the operator did not confirm after review.
    """
    deploy_dir = Path(deploy_dir)
    env_path = deploy_dir / env_name
    template_path = deploy_dir / template_name

    if env_path.exists():
        logger.debug("Found %s, leaving it untouched", env_path)
        return False

    logger.warning("No %s file found. Creating from template...", env_name)
    if not template_path.is_file():
        raise MissingTemplate(
            f"{template_name} not found in {deploy_dir}",
            hint=f"Restore {template_name} from the release bundle, or create {env_name} by hand",
        )

    shutil.copyfile(template_path, env_path)
    logger.info("Created %s from %s", env_path, template_name)

    print(f"Please review and edit {env_path} before starting the service")
    if not confirm(f"Continue with the settings in {env_name}?", default=True):
        raise OperatorAborted(
            f"Stopped after creating {env_name} for review",
            hint=f"Edit {env_path}, then re-run; it will not be overwritten",
        )
    return True


def load_environment(env_path: Path) -> EnvironmentSettings:
    """Parse and validate the environment file.

    Raises:
        InvalidConfiguration: a recognized key holds a malformed value.
    """
    values = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
    try:
        settings = EnvironmentSettings.model_validate(values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidConfiguration(
            f"Invalid settings in {env_path}: {problems}",
            hint=f"Fix the listed keys in {env_path} (compare with env.example)",
        ) from e

    logger.info(
        "Environment: GRPC_ADDR=%s PROVER_COUNT=%d VK_VERIFICATION=%s RUST_LOG=%s",
        settings.grpc_addr, settings.prover_count, settings.vk_verification, settings.rust_log,
    )
    return settings
