"""
Configuration management for pico-deploy.

Loads settings from environment variables and an optional YAML file
(``pico-deploy.yaml`` in the deployment directory).
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .variants import DEFAULT_ASSET_BASE_URL, GNARK_SERVER_NAME

CONFIG_FILENAME = "pico-deploy.yaml"


class BootstrapConfig(BaseSettings):
    """Configuration for a bootstrap run."""

    model_config = SettingsConfigDict(env_prefix="PICO_DEPLOY_", extra="ignore")

    # Layout (relative paths resolve against deploy_dir)
    deploy_dir: Path = Field(
        default=Path("."),
        description="Deployment directory holding .env and docker-compose.yml"
    )
    env_file: str = Field(default=".env", description="Environment file name")
    env_template: str = Field(default="env.example", description="Environment template name")
    compose_file: str = Field(default="docker-compose.yml", description="Compose file name")
    assets_dir: Path = Field(
        default=Path("../gnark_downloads/kb"),
        description="Directory for gnark verification files"
    )
    data_dir: Path = Field(
        default=Path("../data"),
        description="Persistent data directory bind-mounted into the engine"
    )

    # Assets
    asset_base_url: str = Field(
        default=DEFAULT_ASSET_BASE_URL,
        description="Base URL the gnark files are fetched from"
    )
    download_timeout_seconds: float = Field(
        default=3600.0,
        description="Upper bound for a single file transfer"
    )
    allow_missing_assets: bool = Field(
        default=False,
        description="Continue without gnark files if the download is declined"
    )

    # Hardware probe
    gpu_probe_image: str = Field(
        default="nvidia/cuda:12.8.1-runtime-ubuntu22.04",
        description="Throwaway image used to probe GPU access"
    )
    gpu_probe_command: str = Field(default="nvidia-smi", description="GPU probe command")

    # Topology
    gnark_image: str = Field(
        default=f"{GNARK_SERVER_NAME}:latest",
        description="gnark verification-key server image"
    )
    grpc_host_port: Optional[int] = Field(
        default=None,
        description="Host port for the engine RPC (default: the GRPC_ADDR port from .env)"
    )

    # Interaction / logging
    assume: Optional[str] = Field(
        default=None,
        description="Non-interactive answer: yes, no or fail"
    )
    log_level: str = Field(default="INFO", description="Bootstrap log level")
    log_dir: Optional[Path] = Field(default=None, description="Optional log file directory")

    @property
    def deploy_path(self) -> Path:
        """Absolute deployment directory (relative values are taken from the cwd)."""
        return Path(os.path.abspath(self.deploy_dir))

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the deployment directory."""
        path = Path(path)
        if not path.is_absolute():
            path = self.deploy_path / path
        return Path(os.path.abspath(path))

    @property
    def env_path(self) -> Path:
        return self.resolve(Path(self.env_file))

    @property
    def template_path(self) -> Path:
        return self.resolve(Path(self.env_template))

    @property
    def compose_path(self) -> Path:
        return self.resolve(Path(self.compose_file))

    @property
    def assets_path(self) -> Path:
        return self.resolve(self.assets_dir)

    @property
    def data_path(self) -> Path:
        return self.resolve(self.data_dir)


def load_yaml_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from YAML file if it exists."""
    if config_path is None:
        deploy_dir = os.environ.get("PICO_DEPLOY_DEPLOY_DIR", ".")
        config_path = Path(deploy_dir) / CONFIG_FILENAME

    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


_config: Optional[BootstrapConfig] = None


def get_config(**overrides) -> BootstrapConfig:
    """Get the singleton configuration instance.

    YAML values act as defaults; environment variables override them and
    explicit keyword overrides (from the CLI) win over both.
    """
    global _config
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if _config is None or overrides:
        yaml_config = load_yaml_config(
            Path(overrides["deploy_dir"]) / CONFIG_FILENAME if "deploy_dir" in overrides else None
        )
        env_values = BootstrapConfig().model_dump(exclude_unset=True)
        _config = BootstrapConfig(**{**yaml_config, **env_values, **overrides})
    return _config


def reset_config() -> None:
    """Reset config singleton (useful for testing)."""
    global _config
    _config = None
