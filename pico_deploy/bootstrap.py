"""
Bootstrap orchestrator.

Runs the stages in order, each one a gate:

    prerequisites -> environment -> hardware (GPU only) -> assets
        -> image -> data directory -> compose file -> launch

The first failure propagates and stops the run. Nothing is rolled back:
every stage only does work for what is missing, so a re-run picks up
where the last one stopped.
"""

import logging
from typing import Optional

from .assets import AssetFetcher
from .config import BootstrapConfig
from .confirm import Confirmer
from .directories import ensure_data_dir
from .environment import ensure_environment, load_environment
from .hardware import check_hardware
from .host import HostTools
from .images import check_image
from .launcher import launch_services
from .models.schemas import BootstrapResult, Variant
from .prerequisites import check_prerequisites
from .runtime import DockerRuntime
from .topology import build_topology, ensure_compose_file
from .variants import build_manifest

logger = logging.getLogger("PICO.Deploy.Bootstrap")


class Bootstrapper:
    """Brings one deployment variant up on this host."""

    def __init__(
        self,
        variant: Variant,
        config: BootstrapConfig,
        confirm: Confirmer,
        host: Optional[HostTools] = None,
        runtime: Optional[DockerRuntime] = None,
    ):
        self.variant = variant
        self.config = config
        self.confirm = confirm
        self.host = host or HostTools()
        self.runtime = runtime or DockerRuntime()

    def run(self) -> BootstrapResult:
        cfg = self.config
        deploy_dir = cfg.deploy_path
        actions = []

        compose = check_prerequisites(self.host)

        if ensure_environment(deploy_dir, self.confirm, cfg.env_file, cfg.env_template):
            actions.append(f"created {cfg.env_file} from {cfg.env_template}")
        settings = load_environment(cfg.env_path)

        if self.variant.requires_gpu:
            check_hardware(self.runtime, self.confirm, cfg.gpu_probe_image, cfg.gpu_probe_command)

        fetcher = AssetFetcher(
            self.host,
            build_manifest(cfg.asset_base_url),
            cfg.assets_path,
            timeout=cfg.download_timeout_seconds,
        )
        assets = fetcher.fetch(self.confirm, allow_missing=cfg.allow_missing_assets)
        actions += [f"downloaded {name}" for name in assets.downloaded]

        check_image(self.runtime, self.variant)

        data_existed = cfg.data_path.is_dir()
        data_dir = ensure_data_dir(cfg.data_path)
        if not data_existed:
            actions.append(f"created {data_dir}")

        topology = build_topology(
            self.variant,
            deploy_dir,
            cfg.data_path,
            cfg.assets_path,
            gnark_image=cfg.gnark_image,
            grpc_port=settings.grpc_port,
            host_port=cfg.grpc_host_port,
            env_file=cfg.env_file,
        )
        if ensure_compose_file(cfg.compose_path, topology):
            actions.append(f"wrote {cfg.compose_file}")

        launch = launch_services(self.host, compose, deploy_dir, self.variant)

        logger.info("Bootstrap complete (%d change(s) this run)", len(actions))
        return BootstrapResult(
            variant=self.variant.name,
            compose=compose,
            data_dir=data_dir,
            actions=actions,
            assets=assets,
            launch=launch,
        )
