"""
Compose topology for the proving engine and its gnark sidecar.

The gnark server only joins the internal network and publishes no ports,
so the proving engine is the only thing that can reach it.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models.schemas import ServiceSpec, ServiceTopology, Variant
from .variants import GNARK_SERVER_NAME

logger = logging.getLogger("PICO.Deploy.Topology")

DATA_MOUNT = "/data"
ASSETS_MOUNT = "/gnark_downloads/kb"


def _relative_to(path: Path, base: Path) -> str:
    rel = os.path.relpath(os.path.abspath(path), os.path.abspath(base))
    return rel if rel.startswith(".") else f"./{rel}"


def build_topology(
    variant: Variant,
    deploy_dir: Path,
    data_dir: Path,
    assets_dir: Path,
    gnark_image: str,
    grpc_port: int = 50052,
    env_file: str = ".env",
    host_port: Optional[int] = None,
) -> ServiceTopology:
    """Declare the two-service topology for a variant.

    The engine RPC port is published on the same host port unless
    ``host_port`` says otherwise.
    """
    topology = ServiceTopology(services=[])
    data_src = _relative_to(data_dir, deploy_dir)
    assets_src = _relative_to(assets_dir, deploy_dir)

    engine = ServiceSpec(
        name=variant.container_name,
        image=variant.image,
        container_name=variant.container_name,
        env_file=env_file,
        ports=[f"{host_port or grpc_port}:{grpc_port}"],
        volumes=[f"{data_src}:{DATA_MOUNT}", f"{assets_src}:{ASSETS_MOUNT}:ro"],
        networks=[topology.public_network, topology.private_network],
        depends_on=[GNARK_SERVER_NAME],
        gpu=variant.requires_gpu,
    )
    gnark = ServiceSpec(
        name=GNARK_SERVER_NAME,
        image=gnark_image,
        container_name=GNARK_SERVER_NAME,
        volumes=[f"{assets_src}:{ASSETS_MOUNT}:ro"],
        networks=[topology.private_network],
    )
    topology.services = [engine, gnark]
    return topology


def _render_service(svc: ServiceSpec) -> Dict[str, Any]:
    out: Dict[str, Any] = {"image": svc.image, "container_name": svc.container_name}
    if svc.env_file:
        out["env_file"] = [svc.env_file]
    if svc.environment:
        out["environment"] = dict(svc.environment)
    if svc.ports:
        out["ports"] = list(svc.ports)
    if svc.volumes:
        out["volumes"] = list(svc.volumes)
    if svc.networks:
        out["networks"] = list(svc.networks)
    if svc.depends_on:
        out["depends_on"] = list(svc.depends_on)
    out["restart"] = svc.restart
    if svc.gpu:
        out["deploy"] = {
            "resources": {
                "reservations": {
                    "devices": [{"driver": "nvidia", "count": "all", "capabilities": ["gpu"]}]
                }
            }
        }
    return out


def render_compose(topology: ServiceTopology) -> Dict[str, Any]:
    """Compose-file mapping for a topology."""
    return {
        "services": {svc.name: _render_service(svc) for svc in topology.services},
        "networks": {
            topology.public_network: {"driver": "bridge"},
            topology.private_network: {"driver": "bridge", "internal": True},
        },
    }


def ensure_compose_file(path: Path, topology: ServiceTopology) -> bool:
    """Write the compose file if it does not exist. Returns True if written."""
    path = Path(path)
    if path.exists():
        logger.debug("Using existing compose file %s", path)
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(render_compose(topology), f, sort_keys=False)
    logger.info("Wrote compose file %s", path)
    return True
