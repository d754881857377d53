"""
pico-deploy - bootstrap the Pico proving service on this host.

Usage:
    # Bring up the GPU or CPU deployment from the deployment directory
    pico-deploy-gpu
    pico-deploy-cpu

    # Generic entry point
    pico-deploy --variant cpu --deploy-dir deploy/cpu

    # Unattended runs (answer every prompt, or fail if one is reached)
    pico-deploy-gpu --yes
    pico-deploy-gpu --non-interactive

    # Show what is already in place and exit
    pico-deploy-cpu --status

    # Only fetch the gnark verification files
    pico-deploy-download-gnark --deploy-dir deploy/gpu

Exit status is 0 on success and 1 on any failed gate.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .assets import AssetFetcher, human_size
from .bootstrap import Bootstrapper
from .config import get_config
from .confirm import confirmer_for
from .errors import BootstrapError
from .host import HostTools
from .logging_setup import setup_logging
from .models.schemas import DeploymentState, Variant, VariantName
from .runtime import DockerRuntime
from .status import inspect_state
from .variants import build_manifest, get_variant

logger = logging.getLogger("PICO.Deploy.CLI")

BANNER_WIDTH = 50


def _banner(title: str) -> None:
    print("=" * BANNER_WIDTH)
    print(f"  {title}")
    print("=" * BANNER_WIDTH)
    print()


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--deploy-dir", help="Deployment directory (default: current directory)")
    answer = parser.add_mutually_exclusive_group()
    answer.add_argument("--yes", "-y", dest="assume", action="store_const", const="yes",
                        help="Answer yes to every prompt")
    answer.add_argument("--no", dest="assume", action="store_const", const="no",
                        help="Answer no to every prompt")
    answer.add_argument("--non-interactive", dest="assume", action="store_const", const="fail",
                        help="Fail instead of prompting")
    parser.add_argument("--log-level", help="Log level (default: INFO)")


def _build_parser(variant: Optional[VariantName]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"pico-deploy-{variant.value}" if variant else "pico-deploy",
        description="Bootstrap the Pico proving service and its gnark sidecar",
    )
    if variant is None:
        parser.add_argument(
            "--variant", choices=[v.value for v in VariantName], default=VariantName.GPU.value,
            help="Deployment variant (default: gpu)",
        )
    _add_common_options(parser)
    parser.add_argument("--status", action="store_true", help="Print deployment state and exit")
    return parser


def _report_failure(e: BootstrapError) -> int:
    logger.debug("Bootstrap stopped", exc_info=True)
    print()
    _banner(f"Error: {e.message}")
    if e.hint:
        print(e.hint)
        print()
    return e.exit_code


def _print_state(variant: Variant, state: DeploymentState) -> None:
    print(f"{variant.title} deployment state:")
    for field, value in state.model_dump().items():
        print(f"  {field:<18} {'yes' if value else 'no'}")


def run(argv: Optional[List[str]] = None, variant_name: Optional[VariantName] = None) -> int:
    """Parse arguments, run the bootstrap, and return the process exit code."""
    parser = _build_parser(variant_name)
    args = parser.parse_args(argv)
    variant = get_variant(variant_name or args.variant)

    config = get_config(deploy_dir=args.deploy_dir, assume=args.assume, log_level=args.log_level)
    setup_logging(level=config.log_level, log_dir=str(config.log_dir) if config.log_dir else None)

    if args.status:
        _print_state(variant, inspect_state(config, variant, DockerRuntime()))
        return 0

    try:
        confirm = confirmer_for(config.assume)
    except ValueError as e:
        parser.error(str(e))

    _banner(f"{variant.title} - Docker Deployment")
    try:
        result = Bootstrapper(variant, config, confirm).run()
    except BootstrapError as e:
        return _report_failure(e)

    print()
    _banner("Service started successfully!")
    print(f"Data directory: {result.data_dir}")
    print()
    for line in result.launch.render():
        print(line)
    print()
    return 0


def run_download(argv: Optional[List[str]] = None) -> int:
    """Fetch only the gnark verification files and return the exit code.

    Running this command is consent to download, so missing files are
    fetched without asking unless --no or --non-interactive says otherwise.
    """
    parser = argparse.ArgumentParser(
        prog="pico-deploy-download-gnark",
        description="Download the gnark verification files for on-chain proving",
    )
    _add_common_options(parser)
    parser.add_argument("--assets-dir", help="Target directory (default: ../gnark_downloads/kb)")
    args = parser.parse_args(argv)

    config = get_config(
        deploy_dir=args.deploy_dir,
        assume=args.assume,
        log_level=args.log_level,
        assets_dir=args.assets_dir,
    )
    setup_logging(level=config.log_level, log_dir=str(config.log_dir) if config.log_dir else None)

    try:
        confirm = confirmer_for(config.assume or "yes")
    except ValueError as e:
        parser.error(str(e))

    _banner("Downloading gnark verification files")
    fetcher = AssetFetcher(
        HostTools(),
        build_manifest(config.asset_base_url),
        config.assets_path,
        timeout=config.download_timeout_seconds,
    )
    try:
        report = fetcher.fetch(confirm)
    except BootstrapError as e:
        return _report_failure(e)

    print()
    _banner("All gnark files downloaded successfully!")
    print(f"Files location: {report.assets_dir}")
    print(f"Total size: {human_size(report.total_bytes)}")
    print()
    return 0


def main() -> None:
    sys.exit(run())


def main_cpu() -> None:
    sys.exit(run(variant_name=VariantName.CPU))


def main_gpu() -> None:
    sys.exit(run(variant_name=VariantName.GPU))


def main_download_gnark() -> None:
    sys.exit(run_download())


if __name__ == "__main__":
    main()
