"""Pydantic models for variants, assets, topology and deployment state."""

from .schemas import (
    AssetEntry,
    AssetManifest,
    AssetReport,
    BootstrapResult,
    ComposeCommand,
    DeploymentState,
    EnvironmentSettings,
    LaunchReport,
    ServiceSpec,
    ServiceTopology,
    Variant,
    VariantName,
)

__all__ = [
    "AssetEntry",
    "AssetManifest",
    "AssetReport",
    "BootstrapResult",
    "ComposeCommand",
    "DeploymentState",
    "EnvironmentSettings",
    "LaunchReport",
    "ServiceSpec",
    "ServiceTopology",
    "Variant",
    "VariantName",
]
