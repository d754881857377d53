"""
Variant descriptors and the gnark asset manifest.

The CPU and GPU deployments share one control flow. Everything that
differs between them lives in the Variant values below.
"""

from typing import Dict

from .models.schemas import AssetEntry, AssetManifest, Variant, VariantName

GNARK_SERVER_NAME = "pico-gnark-server"

DEFAULT_ASSET_BASE_URL = "https://picobench.s3.us-west-2.amazonaws.com/koalabear_gnark/gpu"

# filename -> logical name, in download order
ASSET_FILES = {
    "vm_ccs": "verification circuit",
    "vm_pk": "proving key",
    "vm_vk": "verifying key",
}

CPU = Variant(
    name=VariantName.CPU,
    title="Pico Proving Service (CPU)",
    image="pico-proving-service-cpu:latest",
    image_archive="pico-proving-service-cpu.tar",
    container_name="pico-proving-service-cpu",
    requires_gpu=False,
    description="CPU proving",
)

GPU = Variant(
    name=VariantName.GPU,
    title="Pico Proving Service",
    image="pico-proving-service-gpu:latest",
    image_archive="pico-proving-service-gpu.tar",
    container_name="pico-proving-service-gpu",
    requires_gpu=True,
    description="GPU proving",
)

VARIANTS: Dict[VariantName, Variant] = {
    VariantName.CPU: CPU,
    VariantName.GPU: GPU,
}


def get_variant(name) -> Variant:
    """Look up a variant by name ("cpu" / "gpu" or VariantName)."""
    try:
        return VARIANTS[VariantName(name)]
    except ValueError:
        raise ValueError(f"Unknown variant: {name}") from None


def build_manifest(base_url: str = DEFAULT_ASSET_BASE_URL) -> AssetManifest:
    """Build the gnark asset manifest rooted at base_url."""
    base = base_url.rstrip("/")
    return AssetManifest(entries=tuple(
        AssetEntry(name=name, url=f"{base}/{filename}", filename=filename)
        for filename, name in ASSET_FILES.items()
    ))
