"""
Pydantic models for the pico-deploy bootstrap.

Defines the variant descriptor, asset manifest, service topology,
environment settings and the inferred deployment state.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Variant & Compose Models
# =============================================================================

class VariantName(str, Enum):
    """Supported deployment variants."""
    CPU = "cpu"
    GPU = "gpu"


class Variant(BaseModel):
    """Everything that differs between the CPU and GPU deployments."""
    model_config = ConfigDict(frozen=True)

    name: VariantName
    title: str = Field(..., description="Human-readable service title")
    image: str = Field(..., description="Pre-built proving service image tag")
    image_archive: str = Field(..., description="Tarball the image is distributed as")
    container_name: str = Field(..., description="Proving service container name")
    requires_gpu: bool = False
    description: str = ""


class ComposeCommand(BaseModel):
    """The selected compose invocation (standalone or docker plugin)."""
    model_config = ConfigDict(frozen=True)

    prefix: Tuple[str, ...]

    @classmethod
    def standalone(cls) -> "ComposeCommand":
        return cls(prefix=("docker-compose",))

    @classmethod
    def integrated(cls) -> "ComposeCommand":
        return cls(prefix=("docker", "compose"))

    @property
    def is_standalone(self) -> bool:
        return self.prefix == ("docker-compose",)

    def argv(self, *args: str) -> List[str]:
        return [*self.prefix, *args]

    def display(self, *args: str) -> str:
        return " ".join(self.argv(*args))

    def __str__(self) -> str:
        return self.display()


# =============================================================================
# Asset Models
# =============================================================================

class AssetEntry(BaseModel):
    """A single gnark artifact: logical name, remote location, local filename."""
    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    filename: str

    def local_path(self, assets_dir: Path) -> Path:
        return Path(assets_dir) / self.filename


class AssetManifest(BaseModel):
    """Ordered set of artifacts required for on-chain proving."""
    model_config = ConfigDict(frozen=True)

    entries: Tuple[AssetEntry, ...]

    def missing(self, assets_dir: Path) -> List[AssetEntry]:
        """Entries whose local file does not exist. Presence is the only check."""
        return [e for e in self.entries if not e.local_path(assets_dir).is_file()]


class AssetReport(BaseModel):
    """Outcome of the asset fetch stage."""
    assets_dir: Path
    downloaded: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    total_bytes: int = 0


# =============================================================================
# Topology Models
# =============================================================================

class ServiceSpec(BaseModel):
    """A single service in the compose topology."""
    name: str
    image: str
    container_name: str
    networks: List[str] = Field(default_factory=list)
    volumes: List[str] = Field(default_factory=list)
    ports: List[str] = Field(default_factory=list)
    env_file: Optional[str] = None
    environment: Dict[str, str] = Field(default_factory=dict)
    depends_on: List[str] = Field(default_factory=list)
    gpu: bool = False
    restart: str = "unless-stopped"


class ServiceTopology(BaseModel):
    """Proving engine + gnark sidecar joined by a private network."""
    services: List[ServiceSpec]
    private_network: str = "pico-internal"
    public_network: str = "pico-public"

    def service(self, name: str) -> ServiceSpec:
        for svc in self.services:
            if svc.name == name:
                return svc
        raise KeyError(name)


# =============================================================================
# Environment Configuration Models
# =============================================================================

class EnvironmentSettings(BaseModel):
    """Recognized keys of the proving service .env file.

    Unknown keys are kept as extras and passed through untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    grpc_addr: str = Field(default="[::]:50052", alias="GRPC_ADDR")
    prover_count: int = Field(default=1, ge=1, alias="PROVER_COUNT")
    chunk_size: Optional[int] = Field(default=None, ge=1, alias="CHUNK_SIZE")
    chunk_batch_size: Optional[int] = Field(default=None, ge=1, alias="CHUNK_BATCH_SIZE")
    split_threshold: Optional[int] = Field(default=None, ge=1, alias="SPLIT_THRESHOLD")
    rayon_num_threads: Optional[int] = Field(default=None, ge=1, alias="RAYON_NUM_THREADS")
    rust_log: str = Field(default="info", alias="RUST_LOG")
    vk_verification: bool = Field(default=True, alias="VK_VERIFICATION")
    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")

    @field_validator(
        "chunk_size", "chunk_batch_size", "split_threshold", "rayon_num_threads",
        "database_url", mode="before",
    )
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("grpc_addr")
    @classmethod
    def _has_port(cls, value: str) -> str:
        host, sep, port = value.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"expected host:port, got {value!r}")
        return value

    @property
    def grpc_port(self) -> int:
        """Port the engine listens on, taken from GRPC_ADDR."""
        return int(self.grpc_addr.rpartition(":")[2])


# =============================================================================
# Deployment State
# =============================================================================

class DeploymentState(BaseModel):
    """Inferred state of a deployment; nothing here is persisted."""
    config_present: bool = False
    assets_present: bool = False
    image_present: bool = False
    data_dir_present: bool = False
    services_running: bool = False

    @property
    def complete(self) -> bool:
        return all((
            self.config_present,
            self.assets_present,
            self.image_present,
            self.data_dir_present,
            self.services_running,
        ))


class LaunchReport(BaseModel):
    """Operator summary printed after a successful `compose up -d`."""
    variant: Variant
    services: List[str]
    logs_command: str
    status_command: str
    stop_command: str
    shell_command: str

    def render(self) -> List[str]:
        lines = ["Services running:"]
        lines += [f"  - {svc}" for svc in self.services]
        lines += [
            "",
            "View logs:",
            f"  {self.logs_command}",
            "",
            "Check status:",
            f"  {self.status_command}",
            "",
            "Stop service:",
            f"  {self.stop_command}",
            "",
            "Access server container:",
            f"  {self.shell_command}",
        ]
        return lines


class BootstrapResult(BaseModel):
    """What a bootstrap run did."""
    variant: VariantName
    compose: ComposeCommand
    data_dir: Path
    actions: List[str] = Field(default_factory=list, description="Mutating actions performed")
    assets: Optional[AssetReport] = None
    launch: Optional[LaunchReport] = None
