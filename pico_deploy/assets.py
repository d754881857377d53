"""
gnark verification-key asset fetcher.

Downloads the files listed in the asset manifest into the asset directory
with curl or wget, whichever the host has. A file that already exists is
treated as complete and is never fetched again, so the stage can simply be
re-run after a partial failure.

Transfers land in ``<file>.part`` and are renamed into place only after the
tool exits cleanly, so an interrupted download never looks like a finished one.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional

from .confirm import Confirmer
from .errors import IncompleteAssetSet, MissingDependency
from .host import HostTools
from .models.schemas import AssetEntry, AssetManifest, AssetReport

logger = logging.getLogger("PICO.Deploy.Assets")

PARTIAL_SUFFIX = ".part"


def human_size(num_bytes: int) -> str:
    """Format a byte count like `du -h` (1024-based, one decimal)."""
    if num_bytes < 1024:
        return f"{num_bytes}B"
    size = float(num_bytes)
    for unit in ("K", "M", "G"):
        size /= 1024
        if size < 1024:
            return f"{size:.1f}{unit}"
    return f"{size / 1024:.1f}T"


def directory_size(path: Path) -> int:
    """Total size in bytes of regular files under path, ignoring unfinished
    ``.part`` transfers."""
    total = 0
    for root, _dirs, files in os.walk(path):
        for name in files:
            if name.endswith(PARTIAL_SUFFIX):
                continue
            try:
                total += (Path(root) / name).stat().st_size
            except OSError:
                continue
    return total


class TransferTool:
    """A host download tool (curl or wget)."""

    name = ""

    def command(self, url: str, target: Path) -> List[str]:
        raise NotImplementedError


class CurlTransfer(TransferTool):
    name = "curl"

    def command(self, url: str, target: Path) -> List[str]:
        # -f: fail on HTTP errors instead of saving the error body
        return ["curl", "-fL", "-o", str(target), url]


class WgetTransfer(TransferTool):
    name = "wget"

    def command(self, url: str, target: Path) -> List[str]:
        return ["wget", "-O", str(target), url]


TRANSFER_TOOLS = (CurlTransfer, WgetTransfer)


def select_transfer_tool(host: HostTools) -> TransferTool:
    """First available of curl, wget.

    Raises:
        MissingDependency: neither is installed.
    """
    for tool_cls in TRANSFER_TOOLS:
        if host.which(tool_cls.name) is not None:
            return tool_cls()
    raise MissingDependency(
        "Neither curl nor wget is installed",
        hint="Please install curl or wget first",
    )


class AssetFetcher:
    """Ensures every manifest entry exists under assets_dir."""

    def __init__(
        self,
        host: HostTools,
        manifest: AssetManifest,
        assets_dir: Path,
        timeout: Optional[float] = None,
    ):
        self.host = host
        self.manifest = manifest
        self.assets_dir = Path(assets_dir)
        self.timeout = timeout

    def missing(self) -> List[AssetEntry]:
        return self.manifest.missing(self.assets_dir)

    def _download(self, tool: TransferTool, entry: AssetEntry) -> bool:
        """Fetch one entry. Returns True if the final file is in place."""
        target = entry.local_path(self.assets_dir)
        partial = target.with_name(target.name + PARTIAL_SUFFIX)

        logger.info("Downloading %s (%s)...", entry.filename, entry.name)
        try:
            result = self.host.run(
                tool.command(entry.url, partial),
                capture=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error("Download of %s timed out after %ss", entry.filename, self.timeout)
            partial.unlink(missing_ok=True)
            return False

        if result.returncode != 0 or not partial.is_file():
            logger.error("Failed to download %s (%s exit %d)", entry.filename, tool.name, result.returncode)
            partial.unlink(missing_ok=True)
            return False

        partial.replace(target)
        logger.info("Downloaded %s (%s)", entry.filename, human_size(target.stat().st_size))
        return True

    def fetch(self, confirm: Confirmer, allow_missing: bool = False) -> AssetReport:
        """Download whatever is missing, then verify every file is present.

        The operator is asked once before any transfer. Present files are
        skipped without touching the network.

        Raises:
            MissingDependency: a download is needed but no transfer tool exists.
            IncompleteAssetSet: any file is still missing afterwards (or the
                download was declined and allow_missing is False).
        """
        report = AssetReport(assets_dir=self.assets_dir)
        missing = self.missing()
        missing_names = {e.filename for e in missing}

        for entry in self.manifest.entries:
            if entry.filename not in missing_names:
                logger.info("File %s already exists, skipping...", entry.filename)
                report.skipped.append(entry.filename)

        if missing:
            logger.warning("gnark verification files not found: %s", ", ".join(sorted(missing_names)))
            logger.warning("These files are required for on-chain proving")
            if not confirm(f"Download {len(missing)} gnark file(s) now?"):
                report.missing = [e.filename for e in missing]
                if allow_missing:
                    logger.warning("Continuing without gnark files. On-chain proving will not work")
                    return report
                raise IncompleteAssetSet(
                    "gnark verification files are missing and download was declined",
                    missing=report.missing,
                    hint=f"Re-run and accept the download, or place the files in {self.assets_dir}",
                )

            tool = select_transfer_tool(self.host)
            self.assets_dir.mkdir(parents=True, exist_ok=True)
            for entry in missing:
                if self._download(tool, entry):
                    report.downloaded.append(entry.filename)

        logger.info("Verifying downloads...")
        report.missing = [e.filename for e in self.missing()]
        if report.missing:
            raise IncompleteAssetSet(
                f"Some gnark files are missing: {', '.join(report.missing)}",
                missing=report.missing,
                hint="Please check your internet connection and try again; "
                     "files already downloaded will not be fetched again",
            )

        report.total_bytes = directory_size(self.assets_dir)
        logger.info(
            "All gnark files present in %s (total %s)",
            self.assets_dir, human_size(report.total_bytes),
        )
        return report
