"""Host-side data directory provisioning."""

import logging
from pathlib import Path

logger = logging.getLogger("PICO.Deploy.Directories")


def ensure_data_dir(path: Path) -> Path:
    """Create the persistent data directory (and parents) if needed.

    Returns the resolved absolute path. A no-op if it already exists.
    """
    path = Path(path)
    logger.info("Creating data directory...")
    path.mkdir(parents=True, exist_ok=True)
    resolved = path.resolve()
    logger.info("Data directory ready at: %s", resolved)
    return resolved
