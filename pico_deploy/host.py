"""
Host tool access for pico-deploy.

Every executable the bootstrap touches (docker, docker-compose, curl, wget)
goes through HostTools so stages can be exercised with a fake host.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

logger = logging.getLogger("PICO.Deploy.Host")


class HostTools:
    """Locates and runs host executables."""

    def which(self, name: str) -> Optional[str]:
        """Return the absolute path of an executable on PATH, or None."""
        return shutil.which(name)

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Union[str, Path]] = None,
        capture: bool = True,
        timeout: Optional[float] = None,
    ) -> subprocess.CompletedProcess:
        """Run a command and return the completed process.

        With capture=False the output streams straight to the terminal.
        A missing executable is reported as exit status 127, like a shell.
        Raises subprocess.TimeoutExpired when timeout elapses.
        """
        argv: List[str] = list(cmd)
        logger.debug("Running: %s", " ".join(argv))
        try:
            return subprocess.run(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=capture,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            logger.debug("Executable not found: %s", e)
            return subprocess.CompletedProcess(argv, 127, "", str(e))
