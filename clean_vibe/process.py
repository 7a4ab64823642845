"""Run configured shell commands (tests, formatter, build, publish)."""

import logging
import subprocess
from pathlib import Path

from clean_vibe.errors import SubprocessFailureError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Executes shell commands in the project root with output streamed to the terminal."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root) if root else Path.cwd()

    def run(self, command: str) -> None:
        """Run `command`, raising SubprocessFailureError on a non-zero exit."""
        logger.debug("Running: %s (cwd=%s)", command, self.root)
        try:
            result = subprocess.run(command, shell=True, cwd=self.root)
        except OSError as e:
            raise SubprocessFailureError(command, -1, str(e))
        if result.returncode != 0:
            raise SubprocessFailureError(command, result.returncode)
