"""
Search path publishing.

The only place cmake-setup mutates process-wide state. Selection and
layout resolution return plain paths; this publisher applies them.
"""

import logging
import os
from pathlib import Path
from typing import MutableMapping, Optional

from cmakesetup.core.interfaces import PathPublisher

logger = logging.getLogger(__name__)


class EnvironmentPathPublisher(PathPublisher):
    """
    Prepend directories to PATH and export them to later workflow steps.

    When GITHUB_PATH names a file, each published directory is appended to
    it on its own line; the runner adds those lines to PATH for every
    subsequent step of the job.
    """

    def __init__(self, env: Optional[MutableMapping[str, str]] = None):
        """
        Initialize publisher.

        Args:
            env: Environment to modify (default: os.environ)
        """
        self.env = os.environ if env is None else env

    def add_path(self, directory: Path) -> None:
        directory = str(directory)

        github_path = self.env.get("GITHUB_PATH")
        if github_path:
            with open(github_path, "a", encoding="utf-8") as f:
                f.write(f"{directory}{os.linesep}")
            logger.debug(f"Appended {directory} to {github_path}")

        current = self.env.get("PATH", "")
        self.env["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory
        logger.info(f"Added {directory} to PATH")


__all__ = ["EnvironmentPathPublisher"]
