"""
On-disk tool cache.

Installed tools are stored with the same layout the hosted runners use, so
a cache pre-populated on the runner image is picked up as-is:

    <root>/<package>/<version>/<arch>/            installed files
    <root>/<package>/<version>/<arch>.complete    written after the copy

An entry without its completion marker is treated as absent; that is what
an interrupted copy leaves behind.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout

from cmakesetup.core.directory import get_tool_cache_dir
from cmakesetup.core.exceptions import ToolCacheError
from cmakesetup.core.filesystem import FilesystemError, recursive_copy, safe_rmtree
from cmakesetup.core.interfaces import ToolCache
from cmakesetup.core.platform import Arch, detect_arch

logger = logging.getLogger(__name__)


class LocalToolCache(ToolCache):
    """
    Tool cache rooted at a local directory.

    Example:
        >>> cache = LocalToolCache(Path("/opt/hostedtoolcache"))
        >>> cache.find("cmake", "3.28.1")
        PosixPath('/opt/hostedtoolcache/cmake/3.28.1/x86_64')
    """

    def __init__(
        self,
        root: Optional[Path] = None,
        arch: Optional[Arch] = None,
        lock_timeout: int = 300,
    ):
        """
        Initialize tool cache.

        Args:
            root: Cache root (default: $RUNNER_TOOL_CACHE or ~/.cmakesetup/tool-cache)
            arch: Architecture key of entries (default: host architecture)
            lock_timeout: Timeout in seconds for acquiring an entry lock
        """
        self.root = Path(root) if root else get_tool_cache_dir()
        self.arch = arch or detect_arch()
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root} ({self.arch})")

    def entry_path(self, package_name: str, version_name: str) -> Path:
        """Get the directory an entry is (or would be) stored in."""
        return self.root / package_name / version_name / self.arch.value

    def _marker_path(self, package_name: str, version_name: str) -> Path:
        return self.root / package_name / version_name / f"{self.arch.value}.complete"

    @contextmanager
    def _lock(self, package_name: str, version_name: str):
        """
        Acquire the exclusive lock of one cache entry.

        Raises:
            ToolCacheError: If lock cannot be acquired within timeout
        """
        lock_path = (
            self.root / ".lock" / f"{package_name}-{version_name}-{self.arch.value}.lock"
        )
        lock_path.parent.mkdir(parents=True, exist_ok=True)

        lock = FileLock(lock_path, timeout=self.lock_timeout)

        try:
            with lock:
                logger.debug(f"Acquired tool cache lock: {lock_path}")
                yield
        except Timeout as e:
            raise ToolCacheError(
                f"Could not acquire tool cache lock within {self.lock_timeout} seconds"
            ) from e

    def find(self, package_name: str, version_name: str) -> Optional[Path]:
        if not package_name or not version_name:
            return None

        path = self.entry_path(package_name, version_name)
        if path.is_dir() and self._marker_path(package_name, version_name).exists():
            logger.debug(f"Found {package_name} {version_name} in tool cache: {path}")
            return path

        logger.debug(f"{package_name} {version_name} not found in tool cache")
        return None

    def cache_dir(self, source_path: Path, package_name: str, version_name: str) -> Path:
        destination = self.entry_path(package_name, version_name)
        marker = self._marker_path(package_name, version_name)

        logger.debug(f"Caching {source_path} as {package_name} {version_name}")

        with self._lock(package_name, version_name):
            # Another job may have completed the entry while we waited
            if destination.is_dir() and marker.exists():
                logger.info(
                    f"{package_name} {version_name} already cached at {destination}"
                )
                return destination

            try:
                marker.unlink(missing_ok=True)
                safe_rmtree(destination)
                destination.mkdir(parents=True)
                recursive_copy(source_path, destination)
                marker.touch()
            except (FilesystemError, OSError) as e:
                raise ToolCacheError(
                    f"Failed to cache {package_name} {version_name}: {e}"
                ) from e

        logger.info(f"Cached {package_name} {version_name} at {destination}")
        return destination


__all__ = ["LocalToolCache"]
