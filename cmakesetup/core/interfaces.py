"""
Collaborator interfaces for cmake-setup.

The installer depends only on these abstractions. Concrete implementations
live in cmakesetup.core (tool cache, fetcher, path publisher) and
cmakesetup.releases (version index); tests substitute in-memory fakes.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from cmakesetup.releases.models import VersionInfo


class VersionIndex(ABC):
    """Read-only source of released versions and their assets."""

    @abstractmethod
    def all_versions(self) -> List["VersionInfo"]:
        """
        Get every known release.

        Returns:
            List of VersionInfo records, in the order the source lists them
        """
        pass


class ToolCache(ABC):
    """Persistent store of installed tools keyed by (package name, version)."""

    @abstractmethod
    def find(self, package_name: str, version_name: str) -> Optional[Path]:
        """
        Look up a cached installation.

        Args:
            package_name: Tool name (e.g., "cmake")
            version_name: Version string (e.g., "3.28.1")

        Returns:
            Path to the cached directory, or None if not cached
        """
        pass

    @abstractmethod
    def cache_dir(self, source_path: Path, package_name: str, version_name: str) -> Path:
        """
        Store a directory in the cache.

        Args:
            source_path: Directory whose contents are cached
            package_name: Tool name
            version_name: Version string

        Returns:
            Canonical path of the cached copy
        """
        pass


class Fetcher(ABC):
    """Downloads archives and unpacks them into scratch directories."""

    @abstractmethod
    def download(self, url: str) -> Path:
        """Download url and return the local file path."""
        pass

    @abstractmethod
    def extract_zip(self, archive_path: Path) -> Path:
        """Extract a .zip archive and return the extraction directory."""
        pass

    @abstractmethod
    def extract_tar(self, archive_path: Path) -> Path:
        """Extract a .tar.gz archive and return the extraction directory."""
        pass

    def cleanup(self) -> None:
        """
        Remove downloads and extraction directories created so far.

        Called once their contents have been copied into the tool cache.
        """
        pass


class PathPublisher(ABC):
    """Makes a directory visible on the executable search path."""

    @abstractmethod
    def add_path(self, directory: Path) -> None:
        """Append directory to the search path for the rest of the run."""
        pass


__all__ = [
    "VersionIndex",
    "ToolCache",
    "Fetcher",
    "PathPublisher",
]
