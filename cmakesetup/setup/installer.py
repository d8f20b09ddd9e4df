"""
CMake installation orchestration.

Composes asset selection and layout lookup with the fetch, cache and path
collaborators:

    cache lookup -> (select URL -> download -> extract -> cache) -> bin dir -> PATH

Each step runs to completion before the next; nothing is retried here and
every error propagates unchanged. The search path is only touched after the
bin directory has been fully resolved.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from cmakesetup.core.exceptions import UnsupportedFormatError
from cmakesetup.core.interfaces import Fetcher, PathPublisher, ToolCache
from cmakesetup.core.platform import Arch, OSPlatform, detect_os_platform
from cmakesetup.releases.models import VersionInfo
from cmakesetup.setup.layout import locate_bin_directory
from cmakesetup.setup.selector import select_asset_url

logger = logging.getLogger(__name__)

PACKAGE_NAME = "cmake"


class CMakeInstaller:
    """
    Make a CMake release available on the search path.

    Example:
        >>> installer = CMakeInstaller(LocalToolCache(), ArchiveFetcher(),
        ...                            EnvironmentPathPublisher())
        >>> installer.ensure_on_path(version, [Arch.X86_64, Arch.X86])
        PosixPath('/opt/hostedtoolcache/cmake/3.28.1/x86_64/cmake-3.28.1-linux-x86_64/bin')
    """

    def __init__(
        self,
        tool_cache: ToolCache,
        fetcher: Fetcher,
        path_publisher: PathPublisher,
        platform: Optional[OSPlatform] = None,
    ):
        """
        Initialize installer.

        Args:
            tool_cache: Cache of installed tools
            fetcher: Downloads and extracts archives
            path_publisher: Receives the resolved bin directory
            platform: Target operating system (default: host OS)
        """
        self.tool_cache = tool_cache
        self.fetcher = fetcher
        self.path_publisher = path_publisher
        self.platform = platform or detect_os_platform()

    def _fetch_archive(self, url: str) -> Path:
        """
        Download and extract an archive.

        Raises:
            UnsupportedFormatError: If the URL is neither .zip nor .tar.gz
        """
        if url.endswith(".zip"):
            extract = self.fetcher.extract_zip
        elif url.endswith(".tar.gz"):
            extract = self.fetcher.extract_tar
        else:
            raise UnsupportedFormatError(f"Could not determine filetype of {url}")

        download = self.fetcher.download(url)
        logger.debug(f"Downloaded archive to: {download}")

        extracted_path = extract(download)
        logger.debug(f"Extracted archive to: {extracted_path}")
        return extracted_path

    def add_to_tool_cache(
        self, version: VersionInfo, arch_candidates: Sequence[Arch]
    ) -> Path:
        """
        Download a release and store it in the tool cache.

        Returns:
            Canonical cached directory
        """
        logger.info(f"Installing CMake {version.name}")
        url = select_asset_url(version, arch_candidates, self.platform)
        try:
            extracted_archive = self._fetch_archive(url)
            cached_dir = self.tool_cache.cache_dir(
                extracted_archive, PACKAGE_NAME, version.name
            )
        finally:
            self.fetcher.cleanup()
        logger.debug(f"Cached CMake directory: {cached_dir}")
        return cached_dir

    def resolve_bin_directory(
        self, version: VersionInfo, arch_candidates: Sequence[Arch]
    ) -> Path:
        """
        Get the bin directory of a release, installing it if not cached.

        Does not modify the search path.

        Args:
            version: Release to install
            arch_candidates: Acceptable architectures, most preferred first

        Returns:
            Path to the directory holding the cmake executables
        """
        tool_path = self.tool_cache.find(PACKAGE_NAME, version.name)

        if tool_path:
            logger.info(f"Using cached CMake {version.name} from {tool_path}")
        else:
            tool_path = self.add_to_tool_cache(version, arch_candidates)

        return locate_bin_directory(tool_path, self.platform)

    def ensure_on_path(
        self, version: VersionInfo, arch_candidates: Sequence[Arch]
    ) -> Path:
        """
        Install a release if needed and publish its bin directory.

        Returns:
            The published bin directory
        """
        bin_dir = self.resolve_bin_directory(version, arch_candidates)
        logger.debug(f"Adding bin directory to PATH: {bin_dir}")
        self.path_publisher.add_path(bin_dir)
        return bin_dir


__all__ = ["CMakeInstaller", "PACKAGE_NAME"]
