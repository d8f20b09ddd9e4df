"""
Core functionality for cmake-setup.

This package contains the platform model, the exception hierarchy and the
collaborators the installer drives (tool cache, fetcher, path publisher).
"""

from .exceptions import (
    CMakeSetupError,
    NotFoundError,
    VersionNotFoundError,
    UnsupportedFormatError,
    LayoutError,
    UnsupportedPlatformError,
    ReleaseIndexError,
    ToolCacheError,
    ConfigurationError,
)

from .platform import (
    OSPlatform,
    Arch,
    detect_os_platform,
    detect_arch,
    default_arch_candidates,
    parse_arch_candidates,
    clear_platform_cache,
)

from .interfaces import (
    VersionIndex,
    ToolCache,
    Fetcher,
    PathPublisher,
)

from .download import ArchiveFetcher, DownloadError
from .environment import EnvironmentPathPublisher
from .tool_cache import LocalToolCache

__all__ = [
    "CMakeSetupError",
    "NotFoundError",
    "VersionNotFoundError",
    "UnsupportedFormatError",
    "LayoutError",
    "UnsupportedPlatformError",
    "ReleaseIndexError",
    "ToolCacheError",
    "ConfigurationError",
    "OSPlatform",
    "Arch",
    "detect_os_platform",
    "detect_arch",
    "default_arch_candidates",
    "parse_arch_candidates",
    "clear_platform_cache",
    "VersionIndex",
    "ToolCache",
    "Fetcher",
    "PathPublisher",
    "ArchiveFetcher",
    "DownloadError",
    "EnvironmentPathPublisher",
    "LocalToolCache",
]
