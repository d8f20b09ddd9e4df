"""
Asset selection.

Picks the download URL of the one archive of a release that fits the
current operating system and the caller's architecture preferences.
"""

import logging
import re
from typing import List, Optional, Sequence, Union

from cmakesetup.core.exceptions import NotFoundError
from cmakesetup.core.platform import (
    Arch,
    OSPlatform,
    detect_os_platform,
    parse_arch_candidates,
)
from cmakesetup.releases.models import AssetInfo, FileType, VersionInfo

logger = logging.getLogger(__name__)

_UNIVERSAL_PATTERN = re.compile(r"macos-universal")


def _names(assets: Sequence[AssetInfo]) -> List[str]:
    return [a.name for a in assets]


def prefer_64bit_or_universal(assets: Sequence[AssetInfo]) -> List[AssetInfo]:
    """
    Narrow ambiguous assets to 64-bit or macOS universal builds.

    An asset is preferred when its URL contains "64" or its name contains
    "macos-universal". If none is preferred, all assets are kept.
    """
    preferred = [
        a for a in assets if "64" in a.url or _UNIVERSAL_PATTERN.search(a.name)
    ]
    logger.debug(f"Preferred 64-bit/universal assets: {_names(preferred)}")
    return preferred if preferred else list(assets)


def stable_first_match(assets: Sequence[AssetInfo]) -> AssetInfo:
    """
    Pick the first remaining asset, in release order.

    The order comes from the release listing and is kept through every
    filter, so ties are broken by position.
    """
    return assets[0]


def select_asset_url(
    version: VersionInfo,
    arch_candidates: Sequence[Union[Arch, str]],
    platform: Optional[Union[OSPlatform, str]] = None,
) -> str:
    """
    Get the download URL of the best archive for a platform.

    Args:
        version: Release to pick an asset from
        arch_candidates: Acceptable architectures, most preferred first
            (Arch members or aliases such as "x64")
        platform: Target operating system or its value, e.g. "linux"
            (default: host OS)

    Returns:
        URL of the selected asset

    Raises:
        NotFoundError: If no archive matches the platform and any candidate
        ValueError: If the platform or an architecture is unknown

    Example:
        >>> select_asset_url(version, [Arch.X86_64, Arch.X86], OSPlatform.LINUX)
        'https://github.com/Kitware/CMake/releases/download/v3.28.1/cmake-3.28.1-linux-x86_64.tar.gz'
    """
    platform = OSPlatform(platform) if platform else detect_os_platform()
    arch_candidates = parse_arch_candidates(arch_candidates)
    logger.debug(
        f"Selecting asset of {version.name} for {platform} "
        f"with arch candidates: {[str(a) for a in arch_candidates]}"
    )

    assets_for_platform = [
        a
        for a in version.assets
        if a.platform is platform and a.filetype is FileType.ARCHIVE
    ]
    logger.debug(f"Archives for {platform}: {_names(assets_for_platform)}")

    matching_assets = None
    for arch in arch_candidates:
        arch_assets = [a for a in assets_for_platform if a.arch is arch]
        logger.debug(f"Archives for {arch}: {_names(arch_assets)}")
        if arch_assets:
            matching_assets = arch_assets
            break

    if matching_assets is None:
        raise NotFoundError(
            f"Could not find {platform} asset for cmake version {version.name}"
        )

    if len(matching_assets) > 1:
        matching_assets = prefer_64bit_or_universal(matching_assets)

    asset_url = stable_first_match(matching_assets).url
    logger.debug(f"Using asset url: {asset_url}")
    return asset_url


__all__ = [
    "select_asset_url",
    "prefer_64bit_or_universal",
    "stable_first_match",
]
