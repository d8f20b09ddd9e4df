"""
Release data model.

VersionInfo and AssetInfo are immutable records describing one CMake
release and its downloadable files. Asset platform, architecture and file
type arrive as free-form file names; they are mapped onto the closed
enumerations here, at the boundary, and never compared as strings later.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from cmakesetup.core.platform import Arch, OSPlatform


class FileType(str, Enum):
    """Kind of file a release asset is."""

    ARCHIVE = "archive"
    PACKAGE = "package"
    SCRIPT = "script"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


# First match wins; ordering matters (x86_64 must be tested before x86).
_PLATFORM_PATTERNS = (
    (re.compile(r"linux", re.IGNORECASE), OSPlatform.LINUX),
    (re.compile(r"darwin|macos", re.IGNORECASE), OSPlatform.DARWIN),
    (re.compile(r"windows|win32|win64", re.IGNORECASE), OSPlatform.WIN32),
)

_ARCH_PATTERNS = (
    (re.compile(r"x86_64|x64|amd64", re.IGNORECASE), Arch.X86_64),
    (re.compile(r"aarch64|arm64", re.IGNORECASE), Arch.ARM64),
    (re.compile(r"i386|i686|x86", re.IGNORECASE), Arch.X86),
    # Universal bundles carry an x86_64 slice
    (re.compile(r"universal", re.IGNORECASE), Arch.X86_64),
)

_FILETYPE_SUFFIXES = (
    ((".zip", ".tar.gz"), FileType.ARCHIVE),
    ((".dmg", ".msi"), FileType.PACKAGE),
    ((".sh",), FileType.SCRIPT),
)


def platform_from_name(filename: str) -> Optional[OSPlatform]:
    """
    Get the operating system an asset file name was built for.

    Example:
        >>> platform_from_name("cmake-3.28.1-macos-universal.tar.gz")
        <OSPlatform.DARWIN: 'darwin'>
    """
    for pattern, platform in _PLATFORM_PATTERNS:
        if pattern.search(filename):
            return platform
    return None


def arch_from_name(filename: str) -> Optional[Arch]:
    """
    Get the CPU architecture an asset file name was built for.

    Example:
        >>> arch_from_name("cmake-3.28.1-windows-i386.zip")
        <Arch.X86: 'x86'>
    """
    for pattern, arch in _ARCH_PATTERNS:
        if pattern.search(filename):
            return arch
    return None


def filetype_from_name(filename: str) -> FileType:
    """Get the kind of file from its extension."""
    lowered = filename.lower()
    for suffixes, filetype in _FILETYPE_SUFFIXES:
        if lowered.endswith(suffixes):
            return filetype
    return FileType.OTHER


@dataclass(frozen=True)
class AssetInfo:
    """
    One downloadable file of a release.

    Attributes:
        name: File name (e.g., 'cmake-3.28.1-linux-x86_64.tar.gz')
        url: Download URL
        platform: Operating system, or None if the name names none
        arch: CPU architecture, or None if the name names none
        filetype: Kind of file
    """

    name: str
    url: str
    platform: Optional[OSPlatform]
    arch: Optional[Arch]
    filetype: FileType

    @classmethod
    def from_release_asset(cls, name: str, url: str) -> "AssetInfo":
        """
        Classify a release asset by its file name.

        Example:
            >>> AssetInfo.from_release_asset(
            ...     "cmake-3.28.1-linux-x86_64.tar.gz",
            ...     "https://github.com/Kitware/CMake/releases/download/v3.28.1/cmake-3.28.1-linux-x86_64.tar.gz",
            ... ).arch
            <Arch.X86_64: 'x86_64'>
        """
        return cls(
            name=name,
            url=url,
            platform=platform_from_name(name),
            arch=arch_from_name(name),
            filetype=filetype_from_name(name),
        )


@dataclass(frozen=True)
class VersionInfo:
    """
    One release and its assets.

    Attributes:
        name: Version string without a leading 'v' (e.g., '3.28.1')
        assets: Downloadable files, in release order
        url: Release page or API URL
        draft: Whether the release is an unpublished draft
        prerelease: Whether the release is marked as a prerelease
    """

    name: str
    assets: Tuple[AssetInfo, ...] = field(default_factory=tuple)
    url: str = ""
    draft: bool = False
    prerelease: bool = False

    @classmethod
    def from_github_release(cls, release: Dict[str, Any]) -> "VersionInfo":
        """
        Build a VersionInfo from a GitHub REST API release object.

        Args:
            release: Decoded JSON of one entry of /repos/{owner}/{repo}/releases

        Returns:
            VersionInfo with classified assets
        """
        tag = release.get("tag_name") or release.get("name") or ""
        assets = tuple(
            AssetInfo.from_release_asset(asset["name"], asset["browser_download_url"])
            for asset in release.get("assets", [])
        )
        return cls(
            name=tag[1:] if tag.startswith("v") else tag,
            assets=assets,
            url=release.get("html_url") or release.get("url", ""),
            draft=bool(release.get("draft", False)),
            prerelease=bool(release.get("prerelease", False)),
        )


__all__ = [
    "FileType",
    "AssetInfo",
    "VersionInfo",
    "platform_from_name",
    "arch_from_name",
    "filetype_from_name",
]
