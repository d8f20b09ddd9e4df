"""
Pytest configuration and shared fixtures for cmake-setup tests.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from cmakesetup.core.interfaces import Fetcher, PathPublisher, ToolCache
from cmakesetup.core.platform import Arch, OSPlatform, clear_platform_cache
from cmakesetup.releases.models import AssetInfo, FileType, VersionInfo


# ============================================================================
# Builders
# ============================================================================


def make_asset(
    url: str,
    platform: Optional[OSPlatform] = OSPlatform.LINUX,
    arch: Optional[Arch] = Arch.X86_64,
    filetype: FileType = FileType.ARCHIVE,
    name: Optional[str] = None,
) -> AssetInfo:
    """Build an AssetInfo with explicit classification."""
    return AssetInfo(
        name=name if name is not None else url.rsplit("/", 1)[-1],
        url=url,
        platform=platform,
        arch=arch,
        filetype=filetype,
    )


def make_version(name: str = "3.28.1", *assets: AssetInfo, **kwargs) -> VersionInfo:
    """Build a VersionInfo owning the given assets."""
    return VersionInfo(name=name, assets=tuple(assets), **kwargs)


def github_release(tag: str, asset_names: List[str], **kwargs) -> dict:
    """Build a GitHub REST API release object."""
    release = {
        "tag_name": tag,
        "html_url": f"https://github.com/Kitware/CMake/releases/tag/{tag}",
        "draft": False,
        "prerelease": False,
        "assets": [
            {
                "name": name,
                "browser_download_url": (
                    f"https://github.com/Kitware/CMake/releases/download/{tag}/{name}"
                ),
            }
            for name in asset_names
        ],
    }
    release.update(kwargs)
    return release


# ============================================================================
# In-memory collaborators
# ============================================================================


class FakeToolCache(ToolCache):
    """Tool cache that records calls and stores entries under a directory."""

    def __init__(self, root: Path, entries: Optional[Dict[Tuple[str, str], Path]] = None):
        self.root = root
        self.entries = dict(entries or {})
        self.find_calls: List[Tuple[str, str]] = []
        self.cache_calls: List[Tuple[Path, str, str]] = []

    def find(self, package_name, version_name):
        self.find_calls.append((package_name, version_name))
        return self.entries.get((package_name, version_name))

    def cache_dir(self, source_path, package_name, version_name):
        self.cache_calls.append((source_path, package_name, version_name))
        self.entries[(package_name, version_name)] = source_path
        return source_path


class FakeFetcher(Fetcher):
    """Fetcher that 'extracts' by creating a fixed tree under a directory."""

    def __init__(self, root: Path, top_level: str = "cmake-3.28.1-linux-x86_64"):
        self.root = root
        self.top_level = top_level
        self.downloads: List[str] = []
        self.extracted: List[Tuple[str, Path]] = []
        self.cleanups = 0

    def download(self, url):
        self.downloads.append(url)
        archive = self.root / url.rsplit("/", 1)[-1]
        archive.parent.mkdir(parents=True, exist_ok=True)
        archive.write_bytes(b"archive")
        return archive

    def _extract(self, kind, archive_path):
        self.extracted.append((kind, archive_path))
        destination = self.root / f"extracted-{len(self.extracted)}"
        (destination / self.top_level / "bin").mkdir(parents=True)
        return destination

    def extract_zip(self, archive_path):
        return self._extract("zip", archive_path)

    def extract_tar(self, archive_path):
        return self._extract("tar", archive_path)

    def cleanup(self):
        self.cleanups += 1


class RecordingPublisher(PathPublisher):
    """Path publisher that only records published directories."""

    def __init__(self):
        self.published: List[Path] = []

    def add_path(self, directory):
        self.published.append(directory)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    """Platform detection is cached per process; isolate tests from it."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def tool_cache(tmp_path) -> FakeToolCache:
    return FakeToolCache(tmp_path / "cache")


@pytest.fixture
def fetcher(tmp_path) -> FakeFetcher:
    return FakeFetcher(tmp_path / "fetch")


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def cmake_3_28() -> VersionInfo:
    """A release with the asset set CMake 3.28.1 actually ships."""
    base = "https://github.com/Kitware/CMake/releases/download/v3.28.1"
    names = [
        "cmake-3.28.1-SHA-256.txt",
        "cmake-3.28.1-linux-aarch64.sh",
        "cmake-3.28.1-linux-aarch64.tar.gz",
        "cmake-3.28.1-linux-x86_64.sh",
        "cmake-3.28.1-linux-x86_64.tar.gz",
        "cmake-3.28.1-macos-universal.dmg",
        "cmake-3.28.1-macos-universal.tar.gz",
        "cmake-3.28.1-macos10.10-universal.dmg",
        "cmake-3.28.1-macos10.10-universal.tar.gz",
        "cmake-3.28.1-windows-arm64.msi",
        "cmake-3.28.1-windows-arm64.zip",
        "cmake-3.28.1-windows-i386.msi",
        "cmake-3.28.1-windows-i386.zip",
        "cmake-3.28.1-windows-x86_64.msi",
        "cmake-3.28.1-windows-x86_64.zip",
        "cmake-3.28.1.tar.gz",
        "cmake-3.28.1.zip",
    ]
    return VersionInfo(
        name="3.28.1",
        assets=tuple(AssetInfo.from_release_asset(n, f"{base}/{n}") for n in names),
    )
