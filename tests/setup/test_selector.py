"""
Unit tests for asset selection.
"""

import pytest
from unittest.mock import patch

from cmakesetup.core.exceptions import NotFoundError
from cmakesetup.core.platform import Arch, OSPlatform
from cmakesetup.releases.models import FileType
from cmakesetup.setup.selector import (
    prefer_64bit_or_universal,
    select_asset_url,
    stable_first_match,
)

from conftest import make_asset, make_version


class TestPlatformFiltering:
    """Test filtering by operating system and file type."""

    def test_no_asset_for_platform(self):
        """Test assets for other platforms never match."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/cmake-win.zip", platform=OSPlatform.WIN32),
            make_asset("https://h/cmake-mac.tar.gz", platform=OSPlatform.DARWIN),
        )

        with pytest.raises(NotFoundError, match="linux asset for cmake version 3.20.0"):
            select_asset_url(version, [Arch.X86_64], OSPlatform.LINUX)

    def test_empty_asset_list(self):
        """Test a release without assets fails."""
        with pytest.raises(NotFoundError):
            select_asset_url(make_version("3.20.0"), [Arch.X86_64], OSPlatform.LINUX)

    def test_empty_arch_candidates(self):
        """Test no candidate architectures means nothing can match."""
        version = make_version("3.20.0", make_asset("https://h/cmake.tar.gz"))

        with pytest.raises(NotFoundError):
            select_asset_url(version, [], OSPlatform.LINUX)

    def test_non_archives_are_skipped(self):
        """Test installers and scripts are never selected."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/cmake.sh", filetype=FileType.SCRIPT),
            make_asset("https://h/cmake.tar.gz"),
        )

        assert select_asset_url(version, [Arch.X86_64], OSPlatform.LINUX) == (
            "https://h/cmake.tar.gz"
        )

    def test_only_non_archives(self):
        """Test a platform with only packages fails."""
        version = make_version(
            "3.20.0",
            make_asset(
                "https://h/cmake.msi",
                platform=OSPlatform.WIN32,
                filetype=FileType.PACKAGE,
            ),
        )

        with pytest.raises(NotFoundError):
            select_asset_url(version, [Arch.X86_64], OSPlatform.WIN32)

    def test_unclassified_assets_never_match(self):
        """Test assets without platform or arch are ignored."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/cmake-3.20.0.tar.gz", platform=None, arch=None),
        )

        with pytest.raises(NotFoundError):
            select_asset_url(version, [Arch.X86_64], OSPlatform.LINUX)

    def test_defaults_to_host_platform(self):
        """Test the host OS is used when no platform is given."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/linux.tar.gz", platform=OSPlatform.LINUX),
            make_asset("https://h/win.zip", platform=OSPlatform.WIN32),
        )

        with patch(
            "cmakesetup.setup.selector.detect_os_platform",
            return_value=OSPlatform.WIN32,
        ):
            assert select_asset_url(version, [Arch.X86_64]) == "https://h/win.zip"


class TestArchitecturePriority:
    """Test priority-ordered architecture fallback."""

    def test_first_matching_candidate_wins_over_list_order(self):
        """Test candidate order decides, not asset order."""
        version = make_version(
            "3.20.0",
            make_asset("u1", arch=Arch.ARM64),
            make_asset("u2", arch=Arch.X86_64),
        )

        assert select_asset_url(version, [Arch("x64"), Arch.ARM64], OSPlatform.LINUX) == "u2"

    def test_falls_back_to_later_candidate(self):
        """Test a later candidate is used when earlier ones have no asset."""
        version = make_version("3.20.0", make_asset("u-x86_64", arch=Arch.X86_64))

        assert (
            select_asset_url(version, [Arch.ARM64, Arch.X86_64], OSPlatform.LINUX)
            == "u-x86_64"
        )

    def test_string_candidates_are_normalised(self):
        """Test alias strings select the same asset as enum members."""
        version = make_version(
            "3.20.0",
            make_asset("u1", arch=Arch.ARM64),
            make_asset("u2", arch=Arch.X86_64),
        )

        assert select_asset_url(version, ["x64", "arm64"], OSPlatform.LINUX) == "u2"

    def test_string_platform(self):
        version = make_version("3.20.0", make_asset("u-linux"))

        assert select_asset_url(version, [Arch.X86_64], "linux") == "u-linux"

    def test_unknown_arch_string(self):
        """Test a mistyped architecture fails instead of matching nothing."""
        version = make_version("3.20.0", make_asset("u1"))

        with pytest.raises(ValueError, match="Unknown architecture 'x68'"):
            select_asset_url(version, ["x68"], OSPlatform.LINUX)

    def test_unknown_platform_string(self):
        version = make_version("3.20.0", make_asset("u1"))

        with pytest.raises(ValueError):
            select_asset_url(version, [Arch.X86_64], "beos")

    def test_no_candidate_matches(self):
        """Test failure when no candidate architecture has an asset."""
        version = make_version("3.20.0", make_asset("u-arm", arch=Arch.ARM64))

        with pytest.raises(NotFoundError):
            select_asset_url(version, [Arch.X86_64, Arch.X86], OSPlatform.LINUX)


class TestDisambiguation:
    """Test the 64-bit / universal preference among ambiguous matches."""

    def test_prefers_url_containing_64(self):
        """Test an asset whose URL contains '64' wins."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/tool.zip"),
            make_asset("https://h/tool-x64.zip"),
        )

        assert (
            select_asset_url(version, [Arch.X86_64], OSPlatform.LINUX)
            == "https://h/tool-x64.zip"
        )

    def test_prefers_macos_universal_name(self):
        """Test a macos-universal asset wins without '64' in its URL."""
        version = make_version(
            "3.20.0",
            make_asset(
                "https://h/a.tar.gz", platform=OSPlatform.DARWIN, name="cmake-Darwin.tar.gz"
            ),
            make_asset(
                "https://h/b.tar.gz",
                platform=OSPlatform.DARWIN,
                name="cmake-3.20.0-macos-universal.tar.gz",
            ),
        )

        assert select_asset_url(version, [Arch.X86_64], OSPlatform.DARWIN) == (
            "https://h/b.tar.gz"
        )

    def test_keeps_all_when_nothing_preferred(self):
        """Test the first ambiguous asset wins when none is preferred."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/first.tar.gz"),
            make_asset("https://h/second.tar.gz"),
        )

        assert select_asset_url(version, [Arch.X86_64], OSPlatform.LINUX) == (
            "https://h/first.tar.gz"
        )

    def test_first_of_several_preferred(self):
        """Test position breaks ties among preferred assets."""
        version = make_version(
            "3.20.0",
            make_asset("https://h/plain.tar.gz"),
            make_asset("https://h/first-64.tar.gz"),
            make_asset("https://h/second-64.tar.gz"),
        )

        assert select_asset_url(version, [Arch.X86_64], OSPlatform.LINUX) == (
            "https://h/first-64.tar.gz"
        )

    def test_single_match_skips_heuristic(self):
        """Test a lone match is returned even without '64'."""
        version = make_version("3.20.0", make_asset("https://h/x86.zip", arch=Arch.X86))

        assert select_asset_url(version, [Arch.X86], OSPlatform.LINUX) == "https://h/x86.zip"

    def test_prefer_helper_keeps_input_when_empty(self):
        """Test prefer_64bit_or_universal never narrows to nothing."""
        assets = [make_asset("https://h/a.zip"), make_asset("https://h/b.zip")]

        assert prefer_64bit_or_universal(assets) == assets

    def test_stable_first_match(self):
        """Test stable_first_match returns the first element."""
        assets = [make_asset("https://h/a.zip"), make_asset("https://h/b.zip")]

        assert stable_first_match(assets).url == "https://h/a.zip"


class TestRealReleaseAssets:
    """Test selection against the asset list of a real release."""

    def test_linux_x86_64(self, cmake_3_28):
        url = select_asset_url(cmake_3_28, [Arch.X86_64, Arch.X86], OSPlatform.LINUX)
        assert url.endswith("/cmake-3.28.1-linux-x86_64.tar.gz")

    def test_linux_arm64(self, cmake_3_28):
        url = select_asset_url(cmake_3_28, [Arch.ARM64, Arch.X86_64], OSPlatform.LINUX)
        assert url.endswith("/cmake-3.28.1-linux-aarch64.tar.gz")

    def test_macos_prefers_universal(self, cmake_3_28):
        url = select_asset_url(cmake_3_28, [Arch.ARM64, Arch.X86_64], OSPlatform.DARWIN)
        assert url.endswith("/cmake-3.28.1-macos-universal.tar.gz")

    def test_windows_32bit(self, cmake_3_28):
        url = select_asset_url(cmake_3_28, [Arch.X86], OSPlatform.WIN32)
        assert url.endswith("/cmake-3.28.1-windows-i386.zip")

    def test_windows_x86_64(self, cmake_3_28):
        url = select_asset_url(cmake_3_28, [Arch.X86_64, Arch.X86], OSPlatform.WIN32)
        assert url.endswith("/cmake-3.28.1-windows-x86_64.zip")
