"""
Unit tests for version request matching.
"""

import pytest

from cmakesetup.core.exceptions import NotFoundError, VersionNotFoundError
from cmakesetup.releases.matching import (
    get_latest_matching,
    matching_versions,
    parse_version,
)
from cmakesetup.releases.models import VersionInfo


@pytest.fixture
def versions():
    return [
        VersionInfo(name="3.29.0-rc1", prerelease=True),
        VersionInfo(name="3.28.3"),
        VersionInfo(name="3.30.0", draft=True),
        VersionInfo(name="3.28.1"),
        VersionInfo(name="3.27.9"),
        VersionInfo(name="3.9.6"),
        VersionInfo(name="nightly"),
        VersionInfo(name="2.8.12"),
    ]


class TestGetLatestMatching:
    """Test resolving a request to one release."""

    @pytest.mark.parametrize("requested", ["", "latest", " latest "])
    def test_latest(self, versions, requested):
        assert get_latest_matching(requested, versions).name == "3.28.3"

    @pytest.mark.parametrize(
        "requested,expected",
        [
            ("3", "3.28.3"),
            ("3.x", "3.28.3"),
            ("3.28", "3.28.3"),
            ("3.28.x", "3.28.3"),
            ("3.27.X", "3.27.9"),
            ("3.9", "3.9.6"),
            ("2", "2.8.12"),
        ],
    )
    def test_prefix(self, versions, requested, expected):
        assert get_latest_matching(requested, versions).name == expected

    def test_exact(self, versions):
        assert get_latest_matching("3.28.1", versions).name == "3.28.1"

    def test_exact_prerelease(self, versions):
        assert get_latest_matching("3.29.0-rc1", versions).name == "3.29.0-rc1"

    def test_specifier_set(self, versions):
        assert get_latest_matching(">=3.20,<3.28", versions).name == "3.27.9"

    def test_version_ordering_is_numeric(self, versions):
        """Test 3.28 sorts above 3.9."""
        assert get_latest_matching("<4", versions).name == "3.28.3"

    def test_drafts_never_match(self, versions):
        with pytest.raises(VersionNotFoundError):
            get_latest_matching("3.30.0", versions)

    def test_no_match(self, versions):
        with pytest.raises(VersionNotFoundError, match="Unable to find version matching 4.x"):
            get_latest_matching("4.x", versions)

    def test_not_found_is_a_not_found_error(self, versions):
        with pytest.raises(NotFoundError):
            get_latest_matching("9.9.9", versions)

    @pytest.mark.parametrize("requested", ["banana", "3.28.1.x.y", ">=three"])
    def test_unparseable_request(self, versions, requested):
        with pytest.raises(VersionNotFoundError):
            get_latest_matching(requested, versions)

    def test_empty_index(self):
        with pytest.raises(VersionNotFoundError):
            get_latest_matching("latest", [])


class TestMatchingVersions:
    """Test listing every matching release."""

    def test_newest_first(self, versions):
        names = [v.name for v in matching_versions("3.28", versions)]

        assert names == ["3.28.3", "3.28.1"]

    def test_latest_lists_all_stable(self, versions):
        names = [v.name for v in matching_versions("latest", versions)]

        assert names == ["3.28.3", "3.28.1", "3.27.9", "3.9.6", "2.8.12"]


class TestParseVersion:
    def test_valid(self):
        assert str(parse_version("3.28.1")) == "3.28.1"

    def test_invalid(self):
        assert parse_version("nightly") is None
