"""
Tests for latest version tag resolution.
"""

from git_smart.git_manager import GitManager
from git_smart.version_resolver import (
    latest_version,
    parse_version_tags,
    resolve_latest_version,
    suffix_sort_key,
)


class TestResolveLatestVersion:
    """Test the two-phase resolution."""

    def test_plain_tag_preferred_over_prerelease(self):
        assert resolve_latest_version(["v1.2.0", "v1.3.0", "v1.3.0-rc1"]) == "v1.3.0"

    def test_highest_suffix_without_plain_tag(self):
        assert resolve_latest_version(["v1.3.0-rc1", "v1.3.0-rc2"]) == "v1.3.0-rc2"

    def test_prerelease_of_newer_base_wins(self):
        assert resolve_latest_version(["v1.2.0", "v1.3.0-alpha"]) == "v1.3.0-alpha"

    def test_numeric_ordering(self):
        assert resolve_latest_version(["v1.9.0", "v1.10.0", "v1.2.0"]) == "v1.10.0"

    def test_natural_suffix_ordering(self):
        assert resolve_latest_version(["v2.0.0-rc2", "v2.0.0-rc10"]) == "v2.0.0-rc10"

    def test_ignores_non_version_tags(self):
        assert resolve_latest_version(["release", "v1.0.0", "nightly"]) == "v1.0.0"

    def test_no_matching_tags(self):
        assert resolve_latest_version([]) is None
        assert resolve_latest_version(["release"]) is None


class TestHelpers:
    """Test parsing and ordering helpers."""

    def test_parse_version_tags_filters(self):
        tags = parse_version_tags(["v1.0.0", "junk", "2.0.0-beta"])
        assert [t.name for t in tags] == ["v1.0.0", "2.0.0-beta"]

    def test_suffix_sort_key(self):
        assert suffix_sort_key("-rc10") > suffix_sort_key("-rc9")
        assert suffix_sort_key("-beta") > suffix_sort_key("-alpha")


class TestLatestVersionInRepo:
    """Test resolution against real repository tags."""

    def test_reads_repo_tags(self, git_repo, git_cmd):
        for tag in ("v1.2.0", "v1.3.0-rc1", "v1.3.0-rc2"):
            git_cmd(git_repo, "tag", tag)

        assert latest_version(GitManager(git_repo)) == "v1.3.0-rc2"

        git_cmd(git_repo, "tag", "v1.3.0")
        assert latest_version(GitManager(git_repo)) == "v1.3.0"

    def test_no_tags(self, git_repo):
        assert latest_version(GitManager(git_repo)) is None
