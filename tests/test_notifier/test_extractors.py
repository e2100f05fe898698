"""Tests for provenance field extractors — every variant, never raising."""

from __future__ import annotations

import pytest

from src.core.types import GitSource, RepoSource, StorageSource
from src.notifier.extractors import git_ref, repo_name, source_ref, source_type


class _OtherSource:
    """Stand-in for a provenance variant the extractors do not know."""


_UNSET_OR_UNKNOWN = [None, _OtherSource(), "gitSource", {}]


class TestUnsetOrUnknown:
    @pytest.mark.parametrize("source", _UNSET_OR_UNKNOWN)
    def test_repo_name_empty(self, source: object) -> None:
        assert repo_name(source) == ""

    @pytest.mark.parametrize("source", _UNSET_OR_UNKNOWN)
    def test_source_ref_empty(self, source: object) -> None:
        assert source_ref(source) == ""

    @pytest.mark.parametrize("source", _UNSET_OR_UNKNOWN)
    def test_source_type_unknown(self, source: object) -> None:
        assert source_type(source) == "Unknown"


class TestRepoName:
    def test_repo_source_verbatim(self) -> None:
        assert repo_name(RepoSource(repo_name="github_org_svc")) == "github_org_svc"

    def test_git_url_strips_dot_git(self) -> None:
        src = GitSource(url="https://github.com/draftboardco/sales-intro-svc.git")
        assert repo_name(src) == "draftboardco/sales-intro-svc"

    def test_git_url_strips_only_one_suffix(self) -> None:
        src = GitSource(url="https://github.com/org/tools.git.git")
        assert repo_name(src) == "org/tools.git"

    def test_git_url_without_suffix(self) -> None:
        src = GitSource(url="https://gitlab.com/group/sub/project")
        assert repo_name(src) == "sub/project"

    def test_git_url_empty(self) -> None:
        assert repo_name(GitSource(url="")) == ""

    def test_git_url_single_segment(self) -> None:
        assert repo_name(GitSource(url="repo.git")) == "repo"

    def test_storage_bucket(self) -> None:
        src = StorageSource(bucket="draftboard-368620_cloudbuild", object="source/a.tgz")
        assert repo_name(src) == "gs://draftboard-368620_cloudbuild"


class TestSourceRef:
    def test_repo_branch_first(self) -> None:
        src = RepoSource(branch_name="main", tag_name="v1", commit_sha="abc")
        assert source_ref(src) == "branch/main"

    def test_repo_tag_then_commit(self) -> None:
        assert source_ref(RepoSource(tag_name="v1", commit_sha="abc")) == "tag/v1"
        assert source_ref(RepoSource(commit_sha="abc")) == "commit/abc"

    def test_repo_nothing_set(self) -> None:
        assert source_ref(RepoSource(repo_name="svc")) == ""

    def test_git_revision(self) -> None:
        assert source_ref(GitSource(url="u", revision="b8decbd")) == "commit/b8decbd"
        assert source_ref(GitSource(url="u")) == ""

    def test_storage_generation(self) -> None:
        src = StorageSource(bucket="b", object="o.tgz", generation=1742557737797427)
        assert source_ref(src) == "generation/1742557737797427"

    def test_storage_object_when_no_generation(self) -> None:
        assert source_ref(StorageSource(bucket="b", object="o.tgz")) == "object/o.tgz"


class TestSourceType:
    def test_labels(self) -> None:
        assert source_type(RepoSource()) == "Cloud Source Repository"
        assert source_type(GitSource()) == "Git Repository"
        assert source_type(StorageSource()) == "Cloud Storage"


class TestGitRef:
    def test_branch_and_sha(self) -> None:
        subs = {"BRANCH_NAME": "develop", "TAG_NAME": "v1", "SHORT_SHA": "b8decbd"}
        assert git_ref(subs) == "branch/develop (b8decbd)"

    def test_tag_and_sha(self) -> None:
        assert git_ref({"TAG_NAME": "v0.15.0", "SHORT_SHA": "b8decbd"}) == "tag/v0.15.0 (b8decbd)"

    def test_sha_only(self) -> None:
        assert git_ref({"SHORT_SHA": "b8decbd"}) == "commit/b8decbd"

    def test_branch_without_sha(self) -> None:
        assert git_ref({"BRANCH_NAME": "develop"}) == ""

    def test_keys_are_case_sensitive(self) -> None:
        assert git_ref({"short_sha": "b8decbd"}) == ""

    def test_missing_map(self) -> None:
        assert git_ref(None) == ""
        assert git_ref({}) == ""
