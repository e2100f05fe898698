"""Tests for build event types and Pub/Sub payload parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.core.types import (
    BuildEvent,
    BuildStatus,
    GitSource,
    RepoSource,
    StorageSource,
)


class TestFromCloudBuild:
    def test_git_source(self) -> None:
        ev = BuildEvent.from_cloud_build(
            {
                "id": "177e4613-0964-426d-9d6f-bbe677a7d6da",
                "projectId": "draftboard-368620",
                "status": "SUCCESS",
                "logUrl": "https://console.cloud.google.com/cloud-build/builds/177e",
                "source": {
                    "gitSource": {
                        "url": "https://github.com/draftboardco/sales-intro-svc.git",
                        "revision": "b8decbd7e1df6dbb2e075027d502088105eec68d",
                    }
                },
                "substitutions": {"BRANCH_NAME": "develop"},
                "buildTriggerId": "trigger-1",
            }
        )
        assert ev.project_id == "draftboard-368620"
        assert ev.status is BuildStatus.SUCCESS
        assert isinstance(ev.source, GitSource)
        assert ev.source.revision == "b8decbd7e1df6dbb2e075027d502088105eec68d"
        assert ev.substitutions == {"BRANCH_NAME": "develop"}
        assert ev.build_trigger_id == "trigger-1"

    def test_storage_generation_string(self) -> None:
        ev = BuildEvent.from_cloud_build(
            {
                "status": "WORKING",
                "source": {
                    "storageSource": {
                        "bucket": "draftboard-368620_cloudbuild",
                        "object": "source/1742557736.879493.tgz",
                        "generation": "1742557737797427",
                    }
                },
            }
        )
        assert isinstance(ev.source, StorageSource)
        assert ev.source.generation == 1742557737797427

    def test_repo_source_camel_case(self) -> None:
        ev = BuildEvent.from_cloud_build(
            {"source": {"repoSource": {"repoName": "svc", "branchName": "main", "projectId": "p1"}}}
        )
        assert isinstance(ev.source, RepoSource)
        assert ev.source.repo_name == "svc"
        assert ev.source.branch_name == "main"
        assert ev.source.project_id == "p1"

    def test_unknown_source_variant_is_none(self) -> None:
        ev = BuildEvent.from_cloud_build({"source": {"connectedRepository": {"repository": "x"}}})
        assert ev.source is None

    def test_missing_fields_default(self) -> None:
        ev = BuildEvent.from_cloud_build({})
        assert ev.id == ""
        assert ev.status is BuildStatus.STATUS_UNKNOWN
        assert ev.source is None
        assert ev.substitutions == {}

    def test_unknown_status_degrades(self) -> None:
        ev = BuildEvent.from_cloud_build({"status": "SOMETHING_NEW"})
        assert ev.status is BuildStatus.STATUS_UNKNOWN

    def test_unknown_fields_discarded(self) -> None:
        ev = BuildEvent.from_cloud_build(
            {"id": "b1", "steps": [{"name": "gcr.io/cloud-builders/docker"}]}
        )
        assert ev.id == "b1"


class TestSourceUnion:
    def test_discriminated_by_kind(self) -> None:
        ev = BuildEvent.model_validate(
            {"source": {"kind": "storage", "bucket": "b", "object": "o"}}
        )
        assert isinstance(ev.source, StorageSource)

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BuildEvent.model_validate({"source": {"kind": "ftp"}})


class TestImmutability:
    def test_event_is_frozen(self) -> None:
        ev = BuildEvent(id="b1")
        with pytest.raises(ValidationError):
            ev.id = "b2"  # type: ignore[misc]

    def test_source_is_frozen(self) -> None:
        src = GitSource(url="https://github.com/a/b.git")
        with pytest.raises(ValidationError):
            src.url = "x"  # type: ignore[misc]
