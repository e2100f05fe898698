"""Domain types for Cloud Build events."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class BuildStatus(StrEnum):
    """Cloud Build lifecycle status."""

    STATUS_UNKNOWN = "STATUS_UNKNOWN"
    PENDING = "PENDING"
    QUEUED = "QUEUED"
    WORKING = "WORKING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


# ── Provenance ──────────────────────────────────────────────────


class RepoSource(BaseModel):
    """Source in a Cloud Source Repository."""

    model_config = {"frozen": True}

    kind: Literal["repo"] = "repo"
    project_id: str = ""
    repo_name: str = ""
    branch_name: str = ""
    tag_name: str = ""
    commit_sha: str = ""
    dir: str = ""


class GitSource(BaseModel):
    """Source fetched from a plain git URL."""

    model_config = {"frozen": True}

    kind: Literal["git"] = "git"
    url: str = ""
    revision: str = ""
    dir: str = ""


class StorageSource(BaseModel):
    """Source archive in a Cloud Storage bucket."""

    model_config = {"frozen": True}

    kind: Literal["storage"] = "storage"
    bucket: str = ""
    object: str = ""
    generation: int = 0


Source = Annotated[
    Union[RepoSource, GitSource, StorageSource],
    Field(discriminator="kind"),
]

# Pub/Sub payload key → provenance model.
_SOURCE_KEYS: dict[str, type[BaseModel]] = {
    "repoSource": RepoSource,
    "gitSource": GitSource,
    "storageSource": StorageSource,
}

_SOURCE_FIELDS: dict[str, str] = {
    "projectId": "project_id",
    "repoName": "repo_name",
    "branchName": "branch_name",
    "tagName": "tag_name",
    "commitSha": "commit_sha",
}


# ── Build event ─────────────────────────────────────────────────


class BuildEvent(BaseModel):
    """A build lifecycle event as delivered by the host. Read-only."""

    model_config = {"frozen": True}

    id: str = ""
    project_id: str = ""
    status: BuildStatus = BuildStatus.STATUS_UNKNOWN
    log_url: str = ""
    source: Source | None = None
    substitutions: dict[str, str] = Field(default_factory=dict)
    build_trigger_id: str = ""
    create_time: str = ""
    start_time: str = ""
    finish_time: str = ""
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_cloud_build(cls, payload: dict[str, Any]) -> BuildEvent:
        """Build an event from the Cloud Build Pub/Sub JSON message.

        Unknown fields are discarded. A source block with no recognised
        variant yields ``source=None``.
        """
        status = payload.get("status", BuildStatus.STATUS_UNKNOWN)
        if status not in BuildStatus.__members__:
            status = BuildStatus.STATUS_UNKNOWN

        return cls(
            id=payload.get("id", ""),
            project_id=payload.get("projectId", ""),
            status=status,
            log_url=payload.get("logUrl", ""),
            source=_parse_source(payload.get("source")),
            substitutions=dict(payload.get("substitutions") or {}),
            build_trigger_id=payload.get("buildTriggerId", ""),
            create_time=payload.get("createTime", ""),
            start_time=payload.get("startTime", ""),
            finish_time=payload.get("finishTime", ""),
            tags=list(payload.get("tags") or []),
        )


def _parse_source(raw: Any) -> RepoSource | GitSource | StorageSource | None:
    if not isinstance(raw, dict):
        return None
    for key, model in _SOURCE_KEYS.items():
        body = raw.get(key)
        if not isinstance(body, dict):
            continue
        fields = {
            _SOURCE_FIELDS.get(k, k): v
            for k, v in body.items()
            if _SOURCE_FIELDS.get(k, k) in model.model_fields and k != "kind"
        }
        # int64 values arrive as strings in protobuf JSON.
        if "generation" in fields:
            fields["generation"] = int(fields["generation"] or 0)
        return model(**fields)  # type: ignore[return-value]
    return None
