"""Pure functions that turn a build's provenance into display strings.

None of these raise: an unset or unrecognised source degrades to ``""``
(or ``"Unknown"`` for the source type label).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.core.types import GitSource, RepoSource, StorageSource

_SOURCE_TYPE_LABELS: dict[type, str] = {
    RepoSource: "Cloud Source Repository",
    GitSource: "Git Repository",
    StorageSource: "Cloud Storage",
}


def repo_name(source: Any) -> str:
    """Return ``owner/repo`` for git sources, the repo name or bucket otherwise."""
    if isinstance(source, RepoSource):
        return source.repo_name
    if isinstance(source, GitSource):
        if not source.url:
            return ""
        parts = source.url.removesuffix(".git").split("/")
        # Fewer than two segments: return whatever is there.
        return "/".join(parts[-2:])
    if isinstance(source, StorageSource):
        return "gs://" + source.bucket
    return ""


def source_ref(source: Any) -> str:
    """Return the ref the build was fetched at, e.g. ``branch/main``."""
    if isinstance(source, RepoSource):
        if source.branch_name:
            return f"branch/{source.branch_name}"
        if source.tag_name:
            return f"tag/{source.tag_name}"
        if source.commit_sha:
            return f"commit/{source.commit_sha}"
        return ""
    if isinstance(source, GitSource):
        return f"commit/{source.revision}" if source.revision else ""
    if isinstance(source, StorageSource):
        if source.generation != 0:
            return f"generation/{source.generation}"
        return f"object/{source.object}"
    return ""


def source_type(source: Any) -> str:
    """Human label for the provenance variant."""
    return _SOURCE_TYPE_LABELS.get(type(source), "Unknown")


def git_ref(substitutions: Mapping[str, str] | None) -> str:
    """Describe the git ref from trigger substitutions.

    Prefers ``BRANCH_NAME`` over ``TAG_NAME``; both need ``SHORT_SHA``.
    """
    if not substitutions:
        return ""
    short_sha = substitutions.get("SHORT_SHA", "")
    branch = substitutions.get("BRANCH_NAME", "")
    if branch and short_sha:
        return f"branch/{branch} ({short_sha})"
    tag = substitutions.get("TAG_NAME", "")
    if tag and short_sha:
        return f"tag/{tag} ({short_sha})"
    if short_sha:
        return f"commit/{short_sha}"
    return ""
