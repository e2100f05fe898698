"""Tests for ConfigBindingResolver — literals and $(build.*) references."""

from __future__ import annotations

import pytest

from src.core.types import BuildEvent, BuildStatus, GitSource
from src.notifier.bindings import ConfigBindingResolver
from src.notifier.exceptions import ResolutionError


def _event(**kw: object) -> BuildEvent:
    defaults: dict[str, object] = {
        "id": "b1",
        "project_id": "draftboard-368620",
        "status": BuildStatus.FAILURE,
        "source": GitSource(url="https://github.com/org/svc.git", revision="abc"),
        "substitutions": {"_NAMESPACE": "s-prod", "BRANCH_NAME": "main"},
    }
    defaults.update(kw)
    return BuildEvent(**defaults)  # type: ignore[arg-type]


class TestConfigBindingResolver:
    def test_literal_passthrough(self) -> None:
        resolver = ConfigBindingResolver({"channel": "#builds"})
        assert resolver.resolve(_event()) == {"channel": "#builds"}

    def test_event_fields(self) -> None:
        resolver = ConfigBindingResolver(
            {"status": "$(build.status)", "project": "$(build.project_id)"}
        )
        assert resolver.resolve(_event()) == {"status": "FAILURE", "project": "draftboard-368620"}

    def test_camel_case_fields(self) -> None:
        resolver = ConfigBindingResolver({"project": "$(build.projectId)"})
        assert resolver.resolve(_event()) == {"project": "draftboard-368620"}

    def test_substitution(self) -> None:
        resolver = ConfigBindingResolver({"ns": "$(build.substitutions._NAMESPACE)"})
        assert resolver.resolve(_event()) == {"ns": "s-prod"}

    def test_nested_source_field(self) -> None:
        resolver = ConfigBindingResolver({"rev": "$(build.source.revision)"})
        assert resolver.resolve(_event()) == {"rev": "abc"}

    def test_embedded_references(self) -> None:
        resolver = ConfigBindingResolver(
            {"title": "$(build.substitutions.BRANCH_NAME) build $(build.id) $(build.status)"}
        )
        assert resolver.resolve(_event()) == {"title": "main build b1 FAILURE"}

    def test_no_params(self) -> None:
        assert ConfigBindingResolver().resolve(_event()) == {}

    @pytest.mark.parametrize(
        "ref",
        [
            "$(build.no_such_field)",
            "$(build.substitutions.MISSING)",
            "$(build.source.revision.extra)",
            "$(build.model_fields)",
        ],
    )
    def test_unknown_reference(self, ref: str) -> None:
        with pytest.raises(ResolutionError, match="unknown binding reference"):
            ConfigBindingResolver({"x": ref}).resolve(_event())

    def test_reference_through_missing_source(self) -> None:
        with pytest.raises(ResolutionError):
            ConfigBindingResolver({"x": "$(build.source.url)"}).resolve(_event(source=None))
