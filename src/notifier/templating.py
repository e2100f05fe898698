"""Jinja2 binding for Block Kit templates.

Templates run in an immutable sandbox: they can read ``build`` and
``params`` and call the helpers registered in :data:`HELPERS`, nothing else.
The template is parsed once; every render gets its own :class:`TemplateView`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import structlog
from jinja2 import StrictUndefined, TemplateSyntaxError, meta
from jinja2.sandbox import ImmutableSandboxedEnvironment

from src.core.types import BuildEvent
from src.notifier.environment import deployment_info, is_prod
from src.notifier.exceptions import RenderError, TemplateParseError
from src.notifier.extractors import git_ref, repo_name, source_ref, source_type

logger = structlog.get_logger(__name__)

# Names a template may read besides the helpers.
VIEW_NAMES = frozenset({"build", "params"})

_UTM_CAMPAIGN = "google-cloud-build-notifiers"
_UTM_SOURCE = "google-cloud-build"


@dataclass(frozen=True)
class TemplateView:
    """What a template sees: the event and its resolved bindings."""

    build: BuildEvent
    params: Mapping[str, str] = field(default_factory=dict)


# ── Generic helpers ─────────────────────────────────────────────


def replace(s: str, old: str, new: str) -> str:
    return s.replace(old, new)


def eq(a: Any, b: Any) -> bool:
    return a == b


def contains(s: str | None, substr: str) -> bool:
    return bool(s) and substr in s


def type_of(value: Any) -> str:
    """Class name of *value*, used to branch on the provenance variant."""
    return type(value).__name__


def with_utm(url: str, medium: str = "chat") -> str:
    """Add Cloud Build notifier UTM parameters to a log URL."""
    if not url:
        return ""
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query.update(
        utm_campaign=_UTM_CAMPAIGN,
        utm_medium=medium,
        utm_source=_UTM_SOURCE,
    )
    return urlunsplit(parts._replace(query=urlencode(sorted(query.items()))))


HELPERS: dict[str, Callable[..., Any]] = {
    "repo_name": repo_name,
    "source_ref": source_ref,
    "source_type": source_type,
    "git_ref": git_ref,
    "deployment_info": deployment_info,
    "is_prod": is_prod,
    "replace": replace,
    "eq": eq,
    "contains": contains,
    "type_of": type_of,
    "with_utm": with_utm,
}


def _make_environment() -> ImmutableSandboxedEnvironment:
    env = ImmutableSandboxedEnvironment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.globals.update(HELPERS)
    return env


class BlockKitTemplate:
    """A parsed Block Kit template. Read-only after :meth:`parse`."""

    def __init__(self, name: str, template: Any) -> None:
        self.name = name
        self._template = template

    @classmethod
    def parse(cls, text: str, name: str = "blockkit_template") -> BlockKitTemplate:
        """Parse *text* once, rejecting names that are neither view fields nor helpers.

        Raises:
            TemplateParseError: on syntax errors, unknown filters or tests,
                or references to unregistered names.
        """
        env = _make_environment()
        try:
            ast = env.parse(text, name=name)
            template = env.from_string(ast)
        except TemplateSyntaxError as exc:
            raise TemplateParseError(
                f"failed to parse template {name!r} (line {exc.lineno}): {exc.message}"
            ) from exc

        unknown = meta.find_undeclared_variables(ast) - VIEW_NAMES - set(env.globals)
        if unknown:
            raise TemplateParseError(
                f"template {name!r} references unknown names: {', '.join(sorted(unknown))}"
            )

        logger.debug("template_parsed", template=name, helpers=len(HELPERS))
        return cls(name, template)

    def render(self, view: TemplateView) -> bytes:
        """Execute the template against *view*.

        Raises:
            RenderError: on undefined fields or a failing helper.
        """
        try:
            text = self._template.render(build=view.build, params=dict(view.params))
        except Exception as exc:
            raise RenderError(
                f"failed to execute template {self.name!r} for build {view.build.id!r}: {exc}"
            ) from exc
        return text.encode("utf-8")
