"""Event filters deciding whether a build event produces a notification."""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from jinja2 import StrictUndefined, TemplateSyntaxError
from jinja2.sandbox import ImmutableSandboxedEnvironment

from src.core.types import BuildEvent
from src.notifier.exceptions import FilterError, SetupError

logger = structlog.get_logger(__name__)


class EventFilter(Protocol):
    def apply(self, event: BuildEvent) -> bool: ...


class ExpressionFilter:
    """Filter written as a sandboxed Jinja2 expression over ``build``.

    Example: ``build.status in ["SUCCESS", "FAILURE"]``. An empty
    expression lets every event through.
    """

    def __init__(self, expression: str) -> None:
        self.expression = expression.strip()
        self._compiled: Any = None
        if not self.expression:
            return

        env = ImmutableSandboxedEnvironment(undefined=StrictUndefined)
        try:
            self._compiled = env.compile_expression(self.expression, undefined_to_none=False)
        except TemplateSyntaxError as exc:
            raise SetupError(
                f"failed to compile event filter {self.expression!r}: {exc.message}"
            ) from exc

    def apply(self, event: BuildEvent) -> bool:
        if self._compiled is None:
            return True
        try:
            return bool(self._compiled(build=event))
        except Exception as exc:
            raise FilterError(
                f"event filter {self.expression!r} failed for build {event.id!r}: {exc}"
            ) from exc
