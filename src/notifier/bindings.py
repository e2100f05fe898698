"""Binding resolution: template params computed from config and the event."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel

from src.core.types import BuildEvent
from src.notifier.exceptions import ResolutionError

# $(build.status), $(build.substitutions._NAMESPACE), ...
_REFERENCE = re.compile(r"\$\(build((?:\.[A-Za-z0-9_]+)+)\)")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class BindingResolver(Protocol):
    def resolve(self, event: BuildEvent) -> dict[str, str]: ...


class ConfigBindingResolver:
    """Resolves ``spec.notification.params``.

    Literal values pass through verbatim; ``$(build.<path>)`` references are
    replaced with the matching event field or substitution.
    """

    def __init__(self, params: Mapping[str, str] | None = None) -> None:
        self._params = dict(params or {})

    def resolve(self, event: BuildEvent) -> dict[str, str]:
        return {
            name: _REFERENCE.sub(lambda m: _lookup(event, m.group(1)), value)
            for name, value in self._params.items()
        }


def _lookup(event: BuildEvent, path: str) -> str:
    value: Any = event
    for segment in path.lstrip(".").split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                raise ResolutionError(f"unknown binding reference $(build{path})")
            value = value[segment]
            continue
        attr = _CAMEL_BOUNDARY.sub("_", segment).lower()
        if not isinstance(value, BaseModel) or attr not in type(value).model_fields:
            raise ResolutionError(f"unknown binding reference $(build{path})")
        value = getattr(value, attr)
    return "" if value is None else str(value)
