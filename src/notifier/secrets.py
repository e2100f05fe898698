"""Secret lookup for the webhook URL."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from src.core.config import SecretConfig
from src.notifier.exceptions import SetupError

_ENV_SCHEME = "env://"


class SecretGetter(Protocol):
    def get_secret(self, name: str) -> str: ...


class EnvSecretGetter:
    """Resolves ``env://VAR`` resource names from the process environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get_secret(self, name: str) -> str:
        if not name.startswith(_ENV_SCHEME):
            raise LookupError(f"unsupported secret resource {name!r}, expected {_ENV_SCHEME}VAR")
        var = name.removeprefix(_ENV_SCHEME)
        value = self._environ.get(var, "")
        if not value:
            raise LookupError(f"environment variable {var!r} is not set")
        return value


def get_secret_ref(delivery: Mapping[str, Any], field: str) -> str:
    """Return the ``secretRef`` named by *field* in a delivery config block."""
    entry = delivery.get(field)
    if not isinstance(entry, Mapping):
        raise SetupError(f"delivery config has no {field!r} entry")
    ref = entry.get("secretRef", "")
    if not isinstance(ref, str) or not ref:
        raise SetupError(f"delivery config field {field!r} has no secretRef")
    return ref


def find_secret_resource_name(secrets: Iterable[SecretConfig], ref: str) -> str:
    """Map a secret ref to the resource name declared under ``spec.secrets``."""
    for secret in secrets:
        if secret.name == ref:
            return secret.value
    raise SetupError(f"no secret named {ref!r} in spec.secrets")
