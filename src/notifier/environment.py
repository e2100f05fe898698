"""Deployment target extraction and production classification."""

from __future__ import annotations

from collections.abc import Mapping

# Field → substitution keys, in order of preference.
_DEPLOYMENT_KEYS: dict[str, tuple[str, ...]] = {
    "project": ("_CLUSTER_PROJECT", "PROJECT_ID"),
    "cluster": ("_CLUSTER", "CLUSTER"),
    "namespace": ("_NAMESPACE", "NAMESPACE"),
}

_PROD_NAMESPACES = frozenset({"p", "prd"})


def deployment_info(substitutions: Mapping[str, str] | None) -> dict[str, str]:
    """Pick project, cluster and namespace out of build substitutions.

    Fields with no non-empty candidate are left out of the result.
    """
    info: dict[str, str] = {}
    if not substitutions:
        return info
    for field, keys in _DEPLOYMENT_KEYS.items():
        for key in keys:
            value = substitutions.get(key, "")
            if value:
                info[field] = value
                break
    return info


def is_prod(info: Mapping[str, str] | None) -> bool:
    """Whether the deployment target looks like production.

    Permissive on purpose: it drives a warning banner, so a false positive
    is preferable to a missed production deploy.
    """
    if not info:
        return False
    cluster = info.get("cluster", "").lower()
    namespace = info.get("namespace", "").lower()
    return "prod" in cluster or "prod" in namespace or namespace in _PROD_NAMESPACES
