"""Compare desired container definitions with registered ones."""

from typing import Any

CONTAINER_KEYS = ("image", "cpu", "memory")
PORT_MAPPING_KEYS = ("containerPort", "hostPort", "protocol")
ENVIRONMENT_KEYS = ("name", "value")


def is_different(expected: dict[str, Any], actual: dict[str, Any] | None) -> bool:
    """Return true when a registered container differs from the desired one.

    ECS omits empty collections from describe responses, so absent keys on
    either side compare as empty. Port mappings and environment entries are
    compared without regard to order.

    Args:
        expected: Container definition built locally.
        actual: Container definition currently registered, if any.

    Returns:
        True when the definitions differ materially.
    """
    if actual is None:
        return True
    for key in CONTAINER_KEYS:
        if expected.get(key) != actual.get(key):
            return True
    if sorted(expected.get("links") or []) != sorted(actual.get("links") or []):
        return True
    if (expected.get("dockerLabels") or {}) != (actual.get("dockerLabels") or {}):
        return True
    if _members(expected, "portMappings", PORT_MAPPING_KEYS) != _members(
        actual, "portMappings", PORT_MAPPING_KEYS
    ):
        return True
    return _members(expected, "environment", ENVIRONMENT_KEYS) != _members(
        actual, "environment", ENVIRONMENT_KEYS
    )


def _members(
    definition: dict[str, Any],
    key: str,
    fields: tuple[str, ...],
) -> list[tuple[str, ...]]:
    items = definition.get(key) or []
    return sorted(tuple(str(item.get(f)) for f in fields) for item in items)
