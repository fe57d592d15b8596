"""Container definition payloads for ECS task definitions."""

from collections.abc import Iterable
from functools import singledispatch
from typing import Any

from ecs_conductor.core.deployments.aws_ecs.models import AppSpec, ContainerSpec, FrontSpec


def create_definitions(
    containers: Iterable[ContainerSpec],
    front_port: int | None,
) -> list[dict[str, Any]]:
    """Build container definitions in input order.

    Args:
        containers: Desired container specs.
        front_port: Host port for the front container, or None when no front
            container is expected.

    Returns:
        One container definition per spec.
    """
    return [container_definition(container, front_port) for container in containers]


def create_oneshot_definitions(containers: Iterable[ContainerSpec]) -> list[dict[str, Any]]:
    """Build container definitions for a oneshot task.

    Front containers are skipped and ``essential`` is dropped so ECS applies
    its own default.
    """
    definitions = create_definitions(
        (c for c in containers if not isinstance(c, FrontSpec)),
        None,
    )
    for definition in definitions:
        definition.pop("essential", None)
    return definitions


@singledispatch
def container_definition(container: Any, front_port: int | None) -> dict[str, Any]:
    """Return the ECS container definition for a container spec."""
    raise TypeError(f"Unsupported container spec: {type(container).__name__}")


@container_definition.register
def _front_definition(container: FrontSpec, front_port: int | None) -> dict[str, Any]:
    if front_port is None:
        raise ValueError("Front container requires a front port.")
    return _base_definition(
        container,
        [{"containerPort": container.container_port, "hostPort": front_port, "protocol": "tcp"}],
    )


@container_definition.register
def _app_definition(container: AppSpec, front_port: int | None) -> dict[str, Any]:
    return _base_definition(container, [])


def _base_definition(
    container: ContainerSpec,
    port_mappings: list[dict[str, Any]],
) -> dict[str, Any]:
    return {
        "name": container.name,
        "image": container.image,
        "cpu": container.cpu,
        "memory": container.memory,
        "links": list(container.links),
        "portMappings": port_mappings,
        "essential": True,
        "environment": [{"name": k, "value": v} for k, v in container.env.items()],
        "dockerLabels": dict(container.docker_labels),
    }
