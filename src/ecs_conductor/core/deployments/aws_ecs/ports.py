"""Front port allocation across the services of a cluster."""

import logging
from typing import Any

from ecs_conductor.core.deployments.aws_ecs.models import FRONT_CONTAINER_NAME
from ecs_conductor.core.deployments.aws_ecs.services import describe_service

logger = logging.getLogger(__name__)

DEFAULT_FRONT_PORT = 10000


def determine_front_port(ecs: Any, cluster: str, app_id: str, dry_run: bool = False) -> int:
    """Return the front host port for an application.

    An existing service keeps the port it is bound to. Otherwise the port is
    one above the highest front port bound by any service in the cluster.
    Two first deploys racing in the same cluster can pick the same port.

    Args:
        ecs: ECS client.
        cluster: ECS cluster name.
        app_id: Application identity (service name).
        dry_run: Return the default port without remote calls.

    Returns:
        The front host port.
    """
    if dry_run:
        return DEFAULT_FRONT_PORT

    service = describe_service(ecs, cluster, app_id)
    if service is not None:
        port = find_front_port(ecs, service["taskDefinition"])
        if port is not None:
            logger.debug(f"Reusing front port {port} of service {app_id}")
            return port
    return new_front_port(ecs, cluster)


def new_front_port(ecs: Any, cluster: str) -> int:
    """Return the lowest port above every front port bound in the cluster."""
    ports: dict[str, int | None] = {}
    paginator = ecs.get_paginator("list_services")
    # describe_services accepts at most 10 services per call.
    for page in paginator.paginate(cluster=cluster, PaginationConfig={"PageSize": 10}):
        service_arns = page.get("serviceArns", [])
        if not service_arns:
            continue
        response = ecs.describe_services(cluster=cluster, services=service_arns)
        for service in response.get("services", []):
            if service.get("status") == "INACTIVE":
                continue
            task_definition = service["taskDefinition"]
            if task_definition not in ports:
                ports[task_definition] = find_front_port(ecs, task_definition)

    observed = [port for port in ports.values() if port is not None]
    if not observed:
        return DEFAULT_FRONT_PORT
    return max(observed) + 1


def find_front_port(ecs: Any, task_definition: str) -> int | None:
    """Return the host port of the front container of a task definition."""
    response = ecs.describe_task_definition(taskDefinition=task_definition)
    for container in response["taskDefinition"].get("containerDefinitions", []):
        if container.get("name") != FRONT_CONTAINER_NAME:
            continue
        port_mappings = container.get("portMappings") or []
        if port_mappings:
            return int(port_mappings[0]["hostPort"])
    return None
