"""ECS service reconciliation and convergence polling."""

import logging
from enum import Enum
from typing import Any

from ecs_conductor.core.deployments.aws_ecs.models import (
    FRONT_CONTAINER_NAME,
    UNCHANGED,
    Changed,
    SchedulerConfig,
    Unchanged,
)
from ecs_conductor.core.deployments.aws_ecs.polling import PollContext

logger = logging.getLogger(__name__)

SERVICE_KEYS = ("desiredCount", "taskDefinition")


class ConvergenceState(Enum):
    """State of a service rollout as seen by the poller."""

    CONVERGING = "converging"
    CONVERGED = "converged"


def describe_service(ecs: Any, cluster: str, app_id: str) -> dict[str, Any] | None:
    """Return the live service, or None when it is missing or INACTIVE."""
    response = ecs.describe_services(cluster=cluster, services=[app_id])
    services = response.get("services", [])
    if not services:
        return None
    service = services[0]
    if service.get("status") == "INACTIVE":
        return None
    return service


def create_or_update_service(
    ecs: Any,
    load_balancer: Any,
    config: SchedulerConfig,
    app_id: str,
    task_definition_arn: str,
    front_port: int,
) -> Changed[dict[str, Any]] | Unchanged:
    """Create the service, or update it when its binding changed.

    Args:
        ecs: ECS client.
        load_balancer: Load balancer collaborator.
        config: Scheduler configuration.
        app_id: Application identity (service name).
        task_definition_arn: Revision the service should run.
        front_port: Host port of the front container.

    Returns:
        ``Changed`` with the created or updated service, or ``UNCHANGED``.
    """
    service = describe_service(ecs, config.cluster, app_id)
    if service is None:
        params: dict[str, Any] = {
            "cluster": config.cluster,
            "serviceName": app_id,
            "taskDefinition": task_definition_arn,
            "desiredCount": config.desired_count,
        }
        if config.role:
            params["role"] = config.role
        name = load_balancer.find_or_create_load_balancer(front_port)
        if name:
            params["loadBalancers"] = [
                {
                    "loadBalancerName": name,
                    "containerName": FRONT_CONTAINER_NAME,
                    "containerPort": 80,
                }
            ]
        return Changed(ecs.create_service(**params)["service"])

    desired = {"desiredCount": config.desired_count, "taskDefinition": task_definition_arn}
    if not service_changed(service, desired):
        return UNCHANGED
    response = ecs.update_service(cluster=config.cluster, service=app_id, **desired)
    return Changed(response["service"])


def service_changed(service: dict[str, Any], desired: dict[str, Any]) -> bool:
    """Return true when desired count or task definition differ.

    Other service attributes are not updatable through this path and are
    ignored.
    """
    return any(service.get(key) != desired[key] for key in SERVICE_KEYS)


def wait_for_convergence(
    ecs: Any,
    service: dict[str, Any],
    poll: PollContext | None = None,
) -> dict[str, Any]:
    """Poll a service until none of its deployments is ACTIVE.

    New service events are logged once each while waiting.

    Args:
        ecs: ECS client.
        service: Service returned by the create or update call.
        poll: Poll pacing; unbounded by default.

    Returns:
        The converged service.
    """
    poll = poll or PollContext()
    deadline = poll.deadline()
    latest_event_id = _latest_event_id(service.get("events", []))
    while True:
        response = ecs.describe_services(
            cluster=service["clusterArn"], services=[service["serviceArn"]]
        )
        current = response["services"][0]
        events = current.get("events", [])
        for event in new_events(events, latest_event_id):
            logger.info(f"{event['createdAt']}: {event['message']}")
        latest_event_id = _latest_event_id(events)

        state = next_convergence_state(current.get("deployments", []))
        if state is ConvergenceState.CONVERGED:
            return current
        poll.wait(deadline, f"service {current.get('serviceName', '')} to converge")


def next_convergence_state(deployments: list[dict[str, Any]]) -> ConvergenceState:
    """Return CONVERGED once no deployment is ACTIVE."""
    if all(d.get("status") != "ACTIVE" for d in deployments):
        return ConvergenceState.CONVERGED
    return ConvergenceState.CONVERGING


def new_events(events: list[dict[str, Any]], latest_event_id: str | None) -> list[dict[str, Any]]:
    """Return events newer than the given id, newest first."""
    fresh = []
    for event in events:
        if event.get("id") == latest_event_id:
            break
        fresh.append(event)
    return fresh


def _latest_event_id(events: list[dict[str, Any]]) -> str | None:
    if not events:
        return None
    return events[0].get("id")
