"""Service status checks for ECS."""

from typing import Any

from ecs_conductor.core.deployments.aws_ecs.load_balancer import EcsLoadBalancer
from ecs_conductor.core.deployments.aws_ecs.models import (
    DeploymentStatus,
    EventStatus,
    ListenerStatus,
    ServiceStatus,
    TaskStatus,
)
from ecs_conductor.core.deployments.aws_ecs.services import describe_service

MAX_EVENTS = 10


def check_service(
    ecs: Any,
    ec2: Any,
    load_balancer: EcsLoadBalancer,
    cluster: str,
    app_id: str,
) -> ServiceStatus | None:
    """Collect the status of an application's service.

    Returns:
        The status snapshot, or None when the service is unavailable.
    """
    service = describe_service(ecs, cluster, app_id)
    if service is None:
        return None

    return ServiceStatus(
        service_arn=service["serviceArn"],
        listeners=_listeners(service, load_balancer),
        deployments=[_deployment(d) for d in service.get("deployments", [])],
        tasks=_tasks(ecs, ec2, cluster, service["serviceArn"]),
        events=[
            EventStatus(created_at=e.get("createdAt"), message=e.get("message", ""))
            for e in service.get("events", [])[:MAX_EVENTS]
        ],
    )


def _listeners(service: dict[str, Any], load_balancer: EcsLoadBalancer) -> list[ListenerStatus]:
    bindings = service.get("loadBalancers", [])
    if not bindings:
        return []
    detail = load_balancer.describe_load_balancer()
    if detail is None:
        return []
    binding = bindings[0]
    return [
        ListenerStatus(
            dns_name=detail.get("DNSName", ""),
            load_balancer_port=d["Listener"]["LoadBalancerPort"],
            container_name=binding.get("containerName", ""),
            container_port=binding.get("containerPort", 0),
        )
        for d in detail.get("ListenerDescriptions", [])
    ]


def _deployment(deployment: dict[str, Any]) -> DeploymentStatus:
    # Show family:revision rather than the full ARN.
    task_definition = str(deployment.get("taskDefinition", ""))
    return DeploymentStatus(
        status=str(deployment.get("status", "")),
        task_definition=task_definition.split("task-definition/", 1)[-1],
        desired_count=int(deployment.get("desiredCount", 0)),
        pending_count=int(deployment.get("pendingCount", 0)),
        running_count=int(deployment.get("runningCount", 0)),
    )


def _tasks(ecs: Any, ec2: Any, cluster: str, service_arn: str) -> list[TaskStatus]:
    results: list[TaskStatus] = []
    paginator = ecs.get_paginator("list_tasks")
    for page in paginator.paginate(cluster=cluster, serviceName=service_arn):
        task_arns = page.get("taskArns", [])
        if not task_arns:
            continue
        tasks = ecs.describe_tasks(cluster=cluster, tasks=task_arns).get("tasks", [])
        container_instances = _container_instances(ecs, cluster, tasks)
        names = _instance_names(ec2, [ci["ec2InstanceId"] for ci in container_instances.values()])
        for task in tasks:
            instance = container_instances.get(task.get("containerInstanceArn", ""), {})
            instance_id = instance.get("ec2InstanceId")
            results.append(
                TaskStatus(
                    last_status=str(task.get("lastStatus", "")),
                    ec2_instance_id=instance_id,
                    name_tag=names.get(instance_id) if instance_id else None,
                )
            )
    return results


def _container_instances(
    ecs: Any, cluster: str, tasks: list[dict[str, Any]]
) -> dict[str, dict[str, Any]]:
    arns = sorted({t["containerInstanceArn"] for t in tasks if t.get("containerInstanceArn")})
    if not arns:
        return {}
    response = ecs.describe_container_instances(cluster=cluster, containerInstances=arns)
    return {ci["containerInstanceArn"]: ci for ci in response.get("containerInstances", [])}


def _instance_names(ec2: Any, instance_ids: list[str]) -> dict[str, str]:
    if not instance_ids:
        return {}
    names: dict[str, str] = {}
    response = ec2.describe_instances(InstanceIds=instance_ids)
    for reservation in response.get("Reservations", []):
        for instance in reservation.get("Instances", []):
            for tag in instance.get("Tags", []):
                if tag.get("Key") == "Name":
                    names[instance["InstanceId"]] = tag.get("Value", "")
    return names
