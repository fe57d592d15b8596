"""Oneshot ECS task execution."""

import logging
from typing import Any

from ecs_conductor.core.deployments.aws_ecs.models import APP_CONTAINER_NAME, ContainerResult
from ecs_conductor.core.deployments.aws_ecs.polling import PollContext

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND_EXIT_CODE = 127
STOPPED = "STOPPED"
STARTED_BY_MAX_LENGTH = 36


def run_task(
    ecs: Any,
    cluster: str,
    app_id: str,
    task_definition_arn: str,
    commands: list[str],
) -> dict[str, Any]:
    """Start one task with the app container command overridden.

    Raises:
        RuntimeError: When ECS did not place the task.
    """
    response = ecs.run_task(
        cluster=cluster,
        taskDefinition=task_definition_arn,
        overrides={"containerOverrides": [{"name": APP_CONTAINER_NAME, "command": commands}]},
        count=1,
        startedBy=f"ecs-conductor oneshot {app_id}"[:STARTED_BY_MAX_LENGTH],
    )
    tasks = response.get("tasks", [])
    if not tasks:
        raise RuntimeError(f"Failed to run task: {response.get('failures', [])}")
    return tasks[0]


def wait_for_task(
    ecs: Any,
    ec2: Any,
    cluster: str,
    task_arn: str,
    poll: PollContext | None = None,
) -> dict[str, ContainerResult]:
    """Poll a task until it is STOPPED.

    The container instance is reported whenever it is first seen or changes,
    and the start time once it is known.

    Returns:
        Final container results keyed by container name.
    """
    poll = poll or PollContext()
    deadline = poll.deadline()
    container_instance_arn = None
    started_at = None
    while True:
        task = ecs.describe_tasks(cluster=cluster, tasks=[task_arn])["tasks"][0]
        current_instance = task.get("containerInstanceArn")
        if current_instance and current_instance != container_instance_arn:
            container_instance_arn = current_instance
            report_container_instance(ecs, ec2, cluster, container_instance_arn)
        if started_at is None and task.get("startedAt") is not None:
            started_at = task["startedAt"]
            logger.info(f"Started at {started_at}")

        status = task.get("lastStatus")
        logger.debug(f"  status {status}")
        if status == STOPPED:
            logger.info(f"Stopped at {task.get('stoppedAt')}")
            return {
                c["name"]: ContainerResult(
                    name=c["name"], exit_code=c.get("exitCode"), reason=c.get("reason")
                )
                for c in task.get("containers", [])
            }
        poll.wait(deadline, f"task {task_arn} to stop")


def report_container_instance(
    ecs: Any,
    ec2: Any,
    cluster: str,
    container_instance_arn: str,
) -> None:
    """Log the container instance a task was placed on."""
    response = ecs.describe_container_instances(
        cluster=cluster, containerInstances=[container_instance_arn]
    )
    instance_id = response["containerInstances"][0]["ec2InstanceId"]
    name_tag = None
    paginator = ec2.get_paginator("describe_tags")
    for page in paginator.paginate(Filters=[{"Name": "resource-id", "Values": [instance_id]}]):
        for tag in page.get("Tags", []):
            if tag.get("Key") == "Name":
                name_tag = tag.get("Value")
    if name_tag:
        logger.info(f"Container instance is {container_instance_arn} ({name_tag} {instance_id})")
    else:
        logger.info(f"Container instance is {container_instance_arn} ({instance_id})")


def derive_exit_code(containers: dict[str, ContainerResult]) -> int:
    """Return the process exit code for a stopped oneshot task.

    The ``app`` container's exit code wins; without one the result is 127.
    """
    exit_code = COMMAND_NOT_FOUND_EXIT_CODE
    for name, container in containers.items():
        if container.exit_code is None:
            logger.info(f"{name} has stopped without exit_code: reason={container.reason}")
            continue
        logger.info(f"{name} has stopped with exit_code={container.exit_code}")
        if name == APP_CONTAINER_NAME:
            exit_code = container.exit_code
    return exit_code
