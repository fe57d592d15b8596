"""ECS task definition registration."""

import logging
from typing import Any

from botocore.exceptions import ClientError

from ecs_conductor.core.deployments.aws_ecs.comparator import is_different
from ecs_conductor.core.deployments.aws_ecs.errors import error_code
from ecs_conductor.core.deployments.aws_ecs.models import (
    UNCHANGED,
    Changed,
    TaskDefinitionRevision,
    Unchanged,
)

logger = logging.getLogger(__name__)

ONESHOT_FAMILY_SUFFIX = "-oneshot"


def oneshot_family(app_id: str) -> str:
    """Return the task definition family used for oneshot runs."""
    return f"{app_id}{ONESHOT_FAMILY_SUFFIX}"


def task_definition_changed(
    ecs: Any,
    family: str,
    definitions: list[dict[str, Any]],
    force: bool = False,
) -> bool:
    """Return true when the desired definitions need a new revision.

    Args:
        ecs: ECS client.
        family: Task definition family.
        definitions: Desired container definitions.
        force: Skip the comparison and always register.

    Returns:
        True when a container was added, removed or modified, or when the
        family has never been registered.
    """
    if force:
        return True
    try:
        response = ecs.describe_task_definition(taskDefinition=family)
    except ClientError as exc:
        # ECS reports an unknown family as a generic client fault.
        if error_code(exc) == "ClientException":
            return True
        raise

    registered = {
        c["name"]: c for c in response["taskDefinition"].get("containerDefinitions", [])
    }
    for definition in definitions:
        if is_different(definition, registered.pop(definition["name"], None)):
            return True
    return bool(registered)


def register_task_definition(
    ecs: Any,
    family: str,
    definitions: list[dict[str, Any]],
    force: bool = False,
) -> Changed[dict[str, Any]] | Unchanged:
    """Register a new revision when the definitions changed.

    Returns:
        ``Changed`` with the registered task definition, or ``UNCHANGED``.
    """
    if not task_definition_changed(ecs, family, definitions, force):
        return UNCHANGED
    response = ecs.register_task_definition(family=family, containerDefinitions=definitions)
    return Changed(response["taskDefinition"])


def register_or_reuse(
    ecs: Any,
    family: str,
    definitions: list[dict[str, Any]],
    force: bool = False,
) -> TaskDefinitionRevision:
    """Register a new revision if needed, otherwise fetch the current one."""
    result = register_task_definition(ecs, family, definitions, force)
    if isinstance(result, Changed):
        revision = TaskDefinitionRevision.from_response(result.value, created=True)
        logger.info(f"Registered task definition: {revision.arn}")
        return revision

    logger.info("Task definition isn't changed")
    response = ecs.describe_task_definition(taskDefinition=family)
    return TaskDefinitionRevision.from_response(response["taskDefinition"], created=False)
