"""Clean-up helpers for ECS deployment resources."""

import logging
from typing import Any

from botocore.exceptions import ClientError

from ecs_conductor.core.deployments.aws_ecs.errors import error_code
from ecs_conductor.core.deployments.aws_ecs.load_balancer import EcsLoadBalancer
from ecs_conductor.core.deployments.aws_ecs.services import describe_service

logger = logging.getLogger(__name__)

ABSENT_SERVICE_CODES = {"ServiceNotFoundException", "ServiceNotActiveException"}


def remove_service(
    ecs: Any,
    load_balancer: EcsLoadBalancer,
    cluster: str,
    app_id: str,
) -> bool:
    """Delete the service and its load balancer.

    The load balancer is torn down even when the service is already gone.

    Returns:
        True when a service was deleted, False when it did not exist.
    """
    deleted = _delete_service(ecs, cluster, app_id)
    load_balancer.destroy()
    return deleted


def _delete_service(ecs: Any, cluster: str, app_id: str) -> bool:
    service = describe_service(ecs, cluster, app_id)
    if service is None:
        logger.info(f"Service {app_id} doesn't exist")
        return False
    try:
        ecs.delete_service(cluster=cluster, service=app_id, force=True)
    except ClientError as exc:
        if error_code(exc) in ABSENT_SERVICE_CODES:
            logger.info(f"Service {app_id} doesn't exist")
            return False
        raise
    logger.info(f"{service['serviceArn']} is deleted")
    return True
