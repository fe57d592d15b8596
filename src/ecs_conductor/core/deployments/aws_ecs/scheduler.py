"""ECS scheduler: deploy, oneshot, status and remove for one application."""

import logging
from typing import Any

from ecs_conductor.core.deployments.aws_ecs.cleanup import remove_service
from ecs_conductor.core.deployments.aws_ecs.definitions import (
    create_definitions,
    create_oneshot_definitions,
)
from ecs_conductor.core.deployments.aws_ecs.errors import ConfigError
from ecs_conductor.core.deployments.aws_ecs.load_balancer import EcsLoadBalancer
from ecs_conductor.core.deployments.aws_ecs.models import (
    APP_CONTAINER_NAME,
    FRONT_CONTAINER_NAME,
    Changed,
    ContainerSpec,
    SchedulerConfig,
    ServiceStatus,
)
from ecs_conductor.core.deployments.aws_ecs.oneshot import derive_exit_code, run_task, wait_for_task
from ecs_conductor.core.deployments.aws_ecs.polling import PollContext
from ecs_conductor.core.deployments.aws_ecs.ports import determine_front_port
from ecs_conductor.core.deployments.aws_ecs.services import (
    create_or_update_service,
    wait_for_convergence,
)
from ecs_conductor.core.deployments.aws_ecs.session import create_session
from ecs_conductor.core.deployments.aws_ecs.status import check_service
from ecs_conductor.core.deployments.aws_ecs.task_definitions import (
    oneshot_family,
    register_or_reuse,
)

logger = logging.getLogger(__name__)


class EcsScheduler:
    """Reconcile one application's containers against an ECS cluster."""

    def __init__(
        self,
        app_id: str,
        config: SchedulerConfig,
        *,
        force: bool = False,
        dry_run: bool = False,
        poll: PollContext | None = None,
        session: Any = None,
    ) -> None:
        """Validate configuration and create AWS clients.

        Args:
            app_id: Application identity, used as family and service name.
            config: Scheduler configuration.
            force: Register a new task definition even if nothing changed.
            dry_run: Log what would be deployed without remote calls.
            poll: Pacing for convergence and oneshot polling.
            session: boto3 session; created from ``config`` when omitted.

        Raises:
            ConfigError: When a required setting is missing.
        """
        if config.desired_count is None:
            raise ConfigError("desired_count must be set")
        if not config.region:
            raise ConfigError("region must be set")

        self.app_id = app_id
        self.config = config
        self.force = force
        self.dry_run = dry_run
        self.poll = poll or PollContext()

        session = session or create_session(config)
        self._ecs = session.client("ecs")
        self._ec2 = session.client("ec2")
        self._load_balancer = EcsLoadBalancer(app_id, session.client("elb"), config.elb)

    def deploy(self, containers: list[ContainerSpec]) -> None:
        """Register the task definition and roll the service out to it."""
        _require_containers(containers, {APP_CONTAINER_NAME, FRONT_CONTAINER_NAME})
        front_port = determine_front_port(
            self._ecs, self.config.cluster, self.app_id, dry_run=self.dry_run
        )
        definitions = create_definitions(containers, front_port)

        if self.dry_run:
            for definition in definitions:
                logger.info(f"Add container {definition}")
            return

        revision = register_or_reuse(self._ecs, self.app_id, definitions, force=self.force)
        result = create_or_update_service(
            self._ecs,
            self._load_balancer,
            self.config,
            self.app_id,
            revision.arn,
            front_port,
        )
        if isinstance(result, Changed):
            logger.info(f"Updated service: {result.value['serviceArn']}")
            wait_for_convergence(self._ecs, result.value, self.poll)
        else:
            logger.info("Service isn't changed")
        logger.info("Deployment completed")

    def oneshot(self, containers: list[ContainerSpec], commands: list[str]) -> int:
        """Run the app container once with ``commands`` and return its exit code."""
        _require_containers(containers, {APP_CONTAINER_NAME})
        definitions = create_oneshot_definitions(containers)
        revision = register_or_reuse(
            self._ecs, oneshot_family(self.app_id), definitions, force=self.force
        )
        task = run_task(self._ecs, self.config.cluster, self.app_id, revision.arn, commands)
        logger.info(f"Started task: {task['taskArn']}")
        results = wait_for_task(
            self._ecs, self._ec2, self.config.cluster, task["taskArn"], self.poll
        )
        logger.info("Oneshot task finished")
        return derive_exit_code(results)

    def status(self) -> ServiceStatus | None:
        """Return the service status, or None when the service is unavailable."""
        return check_service(
            self._ecs, self._ec2, self._load_balancer, self.config.cluster, self.app_id
        )

    def remove(self) -> bool:
        """Delete the service and its load balancer."""
        return remove_service(self._ecs, self._load_balancer, self.config.cluster, self.app_id)


def _require_containers(containers: list[ContainerSpec], names: set[str]) -> None:
    missing = names - {c.name for c in containers}
    if missing:
        raise ConfigError(f"Missing containers: {', '.join(sorted(missing))}")
