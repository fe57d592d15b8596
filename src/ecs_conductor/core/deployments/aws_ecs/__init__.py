"""AWS ECS deployment helpers."""

from ecs_conductor.core.deployments.aws_ecs.cleanup import remove_service
from ecs_conductor.core.deployments.aws_ecs.comparator import is_different
from ecs_conductor.core.deployments.aws_ecs.definitions import (
    create_definitions,
    create_oneshot_definitions,
)
from ecs_conductor.core.deployments.aws_ecs.errors import (
    ConfigError,
    FaultKind,
    PollTimeoutError,
    classify_fault,
)
from ecs_conductor.core.deployments.aws_ecs.load_balancer import EcsLoadBalancer
from ecs_conductor.core.deployments.aws_ecs.models import (
    UNCHANGED,
    AppSpec,
    Changed,
    ContainerResult,
    ContainerSpec,
    FrontSpec,
    LoadBalancerConfig,
    SchedulerConfig,
    ServiceStatus,
    TaskDefinitionRevision,
    Unchanged,
)
from ecs_conductor.core.deployments.aws_ecs.oneshot import derive_exit_code, run_task, wait_for_task
from ecs_conductor.core.deployments.aws_ecs.polling import PollContext
from ecs_conductor.core.deployments.aws_ecs.ports import DEFAULT_FRONT_PORT, determine_front_port
from ecs_conductor.core.deployments.aws_ecs.scheduler import EcsScheduler
from ecs_conductor.core.deployments.aws_ecs.services import (
    create_or_update_service,
    describe_service,
    wait_for_convergence,
)
from ecs_conductor.core.deployments.aws_ecs.session import create_session
from ecs_conductor.core.deployments.aws_ecs.status import check_service
from ecs_conductor.core.deployments.aws_ecs.task_definitions import (
    oneshot_family,
    register_or_reuse,
    register_task_definition,
    task_definition_changed,
)

__all__ = [
    "AppSpec",
    "Changed",
    "ConfigError",
    "ContainerResult",
    "ContainerSpec",
    "DEFAULT_FRONT_PORT",
    "EcsLoadBalancer",
    "EcsScheduler",
    "FaultKind",
    "FrontSpec",
    "LoadBalancerConfig",
    "PollContext",
    "PollTimeoutError",
    "SchedulerConfig",
    "ServiceStatus",
    "TaskDefinitionRevision",
    "UNCHANGED",
    "Unchanged",
    "check_service",
    "classify_fault",
    "create_definitions",
    "create_oneshot_definitions",
    "create_or_update_service",
    "create_session",
    "derive_exit_code",
    "describe_service",
    "determine_front_port",
    "is_different",
    "oneshot_family",
    "register_or_reuse",
    "register_task_definition",
    "remove_service",
    "run_task",
    "task_definition_changed",
    "wait_for_convergence",
    "wait_for_task",
]
