"""ECS Conductor - deploy containerised applications to Amazon ECS."""

from ecs_conductor.core.deployments.aws_ecs import EcsScheduler, SchedulerConfig

__all__ = [
    "EcsScheduler",
    "SchedulerConfig",
]
