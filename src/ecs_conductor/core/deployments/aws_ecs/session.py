"""AWS session helpers."""

import boto3

from ecs_conductor.core.deployments.aws_ecs.models import SchedulerConfig


def create_session(config: SchedulerConfig) -> boto3.session.Session:
    """Create a boto3 session."""
    if config.profile:
        return boto3.session.Session(
            profile_name=config.profile,
            region_name=config.region,
        )

    return boto3.session.Session(region_name=config.region)
