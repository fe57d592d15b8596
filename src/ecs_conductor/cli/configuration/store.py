"""Application definition loading."""

import json
from pathlib import Path

from pydantic import ValidationError

from ecs_conductor.cli.configuration.models import AppDefinition
from ecs_conductor.core.deployments.aws_ecs.errors import ConfigError
from ecs_conductor.core.deployments.aws_ecs.models import SchedulerConfig
from ecs_conductor.core.settings import AwsSettings


def load_definition(path: Path) -> AppDefinition:
    """Load an application definition from disk.

    Args:
        path: Definition file path.

    Returns:
        The loaded definition, with ``app_id`` defaulting to the file stem.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read definition file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid definition file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Definition file must contain a JSON object.")

    try:
        definition = AppDefinition.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid definition values: {exc}") from exc

    if not definition.app_id:
        definition.app_id = path.stem
    return definition


def scheduler_config(definition: AppDefinition, aws: AwsSettings) -> SchedulerConfig:
    """Return scheduler configuration, falling back to AWS settings for the region.

    Args:
        definition: Loaded application definition.
        aws: AWS settings from the environment.

    Returns:
        The scheduler configuration.
    """
    scheduler = definition.scheduler
    return SchedulerConfig(
        desired_count=scheduler.desired_count,
        region=scheduler.region or aws.region,
        cluster=scheduler.cluster,
        role=scheduler.role,
        profile=aws.profile,
        elb=scheduler.elb.to_config() if scheduler.elb else None,
    )
