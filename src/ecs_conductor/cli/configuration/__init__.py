"""Application definition files."""

from ecs_conductor.cli.configuration.models import AppDefinition
from ecs_conductor.cli.configuration.store import load_definition, scheduler_config

__all__ = [
    "AppDefinition",
    "load_definition",
    "scheduler_config",
]
