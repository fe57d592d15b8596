"""ECS Conductor core modules."""

from ecs_conductor.core.settings import AwsSettings, PollSettings, get_poll_settings

__all__ = [
    "AwsSettings",
    "PollSettings",
    "get_poll_settings",
]
