"""Runtime settings for ECS Conductor."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ecs_conductor.config.paths import env_path

ENV_FILE_PATH = str(env_path())


class AwsSettings(BaseSettings):
    """AWS configuration used when the definition file leaves it unset."""

    model_config = SettingsConfigDict(env_prefix="AWS_", env_file=ENV_FILE_PATH, extra="ignore")

    region: str | None = Field(default=None, description="AWS region")
    profile: str | None = Field(default=None, description="AWS named profile")


class PollSettings(BaseSettings):
    """Pacing of convergence and oneshot polling."""

    model_config = SettingsConfigDict(
        env_prefix="ECS_CONDUCTOR_",
        env_file=ENV_FILE_PATH,
        extra="ignore",
    )

    poll_interval_seconds: float = Field(default=1.0, gt=0, description="Seconds between polls")
    # Unset means wait until convergence or interruption.
    timeout_seconds: float | None = Field(default=None, gt=0, description="Poll deadline")


def get_poll_settings() -> PollSettings:
    """Load and return the poll settings."""
    return PollSettings()
