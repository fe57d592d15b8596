"""Application definition file models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ecs_conductor.core.deployments.aws_ecs.models import (
    DEFAULT_CLUSTER,
    FRONT_CONTAINER_NAME,
    AppSpec,
    ContainerSpec,
    FrontSpec,
    LoadBalancerConfig,
)


class ElbDefinition(BaseModel):
    """Classic load balancer values for the front container."""

    listeners: list[int] = Field(default_factory=lambda: [80])
    subnets: list[str] = Field(default_factory=list)
    security_groups: list[str] = Field(default_factory=list)
    scheme: str | None = None
    health_check_path: str = "/"

    def to_config(self) -> LoadBalancerConfig:
        """Return the load balancer configuration."""
        return LoadBalancerConfig(**self.model_dump())


class SchedulerDefinition(BaseModel):
    """Scheduler values for the application."""

    cluster: str = DEFAULT_CLUSTER
    desired_count: int | None = Field(default=None, ge=0)
    region: str | None = None
    role: str | None = None
    elb: ElbDefinition | None = None


class ContainerDefinition(BaseModel):
    """Desired state of one container."""

    image: str
    cpu: int = Field(ge=0)
    memory: int = Field(gt=0)
    links: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    docker_labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("env", "docker_labels", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items()}
        return value


class AppDefinition(BaseModel):
    """An application definition file."""

    model_config = ConfigDict(extra="ignore")

    app_id: str | None = None
    scheduler: SchedulerDefinition = Field(default_factory=SchedulerDefinition)
    containers: dict[str, ContainerDefinition] = Field(default_factory=dict)

    def container_specs(self) -> list[ContainerSpec]:
        """Return container specs in file order."""
        specs: list[ContainerSpec] = []
        for name, container in self.containers.items():
            values = container.model_dump()
            if name == FRONT_CONTAINER_NAME:
                specs.append(FrontSpec(**values))
            else:
                specs.append(AppSpec(name=name, **values))
        return specs
