"""Data models for ECS deployment."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT_CLUSTER = "default"
APP_CONTAINER_NAME = "app"
FRONT_CONTAINER_NAME = "front"


@dataclass
class LoadBalancerConfig:
    """Classic load balancer settings for the front container."""

    listeners: list[int] = field(default_factory=lambda: [80])
    subnets: list[str] = field(default_factory=list)
    security_groups: list[str] = field(default_factory=list)
    scheme: str | None = None
    health_check_path: str = "/"


@dataclass
class SchedulerConfig:
    """Configuration for the ECS scheduler."""

    desired_count: int | None
    region: str | None
    cluster: str = DEFAULT_CLUSTER
    role: str | None = None
    profile: str | None = None
    elb: LoadBalancerConfig | None = None


@dataclass
class AppSpec:
    """Desired state of an application or auxiliary container."""

    name: str
    image: str
    cpu: int
    memory: int
    links: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    docker_labels: dict[str, str] = field(default_factory=dict)


@dataclass
class FrontSpec:
    """Desired state of the front container, which exposes a host port."""

    image: str
    cpu: int
    memory: int
    links: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    docker_labels: dict[str, str] = field(default_factory=dict)
    container_port: int = 80
    name: str = FRONT_CONTAINER_NAME


ContainerSpec = AppSpec | FrontSpec


@dataclass(frozen=True)
class Unchanged:
    """Marker result for a reconciliation step that changed nothing."""


@dataclass(frozen=True)
class Changed(Generic[T]):
    """Result of a reconciliation step that mutated remote state."""

    value: T


UNCHANGED = Unchanged()


@dataclass
class TaskDefinitionRevision:
    """A registered task definition revision."""

    arn: str
    family: str
    revision: int
    created: bool
    container_definitions: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_response(
        cls, task_definition: dict[str, Any], created: bool
    ) -> "TaskDefinitionRevision":
        """Build a revision from a describe/register response body."""
        return cls(
            arn=str(task_definition["taskDefinitionArn"]),
            family=str(task_definition.get("family", "")),
            revision=int(task_definition.get("revision", 0)),
            created=created,
            container_definitions=list(task_definition.get("containerDefinitions", [])),
        )


@dataclass
class ContainerResult:
    """Final state of one container of a stopped oneshot task."""

    name: str
    exit_code: int | None
    reason: str | None = None


@dataclass
class ListenerStatus:
    """A load balancer listener routed to the front container."""

    dns_name: str
    load_balancer_port: int
    container_name: str
    container_port: int


@dataclass
class DeploymentStatus:
    """A deployment attached to the service."""

    status: str
    task_definition: str
    desired_count: int
    pending_count: int
    running_count: int


@dataclass
class TaskStatus:
    """A running task and the EC2 instance backing it."""

    last_status: str
    ec2_instance_id: str | None
    name_tag: str | None = None


@dataclass
class EventStatus:
    """A service event."""

    created_at: Any
    message: str


@dataclass
class ServiceStatus:
    """Snapshot of a service for status reporting."""

    service_arn: str
    listeners: list[ListenerStatus] = field(default_factory=list)
    deployments: list[DeploymentStatus] = field(default_factory=list)
    tasks: list[TaskStatus] = field(default_factory=list)
    events: list[EventStatus] = field(default_factory=list)
