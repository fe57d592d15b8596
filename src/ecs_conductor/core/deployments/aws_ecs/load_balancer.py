"""Classic load balancer in front of the front container."""

import logging
from typing import Any

from botocore.exceptions import ClientError

from ecs_conductor.core.deployments.aws_ecs.errors import error_code
from ecs_conductor.core.deployments.aws_ecs.models import LoadBalancerConfig

logger = logging.getLogger(__name__)

NAME_PREFIX = "ecs-conductor-"
NAME_MAX_LENGTH = 32


class EcsLoadBalancer:
    """Find, create, describe and destroy the load balancer of an application."""

    def __init__(self, app_id: str, client: Any, config: LoadBalancerConfig | None) -> None:
        """Initialise the load balancer collaborator.

        Args:
            app_id: Application identity.
            client: Classic ELB client.
            config: Load balancer settings; None disables creation.
        """
        self._app_id = app_id
        self._client = client
        self._config = config

    @property
    def name(self) -> str:
        """Return the load balancer name for this application."""
        return f"{NAME_PREFIX}{self._app_id}"[:NAME_MAX_LENGTH]

    def find_or_create_load_balancer(self, front_port: int) -> str | None:
        """Ensure the load balancer exists when one is configured.

        Args:
            front_port: Host port listeners forward to.

        Returns:
            The load balancer name, or None when no load balancer is configured.
        """
        if self._config is None:
            return None
        if self.describe_load_balancer() is None:
            params: dict[str, Any] = {
                "LoadBalancerName": self.name,
                "Listeners": [
                    {
                        "Protocol": "HTTP",
                        "LoadBalancerPort": port,
                        "InstanceProtocol": "HTTP",
                        "InstancePort": front_port,
                    }
                    for port in self._config.listeners
                ],
                "Subnets": self._config.subnets,
                "SecurityGroups": self._config.security_groups,
            }
            if self._config.scheme:
                params["Scheme"] = self._config.scheme
            response = self._client.create_load_balancer(**params)
            self._client.configure_health_check(
                LoadBalancerName=self.name,
                HealthCheck={
                    "Target": f"HTTP:{front_port}{self._config.health_check_path}",
                    "Interval": 30,
                    "Timeout": 5,
                    "UnhealthyThreshold": 2,
                    "HealthyThreshold": 10,
                },
            )
            logger.info(f"Created ELB {response.get('DNSName')} with instance_port={front_port}")
        return self.name

    def describe_load_balancer(self) -> dict[str, Any] | None:
        """Return the load balancer description, or None when it does not exist."""
        try:
            response = self._client.describe_load_balancers(LoadBalancerNames=[self.name])
        except ClientError as exc:
            if error_code(exc) == "LoadBalancerNotFound":
                return None
            raise
        descriptions = response.get("LoadBalancerDescriptions", [])
        return descriptions[0] if descriptions else None

    def destroy(self) -> None:
        """Delete the load balancer if it exists."""
        if self.describe_load_balancer() is None:
            logger.info(f"ELB {self.name} doesn't exist")
            return
        self._client.delete_load_balancer(LoadBalancerName=self.name)
        logger.info(f"Deleted ELB {self.name}")
