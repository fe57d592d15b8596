"""Service status output for the CLI."""

from ecs_conductor.cli.ui import console
from ecs_conductor.core.deployments.aws_ecs.models import ServiceStatus


def print_service_status(status: ServiceStatus) -> None:
    """Print a service status report.

    Args:
        status: Status snapshot of the service.
    """
    if status.listeners:
        console.print("Load balancer:")
        for listener in status.listeners:
            console.print(
                f"  {listener.dns_name}:{listener.load_balancer_port} -> "
                f"{listener.container_name}:{listener.container_port}",
                highlight=False,
            )

    console.print("Deployments:")
    for deployment in status.deployments:
        console.print(
            f"  \\[{deployment.status}] {deployment.task_definition} "
            f"desired_count={deployment.desired_count}, "
            f"pending_count={deployment.pending_count}, "
            f"running_count={deployment.running_count}",
            highlight=False,
        )

    console.print("Tasks:")
    for task in status.tasks:
        line = f"  \\[{task.last_status}]: {task.ec2_instance_id or '-'}"
        if task.name_tag:
            line += f" ({task.name_tag})"
        console.print(line, highlight=False)

    console.print("Events:")
    for event in status.events:
        console.print(f"  {event.created_at}: {event.message}", highlight=False, markup=False)
