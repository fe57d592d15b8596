"""CLI entrypoint for ECS Conductor."""

import logging
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click
import questionary
from dotenv import load_dotenv
from rich.logging import RichHandler

from ecs_conductor.cli.configuration import AppDefinition, load_definition, scheduler_config
from ecs_conductor.cli.errors import report_remote_error
from ecs_conductor.cli.status import print_service_status
from ecs_conductor.cli.ui import console
from ecs_conductor.config.paths import env_path
from ecs_conductor.core.deployments.aws_ecs import ConfigError, EcsScheduler, PollContext
from ecs_conductor.core.settings import AwsSettings, get_poll_settings

F = TypeVar("F", bound=Callable[..., Any])

DEFINITION_ARGUMENT = click.argument(
    "definition_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def handle_errors(func: F) -> F:
    """Render configuration and remote errors and exit with status 1."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
        except (click.exceptions.Exit, SystemExit):
            raise
        except Exception as exc:  # noqa: BLE001
            report_remote_error(exc)
            raise SystemExit(1) from exc

    return wrapper  # type: ignore[return-value]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug output.")
def cli(verbose: bool) -> None:
    """Deploy containerised applications to Amazon ECS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    # botocore debug output drowns the deployment progress.
    logging.getLogger("botocore").setLevel(logging.WARNING)


@cli.command()
@DEFINITION_ARGUMENT
@click.option("--force", is_flag=True, help="Register a new task definition even if unchanged.")
@click.option("--dry-run", is_flag=True, help="Show container definitions without deploying.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for convergence.")
@handle_errors
def deploy(definition_file: Path, force: bool, dry_run: bool, timeout: float | None) -> None:
    """Deploy the application as a long-running service."""
    definition = load_definition(definition_file)
    scheduler = _scheduler(definition, force=force, dry_run=dry_run, timeout=timeout)
    scheduler.deploy(definition.container_specs())


@cli.command(context_settings={"ignore_unknown_options": True})
@DEFINITION_ARGUMENT
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("--force", is_flag=True, help="Register a new task definition even if unchanged.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the task to stop.")
@click.pass_context
@handle_errors
def oneshot(
    ctx: click.Context,
    definition_file: Path,
    command: tuple[str, ...],
    force: bool,
    timeout: float | None,
) -> None:
    """Run the app container once with COMMAND and exit with its status."""
    definition = load_definition(definition_file)
    scheduler = _scheduler(definition, force=force, timeout=timeout)
    exit_code = scheduler.oneshot(definition.container_specs(), list(command))
    ctx.exit(exit_code)


@cli.command()
@DEFINITION_ARGUMENT
@handle_errors
def status(definition_file: Path) -> None:
    """Show the service, its tasks and recent events."""
    definition = load_definition(definition_file)
    service_status = _scheduler(definition).status()
    if service_status is None:
        console.print("Unavailable")
        raise SystemExit(1)
    print_service_status(service_status)


@cli.command()
@DEFINITION_ARGUMENT
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@handle_errors
def remove(definition_file: Path, yes: bool) -> None:
    """Delete the service and its load balancer."""
    definition = load_definition(definition_file)
    scheduler = _scheduler(definition)
    if not yes:
        confirmed = questionary.confirm(
            f"Remove service {scheduler.app_id} from cluster {scheduler.config.cluster}?",
            default=False,
        ).ask()
        if not confirmed:
            console.print("[dim]Cancelled.[/dim]")
            return
    if not scheduler.remove():
        console.print(f"Service {scheduler.app_id} doesn't exist")


def _scheduler(
    definition: AppDefinition,
    force: bool = False,
    dry_run: bool = False,
    timeout: float | None = None,
) -> EcsScheduler:
    poll_settings = get_poll_settings()
    poll = PollContext(
        interval_seconds=poll_settings.poll_interval_seconds,
        timeout_seconds=timeout if timeout is not None else poll_settings.timeout_seconds,
    )
    return EcsScheduler(
        str(definition.app_id),
        scheduler_config(definition, AwsSettings()),
        force=force,
        dry_run=dry_run,
        poll=poll,
    )


def main() -> None:
    """Run the CLI."""
    load_dotenv(env_path())
    cli()
