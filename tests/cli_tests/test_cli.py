"""Tests for the command line interface."""

import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from ecs_conductor.cli.configuration import load_definition, scheduler_config
from ecs_conductor.cli.main import cli
from ecs_conductor.core.deployments.aws_ecs import AppSpec, ConfigError, FrontSpec
from ecs_conductor.core.deployments.aws_ecs.models import (
    DeploymentStatus,
    EventStatus,
    ServiceStatus,
    TaskStatus,
)
from ecs_conductor.core.settings import AwsSettings
from tests.conftest import client_error

DEFINITION: dict[str, Any] = {
    "scheduler": {
        "cluster": "production",
        "desired_count": 2,
        "region": "eu-west-2",
        "elb": {"listeners": [80], "subnets": ["subnet-1"], "security_groups": ["sg-1"]},
    },
    "containers": {
        "app": {"image": "example/app:1.0", "cpu": 256, "memory": 512, "env": {"WORKERS": 4}},
        "front": {"image": "example/nginx:1.0", "cpu": 64, "memory": 128, "links": ["app"]},
    },
}


@pytest.fixture
def definition_file(tmp_path: Path) -> Path:
    """Write a definition file named after the application."""
    path = tmp_path / "myapp.json"
    path.write_text(json.dumps(DEFINITION), encoding="utf-8")
    return path


@pytest.fixture
def mock_scheduler() -> Any:
    """Patch the scheduler class used by the CLI."""
    with patch("ecs_conductor.cli.main.EcsScheduler") as scheduler_class:
        yield scheduler_class


def test_load_definition_builds_specs(definition_file: Path) -> None:
    """The file stem is the app id and containers keep file order."""
    definition = load_definition(definition_file)

    assert definition.app_id == "myapp"
    specs = definition.container_specs()
    assert isinstance(specs[0], AppSpec)
    assert specs[0].env == {"WORKERS": "4"}
    assert isinstance(specs[1], FrontSpec)
    config = scheduler_config(definition, AwsSettings(region=None, profile=None))
    assert config.cluster == "production"
    assert config.elb is not None and config.elb.subnets == ["subnet-1"]


def test_region_falls_back_to_environment(tmp_path: Path) -> None:
    """AWS settings fill in a missing region."""
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"scheduler": {"desired_count": 1}}), encoding="utf-8")

    config = scheduler_config(load_definition(path), AwsSettings(region="us-east-1"))

    assert config.region == "us-east-1"


def test_invalid_definition_raises_config_error(tmp_path: Path) -> None:
    """Malformed files are configuration errors."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_definition(path)


def test_deploy_passes_flags(definition_file: Path, mock_scheduler: MagicMock) -> None:
    """Deploy builds a scheduler with the requested flags."""
    result = CliRunner().invoke(cli, ["deploy", str(definition_file), "--force", "--timeout", "60"])

    assert result.exit_code == 0, result.output
    args, kwargs = mock_scheduler.call_args
    assert args[0] == "myapp"
    assert kwargs["force"] is True
    assert kwargs["dry_run"] is False
    assert kwargs["poll"].timeout_seconds == 60.0
    mock_scheduler.return_value.deploy.assert_called_once()


def test_oneshot_exits_with_task_exit_code(
    definition_file: Path, mock_scheduler: MagicMock
) -> None:
    """The oneshot exit code becomes the process exit code."""
    mock_scheduler.return_value.oneshot.return_value = 3

    result = CliRunner().invoke(cli, ["oneshot", str(definition_file), "rake", "db:migrate"])

    assert result.exit_code == 3
    _, commands = mock_scheduler.return_value.oneshot.call_args.args
    assert commands == ["rake", "db:migrate"]


def test_status_of_missing_service_exits_1(
    definition_file: Path, mock_scheduler: MagicMock
) -> None:
    """An unavailable service is reported with exit code 1."""
    mock_scheduler.return_value.status.return_value = None

    result = CliRunner().invoke(cli, ["status", str(definition_file)])

    assert result.exit_code == 1
    assert "Unavailable" in result.output


def test_status_prints_report(definition_file: Path, mock_scheduler: MagicMock) -> None:
    """The report lists deployments, tasks and events."""
    mock_scheduler.return_value.status.return_value = ServiceStatus(
        service_arn="arn:service/myapp",
        deployments=[DeploymentStatus("PRIMARY", "myapp:4", 2, 0, 2)],
        tasks=[TaskStatus("RUNNING", "i-1", "web-1")],
        events=[EventStatus("2024-01-01", "has reached a steady state.")],
    )

    result = CliRunner().invoke(cli, ["status", str(definition_file)])

    assert result.exit_code == 0, result.output
    assert "[PRIMARY] myapp:4 desired_count=2, pending_count=0, running_count=2" in result.output
    assert "[RUNNING]: i-1 (web-1)" in result.output
    assert "2024-01-01: has reached a steady state." in result.output


def test_remove_with_yes_skips_confirmation(
    definition_file: Path, mock_scheduler: MagicMock
) -> None:
    """--yes removes without prompting and reports absence."""
    mock_scheduler.return_value.app_id = "myapp"
    mock_scheduler.return_value.remove.return_value = False

    with patch("ecs_conductor.cli.main.questionary") as mock_questionary:
        result = CliRunner().invoke(cli, ["remove", str(definition_file), "--yes"])

    assert result.exit_code == 0, result.output
    mock_questionary.confirm.assert_not_called()
    assert "Service myapp doesn't exist" in result.output


def test_remove_cancelled_by_user(definition_file: Path, mock_scheduler: MagicMock) -> None:
    """Declining the prompt leaves everything in place."""
    with patch("ecs_conductor.cli.main.questionary") as mock_questionary:
        mock_questionary.confirm.return_value.ask.return_value = False
        result = CliRunner().invoke(cli, ["remove", str(definition_file)])

    assert result.exit_code == 0
    mock_scheduler.return_value.remove.assert_not_called()


def test_remote_errors_exit_1(definition_file: Path, mock_scheduler: MagicMock) -> None:
    """Remote faults are rendered and exit with status 1."""
    mock_scheduler.return_value.deploy.side_effect = client_error("ThrottlingException")

    result = CliRunner().invoke(cli, ["deploy", str(definition_file)])

    assert result.exit_code == 1
    assert "temporarily" in result.output


def test_config_errors_exit_1(definition_file: Path, mock_scheduler: MagicMock) -> None:
    """Configuration errors print their message."""
    mock_scheduler.side_effect = ConfigError("desired_count must be set")

    result = CliRunner().invoke(cli, ["deploy", str(definition_file)])

    assert result.exit_code == 1
    assert "desired_count must be set" in result.output
