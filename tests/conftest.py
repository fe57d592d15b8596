"""Shared fixtures and fakes for the ECS deployment tests."""

import copy
from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from ecs_conductor.core.deployments.aws_ecs import AppSpec, FrontSpec

ACCOUNT_PREFIX = "arn:aws:ecs:eu-west-2:123456789012"


def client_error(code: str, operation: str = "Operation", status: int = 400) -> ClientError:
    """Build a botocore client error with the given code."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} raised"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


def paginator(pages: list[dict[str, Any]]) -> MagicMock:
    """Return a paginator mock yielding ``pages``."""
    mock = MagicMock()
    mock.paginate.return_value = pages
    return mock


class _ListServicesPaginator:
    def __init__(self, ecs: "FakeEcs") -> None:
        self._ecs = ecs

    def paginate(
        self, cluster: str, PaginationConfig: dict[str, Any]  # noqa: N803
    ) -> Iterator[dict[str, Any]]:
        arns = [s["serviceArn"] for s in self._ecs.services.values()]
        size = PaginationConfig["PageSize"]
        for start in range(0, len(arns), size):
            yield {"serviceArns": arns[start : start + size]}


class FakeEcs:
    """In-memory stand-in for the ECS control plane."""

    def __init__(self) -> None:
        self.task_definitions: dict[str, list[dict[str, Any]]] = {}
        self.services: dict[str, dict[str, Any]] = {}
        self.register_calls = 0
        self.create_calls = 0
        self.update_calls = 0

    def describe_task_definition(self, taskDefinition: str) -> dict[str, Any]:  # noqa: N803
        if taskDefinition in self.task_definitions:
            return {"taskDefinition": copy.deepcopy(self.task_definitions[taskDefinition][-1])}
        for revisions in self.task_definitions.values():
            for revision in revisions:
                if revision["taskDefinitionArn"] == taskDefinition:
                    return {"taskDefinition": copy.deepcopy(revision)}
        raise client_error("ClientException", "DescribeTaskDefinition")

    def register_task_definition(
        self,
        family: str,
        containerDefinitions: list[dict[str, Any]],  # noqa: N803
    ) -> dict[str, Any]:
        self.register_calls += 1
        revisions = self.task_definitions.setdefault(family, [])
        number = len(revisions) + 1
        task_definition = {
            "family": family,
            "revision": number,
            "taskDefinitionArn": f"{ACCOUNT_PREFIX}:task-definition/{family}:{number}",
            "containerDefinitions": copy.deepcopy(containerDefinitions),
        }
        revisions.append(task_definition)
        return {"taskDefinition": copy.deepcopy(task_definition)}

    def describe_services(self, cluster: str, services: list[str]) -> dict[str, Any]:
        found = []
        for key in services:
            for service in self.services.values():
                if key in (service["serviceName"], service["serviceArn"]):
                    found.append(copy.deepcopy(service))
        return {"services": found, "failures": []}

    def create_service(self, **params: Any) -> dict[str, Any]:
        self.create_calls += 1
        name = params["serviceName"]
        service = {
            "serviceName": name,
            "serviceArn": f"{ACCOUNT_PREFIX}:service/{name}",
            "clusterArn": f"{ACCOUNT_PREFIX}:cluster/{params['cluster']}",
            "status": "ACTIVE",
            "taskDefinition": params["taskDefinition"],
            "desiredCount": params["desiredCount"],
            "loadBalancers": params.get("loadBalancers", []),
            "deployments": [{"status": "PRIMARY", "taskDefinition": params["taskDefinition"]}],
            "events": [],
        }
        self.services[name] = service
        return {"service": copy.deepcopy(service)}

    def update_service(
        self,
        cluster: str,
        service: str,
        desiredCount: int,  # noqa: N803
        taskDefinition: str,  # noqa: N803
    ) -> dict[str, Any]:
        self.update_calls += 1
        current = self.services[service]
        current["desiredCount"] = desiredCount
        current["taskDefinition"] = taskDefinition
        current["deployments"] = [{"status": "PRIMARY", "taskDefinition": taskDefinition}]
        return {"service": copy.deepcopy(current)}

    def get_paginator(self, name: str) -> Any:
        if name != "list_services":
            raise NotImplementedError(name)
        return _ListServicesPaginator(self)


def app_spec(**overrides: Any) -> AppSpec:
    """Return an app container spec."""
    values: dict[str, Any] = {
        "name": "app",
        "image": "example/app:1.0",
        "cpu": 256,
        "memory": 512,
        "links": [],
        "env": {"RAILS_ENV": "production"},
        "docker_labels": {},
    }
    values.update(overrides)
    return AppSpec(**values)


def front_spec(**overrides: Any) -> FrontSpec:
    """Return a front container spec."""
    values: dict[str, Any] = {
        "image": "example/nginx:1.0",
        "cpu": 64,
        "memory": 128,
        "links": ["app"],
    }
    values.update(overrides)
    return FrontSpec(**values)


@pytest.fixture
def fake_ecs() -> FakeEcs:
    """Return an empty in-memory ECS control plane."""
    return FakeEcs()
