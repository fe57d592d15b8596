"""Tests for fault classification and poll pacing."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import EndpointConnectionError

from ecs_conductor.core.deployments.aws_ecs import (
    FaultKind,
    PollContext,
    PollTimeoutError,
    classify_fault,
)
from tests.conftest import client_error


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (client_error("ThrottlingException"), FaultKind.TRANSIENT),
        (client_error("ServerException", status=500), FaultKind.TRANSIENT),
        (client_error("SomethingOdd", status=503), FaultKind.TRANSIENT),
        (EndpointConnectionError(endpoint_url="https://ecs.example.com"), FaultKind.TRANSIENT),
        (client_error("ClientException"), FaultKind.TERMINAL),
        (client_error("AccessDeniedException"), FaultKind.TERMINAL),
        (ValueError("bad"), FaultKind.TERMINAL),
    ],
)
def test_classify_fault(exc: Exception, kind: FaultKind) -> None:
    """Throttling, server and connectivity faults are transient."""
    assert classify_fault(exc) is kind


def test_classify_fault_follows_cause_chain() -> None:
    """A wrapped transient fault is still transient."""
    try:
        try:
            raise client_error("Throttling")
        except Exception as inner:
            raise RuntimeError("deploy failed") from inner
    except RuntimeError as exc:
        assert classify_fault(exc) is FaultKind.TRANSIENT


def test_unbounded_poll_context_never_times_out() -> None:
    """Without a timeout there is no deadline."""
    sleep = MagicMock()
    poll = PollContext(interval_seconds=0.5, sleep=sleep)

    deadline = poll.deadline()
    poll.wait(deadline, "anything")

    assert deadline is None
    sleep.assert_called_once_with(0.5)


def test_bounded_poll_context_raises_after_deadline() -> None:
    """Waiting past the deadline raises instead of sleeping."""
    sleep = MagicMock()
    clock = MagicMock(side_effect=[100.0, 131.0])
    poll = PollContext(timeout_seconds=30.0, sleep=sleep, clock=clock)

    deadline = poll.deadline()
    with pytest.raises(PollTimeoutError, match="task to stop"):
        poll.wait(deadline, "task to stop")
    sleep.assert_not_called()
