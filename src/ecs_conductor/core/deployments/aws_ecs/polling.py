"""Poll pacing shared by the convergence and oneshot loops."""

import time
from collections.abc import Callable
from dataclasses import dataclass

from ecs_conductor.core.deployments.aws_ecs.errors import PollTimeoutError

DEFAULT_POLL_INTERVAL_SECONDS = 1.0


@dataclass
class PollContext:
    """Fixed-interval pacing with an optional deadline.

    With no timeout the loops using this context wait until their terminal
    state is observed or the process is interrupted.
    """

    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    timeout_seconds: float | None = None
    sleep: Callable[[float], None] = time.sleep
    clock: Callable[[], float] = time.monotonic

    def deadline(self) -> float | None:
        """Return the absolute deadline for a loop starting now."""
        if self.timeout_seconds is None:
            return None
        return self.clock() + self.timeout_seconds

    def wait(self, deadline: float | None, waiting_for: str) -> None:
        """Sleep until the next tick.

        Args:
            deadline: Value returned by ``deadline()`` when the loop started.
            waiting_for: Description used in the timeout message.

        Raises:
            PollTimeoutError: When the deadline has passed.
        """
        if deadline is not None and self.clock() >= deadline:
            raise PollTimeoutError(
                f"Timed out waiting for {waiting_for} after {self.timeout_seconds} seconds."
            )
        self.sleep(self.interval_seconds)
