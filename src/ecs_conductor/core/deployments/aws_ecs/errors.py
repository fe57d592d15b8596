"""Error taxonomy for ECS deployment."""

from enum import Enum

from botocore.exceptions import (
    ClientError,
    ConnectionClosedError,
    EndpointConnectionError,
    ReadTimeoutError,
)

TRANSIENT_ERROR_CODES = {
    "Throttling",
    "ThrottlingException",
    "ThrottledException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "RequestThrottled",
    "ServerException",
    "ServiceUnavailable",
    "ServiceUnavailableException",
    "InternalFailure",
    "InternalError",
}


class ConfigError(RuntimeError):
    """Configuration related errors."""


class PollTimeoutError(RuntimeError):
    """A poll loop did not reach its terminal state before the deadline."""


class FaultKind(Enum):
    """Whether a remote fault is worth retrying by a wrapping layer."""

    TRANSIENT = "transient"
    TERMINAL = "terminal"


def error_code(exc: ClientError) -> str:
    """Return the AWS error code of a client error."""
    return str(exc.response.get("Error", {}).get("Code", ""))


def classify_fault(exc: BaseException) -> FaultKind:
    """Classify a remote fault.

    Nothing in this package retries; the classification is for callers
    that wrap deploy operations with their own retry policy.

    Args:
        exc: Raised exception from a remote call.

    Returns:
        TRANSIENT for throttling, server-side and connectivity faults,
        TERMINAL otherwise.
    """
    for item in exception_chain(exc):
        if isinstance(item, (EndpointConnectionError, ConnectionClosedError, ReadTimeoutError)):
            return FaultKind.TRANSIENT
        if isinstance(item, ClientError):
            if error_code(item) in TRANSIENT_ERROR_CODES:
                return FaultKind.TRANSIENT
            status = item.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if isinstance(status, int) and status >= 500:
                return FaultKind.TRANSIENT
    return FaultKind.TERMINAL


def exception_chain(exc: BaseException) -> list[BaseException]:
    """Return exceptions in cause/context chain.

    Args:
        exc: Root exception.

    Returns:
        Ordered exception chain from root to cause/context.
    """
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return chain
