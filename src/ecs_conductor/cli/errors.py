"""Remote error rendering for the CLI."""

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    ProfileNotFound,
)

from ecs_conductor.cli.ui import console
from ecs_conductor.core.deployments.aws_ecs.errors import (
    FaultKind,
    classify_fault,
    error_code,
    exception_chain,
)

AUTH_ERROR_CODES = {
    "ExpiredToken",
    "ExpiredTokenException",
    "UnrecognizedClientException",
    "InvalidClientTokenId",
    "InvalidSignatureException",
    "AccessDenied",
    "AccessDeniedException",
}


def report_remote_error(exc: Exception) -> None:
    """Render remote deployment errors with actionable guidance.

    Args:
        exc: Raised exception from a remote deployment action.
    """
    if is_aws_auth_error(exc):
        console.print(
            "[red]AWS authentication failed. Your credentials are missing, invalid, "
            "or expired.[/red]"
        )
        console.print(
            "[dim]If using AWS profile/SSO, run: aws sso login --profile <profile>. "
            "If using temporary keys, refresh AWS_SESSION_TOKEN and retry.[/dim]"
        )
        return

    if is_aws_endpoint_error(exc):
        console.print("[red]Could not reach AWS endpoint from this environment.[/red]")
        console.print("[dim]Check network connectivity and AWS region configuration.[/dim]")
        return

    if classify_fault(exc) is FaultKind.TRANSIENT:
        console.print(f"[yellow]Remote call failed temporarily: {exc}[/yellow]")
        console.print("[dim]Nothing was retried. Re-run the command to continue.[/dim]")
        return

    console.print(f"[red]Remote deployment failed: {exc}[/red]")


def is_aws_auth_error(exc: Exception) -> bool:
    """Return true when an exception chain indicates AWS auth issues.

    Args:
        exc: Raised exception from a remote deployment action.

    Returns:
        True when the chain contains an auth-related error.
    """
    for item in exception_chain(exc):
        if isinstance(item, (NoCredentialsError, ProfileNotFound)):
            return True
        if isinstance(item, ClientError) and error_code(item) in AUTH_ERROR_CODES:
            return True
        if "security token included in the request is expired" in str(item).lower():
            return True
    return False


def is_aws_endpoint_error(exc: Exception) -> bool:
    """Return true when an exception chain indicates endpoint/network errors."""
    return any(isinstance(item, EndpointConnectionError) for item in exception_chain(exc))
