"""
core/exceptions.py - Exception hierarchy

Exceptions raised by the inventory core and handled by the CLI.

Hierarchy:
    AWSToolsError (base)
    ├── ProviderQueryError (a paginated or batched AWS query failed)
    ├── WriteError (the report sink rejected a write)
    └── ConfigError (invalid configuration value)

Usage:
    from core.exceptions import provider_errors

    with provider_errors("ec2", "describe_tags"):
        response = ec2.describe_tags(Filters=filters)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

# =============================================================================
# Base exception
# =============================================================================


class AWSToolsError(Exception):
    """Base class for all aws-tools exceptions

    Attributes:
        message: error message
        cause: underlying exception (for chaining)
        details: extra structured details
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Return the exception as a dictionary"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# Provider queries
# =============================================================================


class ProviderQueryError(AWSToolsError):
    """An AWS listing or lookup request failed

    Network, authentication and throttling failures all collapse into this
    kind. Wraps botocore's ClientError/BotoCoreError.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        message = f"{service}.{operation} failed"
        if error_code:
            message = f"{message} ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # the provider's message is already part of self.message
        if self.error_message:
            return self.message
        return super().__str__()

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> "ProviderQueryError":
        """Build from a botocore exception

        Args:
            service: AWS service name
            operation: API operation name
            client_error: ClientError or BotoCoreError

        Returns:
            ProviderQueryError instance
        """
        error_code = None
        error_message = None

        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


@contextmanager
def provider_errors(service: str, operation: str) -> Iterator[None]:
    """Translate botocore exceptions raised in the block into ProviderQueryError"""
    try:
        yield
    except (ClientError, BotoCoreError) as e:
        raise ProviderQueryError.from_client_error(service, operation, e) from e


# =============================================================================
# Output
# =============================================================================


class WriteError(AWSToolsError):
    """The output sink rejected a write"""

    def __init__(
        self,
        destination: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"write to {destination} failed: {message}"
        super().__init__(full_message, cause)
        self.destination = destination
        self.details["destination"] = destination


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(AWSToolsError):
    """Invalid configuration value"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"configuration error [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# Helpers
# =============================================================================


def is_access_denied(error: Exception) -> bool:
    """Check whether the error is an access-denied failure"""
    codes = ("AccessDenied", "AccessDeniedException", "UnauthorizedOperation")

    if isinstance(error, ProviderQueryError):
        return error.error_code in codes

    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code", "") in codes

    return False


def format_error_for_user(error: Exception) -> str:
    """Format an error for display on the command line

    Args:
        error: exception

    Returns:
        human readable message
    """
    if isinstance(error, ProviderQueryError) and is_access_denied(error):
        return f"{error} (check the IAM permissions of the current profile)"

    if isinstance(error, AWSToolsError):
        return str(error)

    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))
        return f"{code}: {message}"

    return str(error)
