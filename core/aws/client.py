"""
core/aws/client.py - boto3 session/client factory

Builds boto3 clients with retry (adaptive mode), timeouts and connection
pool settings. Clients are created once per invocation and passed explicitly
into the inventory functions.

Example:
    from core.aws.client import create_session, get_client

    session = create_session(settings)
    ec2 = get_client(session, "ec2", settings)
    volumes = describe_volumes(ec2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import boto3

from core.config import Settings

if TYPE_CHECKING:
    from botocore.config import Config

DEFAULT_MAX_POOL_CONNECTIONS = 10


def create_session(settings: Settings | None = None) -> boto3.Session:
    """Create a boto3 session using the shared config/credentials files

    Args:
        settings: runtime settings (profile and region)

    Returns:
        boto3 Session
    """
    settings = settings or Settings()
    return boto3.Session(profile_name=settings.profile, region_name=settings.region)


def build_config(settings: Settings | None = None) -> Config:
    """botocore Config with the retry and timeout settings applied"""
    from botocore.config import Config

    settings = settings or Settings()
    return Config(
        retries={"max_attempts": settings.max_attempts, "mode": settings.retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        max_pool_connections=DEFAULT_MAX_POOL_CONNECTIONS,
    )


def get_client(
    session: boto3.Session,
    service_name: str,
    settings: Settings | None = None,
    **kwargs: Any,
) -> Any:
    """Create a boto3 client with retries configured

    Args:
        session: boto3 Session
        service_name: AWS service name (ec2, route53, ...)
        settings: runtime settings (retry/timeout values)
        **kwargs: extra arguments for session.client()

    Returns:
        boto3 client
    """
    config = build_config(settings)

    # merge with a caller supplied config
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # boto3-stubs expects a Literal service name
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        config=config,
        **kwargs,
    )
