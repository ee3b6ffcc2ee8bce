"""
core/aws - boto3 session and client helpers
"""

from .client import build_config, create_session, get_client

__all__: list[str] = [
    "build_config",
    "create_session",
    "get_client",
]
