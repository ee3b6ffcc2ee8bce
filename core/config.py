"""
core/config.py - Central configuration

Settings are read from the environment once per invocation; CLI options
override them.

Usage:
    from core.config import Settings

    settings = Settings.from_env().override(region="eu-west-1")
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DISTRIBUTION_NAME = "aws-tools"

# retry/timeout defaults for botocore clients
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_MODE = "adaptive"
DEFAULT_CONNECT_TIMEOUT = 10  # seconds
DEFAULT_READ_TIMEOUT = 30  # seconds

RETRY_MODES = ("legacy", "standard", "adaptive")

ENV_PREFIX = "AWSTOOLS_"


def get_version() -> str:
    """Return the version string from version.txt, else the installed metadata"""
    from importlib.metadata import PackageNotFoundError, version

    version_file = PROJECT_ROOT / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.debug("Failed to read version file: %s", e)

    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(name, f"expected an integer, got {raw!r}", e) from e
    if value < 1:
        raise ConfigError(name, f"must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings

    Attributes:
        profile: AWS profile name (None uses the default credential chain)
        region: AWS region (None uses the profile's region)
        max_attempts: botocore retry attempts
        retry_mode: botocore retry mode ('legacy', 'standard' or 'adaptive')
        connect_timeout: connect timeout in seconds
        read_timeout: read timeout in seconds
    """

    profile: str | None = None
    region: str | None = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_mode: str = DEFAULT_RETRY_MODE
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    read_timeout: int = DEFAULT_READ_TIMEOUT

    def __post_init__(self) -> None:
        if self.retry_mode not in RETRY_MODES:
            raise ConfigError("retry_mode", f"must be one of {', '.join(RETRY_MODES)}, got {self.retry_mode!r}")

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables"""
        return cls(
            profile=os.environ.get("AWS_PROFILE") or None,
            region=os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or None,
            max_attempts=_env_int(f"{ENV_PREFIX}MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
            retry_mode=os.environ.get(f"{ENV_PREFIX}RETRY_MODE", DEFAULT_RETRY_MODE),
            connect_timeout=_env_int(f"{ENV_PREFIX}CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
            read_timeout=_env_int(f"{ENV_PREFIX}READ_TIMEOUT", DEFAULT_READ_TIMEOUT),
        )

    def override(self, **values: object) -> Settings:
        """Return a copy with the given non-None values replaced"""
        changes = {key: value for key, value in values.items() if value is not None}
        return replace(self, **changes)
